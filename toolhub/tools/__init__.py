from __future__ import annotations

# Import all tool modules to trigger auto-registration via __init_subclass__
from toolhub.tools.base import get_registered_tools  # noqa: F401
from toolhub.tools.calculator import CalculatorTool  # noqa: F401
from toolhub.tools.clock import CurrentTimeTool  # noqa: F401
from toolhub.tools.code_review import CodeReviewPromptTool  # noqa: F401
from toolhub.tools.geocode import GeocodeTool  # noqa: F401
from toolhub.tools.greeting import GreetingTool  # noqa: F401
from toolhub.tools.image import ImageGenerationTool  # noqa: F401
from toolhub.tools.weather import WeatherTool  # noqa: F401

__all__ = [
    "CalculatorTool",
    "CodeReviewPromptTool",
    "CurrentTimeTool",
    "GeocodeTool",
    "GreetingTool",
    "ImageGenerationTool",
    "WeatherTool",
    "get_registered_tools",
]

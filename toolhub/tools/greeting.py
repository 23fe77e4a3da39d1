from __future__ import annotations

from typing import ClassVar, Literal

from pydantic import Field

from toolhub.models.tool import ToolConfig, ToolResponse
from toolhub.tools.base import BasePlatformTool

_TEMPLATES: dict[str, str] = {
    "ko": "안녕하세요, {name}님!",
    "en": "Hey there, {name}! 👋 Nice to meet you!",
    "id": "Halo, {name}! 👋 Senang bertemu dengan Anda!",
}


class GreetingConfig(ToolConfig):
    """Input for the greeting tool."""

    name: str = Field(description="Name of the person to greet")
    language: Literal["ko", "en", "id"] = Field(
        default="en", description="Greeting language (default: en)"
    )


class GreetingTool(BasePlatformTool):
    """Greet someone in Korean, English or Indonesian."""

    name: ClassVar[str] = "greet"
    description: ClassVar[str] = "Return a greeting for the given name and language."
    config_model: ClassVar[type[ToolConfig]] = GreetingConfig
    output_description: ClassVar[str | None] = "Greeting"
    failure_message: ClassVar[str] = "Failed to build the greeting"

    async def execute(self, config: GreetingConfig) -> ToolResponse:
        return ToolResponse.text(greeting_for(config.name, config.language))


def greeting_for(name: str, language: str = "en") -> str:
    return _TEMPLATES[language].format(name=name)

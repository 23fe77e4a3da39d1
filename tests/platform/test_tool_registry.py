from __future__ import annotations

import pytest

from toolhub.core.errors import RegistryConflictError
from toolhub.models.platform import ServerConfig
from toolhub.platform.registry.tool_registry import ToolRegistry
from toolhub.tools.calculator import CalculatorTool
from toolhub.tools.greeting import GreetingTool

EXPECTED_TOOLS = {
    "greet", "calculator", "getCurrentTime", "geocode",
    "getWeather", "generateImage", "codeReviewPrompt",
}


class TestToolRegistry:
    def test_register_and_get(self):
        registry = ToolRegistry()
        registry.register(GreetingTool())
        entry = registry.get("greet")
        assert entry.name == "greet"
        assert [f.name for f in entry.input_fields] == ["name", "language"]
        assert entry.output_schema is not None
        assert "greet" in registry
        assert len(registry) == 1

    def test_duplicate_name_rejected(self):
        registry = ToolRegistry()
        registry.register(GreetingTool())
        with pytest.raises(RegistryConflictError, match="already registered"):
            registry.register(GreetingTool())

    def test_conflict_is_a_value_error(self):
        assert issubclass(RegistryConflictError, ValueError)

    def test_unknown_tool(self):
        with pytest.raises(KeyError, match="Unknown tool"):
            ToolRegistry().get("nope")

    def test_listing_in_registration_order(self):
        registry = ToolRegistry()
        registry.register(CalculatorTool())
        registry.register(GreetingTool())
        assert [m.name for m in registry.list_tools()] == ["calculator", "greet"]
        assert [t.name for t in registry.registered()] == ["calculator", "greet"]

    def test_discover_builds_every_tool(self):
        registry = ToolRegistry()
        registry.discover(ServerConfig(_env_file=None))
        assert {m.name for m in registry.list_tools()} == EXPECTED_TOOLS

    async def test_handlers_are_guarded(self):
        registry = ToolRegistry()
        registry.register(CalculatorTool())
        entry = registry.get("calculator")
        # an object without the expected attributes makes the handler raise
        response = await entry.handler(object())
        assert response.is_error
        assert response.first_text().startswith("Calculation failed: ")

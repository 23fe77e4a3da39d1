from __future__ import annotations

from typing import ClassVar
from zoneinfo import ZoneInfoNotFoundError

from toolhub.core.errors import UpstreamError
from toolhub.models.tool import ToolConfig, ToolResponse
from toolhub.tools.base import (
    BasePlatformTool,
    fault_tolerant,
    format_failure,
    get_registered_tools,
)


class _EchoConfig(ToolConfig):
    text: str


class _EchoTool(BasePlatformTool):
    name: ClassVar[str] = "test_echo"
    description: ClassVar[str] = "Echo text back"
    config_model: ClassVar[type[ToolConfig]] = _EchoConfig
    output_description: ClassVar[str | None] = "Echoed text"

    async def execute(self, config: _EchoConfig) -> ToolResponse:
        return ToolResponse.text(config.text)


class TestBasePlatformTool:
    def test_auto_registration(self):
        assert get_registered_tools()["test_echo"] is _EchoTool

    def test_metadata_uses_wire_schema(self):
        meta = _EchoTool.metadata()
        assert meta.name == "test_echo"
        assert meta.input_schema["required"] == ["text"]
        assert meta.output_schema["properties"]["content"]["description"] == "Echoed text"

    def test_no_output_schema_without_description(self):
        class _Silent(_EchoTool):
            output_description = None

        assert _Silent.output_schema() is None

    async def test_from_config_default(self):
        tool = _EchoTool.from_config(None)
        response = await tool.execute(_EchoConfig(text="hi"))
        assert response.first_text() == "hi"


class TestFormatFailure:
    def test_message_and_detail(self):
        assert format_failure("Geocoding failed", UpstreamError("timeout")) == (
            "Geocoding failed: timeout"
        )

    def test_hint_on_its_own_line(self):
        text = format_failure("Failed", ValueError("bad"), "Try again.")
        assert text == "Failed: bad\nTry again."

    def test_key_error_not_quoted(self):
        exc = ZoneInfoNotFoundError("No time zone found with key Mars/Base")
        assert format_failure("Failed", exc) == "Failed: No time zone found with key Mars/Base"


class TestFaultTolerant:
    async def test_passes_success_through(self):
        async def handler(config):
            return ToolResponse.text("ok")

        guarded = fault_tolerant(handler, tool_name="t", failure_message="Failed")
        assert (await guarded(None)).first_text() == "ok"

    async def test_exception_becomes_error_envelope(self):
        async def handler(config):
            raise UpstreamError("API request failed: 503 Service Unavailable")

        guarded = fault_tolerant(
            handler, tool_name="t", failure_message="Failed to fetch the weather",
            hint="Check your network connection or try again later.",
        )
        response = await guarded(None)
        assert response.is_error
        assert response.first_text() == (
            "Failed to fetch the weather: API request failed: 503 Service Unavailable\n"
            "Check your network connection or try again later."
        )
        assert response.structured_content["content"][0]["text"] == response.first_text()

    async def test_unmirrored_errors(self):
        async def handler(config):
            raise RuntimeError("nope")

        guarded = fault_tolerant(handler, tool_name="t", failure_message="F", mirror=False)
        response = await guarded(None)
        assert response.is_error
        assert response.structured_content is None

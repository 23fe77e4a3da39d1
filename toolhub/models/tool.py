from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


def _integral_float(value: Any) -> Any:
    # Integral floats such as 7.0 count as integers
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


IntegralInt = Annotated[int, BeforeValidator(_integral_float)]


class ToolConfig(BaseModel):
    """Base class for all tool inputs. Tools extend this with their own fields.

    Validation is strict (``"10"`` is not a number) and unknown keys are ignored.
    """

    model_config = ConfigDict(strict=True, populate_by_name=True, extra="ignore")


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ImageContent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["image"] = "image"
    data: str = Field(description="Base64-encoded image bytes")
    mime_type: str = Field(default="image/png", alias="mimeType")


ContentItem = Annotated[TextContent | ImageContent, Field(discriminator="type")]


class ToolResponse(BaseModel):
    """Envelope returned by every tool call."""

    model_config = ConfigDict(populate_by_name=True)

    content: list[ContentItem] = Field(default_factory=list)
    structured_content: dict[str, Any] | None = Field(default=None, alias="structuredContent")
    is_error: bool = Field(default=False, alias="isError")

    @classmethod
    def text(cls, text: str, *, is_error: bool = False, mirror: bool = True) -> ToolResponse:
        """Single text item, mirrored into ``structuredContent`` unless *mirror* is off."""
        item = TextContent(text=text)
        structured = {"content": [item.model_dump()]} if mirror else None
        return cls(content=[item], structured_content=structured, is_error=is_error)

    @classmethod
    def image(cls, data: str, mime_type: str = "image/png") -> ToolResponse:
        return cls(content=[ImageContent(data=data, mime_type=mime_type)])

    def first_text(self) -> str:
        """Text of the first text item, or an empty string."""
        for item in self.content:
            if isinstance(item, TextContent):
                return item.text
        return ""


class ToolMetadata(BaseModel):
    """Metadata describing a registered tool."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str
    version: str = "1.0.0"
    tags: list[str] = []
    input_schema: dict[str, Any] = Field(default_factory=dict, alias="inputSchema")
    output_schema: dict[str, Any] | None = Field(default=None, alias="outputSchema")


def text_output_schema(description: str) -> dict[str, Any]:
    """JSON schema of the ``{"content": [{"type": "text", "text": ...}]}`` mirror."""
    return {
        "type": "object",
        "properties": {
            "content": {
                "type": "array",
                "description": description,
                "items": {
                    "type": "object",
                    "properties": {
                        "type": {"type": "string", "const": "text"},
                        "text": {"type": "string", "description": description},
                    },
                    "required": ["type", "text"],
                },
            }
        },
        "required": ["content"],
    }

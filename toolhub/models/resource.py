from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

MimeType = Literal["text/plain", "application/json"]


class ResourceContent(BaseModel):
    """One content item of a resource read."""

    model_config = ConfigDict(populate_by_name=True)

    uri: str
    mime_type: MimeType = Field(default="text/plain", alias="mimeType")
    text: str


class ResourceResponse(BaseModel):
    """Envelope returned by every resource read."""

    contents: list[ResourceContent]

    @classmethod
    def text(cls, uri: str, text: str, mime_type: MimeType = "text/plain") -> ResourceResponse:
        return cls(contents=[ResourceContent(uri=uri, mime_type=mime_type, text=text)])


class ResourceMetadata(BaseModel):
    """Metadata describing a registered resource."""

    model_config = ConfigDict(populate_by_name=True)

    uri: str
    name: str
    description: str = ""
    mime_type: MimeType = Field(default="text/plain", alias="mimeType")

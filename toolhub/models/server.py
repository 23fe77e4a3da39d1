from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from toolhub.models.resource import ResourceMetadata
from toolhub.models.tool import ToolMetadata


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    booted: bool


class ToolListResponse(BaseModel):
    """Response listing all registered tools."""

    tools: list[ToolMetadata]


class ResourceListResponse(BaseModel):
    """Response listing all registered resources."""

    resources: list[ResourceMetadata]


class ToolCallRequest(BaseModel):
    """Body of a tool call over HTTP."""

    arguments: dict[str, Any] = {}

from __future__ import annotations

from toolhub.models.platform import ServerConfig
from toolhub.models.resource import ResourceContent, ResourceMetadata, ResourceResponse
from toolhub.models.server import (
    HealthResponse,
    ResourceListResponse,
    ToolCallRequest,
    ToolListResponse,
)
from toolhub.models.tool import (
    ImageContent,
    TextContent,
    ToolConfig,
    ToolMetadata,
    ToolResponse,
)

__all__ = [
    "HealthResponse",
    "ImageContent",
    "ResourceContent",
    "ResourceListResponse",
    "ResourceMetadata",
    "ResourceResponse",
    "ServerConfig",
    "TextContent",
    "ToolCallRequest",
    "ToolConfig",
    "ToolListResponse",
    "ToolMetadata",
    "ToolResponse",
]

from __future__ import annotations

from toolhub.platform.registry.resource_registry import ResourceRegistry, normalize_uri
from toolhub.platform.registry.tool_registry import RegisteredTool, ToolRegistry

__all__ = ["RegisteredTool", "ResourceRegistry", "ToolRegistry", "normalize_uri"]

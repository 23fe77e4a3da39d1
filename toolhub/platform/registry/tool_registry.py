from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from toolhub.core.errors import RegistryConflictError
from toolhub.core.schema import FieldSpec, describe_model
from toolhub.models.platform import ServerConfig
from toolhub.models.tool import ToolConfig, ToolMetadata
from toolhub.tools.base import BasePlatformTool, ToolHandler, fault_tolerant

# Only classes shipped in the toolhub.tools package are auto-discovered
_DISCOVERY_PREFIX = "toolhub.tools."


@dataclass(frozen=True)
class RegisteredTool:
    """A tool as the dispatcher sees it: schemas plus a guarded handler."""

    name: str
    description: str
    input_model: type[ToolConfig]
    input_fields: tuple[FieldSpec, ...]
    output_schema: dict[str, Any] | None
    handler: ToolHandler
    metadata: ToolMetadata


class ToolRegistry:
    """Registry of tool instances keyed by name, in registration order."""

    def __init__(self) -> None:
        self._tools: dict[str, RegisteredTool] = {}

    def discover(self, config: ServerConfig) -> None:
        """Import toolhub.tools to trigger auto-registration, then build and register each tool."""
        import toolhub.tools  # noqa: F401  (triggers __init_subclass__)

        from toolhub.tools.base import get_registered_tools

        for tool_cls in get_registered_tools().values():
            if tool_cls.__module__.startswith(_DISCOVERY_PREFIX):
                self.register(tool_cls.from_config(config))

    def register(self, tool: BasePlatformTool) -> RegisteredTool:
        """Register a tool instance. Raises RegistryConflictError on a duplicate name."""
        if tool.name in self._tools:
            raise RegistryConflictError(f"Tool '{tool.name}' is already registered")
        entry = RegisteredTool(
            name=tool.name,
            description=tool.description,
            input_model=tool.config_model,
            input_fields=tuple(describe_model(tool.config_model)),
            output_schema=tool.output_schema(),
            handler=fault_tolerant(
                tool.execute,
                tool_name=tool.name,
                failure_message=tool.failure_message,
                hint=tool.failure_hint,
                mirror=tool.mirror_errors,
            ),
            metadata=tool.metadata(),
        )
        self._tools[tool.name] = entry
        return entry

    def get(self, name: str) -> RegisteredTool:
        """Get a registered tool by name. Raises KeyError if not found."""
        if name not in self._tools:
            raise KeyError(f"Unknown tool: '{name}'")
        return self._tools[name]

    def registered(self) -> list[RegisteredTool]:
        return list(self._tools.values())

    def list_tools(self) -> list[ToolMetadata]:
        """Return metadata for all registered tools."""
        return [entry.metadata for entry in self._tools.values()]

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools

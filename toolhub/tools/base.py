from __future__ import annotations

import functools
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any, ClassVar

import structlog

from toolhub.models.platform import ServerConfig
from toolhub.models.tool import ToolConfig, ToolMetadata, ToolResponse, text_output_schema

logger = structlog.get_logger()

_TOOL_AUTO_REGISTRY: dict[str, type[BasePlatformTool]] = {}

ToolHandler = Callable[[ToolConfig], Awaitable[ToolResponse]]


class BasePlatformTool(ABC):
    """Base class for all tools. Subclasses auto-register via __init_subclass__."""

    name: ClassVar[str]
    description: ClassVar[str]
    config_model: ClassVar[type[ToolConfig]]
    # Description of the mirrored text output; None means no structured output.
    output_description: ClassVar[str | None] = None
    failure_message: ClassVar[str] = "Tool execution failed"
    failure_hint: ClassVar[str | None] = None
    mirror_errors: ClassVar[bool] = True

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if hasattr(cls, "name") and isinstance(cls.__dict__.get("name"), str):
            _TOOL_AUTO_REGISTRY[cls.name] = cls

    @classmethod
    def from_config(cls, config: ServerConfig) -> BasePlatformTool:
        """Build the tool with its dependencies. Called once at boot."""
        return cls()

    @abstractmethod
    async def execute(self, config: ToolConfig) -> ToolResponse: ...

    @classmethod
    def output_schema(cls) -> dict[str, Any] | None:
        if cls.output_description is None:
            return None
        return text_output_schema(cls.output_description)

    @classmethod
    def metadata(cls) -> ToolMetadata:
        return ToolMetadata(
            name=cls.name,
            description=cls.description,
            input_schema=cls.config_model.model_json_schema(by_alias=True),
            output_schema=cls.output_schema(),
        )


def format_failure(message: str, exc: BaseException, hint: str | None = None) -> str:
    """Render an exception as a user-facing error text."""
    # KeyError (and ZoneInfoNotFoundError) str() adds quotes around the message
    detail = exc.args[0] if isinstance(exc, KeyError) and exc.args else str(exc)
    text = f"{message}: {detail}"
    if hint:
        text = f"{text}\n{hint}"
    return text


def fault_tolerant(
    handler: ToolHandler,
    *,
    tool_name: str,
    failure_message: str,
    hint: str | None = None,
    mirror: bool = True,
) -> ToolHandler:
    """Wrap a tool handler so that no exception escapes it.

    Any exception becomes an ``isError`` text envelope carrying
    ``failure_message``, the exception text and an optional remediation hint.
    """

    @functools.wraps(handler)
    async def _guarded(config: ToolConfig) -> ToolResponse:
        try:
            return await handler(config)
        except Exception as exc:
            logger.warning(
                "tool.failed",
                tool=tool_name,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return ToolResponse.text(
                format_failure(failure_message, exc, hint), is_error=True, mirror=mirror
            )

    return _guarded


def get_registered_tools() -> dict[str, type[BasePlatformTool]]:
    """Return a copy of the auto-registration registry."""
    return dict(_TOOL_AUTO_REGISTRY)

from __future__ import annotations

import os
from typing import Any

import structlog
from dotenv import load_dotenv

from toolhub.core.errors import ResourceNotFoundError
from toolhub.core.schema import ValidationResult, validate
from toolhub.models.platform import ServerConfig
from toolhub.models.resource import ResourceMetadata, ResourceResponse
from toolhub.models.tool import TextContent, ToolMetadata, ToolResponse
from toolhub.platform.registry.resource_registry import ResourceRegistry
from toolhub.platform.registry.tool_registry import ToolRegistry
from toolhub.resources.cities import build_city_resources

logger = structlog.get_logger()


def _walk_to_root_until_found(folder: str, filename: str) -> str:
    """Walk up from folder to root looking for filename."""
    checkpath = os.path.join(folder, filename)
    if os.path.isfile(checkpath):
        return checkpath
    parent = os.path.dirname(folder)
    if parent == folder:
        return ""
    return _walk_to_root_until_found(parent, filename)


def _load_dotenv_for_platform(start_dir: str) -> bool:
    """Load the nearest .env at or above start_dir. Set variables always win."""
    starting = os.path.abspath(start_dir)
    dotenv_path = _walk_to_root_until_found(starting, ".env")
    if not dotenv_path:
        logger.debug("dotenv.not_found", starting_dir=starting)
        return False
    load_dotenv(dotenv_path, override=False)
    logger.info("dotenv.loaded", path=dotenv_path)
    return True


def validation_failure(tool_name: str, result: ValidationResult) -> ToolResponse:
    """isError envelope listing every failing field."""
    lines = [f"Invalid arguments for tool '{tool_name}':"]
    lines += [f"- {e.field}: {e.reason} ({e.kind})" for e in result.errors]
    return ToolResponse(
        content=[TextContent(text="\n".join(lines))],
        structured_content={"errors": [e.model_dump(mode="json") for e in result.errors]},
        is_error=True,
    )


class ToolHubPlatform:
    """Owns the tool and resource registries and dispatches calls to them."""

    def __init__(self, config: ServerConfig | None = None):
        self._explicit_config = config is not None
        self.config = config or ServerConfig()
        self.tools = ToolRegistry()
        self.resources = ResourceRegistry()
        self._booted = False

    async def boot(self) -> None:
        """Platform lifecycle: load env -> discover tools -> register resources -> ready."""
        log = logger.bind(phase="boot")

        if self.config.load_dotenv and _load_dotenv_for_platform(os.getcwd()):
            # Re-read settings so values from the loaded file apply
            if not self._explicit_config:
                self.config = ServerConfig()

        self.tools.discover(self.config)
        log.info("tools.discovered", count=len(self.tools))

        self.resources.register_all(build_city_resources(self.config))
        log.info("resources.registered", count=len(self.resources))

        self._booted = True
        log.info("platform.ready", server=self.config.server_name)

    def _ensure_booted(self) -> None:
        if not self._booted:
            raise RuntimeError("Platform not booted. Call boot() first.")

    async def call_tool(self, name: str, arguments: Any = None) -> ToolResponse:
        """Validate *arguments* and run the named tool.

        Raises RuntimeError before boot(). Once booted, every failure comes
        back as an error envelope.
        """
        self._ensure_booted()
        log = logger.bind(tool=name)
        try:
            if name not in self.tools:
                log.warning("tool.unknown")
                return ToolResponse.text(f"Unknown tool: '{name}'", is_error=True)
            entry = self.tools.get(name)

            result = validate(entry.input_model, {} if arguments is None else arguments)
            if not result.ok:
                log.info("tool.validation_failed", errors=result.summary())
                return validation_failure(name, result)

            log.debug("tool.called")
            return await entry.handler(result.value)
        except Exception:
            log.exception("tool.unhandled")
            return ToolResponse.text(f"Internal error while calling tool '{name}'", is_error=True)

    async def read_resource(self, uri: str) -> ResourceResponse:
        """Produce the content of the resource at *uri*.

        Raises RuntimeError before boot(). Once booted, failures become text.
        """
        self._ensure_booted()
        log = logger.bind(uri=uri)
        try:
            descriptor = self.resources.get(uri)
        except ResourceNotFoundError as exc:
            log.warning("resource.unknown")
            return ResourceResponse.text(uri, str(exc))
        try:
            response = await descriptor.producer()
        except Exception:
            log.exception("resource.unhandled")
            return ResourceResponse.text(uri, f"Internal error while reading resource '{uri}'")
        log.info("resource.read")
        return response

    async def shutdown(self) -> None:
        self._booted = False
        logger.info("platform.shutdown")

    def list_tools(self) -> list[ToolMetadata]:
        self._ensure_booted()
        return self.tools.list_tools()

    def list_resources(self) -> list[ResourceMetadata]:
        self._ensure_booted()
        return self.resources.list_resources()

    @property
    def is_booted(self) -> bool:
        return self._booted

from __future__ import annotations


class ToolHubError(Exception):
    """Base class for toolhub errors."""


class UpstreamError(ToolHubError):
    """An upstream HTTP service failed or returned an unusable payload."""


class ConfigurationError(ToolHubError):
    """A required setting is missing or invalid."""

    def __init__(self, setting: str, message: str | None = None):
        self.setting = setting
        super().__init__(message or f"Missing required setting: {setting}")


class RegistryConflictError(ToolHubError, ValueError):
    """Raised when a tool name or resource URI is registered twice."""


class ResourceNotFoundError(ToolHubError, KeyError):
    """Raised when no resource is registered under a URI."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable.
        return str(self.args[0]) if self.args else ""

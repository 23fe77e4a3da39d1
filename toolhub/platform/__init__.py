from __future__ import annotations

from toolhub.platform.app import ToolHubPlatform

__all__ = ["ToolHubPlatform"]

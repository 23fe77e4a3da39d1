from __future__ import annotations

from toolhub.ai.base import BaseImageProvider, ImageConfig, ImageResult

__all__ = ["BaseImageProvider", "ImageConfig", "ImageResult"]

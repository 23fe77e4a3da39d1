from __future__ import annotations

from toolhub.ai.providers.huggingface import HuggingFaceImageProvider, encode_image

__all__ = ["HuggingFaceImageProvider", "encode_image"]

from __future__ import annotations

import base64
import io
import time
from typing import Any

from huggingface_hub import AsyncInferenceClient

from toolhub.ai.base import BaseImageProvider, ImageConfig, ImageResult
from toolhub.core.errors import ConfigurationError


def encode_image(image: Any) -> str:
    """Base64-encode whatever the inference client handed back.

    Accepts raw bytes, an already encoded string, or a PIL image.
    """
    if isinstance(image, str):
        return image
    if isinstance(image, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(image)).decode("ascii")
    if hasattr(image, "save"):
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        return base64.b64encode(buffer.getvalue()).decode("ascii")
    raise TypeError(f"Unsupported image payload: {type(image).__name__}")


class HuggingFaceImageProvider(BaseImageProvider):
    """Text-to-image through the Hugging Face inference providers."""

    def __init__(self, token: str | None):
        self.token = token

    async def generate(self, config: ImageConfig) -> ImageResult:
        if not self.token:
            raise ConfigurationError(
                "HF_TOKEN",
                "Hugging Face token is required. Set the HF_TOKEN environment variable.",
            )

        start = time.monotonic()
        async with AsyncInferenceClient(provider=config.provider, api_key=self.token) as client:
            image = await client.text_to_image(
                config.prompt,
                model=config.model,
                num_inference_steps=config.num_inference_steps,
            )
        duration_ms = int((time.monotonic() - start) * 1000)

        return ImageResult(
            data=encode_image(image),
            model=config.model,
            provider=config.provider,
            duration_ms=duration_ms,
        )

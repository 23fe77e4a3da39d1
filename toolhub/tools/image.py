from __future__ import annotations

from typing import ClassVar

import structlog
from pydantic import Field

from toolhub.ai.base import BaseImageProvider, ImageConfig
from toolhub.ai.providers.huggingface import HuggingFaceImageProvider
from toolhub.models.platform import ServerConfig
from toolhub.models.tool import ToolConfig, ToolResponse
from toolhub.tools.base import BasePlatformTool

logger = structlog.get_logger()


class ImageGenerationConfig(ToolConfig):
    """Input for the image generation tool."""

    prompt: str = Field(description="Description of the image to generate")


class ImageGenerationTool(BasePlatformTool):
    """Generate an image from a prompt via an injected image provider."""

    name: ClassVar[str] = "generateImage"
    description: ClassVar[str] = (
        "Generate an image from a text prompt. Uses a Hugging Face inference model."
    )
    config_model: ClassVar[type[ToolConfig]] = ImageGenerationConfig
    failure_message: ClassVar[str] = "Image generation failed"
    failure_hint: ClassVar[str | None] = "Check that the HF_TOKEN environment variable is set."
    # Image responses carry no structured mirror, errors included
    mirror_errors: ClassVar[bool] = False

    def __init__(
        self,
        provider: BaseImageProvider,
        model: str = "black-forest-labs/FLUX.1-schnell",
        backend: str = "auto",
        steps: int = 5,
    ):
        self.provider = provider
        self.model = model
        self.backend = backend
        self.steps = steps

    @classmethod
    def from_config(cls, config: ServerConfig) -> ImageGenerationTool:
        return cls(
            provider=HuggingFaceImageProvider(config.hf_token),
            model=config.image_model,
            backend=config.image_provider,
            steps=config.image_steps,
        )

    async def execute(self, config: ImageGenerationConfig) -> ToolResponse:
        result = await self.provider.generate(
            ImageConfig(
                prompt=config.prompt,
                model=self.model,
                provider=self.backend,
                num_inference_steps=self.steps,
            )
        )
        logger.info("image.generated", model=result.model, duration_ms=result.duration_ms)
        return ToolResponse.image(result.data, result.mime_type)

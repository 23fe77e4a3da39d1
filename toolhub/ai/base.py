from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel, Field


class ImageConfig(BaseModel):
    prompt: str
    model: str = "black-forest-labs/FLUX.1-schnell"
    provider: str = "auto"
    num_inference_steps: int = Field(default=5, ge=1, le=50)


class ImageResult(BaseModel):
    data: str = Field(description="Base64-encoded image bytes")
    mime_type: str = "image/png"
    model: str
    provider: str
    duration_ms: int


class BaseImageProvider(ABC):
    @abstractmethod
    async def generate(self, config: ImageConfig) -> ImageResult: ...

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerConfig(BaseSettings):
    """Global server configuration.

    Reads from environment variables with TOOLHUB_ prefix and .env files.
    The image credential is the conventional ``HF_TOKEN``.
    """

    model_config = SettingsConfigDict(
        env_prefix="TOOLHUB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    server_name: str = "toolhub"
    server_version: str = "1.0.0"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_json: bool = False
    load_dotenv: bool = True
    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)

    http_timeout: float = Field(default=30.0, ge=1, le=300)
    user_agent: str = "toolhub/1.0.0"
    geocode_url: str = "https://nominatim.openstreetmap.org/search"
    forecast_url: str = "https://api.open-meteo.com/v1/forecast"

    hf_token: str | None = Field(
        default=None, validation_alias=AliasChoices("HF_TOKEN", "TOOLHUB_HF_TOKEN", "hf_token")
    )
    image_model: str = "black-forest-labs/FLUX.1-schnell"
    image_provider: str = "auto"
    image_steps: int = Field(default=5, ge=1, le=50)

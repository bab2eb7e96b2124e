"""Application configuration."""

import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

ASPECT_RATIO_SIZES: dict[str, str] = {
    "1:1": "1024x1024",
    "3:2": "1536x1024",
    "2:3": "1024x1536",
    "auto": "auto",
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str | None = None
    openai_model: str = "gpt-4.1"
    openai_image_quality: str = "auto"
    openai_timeout_seconds: float = Field(default=120.0, gt=0)
    aspect_ratio: str = "1:1"
    max_upload_bytes: int = Field(default=20 * 1024 * 1024, gt=0)
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def resolve_image_size(aspect_ratio: str) -> str:
    """Map an aspect ratio like ``3:2`` to an image tool output size."""
    cleaned = aspect_ratio.strip().lower()
    if cleaned in ASPECT_RATIO_SIZES:
        return ASPECT_RATIO_SIZES[cleaned]
    raise ValueError(f"Unsupported aspect ratio: {aspect_ratio}")

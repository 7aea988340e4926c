"""Configuration utilities for the structured gateway service."""
from __future__ import annotations

import os
from functools import lru_cache
from typing import List

from pydantic import BaseModel, Field, field_validator

DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"


class Settings(BaseModel):
    """Application settings loaded from environment variables."""

    gemini_api_key: str
    gemini_model: str = "gemini-2.0-flash"
    gemini_base_url: str = DEFAULT_GEMINI_BASE_URL
    request_timeout: float = Field(default=60.0, gt=0)
    transport_retries: int = Field(default=0, ge=0)
    allowed_origins: List[str] = Field(default_factory=lambda: ["*"])

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def parse_origins(cls, value: List[str] | str) -> List[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @classmethod
    def from_env(cls) -> "Settings":
        data = {
            "gemini_api_key": os.getenv("STRUCTURED_GATEWAY_GEMINI_API_KEY")
            or os.getenv("GEMINI_API_KEY")
            or "",
            "gemini_model": os.getenv("STRUCTURED_GATEWAY_GEMINI_MODEL", "gemini-2.0-flash"),
            "gemini_base_url": os.getenv(
                "STRUCTURED_GATEWAY_GEMINI_BASE_URL", DEFAULT_GEMINI_BASE_URL
            ),
            "request_timeout": os.getenv("STRUCTURED_GATEWAY_TIMEOUT", "60"),
            "transport_retries": os.getenv("STRUCTURED_GATEWAY_TRANSPORT_RETRIES", "0"),
            "allowed_origins": os.getenv("STRUCTURED_GATEWAY_ALLOWED_ORIGINS", "*"),
        }
        return cls(**data)


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings."""

    settings = Settings.from_env()
    if not settings.gemini_api_key:
        raise ValueError(
            "Gemini API key must be provided via STRUCTURED_GATEWAY_GEMINI_API_KEY or GEMINI_API_KEY"
        )
    return settings

from __future__ import annotations

import os
from functools import lru_cache
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from domain import ChatStrategy


class Settings(BaseModel):
    """Runtime configuration resolved from environment variables."""

    openrouter_api_key: Optional[str] = Field(
        default=None,
        alias="OPENROUTER_API_KEY",
        description="Gateway API key. When absent the remote path is disabled.",
    )
    openrouter_base_url: str = Field(
        default="https://openrouter.ai/api/v1",
        alias="OPENROUTER_BASE_URL",
        description="Base URL of the OpenAI-compatible completion gateway.",
    )
    chat_model: str = Field(
        default="deepseek/deepseek-chat-v3-0324:free",
        alias="CHAT_MODEL",
        description="Model identifier requested from the gateway.",
    )
    chat_temperature: float = Field(
        default=0.7, ge=0.0, le=2.0, alias="CHAT_TEMPERATURE"
    )
    chat_max_tokens: int = Field(default=1000, gt=0, alias="CHAT_MAX_TOKENS")
    chat_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        alias="CHAT_TIMEOUT_SECONDS",
        description="Deadline for a single outbound completion call.",
    )
    chat_strategy: ChatStrategy = Field(
        default=ChatStrategy.REMOTE,
        alias="CHAT_STRATEGY",
        description="remote proxies to the gateway; scripted answers from the keyword table.",
    )
    frontend_url: str = Field(
        default="http://localhost:3000",
        alias="FRONTEND_URL",
        description="Sent to the gateway as HTTP-Referer.",
    )
    app_title: str = Field(
        default="Hiring Platform",
        alias="APP_TITLE",
        description="Sent to the gateway as X-Title.",
    )
    cors_allow_origins: str = Field(
        default="*",
        alias="CORS_ALLOW_ORIGINS",
        description="Comma-separated list of origins allowed to call the API.",
    )
    fallback_seed: Optional[int] = Field(
        default=None,
        alias="FALLBACK_SEED",
        description="Seed for fallback reply selection. Unset means nondeterministic.",
    )
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3001, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = {"populate_by_name": True}

    @field_validator("openrouter_api_key", "fallback_seed", mode="before")
    @classmethod
    def _blank_as_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value.strip() if isinstance(value, str) else value

    @field_validator("chat_strategy", mode="before")
    @classmethod
    def _normalize_strategy(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @property
    def remote_configured(self) -> bool:
        return bool(self.openrouter_api_key)

    @property
    def allowed_origins(self) -> List[str]:
        return [
            origin.strip()
            for origin in self.cors_allow_origins.split(",")
            if origin.strip()
        ] or ["*"]

    @classmethod
    def from_env(cls) -> "Settings":
        return cls.model_validate(os.environ)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance built from environment variables."""
    return Settings.from_env()

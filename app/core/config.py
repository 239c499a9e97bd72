from __future__ import annotations

import os
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["development", "production", "staging", "test"]


def _resolve_env_files() -> tuple[str, ...]:
    env = os.getenv("NEWSDESK_ENVIRONMENT", "development").lower()
    if env in {"prod", "production"}:
        return (".env", ".env.prod")
    if env in {"dev", "development"}:
        return (".env", ".env.dev")
    if env in {"test", "testing"}:
        return (".env", ".env.test")
    return (".env",)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="NEWSDESK_",
        env_file=_resolve_env_files(),
        env_nested_delimiter="__",
        extra="ignore",
    )

    environment: Environment = "development"
    project_name: str = "Newsdesk Generation API"
    api_prefix: str = "/api"
    log_level: str = "INFO"
    log_json: bool = False
    rate_limit: str = "60/minute"
    allowed_hosts: list[str] = ["*"]
    cors_origins: list[str] = []
    enable_docs: bool = True

    openai_api_key: str | None = None
    openai_base_url: str | None = None
    openai_timeout: float = 60.0

    gemini_api_key: str | None = None
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/"

    benzinga_api_key: str | None = None
    benzinga_base_url: str = "https://api.benzinga.com/api/v2.1/calendar/ratings"
    benzinga_timeout: float = 10.0
    ratings_lookback: str = "6m"
    benzinga_news_url: str = "https://api.benzinga.com/api/v2/news"
    news_lookback_days: int = 30


@lru_cache
def get_settings() -> Settings:
    return Settings()

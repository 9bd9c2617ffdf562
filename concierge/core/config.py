"""Application settings and configuration helpers."""

from __future__ import annotations

from functools import lru_cache
from typing import List, Literal

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PlannerBackend = Literal["auto", "openrouter", "rule"]


class Settings(BaseSettings):
    """Strongly-typed configuration sourced from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="Shopping Concierge", description="Human-readable service name.")
    environment: str = Field(default="local", description="Deployment environment identifier.")
    log_level: str = Field(default="INFO", description="Application log level.")
    debug: bool = Field(default=False, description="Force DEBUG logging and verbose planner traces.")

    openrouter_api_key: str | None = Field(
        default=None,
        description="OpenRouter API key used by the LLM planner.",
    )
    openrouter_base_url: str = Field(
        default="https://openrouter.ai/api/v1",
        description="Base URL of the OpenAI-compatible chat completions API.",
    )
    openrouter_model: str = Field(
        default="openai/gpt-4o-mini",
        description="OpenRouter model identifier.",
    )
    openrouter_referer: str | None = Field(
        default=None,
        description="Referer header sent to OpenRouter (your app URL).",
    )
    openrouter_title: str | None = Field(
        default="Shopping Concierge",
        description="Title header sent to OpenRouter.",
    )
    openrouter_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout for a single planner round-trip.",
    )

    planner_backend: PlannerBackend = Field(
        default="auto",
        description="Planner implementation; 'auto' picks OpenRouter when a key is configured.",
    )
    max_iterations: int = Field(default=10, ge=1, description="Planner consultations allowed per request.")
    max_history_length: int = Field(default=20, ge=1, description="Transcript entries kept between turns.")
    max_retries: int = Field(default=3, ge=1, description="Attempts made by the outer retry wrapper.")
    retry_delay_seconds: float = Field(
        default=1.0,
        ge=0,
        description="Base backoff delay; attempt N waits N times this value.",
    )

    frontend_origin: AnyHttpUrl | None = Field(
        default=None,
        description="Allowed frontend origin (CORS). If omitted, defaults to localhost dev server.",
    )
    additional_origins: List[AnyHttpUrl] = Field(
        default_factory=list,
        description="Additional allowed CORS origins.",
    )

    @property
    def cors_origins(self) -> list[str]:
        """Return the full list of allowed CORS origins."""

        origins: list[str] = []
        if self.frontend_origin:
            origins.append(str(self.frontend_origin).rstrip("/"))
        else:
            origins.extend(["http://localhost:5173", "http://127.0.0.1:5173"])

        for origin in self.additional_origins:
            origins.append(str(origin).rstrip("/"))

        # Deduplicate while preserving order
        return list(dict.fromkeys(origins))

    @property
    def openrouter_enabled(self) -> bool:
        return bool(self.openrouter_api_key)

    def resolve_planner_backend(self) -> str:
        """Return the concrete planner backend ('openrouter' or 'rule')."""

        if self.planner_backend == "auto":
            return "openrouter" if self.openrouter_enabled else "rule"
        return self.planner_backend


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()

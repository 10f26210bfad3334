"""Pydantic schemas for runtime configuration and transport payloads."""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from png_vectorizer.errors import ConfigurationError
from png_vectorizer.types import PagePhase

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}

ENV_PREFIX = "VECTORIZER_"


class ServerConfig(BaseModel):
    """Validated HTTP daemon configuration."""

    model_config = ConfigDict(extra="forbid")

    host: str = "0.0.0.0"
    port: int = Field(default=8090, ge=1, le=65535)
    progress_interval_ms: int = Field(default=200, gt=0)
    max_sessions: int = Field(default=256, gt=0)
    log_level: str = "INFO"

    @field_validator("host")
    @classmethod
    def _validate_host(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("host cannot be empty.")
        return cleaned

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of: {', '.join(sorted(_LOG_LEVELS))}")
        return normalized

    @property
    def progress_interval(self) -> float:
        """Progress timer interval in seconds."""
        return self.progress_interval_ms / 1000

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ServerConfig:
        """Build configuration from ``VECTORIZER_*`` environment variables.

        Raises
        ------
        ConfigurationError
            If a variable holds an invalid value.
        """
        env = os.environ if environ is None else environ
        raw = {
            "host": env.get(f"{ENV_PREFIX}HTTP_HOST"),
            "port": env.get(f"{ENV_PREFIX}HTTP_PORT"),
            "progress_interval_ms": env.get(f"{ENV_PREFIX}PROGRESS_INTERVAL_MS"),
            "max_sessions": env.get(f"{ENV_PREFIX}MAX_SESSIONS"),
            "log_level": env.get(f"{ENV_PREFIX}LOG_LEVEL"),
        }
        try:
            return cls(**{key: value for key, value in raw.items() if value is not None})
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid vectorizer configuration: {exc}") from exc


class HealthResponse(BaseModel):
    """Health response payload."""

    model_config = ConfigDict(extra="forbid")

    status: str


class ReadyResponse(BaseModel):
    """Readiness response payload."""

    model_config = ConfigDict(extra="forbid")

    status: str


class SessionState(BaseModel):
    """Page state as seen by the browser."""

    model_config = ConfigDict(extra="forbid")

    session_id: str
    phase: PagePhase
    progress: int = Field(ge=0, le=100)
    filename: str | None = None
    download_url: str | None = None

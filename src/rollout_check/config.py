"""Configuration and environment for the rollout checker."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Checker settings loaded from environment and .env."""

    model_config = SettingsConfigDict(
        env_prefix="ROLLOUT_CHECK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Kubernetes
    kubeconfig: Path | None = Field(
        default=None,
        description="Path to kubeconfig; uses KUBECONFIG env or default location if unset",
    )
    context: str | None = Field(default=None, description="Kubernetes context to use")

    # Polling
    max_attempts: int = Field(
        default=6,
        ge=1,
        description="Number of readiness checks before the rollout is declared failed",
    )
    interval_seconds: float = Field(
        default=10.0,
        ge=0.0,
        description="Pause between two readiness checks",
    )

    # Log scanning
    evidence_limit: int = Field(
        default=10,
        ge=1,
        description="Maximum number of distinct error lines reported per container",
    )
    log_exclude_patterns: list[str] = Field(
        default_factory=lambda: ["datadog"],
        description="Case-insensitive substrings that disqualify a log line as evidence",
    )
    log_tail_lines: int | None = Field(
        default=None,
        ge=1,
        description="Only stream the last N lines of each container log; whole log if unset",
    )


def get_settings() -> Settings:
    """Return validated settings instance."""
    return Settings()

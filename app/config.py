"""
Release Confidence Configuration — pydantic-settings based.

All settings are read from environment variables or .env file.
Nothing is required; an empty environment gives an open, unsigned service.
"""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application-wide settings sourced from environment variables."""

    # ── Security ──
    webhook_secret: str | None = Field(
        default=None,
        description="Shared secret for X-Hub-Signature-256 checks. Unset disables verification.",
    )
    api_token: str | None = Field(
        default=None,
        description="Bearer token required on release routes. Unset means open access.",
    )

    # ── Serving ──
    cache_max_age_seconds: int = Field(
        default=300, description="s-maxage for GET responses"
    )
    default_page_limit: int = Field(default=20, description="Releases per page")
    max_page_limit: int = Field(default=100, description="Upper bound for ?limit=")
    trend_stable_threshold: float = Field(
        default=1.0,
        description="Coverage change (percentage points) below which the trend is 'stable'",
    )

    # ── Server ──
    service_version: str = Field(default="1.0.0", description="Reported by /health")
    cors_origins: list[str] = Field(
        default=["*"], description="Allowed CORS origins"
    )

    # ── Audit ──
    webhook_log_path: str = Field(
        default="webhook_log.jsonl", description="Path to JSON-lines webhook delivery log"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Singleton instance — imported by other modules
settings = Settings()

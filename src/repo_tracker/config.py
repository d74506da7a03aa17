"""Configuration settings for Repository Tracker."""

from datetime import timedelta
from functools import lru_cache
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class RateLimitConfig(BaseModel):
    """Configuration for rate limit reporting.

    Controls thresholds used to classify each credential's remaining
    quota when it is reported after a tracker run.
    """

    healthy_threshold_pct: float = Field(
        default=50.0,
        ge=0.0,
        le=100.0,
        description="% remaining above which status is HEALTHY",
    )
    warning_threshold_pct: float = Field(
        default=20.0,
        ge=0.0,
        le=100.0,
        description="% remaining above which status is WARNING (below healthy)",
    )


class TrackerConfig(BaseModel):
    """Configuration for the tracking scheduler.

    Controls how many repositories are tracked at once, how long a single
    repository may take, and how often a repository becomes due again.
    """

    concurrency: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Maximum repositories tracked concurrently",
    )
    repository_timeout_seconds: float = Field(
        default=300.0,
        gt=0,
        description="Maximum time tracking a single repository can take",
    )
    track_interval_minutes: int = Field(
        default=60,
        ge=1,
        description="Minutes after the last track before a repository is due again",
    )

    @property
    def track_interval(self) -> timedelta:
        """Get the track interval as a timedelta."""
        return timedelta(minutes=self.track_interval_minutes)


class LoggingConfig(BaseModel):
    """Configuration for logging behavior.

    Controls file logging, rotation, and output format.
    """

    log_file: str | None = Field(
        default=None,
        description="Optional path for file logging (enables rotation)",
    )
    rotation: str = Field(
        default="10 MB",
        description="When to rotate log file (e.g., '10 MB', '1 day')",
    )
    retention: str = Field(
        default="7 days",
        description="How long to keep rotated logs",
    )
    serialize: bool = Field(
        default=False,
        description="If True, output JSON format to file",
    )


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # --------------------------------------------------------------------------
    # Database
    # --------------------------------------------------------------------------
    database_url: str = Field(
        default="sqlite+aiosqlite:///./repo_tracker.db",
        description="Async database connection string",
    )

    # --------------------------------------------------------------------------
    # GitHub API
    # --------------------------------------------------------------------------
    github_tokens: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description="GitHub tokens shared by tracker workers (comma-separated or JSON list)",
    )

    # --------------------------------------------------------------------------
    # Application
    # --------------------------------------------------------------------------
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    # --------------------------------------------------------------------------
    # Tracker
    # --------------------------------------------------------------------------
    tracker: TrackerConfig = Field(
        default_factory=TrackerConfig,
        description="Tracking scheduler configuration",
    )

    # --------------------------------------------------------------------------
    # Rate Limit Reporting
    # --------------------------------------------------------------------------
    rate_limit: RateLimitConfig = Field(
        default_factory=RateLimitConfig,
        description="Rate limit reporting configuration",
    )

    # --------------------------------------------------------------------------
    # Logging Configuration
    # --------------------------------------------------------------------------
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration (file output, rotation)",
    )

    @field_validator("github_tokens", mode="before")
    @classmethod
    def _split_tokens(cls, value: Any) -> Any:
        """Accept tokens as a JSON list or a comma-separated string."""
        if isinstance(value, str):
            text = value.strip()
            if text.startswith("["):
                import json

                return json.loads(text)
            return [token.strip() for token in text.split(",") if token.strip()]
        return value


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

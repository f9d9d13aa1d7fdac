"""Application settings using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Player settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="course-progression", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    environment: Literal["development", "staging", "production", "testing"] = Field(
        default="development", description="Environment name"
    )

    # Learning API
    api_base_url: str = Field(
        default="http://localhost:8000/api/v1",
        description="Base URL of the learning server API",
    )
    api_timeout_seconds: float = Field(
        default=10.0, description="Timeout for learning API requests"
    )
    api_page_size: int = Field(
        default=100, ge=1, description="Page size when listing lessons"
    )
    api_token: str | None = Field(
        default=None, description="Bearer token sent with learning API requests"
    )

    # Redis (course list cache)
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL",
    )
    course_list_cache_prefix: str = Field(
        default="courses:list", description="Key prefix of cached course listings"
    )
    course_list_cache_ttl: int = Field(
        default=300, description="TTL in seconds of rewritten course listing pages"
    )

    # Navigation
    navigation_warning_message: str = Field(
        default="You must proceed in order.",
        description="Message emitted when a navigation attempt is blocked",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(
        default="console", description="Log format"
    )
    log_include_caller_info: bool = Field(
        default=False, description="Include caller info"
    )
    log_to_file: bool = Field(default=False, description="Also write JSON log files")
    log_dir: str = Field(default="logs", description="Directory for log files")
    log_file_max_bytes: int = Field(
        default=10 * 1024 * 1024, description="Max size per log file (10MB default)"
    )
    log_file_backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.environment == "testing"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

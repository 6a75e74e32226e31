"""Configuration management for Gmail Cleanup.

This module handles application configuration using Pydantic settings.
Configuration can be loaded from environment variables or .env files.
Slack secrets live in :mod:`gmail_cleanup.credentials` and are loaded per run.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gmail_cleanup.models import RetentionPolicy

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Application settings with environment variable support.

    All settings can be overridden via environment variables with
    the GMAIL_CLEANUP_ prefix (e.g., GMAIL_CLEANUP_RETENTION_DAYS).
    """

    model_config = SettingsConfigDict(
        env_prefix="GMAIL_CLEANUP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Retention
    retention_days: int = Field(
        default=180,
        gt=0,
        description="Threads older than this many days are eligible for deletion",
    )

    # Gmail Configuration
    gmail_user_id: str = Field(
        default="me",
        description="Gmail user ID that owns the mailbox",
    )
    gmail_credentials_path: Path = Field(
        default=Path("credentials.json"),
        description="Path to Gmail API credentials file",
    )
    gmail_token_path: Path = Field(
        default=Path("token.json"),
        description="Path to Gmail API token file",
    )
    gmail_scope: str = Field(
        default="https://mail.google.com/",
        description=(
            "OAuth scope used for Gmail access. Permanent deletion "
            "(users.messages.delete) requires the full mail.google.com scope."
        ),
    )
    gmail_page_size: int = Field(
        default=500,
        gt=0,
        le=500,
        description="Page size used when listing matching threads",
    )

    # Slack Configuration
    slack_post_url: str = Field(
        default="https://slack.com/api/chat.postMessage",
        description="Slack endpoint used to post the report",
    )
    slack_auth_url: str = Field(
        default="https://slack.com/api/auth.test",
        description="Slack endpoint used by the connection test",
    )
    slack_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Timeout for Slack API requests in seconds",
    )

    # Application Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, v: str) -> str:
        level = str(v).strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    def retention_policy(self) -> RetentionPolicy:
        return RetentionPolicy(retention_days=self.retention_days)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Settings: Application settings instance.
    """
    return Settings()

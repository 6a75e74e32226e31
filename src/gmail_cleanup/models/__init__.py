"""Data models for Gmail Cleanup.

This module contains Pydantic models for data validation and serialization.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from gmail_cleanup.models.email_thread import EmailThread


class RetentionPolicy(BaseModel):
    """Age threshold beyond which a thread becomes eligible for deletion."""

    model_config = ConfigDict(frozen=True)

    retention_days: int = Field(gt=0, description="Minimum thread age in days")


class SlackCredentials(BaseModel):
    """Slack bot token and the user ID that receives the report."""

    model_config = ConfigDict(frozen=True)

    token: Optional[str] = Field(default=None, description="Bot token (xoxb-...)")
    recipient_id: Optional[str] = Field(default=None, description="Slack member ID (U...)")


class CredentialValidation(BaseModel):
    """Result of checking the format of Slack credentials."""

    valid: bool = Field(description="Whether every check passed")
    errors: list[str] = Field(default_factory=list, description="One entry per failed check")


class CleanupResult(BaseModel):
    """Outcome of a cleanup run."""

    model_config = ConfigDict(frozen=True)

    matched_count: int = Field(ge=0, description="Threads matched by the search query")
    deleted_count: int = Field(ge=0, description="Threads whose messages were all deleted")

    @model_validator(mode="after")
    def _deleted_within_matched(self) -> "CleanupResult":
        if self.deleted_count > self.matched_count:
            raise ValueError("deleted_count cannot exceed matched_count")
        return self

    @property
    def failed_count(self) -> int:
        return self.matched_count - self.deleted_count


class AuthInfo(BaseModel):
    """Identity reported by Slack's auth.test endpoint."""

    team: Optional[str] = Field(default=None, description="Workspace name")
    user: Optional[str] = Field(default=None, description="Bot user name")
    team_id: Optional[str] = Field(default=None, description="Workspace ID")
    user_id: Optional[str] = Field(default=None, description="Bot user ID")


class NotificationPayload(BaseModel):
    """Body posted to chat.postMessage."""

    channel: str = Field(description="Recipient user ID, used as a DM channel")
    text: str = Field(description="Plain-text fallback summary")
    blocks: list[dict[str, Any]] = Field(description="Block Kit blocks")


__all__ = [
    "AuthInfo",
    "CleanupResult",
    "CredentialValidation",
    "EmailThread",
    "NotificationPayload",
    "RetentionPolicy",
    "SlackCredentials",
]

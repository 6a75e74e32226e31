"""Slack direct-message reporting.

This module formats the cleanup report and sends it to a single Slack user.
Notification is best-effort: failures are logged and never raised, so an
already completed cleanup is never affected.
"""

from __future__ import annotations

from typing import Any

import structlog

from gmail_cleanup.config import Settings
from gmail_cleanup.credentials import TOKEN_ENV, validate_credentials
from gmail_cleanup.exceptions import NotificationProviderError, NotificationTransportError
from gmail_cleanup.models import AuthInfo, NotificationPayload, SlackCredentials
from gmail_cleanup.query import describe_filter
from gmail_cleanup.slack.client import SlackClient

logger = structlog.get_logger()

REPORT_HEADER = ":broom: Gmail Cleanup Report"


def _header(text: str) -> dict[str, Any]:
    return {"type": "header", "text": {"type": "plain_text", "text": text, "emoji": True}}


def _section(text: str) -> dict[str, Any]:
    return {"type": "section", "text": {"type": "mrkdwn", "text": text}}


def _fields(*items: str) -> dict[str, Any]:
    return {"type": "section", "fields": [{"type": "mrkdwn", "text": t} for t in items]}


def build_message_text(count: int, is_dry_run: bool, retention_days: int) -> str:
    """Plain-text summary, also used as the notification fallback."""
    if is_dry_run:
        return (
            f"[DRY RUN] [Gmail Cleanup] Detected {count} unneeded emails older than "
            f"{retention_days} days (not deleted)."
        )
    return (
        f"[Gmail Cleanup] Permanently deleted {count} unneeded emails older than "
        f"{retention_days} days."
    )


def build_blocks(count: int, is_dry_run: bool, retention_days: int) -> list[dict[str, Any]]:
    """Block Kit layout of the report."""
    status = "Dry Run" if is_dry_run else "Done"
    description = (
        "Target emails were detected (dry run, nothing was deleted)"
        if is_dry_run
        else "Target emails were permanently deleted"
    )
    return [
        _header(REPORT_HEADER),
        _section(description),
        _section(f"*Status:*\n{status}"),
        _fields(f"*Filter:*\n{describe_filter(retention_days)}", f"*Count:*\n{count}"),
    ]


class SlackNotifier:
    """Sends cleanup reports and connection tests to Slack."""

    def __init__(self, settings: Settings | None = None, client: SlackClient | None = None) -> None:
        """Initialize the notifier.

        Args:
            settings: Application settings. If None, uses default settings.
            client: Slack transport. If None, creates one using the configured timeout.
        """
        from gmail_cleanup.config import get_settings

        self.settings = settings or get_settings()
        self.client = client or SlackClient(timeout=self.settings.slack_timeout)

    def build_payload(
        self, count: int, is_dry_run: bool, credentials: SlackCredentials
    ) -> NotificationPayload:
        retention_days = self.settings.retention_days
        return NotificationPayload(
            channel=credentials.recipient_id or "",
            text=build_message_text(count, is_dry_run, retention_days),
            blocks=build_blocks(count, is_dry_run, retention_days),
        )

    def notify(self, count: int, is_dry_run: bool, credentials: SlackCredentials) -> bool:
        """Send the cleanup report as a direct message.

        Args:
            count: Deleted thread count, or matched count in a dry run.
            is_dry_run: Whether the run skipped deletion.
            credentials: Slack credentials for this run.

        Returns:
            True if Slack accepted the message, False otherwise.
        """
        validation = validate_credentials(credentials)
        if not validation.valid:
            for error in validation.errors:
                logger.error("slack_credentials_invalid", error=error)
            logger.error(
                "slack_notification_skipped",
                reason="invalid credentials; run verify-settings for details",
            )
            return False

        payload = self.build_payload(count, is_dry_run, credentials)
        assert credentials.token is not None

        try:
            result = self.client.call(
                self.settings.slack_post_url,
                credentials.token,
                payload.model_dump(),
            )
            if not result.get("ok"):
                raise NotificationProviderError(str(result.get("error") or "unknown_error"))
        except NotificationProviderError as exc:
            logger.error("slack_notification_failed", error=exc.error)
            return False
        except NotificationTransportError as exc:
            logger.error("slack_notification_error", error=str(exc))
            return False

        logger.info("slack_notification_sent", channel=payload.channel, count=count, dry_run=is_dry_run)
        return True

    def test_connection(self, credentials: SlackCredentials) -> AuthInfo | None:
        """Check the bot token against Slack's auth.test endpoint.

        Only the token is checked; auth.test does not use the recipient.

        Returns:
            AuthInfo on success, None if the token is missing or malformed or
            Slack rejects it.

        Raises:
            NotificationTransportError: If Slack cannot be reached.
        """
        token_errors = [
            error
            for error in validate_credentials(credentials).errors
            if error.startswith(TOKEN_ENV)
        ]
        if token_errors:
            for error in token_errors:
                logger.error("slack_credentials_invalid", error=error)
            return None

        assert credentials.token is not None
        result = self.client.call(self.settings.slack_auth_url, credentials.token)

        if not result.get("ok"):
            logger.error("slack_connection_failed", error=result.get("error"))
            return None

        info = AuthInfo(
            team=result.get("team"),
            user=result.get("user"),
            team_id=result.get("team_id"),
            user_id=result.get("user_id"),
        )
        logger.info("slack_connection_succeeded", team=info.team, bot=info.user)
        return info

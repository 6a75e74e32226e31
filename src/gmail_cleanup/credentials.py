"""Slack credential loading and validation.

The bot token and recipient ID are read from the ``BOT_TOKEN`` and
``RECIPIENT_ID`` environment variables (or the ``.env`` file). They are loaded
fresh for every run and never cached at module level.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from gmail_cleanup.models import CredentialValidation, SlackCredentials

TOKEN_ENV = "BOT_TOKEN"
RECIPIENT_ENV = "RECIPIENT_ID"

TOKEN_PREFIX = "xoxb-"
RECIPIENT_PREFIX = "U"


class SlackSecrets(BaseSettings):
    """Raw secret values as found in the environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    bot_token: str | None = Field(default=None, description="Slack bot token")
    recipient_id: str | None = Field(default=None, description="Slack member ID of the recipient")


def load_credentials() -> SlackCredentials:
    """Read the Slack secrets from the credential store.

    Returns:
        SlackCredentials: Credentials for the current run. Empty values are
        normalized to None.
    """
    secrets = SlackSecrets()
    return SlackCredentials(
        token=secrets.bot_token or None,
        recipient_id=secrets.recipient_id or None,
    )


def validate_credentials(credentials: SlackCredentials) -> CredentialValidation:
    """Check the format of Slack credentials without contacting Slack.

    Token and recipient are checked independently, so both errors can be
    reported at once.
    """
    errors: list[str] = []

    if not credentials.token:
        errors.append(f"{TOKEN_ENV}: not set")
    elif not credentials.token.startswith(TOKEN_PREFIX):
        errors.append(f'{TOKEN_ENV}: invalid format (must start with "{TOKEN_PREFIX}")')

    if not credentials.recipient_id:
        errors.append(f"{RECIPIENT_ENV}: not set")
    elif not credentials.recipient_id.startswith(RECIPIENT_PREFIX):
        errors.append(f'{RECIPIENT_ENV}: invalid format (must start with "{RECIPIENT_PREFIX}")')

    return CredentialValidation(valid=not errors, errors=errors)

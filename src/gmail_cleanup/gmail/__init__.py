"""Gmail API access."""

from .client import GmailClient

__all__ = ["GmailClient"]

"""Slack reporting."""

from .client import SlackClient
from .notifier import SlackNotifier

__all__ = ["SlackClient", "SlackNotifier"]

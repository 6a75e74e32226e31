"""Custom exceptions for Gmail Cleanup."""


class GmailCleanupError(Exception):
    """Base exception for all Gmail Cleanup errors."""


class ConfigurationError(GmailCleanupError):
    """Exception raised for configuration related errors."""


class AuthenticationError(GmailCleanupError):
    """Exception raised for authentication failures."""


class GmailAPIError(GmailCleanupError):
    """Exception raised for Gmail API related errors."""


class ThreadDeletionError(GmailAPIError):
    """Exception raised when a thread's messages could not all be deleted."""

    def __init__(self, thread_id: str, subject: str, detail: str) -> None:
        super().__init__(f"Failed to delete thread {thread_id} ({subject}): {detail}")
        self.thread_id = thread_id
        self.subject = subject
        self.detail = detail


class NotificationError(GmailCleanupError):
    """Base exception for Slack notification failures."""


class NotificationTransportError(NotificationError):
    """Exception raised when Slack cannot be reached or returns an unreadable response."""


class NotificationProviderError(NotificationError):
    """Exception raised when Slack answers with ``ok: false``."""

    def __init__(self, error: str) -> None:
        super().__init__(error)
        self.error = error

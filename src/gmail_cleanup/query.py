"""Gmail search query construction."""

from __future__ import annotations


def _check_days(retention_days: int) -> None:
    if retention_days <= 0:
        raise ValueError(f"retention_days must be positive, got {retention_days}")


def build_search_query(retention_days: int) -> str:
    """Build the Gmail search query selecting threads eligible for deletion.

    The query is the conjunction of an age clause with "not starred" and
    "not important", in the same syntax as the Gmail search box.

    Args:
        retention_days: Minimum age of the threads, in days.

    Returns:
        Gmail search query string.

    Raises:
        ValueError: If retention_days is not positive.
    """
    _check_days(retention_days)
    return f"older_than:{retention_days}d -is:starred -is:important"


def describe_filter(retention_days: int) -> str:
    """Human-readable (Slack mrkdwn) description of the search query."""
    _check_days(retention_days)
    return f"Older than {retention_days} days `AND`\nNot starred `AND`\nNot important"

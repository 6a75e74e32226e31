"""Helpers for parsing Gmail thread metadata into internal models."""

from __future__ import annotations

from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any

from gmail_cleanup.models import EmailThread


def _header_map(message: dict[str, Any]) -> dict[str, str]:
    payload = message.get("payload") or {}
    headers = payload.get("headers") or []
    result: dict[str, str] = {}
    for h in headers:
        name = h.get("name")
        value = h.get("value")
        if isinstance(name, str) and isinstance(value, str):
            # Gmail can include duplicates; keep the first for now.
            result.setdefault(name.lower(), value)
    return result


def _parse_date(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return parsedate_to_datetime(value)
    except (TypeError, ValueError, OverflowError):
        return None


def _internal_date(message: dict[str, Any]) -> datetime | None:
    raw = message.get("internalDate")
    try:
        ms = int(raw) if raw is not None else None
    except (TypeError, ValueError):
        return None
    if ms is None:
        return None
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc)


def thread_to_email_thread(thread: dict[str, Any]) -> EmailThread:
    """Convert a Gmail API thread (format=metadata) to EmailThread.

    The subject comes from the first message and the date from the last one,
    preferring the Date header over Gmail's internal timestamp.

    Args:
        thread: Gmail API thread dict.

    Returns:
        EmailThread: Parsed thread model.
    """

    messages = [m for m in thread.get("messages") or [] if isinstance(m, dict)]

    subject = ""
    last_date: datetime | None = None
    if messages:
        subject = _header_map(messages[0]).get("subject") or ""
        last = messages[-1]
        last_date = _parse_date(_header_map(last).get("date")) or _internal_date(last)

    message_ids = [str(m["id"]) for m in messages if m.get("id")]

    return EmailThread(
        id=str(thread.get("id") or ""),
        subject=subject,
        last_message_date=last_date,
        message_ids=message_ids,
    )

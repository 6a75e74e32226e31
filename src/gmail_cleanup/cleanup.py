"""Permanent deletion of matched threads.

Threads are processed one at a time in search order. A failure inside one
thread never stops the batch; it only lowers the deleted count.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from gmail_cleanup.exceptions import GmailAPIError, ThreadDeletionError
from gmail_cleanup.gmail.client import GmailClient
from gmail_cleanup.models import CleanupResult, EmailThread

logger = structlog.get_logger()


def log_target_threads(threads: Sequence[EmailThread]) -> None:
    """Log the threads about to be deleted (or detected, in a dry run)."""
    for index, thread in enumerate(threads, start=1):
        date_part = (
            thread.last_message_date.date().isoformat() if thread.last_message_date else "(no date)"
        )
        logger.info(
            "target_thread",
            index=index,
            date=date_part,
            subject=thread.subject,
            message_count=len(thread.message_ids),
        )


class CleanupEngine:
    """Deletes every message of each matched thread."""

    def __init__(self, gmail_client: GmailClient) -> None:
        self.gmail_client = gmail_client

    async def run(self, threads: Sequence[EmailThread]) -> CleanupResult:
        """Delete all messages of the given threads.

        Args:
            threads: Threads returned by the search, in search order.

        Returns:
            CleanupResult: A thread is counted as deleted only when every one
            of its messages was removed.
        """
        if not threads:
            return CleanupResult(matched_count=0, deleted_count=0)

        deleted_count = 0
        for thread in threads:
            try:
                await self.delete_thread(thread)
            except ThreadDeletionError as exc:
                logger.error(
                    "thread_delete_failed",
                    thread_id=exc.thread_id,
                    subject=exc.subject,
                    error=exc.detail,
                )
                continue
            deleted_count += 1

        result = CleanupResult(matched_count=len(threads), deleted_count=deleted_count)
        logger.info(
            "cleanup_completed",
            deleted=result.deleted_count,
            matched=result.matched_count,
            failed=result.failed_count,
        )
        return result

    async def delete_thread(self, thread: EmailThread) -> None:
        """Delete every message in a thread, stopping at the first failure.

        Raises:
            ThreadDeletionError: If any message could not be deleted.
        """
        for message_id in thread.message_ids:
            try:
                await self.gmail_client.delete_message(message_id)
            except GmailAPIError as exc:
                raise ThreadDeletionError(thread.id, thread.subject, str(exc)) from exc

"""Cleanup pipeline.

This module wires the query, search, deletion and notification steps
together for a single run.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from gmail_cleanup.cleanup import CleanupEngine, log_target_threads
from gmail_cleanup.config import Settings
from gmail_cleanup.credentials import load_credentials
from gmail_cleanup.gmail.client import GmailClient
from gmail_cleanup.models import CleanupResult, SlackCredentials
from gmail_cleanup.query import build_search_query
from gmail_cleanup.slack.notifier import SlackNotifier

logger = structlog.get_logger()


@dataclass
class RunContext:
    """Everything a single run needs.

    Credentials are loaded when the context is created, so every run sees the
    current values of the credential store.
    """

    settings: Settings
    credentials: SlackCredentials = field(default_factory=load_credentials)
    gmail_client: GmailClient | None = None
    notifier: SlackNotifier | None = None

    def __post_init__(self) -> None:
        if self.gmail_client is None:
            self.gmail_client = GmailClient(self.settings)
        if self.notifier is None:
            self.notifier = SlackNotifier(self.settings)


async def run_cleanup(context: RunContext, dry_run: bool = False) -> CleanupResult:
    """Search for aged threads, delete them and report to Slack.

    Args:
        context: Per-run context.
        dry_run: If True, matched threads are reported but not deleted.

    Returns:
        CleanupResult: In a dry run, deleted_count is always 0.

    Raises:
        ConfigurationError: If Gmail OAuth files are missing.
        AuthenticationError: If Gmail authentication fails.
        GmailAPIError: If the search fails.
    """
    assert context.gmail_client is not None
    assert context.notifier is not None

    retention_days = context.settings.retention_policy().retention_days
    query = build_search_query(retention_days)

    await context.gmail_client.authenticate()
    threads = await context.gmail_client.search_threads(query)

    logger.info("cleanup_search_completed", query=query, matched=len(threads), dry_run=dry_run)

    if not threads:
        logger.info("no_matching_threads")
        return CleanupResult(matched_count=0, deleted_count=0)

    log_target_threads(threads)

    if dry_run:
        logger.info("dry_run_deletion_skipped", matched=len(threads))
        context.notifier.notify(len(threads), True, context.credentials)
        return CleanupResult(matched_count=len(threads), deleted_count=0)

    result = await CleanupEngine(context.gmail_client).run(threads)
    context.notifier.notify(result.deleted_count, False, context.credentials)
    return result

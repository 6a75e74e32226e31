"""Integration tests against a real Gmail account.

Read-only: these tests search but never delete. They run only when
GMAIL_CLEANUP_INTEGRATION=1 and a valid token.json is available.
"""

import os

import pytest

from gmail_cleanup.config import Settings
from gmail_cleanup.gmail.client import GmailClient
from gmail_cleanup.query import build_search_query

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        os.environ.get("GMAIL_CLEANUP_INTEGRATION") != "1",
        reason="set GMAIL_CLEANUP_INTEGRATION=1 to run Gmail integration tests",
    ),
]


@pytest.mark.asyncio
async def test_search_old_threads() -> None:
    """Test the OAuth flow and a real search for cleanup candidates."""
    client = GmailClient(Settings())
    await client.authenticate()

    threads = await client.search_threads(build_search_query(3650))

    for thread in threads:
        assert thread.id
        assert thread.message_ids

"""Gmail API client implementation.

This module provides a client for searching threads and permanently deleting
messages through the Gmail API.

Notes:
    The Google API client is synchronous. This project wraps those calls using
    `asyncio.to_thread` so the rest of the codebase can remain async-friendly.
    Calls are still awaited one at a time; nothing runs concurrently.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

import structlog

from gmail_cleanup.config import Settings
from gmail_cleanup.exceptions import AuthenticationError, ConfigurationError, GmailAPIError
from gmail_cleanup.gmail.parsing import thread_to_email_thread
from gmail_cleanup.models import EmailThread

logger = structlog.get_logger()

_THREAD_METADATA_HEADERS = ["Subject", "Date"]


class GmailClient:
    """Gmail API client for cleanup operations.

    This client handles authentication, thread search,
    and permanent message deletion.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize Gmail client.

        Args:
            settings: Application settings. If None, uses default settings.
        """
        from gmail_cleanup.config import get_settings

        self.settings = settings or get_settings()
        self._service: Any | None = None
        logger.info("gmail_client_initialized")

    async def authenticate(self) -> None:
        """Authenticate with Gmail API using OAuth2.

        Raises:
            ConfigurationError: If the OAuth client secrets file is missing.
            AuthenticationError: If authentication fails.
        """

        if self._service is not None:
            return

        credentials_path = Path(self.settings.gmail_credentials_path)
        token_path = Path(self.settings.gmail_token_path)
        scope = self.settings.gmail_scope

        if not credentials_path.exists() and not token_path.exists():
            raise ConfigurationError(
                f"Gmail credentials file not found: {credentials_path}. "
                "See README.md -> Gmail API Setup."
            )

        logger.info(
            "gmail_authentication_started",
            credentials_path=str(credentials_path),
            token_path=str(token_path),
            scope=scope,
        )

        try:
            self._service = await asyncio.to_thread(
                self._build_service,
                credentials_path,
                token_path,
                scope,
            )
        except Exception as exc:  # noqa: BLE001
            logger.exception("gmail_authentication_failed", error=str(exc))
            raise AuthenticationError(str(exc)) from exc

        logger.info("gmail_authentication_completed")

    async def search_threads(self, query: str) -> list[EmailThread]:
        """Find all threads matching a Gmail search query.

        Args:
            query: Gmail search query string.

        Returns:
            Matching threads, in the order Gmail returns them. Threads whose
            metadata cannot be fetched are logged and left out.

        Raises:
            GmailAPIError: If listing the matching threads fails.
        """

        self._ensure_authenticated()

        logger.info("searching_threads", query=query)

        try:
            thread_ids = await asyncio.to_thread(self._list_thread_ids_sync, query)
        except Exception as exc:  # noqa: BLE001
            logger.exception("gmail_search_threads_failed", query=query, error=str(exc))
            raise GmailAPIError(str(exc)) from exc

        threads: list[EmailThread] = []
        skipped = 0
        for thread_id in thread_ids:
            try:
                raw = await asyncio.to_thread(self._get_thread_sync, thread_id)
            except Exception as exc:  # noqa: BLE001
                logger.warning("gmail_get_thread_failed", thread_id=thread_id, error=str(exc))
                skipped += 1
                continue
            threads.append(thread_to_email_thread(raw))

        logger.info(
            "search_threads_completed",
            query=query,
            thread_count=len(threads),
            skipped=skipped,
        )
        return threads

    async def delete_message(self, message_id: str) -> None:
        """Permanently delete a single message. There is no undo.

        Args:
            message_id: The Gmail message ID.

        Raises:
            GmailAPIError: If the API request fails.
        """

        self._ensure_authenticated()

        logger.debug("deleting_message", message_id=message_id)

        try:
            await asyncio.to_thread(self._delete_message_sync, message_id)
        except Exception as exc:  # noqa: BLE001
            logger.warning("gmail_delete_message_failed", message_id=message_id, error=str(exc))
            raise GmailAPIError(str(exc)) from exc

    def _ensure_authenticated(self) -> None:
        if self._service is None:
            raise AuthenticationError(
                "Gmail client is not authenticated. Call await GmailClient.authenticate() first."
            )

    def _build_service(self, credentials_path: Path, token_path: Path, scope: str) -> Any:
        # Imported lazily to keep import-time cost low and tests fast.
        from google.auth.transport.requests import Request
        from google.oauth2.credentials import Credentials
        from google_auth_oauthlib.flow import InstalledAppFlow
        from googleapiclient.discovery import build

        creds: Credentials | None = None
        if token_path.exists():
            creds = Credentials.from_authorized_user_file(str(token_path), scopes=[scope])

        if creds is not None and creds.expired and creds.refresh_token:
            creds.refresh(Request())

        if creds is None or not creds.valid:
            if not credentials_path.exists():
                raise ConfigurationError(
                    f"Gmail token is invalid and credentials file not found: {credentials_path}"
                )
            flow = InstalledAppFlow.from_client_secrets_file(str(credentials_path), scopes=[scope])
            creds = flow.run_local_server(port=0)
            token_path.parent.mkdir(parents=True, exist_ok=True)
            token_path.write_text(creds.to_json(), encoding="utf-8")

        # cache_discovery=False prevents writing discovery docs to disk.
        return build("gmail", "v1", credentials=creds, cache_discovery=False)

    def _list_thread_ids_sync(self, query: str) -> list[str]:
        assert self._service is not None
        user_id = self.settings.gmail_user_id
        thread_ids: list[str] = []

        page_token: str | None = None
        while True:
            request = (
                self._service.users()
                .threads()
                .list(
                    userId=user_id,
                    maxResults=self.settings.gmail_page_size,
                    q=query,
                    pageToken=page_token,
                )
            )
            response = request.execute()
            for t in response.get("threads", []) or []:
                thread_id = t.get("id")
                if isinstance(thread_id, str) and thread_id:
                    thread_ids.append(thread_id)
            page_token = response.get("nextPageToken")
            if page_token is None:
                break

        return thread_ids

    def _get_thread_sync(self, thread_id: str) -> dict[str, Any]:
        assert self._service is not None
        request = (
            self._service.users()
            .threads()
            .get(
                userId=self.settings.gmail_user_id,
                id=thread_id,
                format="metadata",
                metadataHeaders=_THREAD_METADATA_HEADERS,
            )
        )
        return request.execute()

    def _delete_message_sync(self, message_id: str) -> None:
        assert self._service is not None
        request = (
            self._service.users()
            .messages()
            .delete(userId=self.settings.gmail_user_id, id=message_id)
        )
        request.execute()

"""Minimal Slack Web API transport.

Slack answers most calls with HTTP 200 and a JSON body carrying ``ok``; error
statuses (e.g. 429) usually carry the same body, so it is read in both cases.
"""

from __future__ import annotations

import http.client
import json
import urllib.error
import urllib.request
from typing import Any

import structlog

from gmail_cleanup.exceptions import NotificationTransportError

logger = structlog.get_logger()


class SlackClient:
    """Posts JSON to Slack Web API methods with bearer authentication."""

    def __init__(self, timeout: float = 10.0) -> None:
        self.timeout = timeout

    def call(self, url: str, token: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
        """POST to a Slack API method and return the decoded response.

        Args:
            url: Full method URL (e.g. https://slack.com/api/chat.postMessage).
            token: Bot token sent as a bearer credential.
            payload: JSON body. If None, the request carries no body.

        Returns:
            Decoded JSON response.

        Raises:
            NotificationTransportError: If Slack cannot be reached or the
                response is not a JSON object.
        """
        headers = {"Authorization": f"Bearer {token}"}
        data: bytes | None = None
        if payload is not None:
            data = json.dumps(payload).encode("utf-8")
            headers["Content-Type"] = "application/json; charset=utf-8"

        logger.debug("slack_request", url=url)
        try:
            req = urllib.request.Request(url=url, data=data, headers=headers, method="POST")
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:  # noqa: S310
                body = resp.read()
        except urllib.error.HTTPError as e:
            logger.warning("slack_http_error", url=url, status=e.code)
            try:
                body = e.read()
            except (OSError, http.client.HTTPException) as read_error:
                raise NotificationTransportError(
                    f"Could not read Slack error response: {read_error!r}"
                ) from read_error
        except (urllib.error.URLError, OSError, http.client.HTTPException, ValueError) as e:
            raise NotificationTransportError(f"Could not reach Slack: {e!r}") from e

        try:
            result = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise NotificationTransportError(f"Malformed Slack response: {e}") from e

        if not isinstance(result, dict):
            raise NotificationTransportError("Malformed Slack response: expected a JSON object")
        return result

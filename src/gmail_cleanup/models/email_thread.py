"""Thread model used by the cleanup pipeline.

Only the metadata needed to log and delete a thread is kept: the subject and
date for reporting, and the message IDs for deletion.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class EmailThread(BaseModel):
    """A Gmail conversation matched by the cleanup query."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Gmail thread ID")
    subject: str = Field(default="", description="Subject of the first message")
    last_message_date: datetime | None = Field(
        default=None, description="Date of the most recent message"
    )

    # Ordered as returned by Gmail (oldest first).
    message_ids: list[str] = Field(default_factory=list, description="Gmail message IDs")

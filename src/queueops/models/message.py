"""Queue message envelope."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class QueueMessage(BaseModel):
    """One delivery of a message, as handed out by a receive call.

    The receipt handle is only valid until the visibility timeout of this
    delivery expires.
    """

    message_id: str
    receipt_handle: str
    body: str
    attributes: dict[str, Any] = Field(default_factory=dict)

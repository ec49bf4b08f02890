"""In-memory queue transport for unit tests and local runs."""

from __future__ import annotations

import itertools
from collections import deque

from queueops.core.exceptions import TransportError
from queueops.models.message import QueueMessage


class MemoryQueueTransport:
    """Deque-backed IQueueTransport.

    Received messages move to an in-flight table until deleted. Visibility
    timeouts are not timed; call ``expire_in_flight`` to make undeleted
    messages visible again.
    """

    def __init__(self) -> None:
        self._visible: deque[tuple[str, str]] = deque()
        self._in_flight: dict[str, tuple[str, str]] = {}
        self._ids = itertools.count(1)
        self._deliveries = itertools.count(1)
        self.receive_calls: list[dict[str, int]] = []
        self.deleted_handles: list[str] = []
        self.receive_error: Exception | None = None
        self.failing_delete_handles: set[str] = set()

    def send(self, body: str, message_id: str | None = None) -> str:
        message_id = message_id or f"msg-{next(self._ids)}"
        self._visible.append((message_id, body))
        return message_id

    @property
    def visible_count(self) -> int:
        return len(self._visible)

    @property
    def in_flight_count(self) -> int:
        return len(self._in_flight)

    def expire_in_flight(self) -> int:
        """Return every undeleted in-flight message to the queue."""
        expired = list(self._in_flight.values())
        self._in_flight.clear()
        self._visible.extend(expired)
        return len(expired)

    async def receive(
        self, max_messages: int, wait_time_seconds: int, visibility_timeout_seconds: int
    ) -> list[QueueMessage]:
        self.receive_calls.append({
            "max_messages": max_messages,
            "wait_time_seconds": wait_time_seconds,
            "visibility_timeout_seconds": visibility_timeout_seconds,
        })
        if self.receive_error is not None:
            raise self.receive_error

        messages: list[QueueMessage] = []
        while self._visible and len(messages) < max_messages:
            message_id, body = self._visible.popleft()
            handle = f"{message_id}#{next(self._deliveries)}"
            self._in_flight[handle] = (message_id, body)
            messages.append(
                QueueMessage(message_id=message_id, receipt_handle=handle, body=body)
            )
        return messages

    async def delete(self, receipt_handle: str) -> None:
        if receipt_handle in self.failing_delete_handles:
            raise TransportError("delete", f"rejected receipt handle {receipt_handle!r}")
        if receipt_handle not in self._in_flight:
            raise TransportError("delete", f"unknown receipt handle {receipt_handle!r}")
        del self._in_flight[receipt_handle]
        self.deleted_handles.append(receipt_handle)

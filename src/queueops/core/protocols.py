"""Protocol interfaces for the queue orchestration seams.

The transport and the handler are both injected into the orchestrator, so
tests can swap them for in-memory doubles without any inheritance.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from queueops.models.message import QueueMessage


# ---------------------------------------------------------------------------
# Queue Transport
# ---------------------------------------------------------------------------

@runtime_checkable
class IQueueTransport(Protocol):
    """Receive/delete access to an at-least-once message queue."""

    async def receive(
        self, max_messages: int, wait_time_seconds: int, visibility_timeout_seconds: int
    ) -> list[QueueMessage]: ...

    async def delete(self, receipt_handle: str) -> None: ...


# ---------------------------------------------------------------------------
# Message Handler
# ---------------------------------------------------------------------------

@runtime_checkable
class IMessageHandler(Protocol):
    """Business logic applied to one decoded message body.

    May be a plain function or a coroutine function. Raising signals failure
    and leaves the message on the queue.
    """

    def __call__(self, body: Any) -> Any: ...

"""One receive call and the handle-then-delete protocol for its messages."""

from __future__ import annotations

import asyncio
import inspect
import json
import logging
from datetime import datetime
from typing import Any

from queueops.core.config import RunConfiguration
from queueops.core.exceptions import (
    ConfigurationError,
    DecodeError,
    TransportError,
    raise_fatal,
)
from queueops.core.protocols import IMessageHandler, IQueueTransport
from queueops.core.timing import milliseconds_between, utc_now
from queueops.core.types import BodyDecoder
from queueops.models.message import QueueMessage
from queueops.models.results import BatchResult, FailureKind, FailureRecord

logger = logging.getLogger(__name__)

# (succeeded, handler result or failure record)
Outcome = tuple[bool, Any]


def _is_coroutine_callable(fn: Any) -> bool:
    return inspect.iscoroutinefunction(fn) or inspect.iscoroutinefunction(
        getattr(fn, "__call__", None)
    )


class BatchProcessor:
    """Processes one batch of up to ``batch_size`` messages.

    Every message returned by the receive call is decoded, handed to the
    handler and, only once the handler returned, deleted by its receipt
    handle. A message whose decode, handler or delete step fails stays on
    the queue and is redelivered after its visibility timeout.
    """

    def __init__(
        self,
        *,
        config: RunConfiguration,
        transport: IQueueTransport,
        handler: IMessageHandler,
        decoder: BodyDecoder = json.loads,
    ) -> None:
        if handler is None or not callable(handler):
            raise ConfigurationError(
                "A callable message handler must be provided before processing messages."
            )
        self._config = config
        self._transport = transport
        self._handler = handler
        self._handler_is_async = _is_coroutine_callable(handler)
        self._decoder = decoder

    async def process(self) -> BatchResult:
        started = utc_now()

        try:
            messages = await self._transport.receive(
                self._config.batch_size,
                self._config.wait_time_seconds,
                self._config.visibility_timeout_seconds,
            )
        except TransportError as exc:
            logger.error("Receive failed: %s", exc, extra={"queue_url": self._config.queue_url})
            failure = FailureRecord.from_exception(FailureKind.RECEIVE, exc)
            return self._result(started, f"Receive failed: {exc}", [], [failure], received=0)

        if not messages:
            logger.debug("The queue is empty", extra={"queue_url": self._config.queue_url})
            return self._result(started, "The queue is empty", [], [], received=0)

        try:
            async with asyncio.TaskGroup() as tg:
                tasks = [tg.create_task(self.process_message(m)) for m in messages]
        except ExceptionGroup as group:
            raise_fatal(group)
            raise

        responses: list[Any] = []
        errors: list[FailureRecord] = []
        for task in tasks:
            ok, value = task.result()
            (responses if ok else errors).append(value)

        return self._result(
            started,
            f"Processed batch of {len(messages)} messages",
            responses,
            errors,
            received=len(messages),
        )

    async def process_message(self, message: QueueMessage) -> Outcome:
        """Decode, handle and delete one message, capturing any failure."""
        try:
            body = self._decode(message)
        except DecodeError as exc:
            return False, self._failure(FailureKind.DECODE, exc, message)

        try:
            result = await self._invoke_handler(body)
        except ConfigurationError:
            raise
        except Exception as exc:
            return False, self._failure(FailureKind.HANDLER, exc, message)

        try:
            await self._transport.delete(message.receipt_handle)
        except Exception as exc:
            return False, self._failure(FailureKind.DELETE, exc, message)

        return True, result

    def _decode(self, message: QueueMessage) -> Any:
        try:
            return self._decoder(message.body)
        except Exception as exc:
            raise DecodeError(message.message_id, str(exc)) from exc

    async def _invoke_handler(self, body: Any) -> Any:
        if self._handler_is_async:
            return await self._handler(body)
        # Sync handlers may block on I/O; keep them off the event loop.
        result = await asyncio.to_thread(self._handler, body)
        if inspect.isawaitable(result):
            result = await result
        return result

    def _failure(
        self, kind: FailureKind, exc: Exception, message: QueueMessage
    ) -> FailureRecord:
        logger.warning(
            "Message %s failed at %s step: %s",
            message.message_id,
            kind.value,
            exc,
            extra={"message_id": message.message_id, "failure_kind": kind.value},
        )
        return FailureRecord.from_exception(
            kind, exc, message_id=message.message_id, receipt_handle=message.receipt_handle
        )

    def _result(
        self,
        started: datetime,
        message: str,
        responses: list[Any],
        errors: list[FailureRecord],
        *,
        received: int,
    ) -> BatchResult:
        finished = utc_now()
        keep = self._config.include_details
        return BatchResult(
            started_at=started,
            finished_at=finished,
            duration_ms=milliseconds_between(started, finished),
            message=message,
            received_count=received,
            success_count=len(responses),
            failure_count=len(errors),
            responses=responses if keep else None,
            errors=errors if keep else None,
        )

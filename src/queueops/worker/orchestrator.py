"""Parallel batch polling across a fixed number of workers."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

from queueops.core.config import RunConfiguration
from queueops.core.exceptions import ConfigurationError, raise_fatal
from queueops.core.protocols import IMessageHandler, IQueueTransport
from queueops.core.timing import milliseconds_between, utc_now
from queueops.core.types import BodyDecoder
from queueops.models.results import FailureKind, FailureRecord, RunResult
from queueops.transport.sqs_backend import SQSTransport
from queueops.worker.batch_processor import BatchProcessor

logger = logging.getLogger(__name__)


class QueueOrchestrator:
    """Reads the queue in X groups of Y messages per run.

    X is ``concurrency`` and Y is ``batch_size``. The handler is bound at
    construction and shared by every batch, so it must be safe to call
    concurrently.
    """

    def __init__(
        self,
        config: RunConfiguration,
        handler: IMessageHandler,
        *,
        transport: IQueueTransport | None = None,
        decoder: BodyDecoder = json.loads,
    ) -> None:
        self._config = config
        if transport is None:
            transport = SQSTransport(
                queue_url=config.queue_url,
                region=config.region,
                endpoint_url=config.endpoint_url,
            )
        self._transport = transport
        self.batch_processor = BatchProcessor(
            config=config,
            transport=self._transport,
            handler=handler,
            decoder=decoder,
        )

    @property
    def config(self) -> RunConfiguration:
        return self._config

    @property
    def transport(self) -> IQueueTransport:
        return self._transport

    async def run(self) -> RunResult:
        """Run ``concurrency`` batches concurrently and aggregate their results.

        Only a ConfigurationError escapes; any other batch failure is folded
        into ``errors`` and the remaining batches run to completion.
        """
        cfg = self._config
        logger.info(
            "Starting run of %d batches of up to %d messages",
            cfg.concurrency,
            cfg.batch_size,
            extra={"queue_url": cfg.queue_url},
        )
        responses: list[Any] = []
        errors: list[FailureRecord] = []
        received = success_count = failure_count = 0
        started = utc_now()

        async def settle(index: int) -> None:
            nonlocal received, success_count, failure_count
            try:
                batch = await self.batch_processor.process()
            except ConfigurationError:
                raise
            except Exception as exc:
                logger.exception("Batch %d failed", index, extra={"queue_url": cfg.queue_url})
                failure_count += 1
                errors.append(FailureRecord.from_exception(FailureKind.BATCH, exc))
                return
            received += batch.received_count
            success_count += batch.success_count
            failure_count += batch.failure_count
            responses.extend(batch.responses or [])
            errors.extend(batch.errors or [])

        try:
            async with asyncio.TaskGroup() as tg:
                for i in range(cfg.concurrency):
                    tg.create_task(settle(i))
        except ExceptionGroup as group:
            raise_fatal(group)
            raise

        finished = utc_now()
        summary = f"Processed the queue in {cfg.concurrency} groups of {cfg.batch_size} messages"
        if received == 0 and failure_count == 0:
            summary += ": the queue is empty, 0 messages processed"
        else:
            summary += f": {success_count} succeeded, {failure_count} failed"

        result = RunResult(
            started_at=started,
            finished_at=finished,
            duration_ms=milliseconds_between(started, finished),
            message=summary,
            success_count=success_count,
            failure_count=failure_count,
            received_count=received,
            responses=responses if cfg.include_details else None,
            errors=errors if cfg.include_details else None,
            batch_count=cfg.concurrency,
            batch_size=cfg.batch_size,
            concurrency=cfg.concurrency,
        )
        logger.info(
            summary,
            extra={
                "queue_url": cfg.queue_url,
                "duration_ms": result.duration_ms,
                "success_count": success_count,
                "failure_count": failure_count,
            },
        )
        return result

    def run_sync(self) -> RunResult:
        """Blocking entry point for callers without a running event loop."""
        return asyncio.run(self.run())

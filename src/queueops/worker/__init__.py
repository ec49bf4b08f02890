"""Batch processing and run orchestration."""

from __future__ import annotations

import json

from queueops.core.config import AppSettings, RunConfiguration
from queueops.core.protocols import IMessageHandler, IQueueTransport
from queueops.core.types import BodyDecoder
from queueops.worker.orchestrator import QueueOrchestrator


def create_orchestrator(
    handler: IMessageHandler,
    settings: AppSettings | None = None,
    transport: IQueueTransport | None = None,
    decoder: BodyDecoder = json.loads,
) -> QueueOrchestrator:
    """Create an orchestrator wired from application settings.

    Without an explicit transport, an SQS transport is built from
    ``settings.sqs``.
    """
    if settings is None:
        settings = AppSettings()

    return QueueOrchestrator(
        RunConfiguration.from_settings(settings),
        handler,
        transport=transport,
        decoder=decoder,
    )


__all__ = ["QueueOrchestrator", "create_orchestrator"]

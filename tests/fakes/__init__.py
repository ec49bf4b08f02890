"""Shared test doubles: in-memory transport and sample handlers."""

from __future__ import annotations

from queueops.transport.memory_backend import MemoryQueueTransport
from tests.fakes.handlers import echo_handler, failing_handler, recording_handler

__all__ = ["MemoryQueueTransport", "echo_handler", "failing_handler", "recording_handler"]

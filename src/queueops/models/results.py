"""Batch and run result models."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Any, Optional

from pydantic import BaseModel


class FailureKind(StrEnum):
    RECEIVE = "receive"
    DECODE = "decode"
    HANDLER = "handler"
    DELETE = "delete"
    BATCH = "batch"


class FailureRecord(BaseModel):
    """A single failure, with enough context to find the message it concerns."""

    kind: FailureKind
    error_type: str
    detail: str
    message_id: Optional[str] = None
    receipt_handle: Optional[str] = None

    @classmethod
    def from_exception(
        cls,
        kind: FailureKind,
        exc: BaseException,
        message_id: Optional[str] = None,
        receipt_handle: Optional[str] = None,
    ) -> FailureRecord:
        return cls(
            kind=kind,
            error_type=type(exc).__name__,
            detail=str(exc),
            message_id=message_id,
            receipt_handle=receipt_handle,
        )


class WorkResult(BaseModel):
    """Timing and outcome shared by batch and run results.

    ``responses`` and ``errors`` are None when details are not retained;
    the counts are always populated.
    """

    started_at: datetime
    finished_at: datetime
    duration_ms: int
    message: str
    success_count: int = 0
    failure_count: int = 0
    responses: Optional[list[Any]] = None
    errors: Optional[list[FailureRecord]] = None
    received_count: int = 0


class BatchResult(WorkResult):
    """Outcome of one receive call and the messages it returned."""


class RunResult(WorkResult):
    """Aggregate of every batch launched by one orchestrator run."""

    batch_count: int = 0
    batch_size: int = 0
    concurrency: int = 0

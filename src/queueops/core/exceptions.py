"""queueops exception hierarchy."""

from __future__ import annotations


class QueueOpsError(Exception):
    """Base exception for all queueops errors."""


class TransportError(QueueOpsError):
    """A receive or delete call against the queue failed."""

    def __init__(self, operation: str, message: str) -> None:
        self.operation = operation
        super().__init__(f"Queue {operation} failed: {message}")


class DecodeError(QueueOpsError):
    """A message body could not be decoded into the expected structure."""

    def __init__(self, message_id: str, message: str) -> None:
        self.message_id = message_id
        super().__init__(f"Could not decode body of message {message_id}: {message}")


class HandlerError(QueueOpsError):
    """The registered message handler signalled failure."""


class ConfigurationError(QueueOpsError):
    """The orchestrator cannot do useful work with its current setup."""


def raise_fatal(group: BaseExceptionGroup) -> None:
    """Re-raise the first ConfigurationError found in a task group failure.

    Returns normally when the group holds no ConfigurationError, leaving the
    caller to re-raise the group itself.
    """
    fatal = group.subgroup(ConfigurationError)
    while fatal is not None:
        first = fatal.exceptions[0]
        if not isinstance(first, BaseExceptionGroup):
            raise first
        fatal = first

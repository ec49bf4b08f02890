"""JSON logging to stdout, one object per line."""

from __future__ import annotations

import json
import logging
import sys
import time
from typing import Any

_RESERVED = frozenset((
    "args", "msg", "levelname", "levelno", "name", "pathname", "filename",
    "module", "exc_info", "exc_text", "stack_info", "lineno", "funcName",
    "created", "msecs", "relativeCreated", "thread", "threadName",
    "processName", "process", "taskName", "message",
))


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": time.time(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        for k, v in record.__dict__.items():
            if k in _RESERVED or k.startswith("_"):
                continue
            payload.setdefault(k, v)

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", verbose: bool = False) -> None:
    """Install the JSON handler on the root logger.

    Args:
        level: Level for the ``queueops`` logger namespace.
        verbose: If True, ``queueops`` logs at DEBUG and third-party
            loggers (boto3, botocore) at INFO instead of WARNING.
    """
    root_level = "INFO" if verbose else "WARNING"
    app_level = "DEBUG" if verbose else level.upper()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(root_level)
    root.addHandler(handler)

    app_logger = logging.getLogger("queueops")
    app_logger.setLevel(app_level)
    app_logger.propagate = True

"""Run one orchestrator pass against a queue from the command line.

Usage:
    queueops --handler mypkg.handlers:process --queue-url https://sqs... --concurrency 4
"""

from __future__ import annotations

import argparse
import importlib
import logging
import os
import sys
from typing import Any

from pydantic import ValidationError

from queueops.core.config import AppSettings, RunConfiguration
from queueops.core.exceptions import ConfigurationError
from queueops.core.logging_setup import setup_logging
from queueops.core.protocols import IMessageHandler
from queueops.worker.orchestrator import QueueOrchestrator

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_CONFIG = 2


def load_handler(path: str) -> IMessageHandler:
    """Import a handler given as ``package.module:function``."""
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigurationError(f"Handler must look like 'module:function', got {path!r}")
    try:
        module = importlib.import_module(module_name)
    except Exception as exc:
        raise ConfigurationError(f"Cannot import handler module {module_name!r}: {exc}") from exc

    handler = getattr(module, attr, None)
    if handler is None or not callable(handler):
        raise ConfigurationError(f"{path!r} is not a callable handler")
    return handler


def build_config(args: argparse.Namespace, settings: AppSettings) -> RunConfiguration:
    overrides: dict[str, Any] = {
        "queue_url": args.queue_url,
        "region": args.region,
        "endpoint_url": args.endpoint_url,
        "batch_size": args.batch_size,
        "concurrency": args.concurrency,
    }
    if args.no_details:
        overrides["include_details"] = False

    try:
        base = RunConfiguration.from_settings(settings).model_dump()
        base.update({k: v for k, v in overrides.items() if v is not None})
        config = RunConfiguration(**base)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid run configuration: {exc}") from exc

    if not config.queue_url:
        raise ConfigurationError("No queue URL configured (--queue-url or QUEUEOPS_SQS_QUEUE_URL)")
    return config


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Process one run of queue batches")
    parser.add_argument("--handler", required=True, help="Message handler as module:function")
    parser.add_argument("--queue-url", default=None, help="SQS queue URL")
    parser.add_argument("--region", default=None, help="AWS region")
    parser.add_argument("--endpoint-url", default=None, help="SQS endpoint (e.g. http://localhost:4566)")
    parser.add_argument("--batch-size", type=int, default=None, help="Max messages per receive (1-10)")
    parser.add_argument("--concurrency", type=int, default=None, help="Parallel batches per run")
    parser.add_argument("--no-details", action="store_true", help="Omit responses and errors from the result")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    # Console scripts do not put the working directory on sys.path.
    if os.getcwd() not in sys.path:
        sys.path.insert(0, os.getcwd())

    try:
        settings = AppSettings()
    except ValidationError as exc:
        setup_logging(verbose=args.verbose)
        logger.error("Invalid settings: %s", exc)
        return EXIT_CONFIG
    setup_logging(settings.log_level, verbose=args.verbose)

    try:
        handler = load_handler(args.handler)
        orchestrator = QueueOrchestrator(build_config(args, settings), handler)
        result = orchestrator.run_sync()
    except ConfigurationError as exc:
        logger.error("%s", exc)
        return EXIT_CONFIG

    # Handler results may be arbitrary objects.
    print(result.model_dump_json(indent=2, fallback=repr))
    return EXIT_FAILURES if result.failure_count else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

"""Structured logging for the engine.

Events are emitted through structlog. While an operator runs, its name is
bound to the logging context, so anything logged inside the operator
(including user predicates that log) carries `operator=<name>`.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import Any, Generator, TextIO

import structlog
from structlog.types import Processor

from relalg.infrastructure.config import ObservabilityConfig


def setup_logging(
    level: str = "INFO",
    log_format: str = "json",
    stream: TextIO | None = None,
) -> None:
    """
    Configure structlog for the process.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: 'json' for one JSON object per line, 'console' for
            human-readable output
        stream: Output stream, stdout when omitted
    """
    numeric_level = getattr(logging, level.upper())
    out = stream or sys.stdout

    logging.basicConfig(format="%(message)s", stream=out, level=numeric_level)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=out.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=out),
        cache_logger_on_first_use=True,
    )


def setup_logging_from_config(config: ObservabilityConfig, stream: TextIO | None = None) -> None:
    """Configure logging from the observability section of the config."""
    setup_logging(level=config.log_level, log_format=config.log_format, stream=stream)


@contextmanager
def operator_context(operator: str, **context: Any) -> Generator[None, None, None]:
    """Bind the operator name (and extra context) for the duration of a call."""
    with structlog.contextvars.bound_contextvars(operator=operator, **context):
        yield


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.BoundLogger:
    """
    Get a bound logger.

    Args:
        name: Logger name, usually the module's __name__
        **initial_context: Key-value pairs bound to every event

    Returns:
        A bound structlog logger
    """
    logger = structlog.get_logger(name)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger

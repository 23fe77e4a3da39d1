from __future__ import annotations

import logging
import sys

import structlog


def configure_logging(level: int | str = logging.INFO, json_output: bool = False) -> None:
    """Configure structlog for the process.

    Logs always go to stderr: stdout carries the MCP stdio stream.
    """
    if isinstance(level, str):
        level = logging.getLevelNamesMapping()[level.upper()]

    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if json_output:
        processors += [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

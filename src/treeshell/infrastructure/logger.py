"""Structured logging setup using structlog."""

from __future__ import annotations

import logging
import os
import sys

import structlog


def _resolve_level() -> int:
    name = os.environ.get("TREESHELL_LOG_LEVEL") or os.environ.get("LOG_LEVEL") or "WARNING"
    return getattr(logging, name.upper(), logging.WARNING)


def setup_logging() -> structlog.stdlib.BoundLogger:
    """Configure structlog with console output on stderr.

    Shell output goes to stdout, so log lines stay out of the way of
    command results.
    """
    log_level = _resolve_level()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(level=log_level, stream=sys.stderr, format="%(message)s")

    return structlog.get_logger()


logger: structlog.stdlib.BoundLogger = setup_logging()


def install_exception_hooks() -> None:
    """Route uncaught exceptions through structlog."""

    def handle_exception(exc_type, exc_value, exc_traceback):  # type: ignore[no-untyped-def]
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return
        logger.critical("Uncaught exception", exc_info=(exc_type, exc_value, exc_traceback))

    sys.excepthook = handle_exception


install_exception_hooks()

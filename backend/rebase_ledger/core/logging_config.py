"""Logging setup for the rebase ledger."""

import logging
import sys
import threading

_LOGGER_PREFIX = "rebase_ledger"
_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_lock = threading.Lock()
_configured = False


def configure_logging(level: int | str = logging.INFO, stream=None, handler: logging.Handler | None = None) -> None:
    """Configure the rebase_ledger logger hierarchy (idempotent).

    Records still propagate to the root logger. A stream handler is attached
    when `stream` or `handler` is given, or when the root logger has none.
    """
    global _configured
    with _lock:
        if _configured:
            return
        _configured = True

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root_logger = logging.getLogger(_LOGGER_PREFIX)
    root_logger.setLevel(level)
    if handler is None and stream is None and logging.getLogger().handlers:
        return

    h = handler if handler is not None else logging.StreamHandler(stream or sys.stderr)
    h.setFormatter(logging.Formatter(_FORMAT))
    root_logger.addHandler(h)


def reset_logging() -> None:
    """Reset logging configuration. For tests."""
    global _configured
    with _lock:
        _configured = False
    logger = logging.getLogger(_LOGGER_PREFIX)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True

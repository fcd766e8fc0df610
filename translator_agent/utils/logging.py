"""Logging helpers for the translator agent."""

from __future__ import annotations

import logging

_LOGGING_INITIALIZED = False

LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def configure_logging(level: str = "info") -> None:
    """Install a single console handler on the root logger.

    Args:
        level: Console verbosity (debug, info, warning, error).
    """
    global _LOGGING_INITIALIZED

    console_level = LEVELS.get(level.lower(), logging.INFO)
    root = logging.getLogger()
    if not _LOGGING_INITIALIZED:
        root.handlers.clear()
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        root.addHandler(handler)
        _LOGGING_INITIALIZED = True
    root.setLevel(console_level)

    # Client libraries log every request at info.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)


def log_at(logger: logging.Logger, level: str, message: str) -> None:
    """Log *message* using a task-log level name."""
    logger.log(LEVELS.get(level, logging.INFO), message)

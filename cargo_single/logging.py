"""Logging utilities for cargo-single commands."""

from __future__ import annotations

import logging

_LOGGER_NAME = "cargo_single"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the cargo_single hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(*, verbose: bool = False) -> logging.Logger:
    """Configure the cargo_single logger with a single stderr handler.

    Normal runs only surface warnings so cargo's own output stays readable;
    ``verbose`` switches the wrapper to debug output.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when main() runs more than once.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(
        logging.Formatter("[cargo-single] %(levelname)s %(message)s")
    )
    logger.addHandler(stream_handler)

    return logger


__all__ = ["configure_logging", "get_logger"]

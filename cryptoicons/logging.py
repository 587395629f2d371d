"""Logging utilities for crypto-icons commands."""

from __future__ import annotations

import logging
from pathlib import Path

from .models import ItemOutcome, ItemStatus

_LOGGER_NAME = "cryptoicons"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the cryptoicons hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the cryptoicons logger with console output and optional file sink."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when the CLI is invoked multiple times.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter("[crypto-icons] %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


def log_outcome(logger: logging.Logger, outcome: ItemOutcome) -> None:
    """Emit one per-item result line at a level matching its status."""
    level = {
        ItemStatus.FAILED: logging.ERROR,
        ItemStatus.SKIPPED: logging.INFO,
        ItemStatus.REPAIRED: logging.WARNING,
    }.get(outcome.status, logging.INFO)
    message = f"{outcome.category.value} {outcome.name}: {outcome.status.value}"
    if outcome.detail:
        message += f" ({outcome.detail})"
    logger.log(level, message)


__all__ = ["configure_logging", "get_logger", "log_outcome"]

"""Centralized logging configuration for the league simulator."""
from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path

LOGGER_NAME = "leaguesim"


def setup_logging(
    level: int | str = logging.INFO,
    log_dir: Path | None = None,
    log_to_console: bool = True,
) -> logging.Logger:
    """
    Configure the package logger.

    Console output is short; the optional file handler (one file per run under
    log_dir) carries timestamps and source locations.

    Args:
        level: Logging level or level name (default: INFO)
        log_dir: Directory for log files; no file logging when None
        log_to_console: Whether to log to stdout (default: True)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers = []

    detailed_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    simple_formatter = logging.Formatter("%(levelname)s: %(message)s")

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"leaguesim_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(detailed_formatter)
        logger.addHandler(file_handler)

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(simple_formatter)
        logger.addHandler(console_handler)

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Return a logger; before setup_logging() runs it has no handlers of its own."""
    return logging.getLogger(name)

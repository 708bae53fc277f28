"""
Logging setup for the Cyber Management System.

The shell owns the terminal, so log records go to a file (or nowhere) and never
propagate to the root logger.
"""

import logging
from pathlib import Path
from typing import Optional

LOGGER_NAME = "cyber_cms"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_cms_logger(name: str) -> logging.Logger:
    """Get a logger nested under the package logger."""
    if name == LOGGER_NAME or name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """Configure the package logger.

    Args:
        level: Logging level name (e.g. ``"DEBUG"``).
        log_file: File to append records to. ``None`` installs a NullHandler.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False

    if log_file:
        Path(log_file).expanduser().parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    else:
        handler = logging.NullHandler()
    logger.addHandler(handler)

    return logger

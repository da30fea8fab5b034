"""Logging setup for Seminar Registry.

Everything logs under the ``seminar_registry`` logger, which writes to a
rotating file and optionally to stderr.
"""

from __future__ import annotations

import logging
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from seminar_registry.config import LoggingConfig

ROOT_LOGGER_NAME = "seminar_registry"
LOG_FILE = "seminar_registry.log"
MAX_BYTES = 10 * 1024 * 1024  # 10MB
BACKUP_COUNT = 5

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# bcrypt hashes and password=... pairs can show up in echoed SQL parameters
_REDACTIONS = [
    (re.compile(r"\$2[aby]?\$\d{2}\$[./A-Za-z0-9]{53}"), "[PASSWORD_HASH]"),
    (
        re.compile(r"(['\"]?password['\"]?\s*[:=]\s*)(['\"]?)[^'\",\s)]+", re.IGNORECASE),
        r"\1\2[REDACTED]",
    ),
]


def setup_logging(config: LoggingConfig, verbose: bool = False) -> logging.Logger:
    """Attach file and console handlers to the package logger.

    Calling it again replaces the handlers from the previous call.

    Args:
        config: Log directory, level and console flag.
        verbose: Force DEBUG regardless of the configured level.

    Returns:
        The ``seminar_registry`` logger.
    """
    log_dir = Path(config.dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    level_name = "DEBUG" if verbose else config.level.upper()
    level = getattr(logging, level_name, logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [
        RotatingFileHandler(
            log_dir / LOG_FILE,
            maxBytes=MAX_BYTES,
            backupCount=BACKUP_COUNT,
            encoding="utf-8",
        )
    ]
    if config.console:
        handlers.append(logging.StreamHandler())
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging to %s at %s", log_dir / LOG_FILE, level_name)
    return logger


def sanitize_for_log(text: str) -> str:
    """Redact password hashes and password values from text."""
    for pattern, replacement in _REDACTIONS:
        text = pattern.sub(replacement, text)
    return text

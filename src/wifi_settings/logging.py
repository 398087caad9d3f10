"""
Logging configuration for the Wi-Fi settings service.
Everything under the wifi_settings logger goes to stderr and, optionally,
to a rotating file.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import List, Optional

ROOT_LOGGER_NAME = "wifi_settings"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
MAX_LOG_BYTES = 10 * 1024 * 1024  # 10MB
LOG_BACKUP_COUNT = 5


def _handlers(log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=MAX_LOG_BYTES,
            backupCount=LOG_BACKUP_COUNT
        ))

    return handlers


def configure_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure the service logger.

    Calling it again replaces the previous handlers, so the service can
    re-apply settings after its configuration file is loaded.

    Args:
        log_level: Logging level name; unknown names fall back to INFO
        log_file: Optional path to a rotating log file

    Returns:
        The wifi_settings logger
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    for handler in _handlers(log_file):
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for a module of the service, e.g. get_logger("service")."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")

"""Logging setup: rotating log file or console, driven by the LOGGING section."""
from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOGGER_NAME = "print_gateway"


def setup_logging(config: Dict[str, Any], name: str = LOGGER_NAME) -> logging.Logger:
    """Build the application logger. Calling it again replaces its handlers."""
    logger = logging.getLogger(name)
    level = logging.getLevelName(str(config.get("level", "INFO")).upper())
    logger.setLevel(level if isinstance(level, int) else logging.INFO)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handler: logging.Handler
    log_file: Optional[str] = config.get("file")
    if config.get("to_file", True) and log_file:
        handler = RotatingFileHandler(
            log_file,
            maxBytes=int(config.get("max_size_mb", 10)) * 1024 * 1024,
            backupCount=int(config.get("backups", 3)),
            encoding="utf-8",
        )
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger


__all__ = ["setup_logging", "LOG_FORMAT", "LOGGER_NAME"]

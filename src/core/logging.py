"""Logging configuration with console output and rotating log files."""

import logging
import os
from logging.handlers import RotatingFileHandler

from src.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


def setup_logging() -> None:
    """Configure root logging once per process."""
    global _configured
    if _configured:
        return

    root_logger = logging.getLogger()
    root_logger.setLevel(settings.LOG_LEVEL.upper())
    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if settings.LOG_TO_FILE:
        try:
            os.makedirs(settings.LOG_DIRECTORY, exist_ok=True)
            file_handler = RotatingFileHandler(
                os.path.join(settings.LOG_DIRECTORY, f"{settings.SERVICE_NAME}.log"),
                maxBytes=settings.LOG_MAX_BYTES,
                backupCount=settings.LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            # Console logging still works, file logging must never block startup
            root_logger.warning(f"File logging disabled: {e}")

    _configured = True

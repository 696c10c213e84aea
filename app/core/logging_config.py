# /app/core/logging_config.py

import logging

from .config import LOG_FORMAT, LOG_LEVEL


def setup_logging() -> logging.Logger:
    """Configures the root logger once and returns the application logger."""
    logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO), format=LOG_FORMAT)

    logger = logging.getLogger("app")
    logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    return logger

# src/log.py
# Named stream loggers shared by the app, the generator and the model clients.

import logging

from src.settings import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger with a single stream handler at the configured level."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(h)
    logger.setLevel(settings.LOG_LEVEL.upper())
    return logger

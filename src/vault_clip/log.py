"""Logging configuration for vault-clip."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(log_path: Path, level: str = "INFO") -> logging.Logger:
    """Attach a rotating file handler to the package logger and return it.

    Idempotent: a second call keeps the existing handler and only updates the level.
    Attribute values and TOTP codes are never logged, only keys and entry paths.
    """
    logger = logging.getLogger("vault_clip")
    logger.setLevel(level)
    if logger.handlers:
        return logger

    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(handler)
    # Keep records out of the root logger's stderr handlers
    logger.propagate = False
    return logger

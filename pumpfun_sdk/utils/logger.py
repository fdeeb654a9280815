# pumpfun_sdk/utils/logger.py

import logging
import os
from typing import Dict, Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_loggers: Dict[str, logging.Logger] = {}


def _default_level() -> int:
    level_name = os.getenv("PUMPFUN_LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """Returns a named logger with a single console handler attached."""
    if name in _loggers:
        logger = _loggers[name]
        if level is not None:
            logger.setLevel(level)
        return logger

    logger = logging.getLogger(name)
    logger.setLevel(level if level is not None else _default_level())

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    _loggers[name] = logger
    return logger


def setup_file_logging(filename: str = "pumpfun_sdk.log", level: int = logging.INFO) -> logging.Handler:
    """Attaches a file handler to every logger handed out so far and to the root logger."""
    file_handler = logging.FileHandler(filename)
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logging.getLogger().addHandler(file_handler)
    for logger in _loggers.values():
        logger.addHandler(file_handler)
    return file_handler


def set_log_level(level) -> None:
    """Applies `level` (a name like "DEBUG" or a logging constant) to every logger handed out so far."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    for logger in _loggers.values():
        logger.setLevel(level)

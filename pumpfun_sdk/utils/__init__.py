# pumpfun_sdk/utils/__init__.py

from .logger import get_logger, set_log_level, setup_file_logging

__all__ = [
    "get_logger",
    "set_log_level",
    "setup_file_logging",
]

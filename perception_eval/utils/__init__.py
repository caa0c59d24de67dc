"""Utility modules."""

from .config_loader import ConfigLoader, load_config, get_nested
from .logger import setup_logger, add_file_handler, get_logger, LoggerMixin, ProgressLogger

__all__ = [
    "ConfigLoader",
    "load_config",
    "get_nested",
    "setup_logger",
    "add_file_handler",
    "get_logger",
    "LoggerMixin",
    "ProgressLogger",
]

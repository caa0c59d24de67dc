"""Logging utilities for the evaluation layer."""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logger(
    name: str = "perception_eval",
    level: str = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    console: bool = True,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """
    Set up and configure a logger.

    Args:
        name: Logger name.
        level: Logging level (DEBUG, INFO, WARNING, ERROR).
        log_file: Optional file path for logging.
        console: Whether to log to console.
        format_string: Custom format string.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(name)
    log_level = getattr(logging, level.upper())
    logger.setLevel(log_level)

    # Clear existing handlers
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers = []

    if format_string is None:
        format_string = DEFAULT_FORMAT

    formatter = logging.Formatter(format_string, datefmt="%Y-%m-%d %H:%M:%S")

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def add_file_handler(
    log_file: Union[str, Path],
    name: str = "perception_eval",
    level: str = "DEBUG",
    format_string: Optional[str] = None,
) -> logging.Logger:
    """
    Attach a file handler to a logger, keeping its other handlers.

    The logger level is lowered to ``level`` when needed. Handlers added by
    ``setup_logger`` keep their own level, so the console output does not
    change. A handler already writing to ``log_file`` is replaced.

    Args:
        log_file: File path for logging.
        name: Logger name.
        level: Level of the file handler.
        format_string: Custom format string.

    Returns:
        Logger instance.
    """
    logger = logging.getLogger(name)
    file_level = getattr(logging, level.upper())

    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    for handler in list(logger.handlers):
        if isinstance(handler, logging.FileHandler) and Path(handler.baseFilename) == log_path.absolute():
            logger.removeHandler(handler)
            handler.close()

    file_handler = logging.FileHandler(log_path)
    file_handler.setLevel(file_level)
    file_handler.setFormatter(
        logging.Formatter(format_string or DEFAULT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    )
    logger.addHandler(file_handler)

    if logger.getEffectiveLevel() > file_level:
        logger.setLevel(file_level)

    return logger


def get_logger(name: str = "perception_eval") -> logging.Logger:
    """
    Get an existing logger or create a basic one.

    Args:
        name: Logger name.

    Returns:
        Logger instance.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger = setup_logger(name)

    return logger


class LoggerMixin:
    """Mixin class to add logging to any class."""

    @property
    def logger(self) -> logging.Logger:
        """Get class-specific logger."""
        if not hasattr(self, "_logger"):
            self._logger = logging.getLogger(f"perception_eval.{self.__class__.__name__}")
        return self._logger


class ProgressLogger:
    """Log progress for long-running operations."""

    def __init__(
        self,
        total: int,
        logger: Optional[logging.Logger] = None,
        description: str = "Processing",
        log_interval: int = 10,
    ):
        """
        Initialize progress logger.

        Args:
            total: Total number of items.
            logger: Logger to use.
            description: Progress description.
            log_interval: Percentage interval for logging.
        """
        self.total = total
        self.logger = logger or get_logger()
        self.description = description
        self.log_interval = log_interval

        self.current = 0
        self.last_logged_pct = -log_interval

    def update(self, n: int = 1) -> None:
        """
        Update progress.

        Args:
            n: Number of items processed.
        """
        self.current += n
        pct = int(100 * self.current / self.total) if self.total > 0 else 100

        if pct >= self.last_logged_pct + self.log_interval:
            self.logger.info(
                f"{self.description}: {self.current}/{self.total} ({pct}%)"
            )
            self.last_logged_pct = pct

    def __enter__(self):
        self.logger.info(f"{self.description}: Starting ({self.total} items)")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.logger.info(f"{self.description}: Completed")
        else:
            self.logger.error(f"{self.description}: Failed - {exc_val}")

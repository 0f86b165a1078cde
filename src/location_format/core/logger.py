"""
Logging configuration for the location format engine.

Provides structured logging to the console and, optionally, to a file.
"""

import logging
import time
from pathlib import Path
from typing import Optional

from . import constants
from ..exceptions import LocationException


def setup_logger(
    name: str = constants.LOGGER_NAME,
    log_file: Optional[str] = None,
    log_level: str = constants.DEFAULT_LOG_LEVEL
) -> logging.Logger:
    """
    Set up application logger with console and optional file handlers.

    Args:
        name: Logger name
        log_file: Path to log file. If None, only the console handler is attached
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Configured logger instance
    """
    level = getattr(logging, log_level.upper(), logging.WARNING)

    # Create logger
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    # Create formatters
    detailed_formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    console_formatter = logging.Formatter(
        fmt="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    # File handler
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(detailed_formatter)
        logger.addHandler(file_handler)

    # Prevent propagation to root logger
    logger.propagate = False

    return logger


class LoggerContext:
    """
    Context manager timing a format or parse call.

    Location errors (bad pattern, unparsable text, missing component) are
    expected input errors and logged as warnings without traceback. Any
    other exception is logged as error with traceback. Exceptions are never
    suppressed.
    """

    def __init__(self, logger: logging.Logger, operation: str, pattern: Optional[str] = None):
        """
        Initialize logger context.

        Args:
            logger: Logger instance
            operation: Name of the operation, e.g. ``parsing``
            pattern: Pattern of the formatter in use, added to every message
        """
        self.logger = logger
        self.operation = operation if pattern is None else f"{operation} with '{pattern}'"
        self.start = None

    @property
    def elapsed_ms(self) -> float:
        return (time.monotonic() - self.start) * 1000.0

    def __enter__(self):
        self.start = time.monotonic()
        self.logger.debug(f"Starting {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.logger.info(f"Completed {self.operation} in {self.elapsed_ms:.3f} ms")
            return False

        message = (
            f"Failed {self.operation} after {self.elapsed_ms:.3f} ms: "
            f"{exc_type.__name__}: {exc_val}"
        )
        if issubclass(exc_type, LocationException):
            self.logger.warning(message)
        else:
            self.logger.error(message, exc_info=(exc_type, exc_val, exc_tb))
        return False

# Copyright 2017, Inderpreet Singh, All rights reserved.

"""
Centralized logging manager for xvacheck.

This module provides:
- Centralized logger configuration
- Mapping from the command line verbosity to a log level
- Multiple output formats (standard, JSON)
"""

import logging
import sys
import json
from datetime import datetime
from logging.handlers import RotatingFileHandler
from typing import Any

import pytz

from .constants import Constants
from .error import AppError


class LogManagerError(AppError):
    """
    Indicates that the log output could not be set up
    """

    pass


class LogLevel:
    """Log level names of the logging constants."""

    LEVELS = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }

    @classmethod
    def to_string(cls, level: int) -> str:
        """Convert a logging constant to string."""
        for name, value in cls.LEVELS.items():
            if value == level:
                return name
        return "UNKNOWN"


class Verbosity:
    """
    Verbosity levels of the validation output.

    * 0: only failures are reported
    * 1: a successful validation is confirmed as well
    * 2: every classified entry and validated pair is reported
    """

    QUIET = 0
    CONFIRM = 1
    DETAILED = 2

    @classmethod
    def to_log_level(cls, verbosity: int) -> int:
        if verbosity < 0:
            raise ValueError(f"Invalid verbosity {verbosity}, must be zero or greater")
        if verbosity >= cls.DETAILED:
            return logging.DEBUG
        if verbosity == cls.CONFIRM:
            return logging.INFO
        return logging.WARNING


class JsonFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Produces JSON output suitable for log aggregation tools like ELK, Splunk, etc.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=pytz.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "source": {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            },
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra_data"):
            log_data["extra"] = record.extra_data

        return json.dumps(log_data, default=str)


class StandardFormatter(logging.Formatter):
    """
    Format: TIMESTAMP - LEVEL - LOGGER - MESSAGE
    """

    DEFAULT_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
    DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

    def __init__(self):
        super().__init__(fmt=self.DEFAULT_FORMAT, datefmt=self.DEFAULT_DATE_FORMAT)


class LogManager:
    """
    Centralized logging manager for xvacheck.

    Provides factory methods for creating loggers with consistent configuration.
    """

    _main_logger: logging.Logger | None = None

    # Configuration
    _log_dir: str | None = None
    _log_level: int = logging.INFO
    _use_json: bool = False

    @classmethod
    def initialize(
        cls,
        log_dir: str | None = None,
        log_level: int = logging.INFO,
        use_json: bool = False,
        debug: bool = False,
    ) -> None:
        """
        Initialize the logging system.

        Args:
            log_dir: Directory to write log files. If None, logs to stdout.
            log_level: Logging constant. Ignored if debug=True.
            use_json: If True, use JSON format for log output.
            debug: If True, force DEBUG level (overrides log_level).

        Raises:
            LogManagerError: If the log file cannot be opened
        """
        if debug:
            cls._log_level = logging.DEBUG
        else:
            cls._log_level = log_level

        cls._log_dir = log_dir
        cls._use_json = use_json

        cls._main_logger = cls.create_logger(Constants.SERVICE_NAME)

        cls._main_logger.debug(
            f"Logging initialized: level={LogLevel.to_string(cls._log_level)}, "
            f"output={'file' if log_dir else 'stdout'}, "
            f"format={'json' if use_json else 'standard'}"
        )

    @classmethod
    def create_logger(cls, name: str) -> logging.Logger:
        """
        Create a new logger with the standard xvacheck configuration.

        Args:
            name: Logger name

        Returns:
            Configured logger instance
        """
        logger = logging.getLogger(name)

        cls._clear_handlers(logger)
        logger.setLevel(cls._log_level)

        handler = cls._create_handler(name, cls._log_dir)
        handler.setFormatter(cls._create_formatter())
        logger.addHandler(handler)

        return logger

    @classmethod
    def get_main_logger(cls) -> logging.Logger:
        """Get the main application logger."""
        if cls._main_logger is None:
            raise RuntimeError("LogManager not initialized. Call LogManager.initialize() first.")
        return cls._main_logger

    @classmethod
    def _clear_handlers(cls, logger: logging.Logger) -> None:
        """Remove all handlers from a logger."""
        handlers = logger.handlers[:]
        for handler in handlers:
            handler.close()
            logger.removeHandler(handler)

    @classmethod
    def _create_handler(cls, name: str, log_dir: str | None) -> logging.Handler:
        """Create the appropriate handler based on configuration."""
        if log_dir is not None:
            log_path = f"{log_dir}/{name}.log"
            try:
                return RotatingFileHandler(
                    log_path,
                    maxBytes=Constants.MAX_LOG_SIZE_IN_BYTES,
                    backupCount=Constants.LOG_BACKUP_COUNT,
                )
            except OSError as e:
                raise LogManagerError(f"Unable to open log file {log_path}: {e}") from e
        else:
            return logging.StreamHandler(sys.stdout)

    @classmethod
    def _create_formatter(cls) -> logging.Formatter:
        """Create the appropriate formatter based on configuration."""
        if cls._use_json:
            return JsonFormatter()
        else:
            return StandardFormatter()


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context: Any,
) -> None:
    """
    Log a message with additional context data.

    When using JSON formatting, context data is included in the log output.

    Args:
        logger: Logger to use
        level: Log level
        message: Log message
        **context: Additional context data to include
    """
    extra = {"extra_data": context} if context else {}
    logger.log(level, message, extra=extra)

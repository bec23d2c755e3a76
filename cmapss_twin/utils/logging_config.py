"""
Logging configuration for the CMAPSS digital twin.

This module provides a structured logging system with:
- Component-specific loggers under the ``cmapss_twin`` root
- Pipe-delimited, fixed-width record formatting
- File and console handlers
- Timed operation contexts
"""

import logging
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Optional, Dict
import threading


ROOT_LOGGER_NAME = 'cmapss_twin'

# Thread-safe logger cache
_loggers: Dict[str, logging.Logger] = {}
_lock = threading.Lock()


class PipeFormatter(logging.Formatter):
    """Formatter producing ``timestamp | level | name | message`` lines."""

    def __init__(self, include_thread: bool = False):
        """Initialize formatter.

        Args:
            include_thread: Whether to include thread name in output
        """
        self.include_thread = include_thread
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        """Format log record.

        Args:
            record: Log record to format

        Returns:
            Formatted log string
        """
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]
        level = record.levelname.ljust(8)
        name = record.name.ljust(20)

        if self.include_thread:
            thread = f"[{record.threadName}]".ljust(15)
            return f"{timestamp} | {level} | {thread} | {name} | {record.getMessage()}"
        return f"{timestamp} | {level} | {name} | {record.getMessage()}"


def setup_logging(
    log_dir: Optional[Path] = None,
    level: int = logging.INFO,
    console: bool = True,
    file: bool = True,
    include_thread: bool = False,
) -> logging.Logger:
    """Set up the logging system.

    Args:
        log_dir: Directory for log files (created if not exists)
        level: Logging level
        console: Enable console output
        file: Enable file output (only when log_dir is given)
        include_thread: Include thread name in output

    Returns:
        The configured package root logger
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)

    # Remove existing handlers
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    formatter = PipeFormatter(include_thread=include_thread)

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if file and log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        log_file = log_dir / f"cmapss_twin_{timestamp}.log"

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a specific component.

    Args:
        name: Component name (e.g., 'fleet', 'simulation', 'decision')

    Returns:
        Logger instance
    """
    full_name = f"{ROOT_LOGGER_NAME}.{name}"

    with _lock:
        if full_name not in _loggers:
            _loggers[full_name] = logging.getLogger(full_name)
        return _loggers[full_name]


class LogContext:
    """Context manager for structured logging of operations."""

    def __init__(self, logger: logging.Logger, operation: str, **context):
        """Initialize log context.

        Args:
            logger: Logger instance
            operation: Operation name
            **context: Additional context to log
        """
        self._logger = logger
        self._operation = operation
        self._context = context
        self._start_time: Optional[float] = None

    @property
    def elapsed_ms(self) -> float:
        """Milliseconds since the context was entered."""
        if self._start_time is None:
            return 0.0
        return (time.perf_counter() - self._start_time) * 1000

    def __enter__(self) -> 'LogContext':
        """Enter context and log start."""
        self._start_time = time.perf_counter()

        context_str = " | ".join(f"{k}={v}" for k, v in self._context.items())
        if context_str:
            self._logger.debug(f"START | {self._operation} | {context_str}")
        else:
            self._logger.debug(f"START | {self._operation}")

        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        """Exit context and log completion."""
        elapsed = self.elapsed_ms

        if exc_type is None:
            self._logger.debug(f"END   | {self._operation} | elapsed={elapsed:.2f}ms")
        else:
            self._logger.error(f"FAIL  | {self._operation} | error={exc_val} | elapsed={elapsed:.2f}ms")

        return False  # Don't suppress exceptions

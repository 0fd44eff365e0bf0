"""Structured logging configuration for iterman."""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional


class IterManFormatter(logging.Formatter):
    """Console formatter with component and operation context."""

    colors = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    reset = "\033[0m"

    def __init__(self, use_color: Optional[bool] = None):
        super().__init__()
        if use_color is None:
            use_color = hasattr(sys.stderr, "isatty") and sys.stderr.isatty()
        self.use_color = use_color

    def format(self, record):
        component = getattr(record, "component", record.name.split(".")[-1])
        operation = getattr(record, "operation", "general")

        timestamp = self.formatTime(record, "%Y-%m-%d %H:%M:%S")

        if self.use_color:
            color = self.colors.get(record.levelname, "")
            level_str = f"{color}{record.levelname:8}{self.reset}"
        else:
            level_str = f"{record.levelname:8}"

        operation_str = f" ({operation})" if operation != "general" else ""
        line = f"{timestamp} {level_str} {f'[{component}]':15} {record.getMessage()}{operation_str}"

        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    console: bool = True,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
) -> None:
    """Setup structured logging for applications using iterman.

    The library itself never calls this; it is for the embedding program.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file (optional)
        console: Whether to log to console
        max_bytes: Maximum log file size before rotation
        backup_count: Number of backup log files to keep
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    package_logger = logging.getLogger("iterman")
    package_logger.setLevel(numeric_level)
    package_logger.handlers.clear()

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(IterManFormatter())
        package_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
        file_handler.setLevel(numeric_level)
        # Plain formatter for files (no colors)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        package_logger.addHandler(file_handler)

    package_logger.debug(
        f"Logging initialized: level={level}, console={console}, file={log_file}"
    )


def setup_logging_from_config(config) -> None:
    """Apply the ``[logging]`` section of a :class:`~iterman.core.config.Config`."""
    setup_logging(
        level=config.get("logging", "level", "INFO"),
        log_file=config.get("logging", "file", "") or None,
    )


class LogContext:
    """Context manager that tags records from a logger with an operation name."""

    def __init__(self, operation: str, logger: Optional[logging.Logger] = None):
        """Initialize log context.

        Args:
            operation: Operation name
            logger: Logger to use (default: the ``iterman`` logger)
        """
        self.operation = operation
        self.logger = logger or logging.getLogger("iterman")
        self._filter = _OperationFilter(operation)

    def __enter__(self):
        for handler in self.logger.handlers:
            handler.addFilter(self._filter)
        self.logger.addFilter(self._filter)
        self.logger.debug(f"Started operation: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            self.logger.error(f"Operation failed: {self.operation}", exc_info=True)
        else:
            self.logger.debug(f"Completed operation: {self.operation}")

        self.logger.removeFilter(self._filter)
        for handler in self.logger.handlers:
            handler.removeFilter(self._filter)
        return False


class _OperationFilter(logging.Filter):
    def __init__(self, operation: str):
        super().__init__()
        self.operation = operation

    def filter(self, record):
        record.operation = self.operation
        return True

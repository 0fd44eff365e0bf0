"""Error types for iterman and translation of low-level I/O failures."""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class IterManError(Exception):
    """Base exception for all iterman errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class SourceFaultError(IterManError):
    """Raised when the underlying source cannot be read."""

    pass


class DecodingFaultError(IterManError):
    """Raised when bytes read from a source are not valid text."""

    pass


class ConfigurationError(IterManError):
    """Raised when a list or configuration file is set up inconsistently."""

    pass


class OutOfBoundsError(IterManError):
    """Raised when seeking past the end of a list."""

    def __init__(self, idx: int, limit: int):
        super().__init__(
            f"invalid index {idx}, expected at most {limit}",
            {"idx": idx, "limit": limit},
        )
        self.idx = idx
        self.limit = limit


class ListNotFoundError(IterManError, KeyError):
    """Raised when a manager lookup names an unregistered list."""

    def __init__(self, name: str):
        super().__init__(f"No list registered under '{name}'", {"name": name})
        self.name = name

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.message


class NameCollisionError(IterManError):
    """Raised when a name is registered twice without replace=True."""

    def __init__(self, name: str):
        super().__init__(f"A list is already registered under '{name}'", {"name": name})
        self.name = name


@contextmanager
def source_errors(operation: str, **context_kwargs):
    """Translate read failures into iterman errors.

    ``UnicodeDecodeError`` becomes :class:`DecodingFaultError`; ``OSError`` and
    any other ``ValueError`` (e.g. reading a closed stream) become
    :class:`SourceFaultError`. The original exception is chained.

    Args:
        operation: Description of the operation being performed
        **context_kwargs: Additional context stored in the error details
    """
    try:
        yield
    except UnicodeDecodeError as e:
        logger.error(f"Decoding failed during {operation}: {e}")
        raise DecodingFaultError(
            f"Could not decode data during {operation}: {e}",
            details={
                "operation": operation,
                "encoding": e.encoding,
                "original_error": str(e),
                **context_kwargs,
            },
        ) from e
    except (OSError, ValueError) as e:
        logger.error(f"Source fault during {operation}: {e}")
        raise SourceFaultError(
            f"Source failed during {operation}: {e}",
            details={
                "operation": operation,
                "original_error": str(e),
                "original_type": type(e).__name__,
                **context_kwargs,
            },
        ) from e

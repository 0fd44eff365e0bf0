"""iterman - iterate memory, stream and directory backed lists through one interface."""

__version__ = "0.1.0"

from iterman.core.errors import (
    ConfigurationError,
    DecodingFaultError,
    IterManError,
    ListNotFoundError,
    NameCollisionError,
    OutOfBoundsError,
    SourceFaultError,
)
from iterman.lists import (
    EXHAUSTED,
    BufferList,
    IterableList,
    IterationPolicy,
    ListFactory,
    MemoryList,
    Outcome,
    SynchronizedList,
    consume_next,
    load_directory,
)
from iterman.manager import ListManager

__all__ = [
    "EXHAUSTED",
    "IterableList",
    "IterationPolicy",
    "MemoryList",
    "BufferList",
    "SynchronizedList",
    "ListFactory",
    "ListManager",
    "Outcome",
    "consume_next",
    "load_directory",
    "IterManError",
    "SourceFaultError",
    "DecodingFaultError",
    "ConfigurationError",
    "OutOfBoundsError",
    "ListNotFoundError",
    "NameCollisionError",
]

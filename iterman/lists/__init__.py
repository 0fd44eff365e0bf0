"""List backends and the iteration contract they share."""

from .base import (
    EXHAUSTED,
    IterableList,
    IterationPolicy,
    Outcome,
    SynchronizedList,
    WriteCallback,
    consume_next,
)
from .buffer_list import BufferList
from .directory_loader import load_directory
from .list_factory import ListFactory
from .memory_list import MemoryList

__all__ = [
    "EXHAUSTED",
    "IterableList",
    "IterationPolicy",
    "Outcome",
    "SynchronizedList",
    "WriteCallback",
    "consume_next",
    "BufferList",
    "MemoryList",
    "load_directory",
    "ListFactory",
]

"""Common contract shared by every list backend.

A list produces one item per :meth:`IterableList.pull` until it is exhausted.
Exhaust-once lists return :data:`EXHAUSTED` forever once their data runs out;
round-robin lists start over from the beginning and only report exhaustion
when there is nothing to cycle through.
"""

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, Optional, Protocol, TypeVar

T = TypeVar("T")


class _Exhausted:
    """Marker returned by ``pull()`` once a list has no more items."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "EXHAUSTED"

    def __bool__(self) -> bool:
        return False


EXHAUSTED = _Exhausted()


class IterationPolicy(Enum):
    """How a list behaves when it reaches the end of its data."""

    EXHAUST_ONCE = "exhaust_once"
    ROUND_ROBIN = "round_robin"

    @classmethod
    def from_flag(cls, round_robin: bool) -> "IterationPolicy":
        return cls.ROUND_ROBIN if round_robin else cls.EXHAUST_ONCE


class IterableList(ABC, Generic[T]):
    """Abstract base class for all list backends."""

    def __init__(self, policy: IterationPolicy = IterationPolicy.EXHAUST_ONCE):
        self._policy = policy

    @abstractmethod
    def pull(self) -> Any:
        """Return the next item, or ``EXHAUSTED`` when there is none."""
        pass

    @property
    def policy(self) -> IterationPolicy:
        return self._policy

    @property
    def round_robin(self) -> bool:
        return self._policy is IterationPolicy.ROUND_ROBIN

    def close(self) -> None:
        """Release any resource held by the list."""
        pass

    def __iter__(self):
        return self

    def __next__(self) -> T:
        item = self.pull()
        if item is EXHAUSTED:
            raise StopIteration
        return item

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class SynchronizedList(IterableList[T]):
    """Wrapper that serializes pulls on a shared list with a lock."""

    def __init__(self, inner: IterableList[T]):
        super().__init__(inner.policy)
        self.inner = inner
        self._lock = threading.Lock()

    def pull(self) -> Any:
        with self._lock:
            return self.inner.pull()

    def close(self) -> None:
        with self._lock:
            self.inner.close()

    def seek(self, *args) -> int:
        with self._lock:
            return self.inner.seek(*args)

    def reset(self) -> None:
        with self._lock:
            self.inner.reset()

    def __getattr__(self, name: str) -> Any:
        # Read-only attributes such as index, line_index and bytes_offset
        if name == "inner":
            raise AttributeError(name)
        return getattr(self.inner, name)

    def __len__(self) -> int:
        return len(self.inner)

    def __bool__(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"SynchronizedList({self.inner!r})"


@dataclass
class Outcome:
    """Result of handing one pulled item to a consumer."""

    item: Any
    result: Any = None
    error: Optional[BaseException] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


class WriteCallback(Protocol):
    """Caller-supplied hook invoked after each consumed item."""

    def __call__(self, item: Any, outcome: Outcome) -> None:
        ...


def consume_next(
    items: IterableList,
    handler: Callable[[Any], Any],
    write_callback: Optional[WriteCallback] = None,
) -> Optional[Outcome]:
    """Pull one item, hand it to ``handler`` and report the outcome.

    Args:
        items: List to pull from
        handler: Function that consumes the item; its return value becomes
            ``Outcome.result``
        write_callback: Optional hook called with the item and its outcome,
            whether the handler succeeded or not

    Returns:
        The outcome, or None if the list is exhausted

    Raises:
        Whatever ``handler`` raises, after the callback has seen the failure
    """
    item = items.pull()
    if item is EXHAUSTED:
        return None

    try:
        result = handler(item)
    except Exception as e:
        outcome = Outcome(item=item, error=e)
        if write_callback is not None:
            write_callback(item, outcome)
        raise

    outcome = Outcome(item=item, result=result)
    if write_callback is not None:
        write_callback(item, outcome)
    return outcome

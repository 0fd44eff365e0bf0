"""List backed by an already materialized sequence."""

import logging
from typing import Any, Iterable

from ..core.errors import OutOfBoundsError
from .base import EXHAUSTED, IterableList, IterationPolicy, T

logger = logging.getLogger(__name__)


class MemoryList(IterableList[T]):
    """Iterate over an in-memory sequence by index.

    Round-robin wraps the cursor back to zero, so no data is ever re-read.
    An empty round-robin list is perpetually exhausted rather than looping.
    """

    def __init__(self, items: Iterable[T], round_robin: bool = False):
        """Initialize memory list.

        Args:
            items: Items to iterate over; copied on construction
            round_robin: Whether to restart from the first item at the end
        """
        super().__init__(IterationPolicy.from_flag(round_robin))
        self._items = tuple(items)
        self._index = 0
        self._exhausted = False
        logger.debug(
            f"Created MemoryList with {len(self._items)} items ({self.policy.value})"
        )

    @classmethod
    def new_round_robin(cls, items: Iterable[T]) -> "MemoryList[T]":
        """Create a memory list with round-robin turned on."""
        return cls(items, round_robin=True)

    def pull(self) -> Any:
        if self._exhausted:
            return EXHAUSTED

        if self.round_robin and self._index >= len(self._items):
            self._index = 0

        if self._index < len(self._items):
            item = self._items[self._index]
            self._index += 1
            return item

        if not self.round_robin:
            self._exhausted = True
        return EXHAUSTED

    @property
    def index(self) -> int:
        """Position of the next item to be pulled."""
        return self._index

    def seek(self, index: int) -> int:
        """Move the cursor so the next pull returns ``items[index]``.

        Raises:
            OutOfBoundsError: If index is not a valid position
        """
        if 0 <= index < len(self._items):
            self._index = index
            self._exhausted = False
            return index

        raise OutOfBoundsError(index, len(self._items))

    def reset(self) -> None:
        """Rewind to the first item."""
        self._index = 0
        self._exhausted = False

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return (
            f"MemoryList(len={len(self._items)}, index={self._index}, "
            f"policy={self.policy.value})"
        )

"""Named registry of lists."""

import logging
from typing import Any, Callable, Dict, List, Optional

from .core.errors import ListNotFoundError, NameCollisionError
from .lists.base import IterableList, Outcome, SynchronizedList, WriteCallback, consume_next

logger = logging.getLogger(__name__)


class ListManager:
    """Owns a set of lists and resolves them by name.

    The manager is an ordinary object: create one and pass it to whatever
    needs lookups. ``get_list_by_name`` hands out the registered instance
    itself, so every lookup sees the cursor where the last consumer left it.
    """

    def __init__(self):
        self._lists: Dict[str, IterableList] = {}

    def add_list(
        self,
        name: str,
        items: IterableList,
        replace: bool = False,
        synchronized: bool = False,
    ) -> IterableList:
        """Register ``items`` under ``name``.

        Args:
            name: Unique, non-empty name
            items: List to register
            replace: Overwrite an existing registration instead of failing;
                the previous list is closed
            synchronized: Wrap the list so pulls from several threads are
                serialized

        Returns:
            The registered list (the wrapper when ``synchronized`` is set)

        Raises:
            NameCollisionError: If ``name`` is taken and ``replace`` is False
        """
        if not isinstance(name, str) or not name:
            raise ValueError(f"List name must be a non-empty string, got {name!r}")
        if not isinstance(items, IterableList):
            raise TypeError(f"Expected an IterableList, got {type(items).__name__}")

        previous = self._lists.get(name)
        if previous is not None:
            if not replace:
                raise NameCollisionError(name)
            logger.info(f"Replacing list '{name}'")
            if previous is not items and getattr(previous, "inner", None) is not items:
                previous.close()

        if synchronized:
            items = SynchronizedList(items)

        self._lists[name] = items
        logger.info(f"Registered list '{name}': {items!r}")
        return items

    def get_list_by_name(self, name: str) -> IterableList:
        """Return the list registered under ``name``.

        Raises:
            ListNotFoundError: If no list is registered under ``name``
        """
        try:
            items = self._lists[name]
        except KeyError:
            raise ListNotFoundError(name) from None
        logger.debug(f"Lookup of list '{name}'")
        return items

    def remove_list(self, name: str) -> IterableList:
        """Unregister and return the list under ``name`` without closing it."""
        try:
            return self._lists.pop(name)
        except KeyError:
            raise ListNotFoundError(name) from None

    def names(self) -> List[str]:
        return list(self._lists)

    def pull(self, name: str) -> Any:
        """Pull the next item from the list registered under ``name``."""
        return self.get_list_by_name(name).pull()

    def consume(
        self,
        name: str,
        handler: Callable[[Any], Any],
        write_callback: Optional[WriteCallback] = None,
    ) -> Optional[Outcome]:
        """Pull one item from ``name`` and pass it through ``handler``.

        See :func:`iterman.lists.base.consume_next`.
        """
        return consume_next(self.get_list_by_name(name), handler, write_callback)

    def close(self) -> None:
        """Close every registered list."""
        for items in self._lists.values():
            items.close()

    def __contains__(self, name: object) -> bool:
        return name in self._lists

    def __len__(self) -> int:
        return len(self._lists)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

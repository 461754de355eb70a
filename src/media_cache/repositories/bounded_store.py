"""Bounded, insertion-ordered key/value store.

The shared foundation of both cache backends. Eviction is FIFO: the entry
inserted first is evicted first. Reads never reorder entries, and
overwriting an existing id keeps its original slot.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Generic, TypeVar

from media_cache.config import DEFAULT_CAPACITY

logger = logging.getLogger(__name__)

V = TypeVar("V")


class BoundedStore(Generic[V]):
    """Ordered id -> value container with a capacity limit.

    After any mutating operation, ``size() <= capacity`` holds. A capacity of
    0 disables storage entirely.

    Subclasses that attach side effects to removal (deleting a file, for
    instance) only need to override ``remove``: ``remove_oldest`` and
    ``set_capacity`` go through it.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 0:
            raise ValueError(f"Capacity must be >= 0, got {capacity}")
        self._entries: OrderedDict[str, V] = OrderedDict()
        self._capacity = capacity

    def store(self, id: str, value: V) -> None:
        """Insert or replace the value for ``id``.

        - If the capacity is 0, does nothing.
        - If ``id`` is already present, the value is replaced in its slot.
        - If the store is full, the oldest entry is evicted first.
        """
        if self._capacity == 0:
            return
        if id not in self._entries and self.size() >= self._capacity:
            self.remove_oldest()
        self._entries[id] = value

    def get(self, id: str) -> V | None:
        return self._entries.get(id)

    def contains(self, id: str) -> bool:
        return id in self._entries

    def remove(self, id: str) -> bool:
        """Remove the entry for ``id``.

        Returns:
            True if an entry existed and was removed
        """
        return self._entries.pop(id, None) is not None

    def remove_oldest(self) -> bool:
        """Remove the earliest-inserted entry.

        Returns:
            False if the store is empty, otherwise the result of ``remove``
        """
        if not self._entries:
            return False
        oldest = next(iter(self._entries))
        logger.debug("Evicting oldest entry %s", oldest)
        return self.remove(oldest)

    def clear(self) -> None:
        self._entries.clear()

    def size(self) -> int:
        return len(self._entries)

    def is_empty(self) -> bool:
        return self.size() == 0

    @property
    def capacity(self) -> int:
        """Maximum number of entries."""
        return self._capacity

    def set_capacity(self, capacity: int) -> BoundedStore[V]:
        """Change the capacity, evicting the oldest entries until it fits."""
        if capacity < 0:
            raise ValueError(f"Capacity must be >= 0, got {capacity}")
        while self.size() > capacity:
            if not self.remove_oldest():
                break
        self._capacity = capacity
        return self

    def as_dict(self) -> Mapping[str, V]:
        """Read-only view of the entries, oldest first."""
        return MappingProxyType(self._entries)

    def _insert_unchecked(self, id: str, value: V) -> None:
        # For rebuilding an index from existing data: no side effects, capacity
        # is enforced by the caller.
        self._entries[id] = value

    def __iter__(self) -> Iterator[tuple[str, V]]:
        return iter(list(self._entries.items()))

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, id: object) -> bool:
        return id in self._entries

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={self.size()}, capacity={self._capacity})"

"""In-memory cache pool.

Stores raw response bodies in a dict with TTL-based expiry. Suitable for
single-process use; entries vanish with the process.
"""

from __future__ import annotations

import time
from typing import Any, Optional

from pyflickr.adapters.cache.item import PoolItem
from pyflickr.core.protocols.cache import CacheItem


class InMemoryCachePool:
    """In-memory implementation of the CacheItemPool protocol.

    Expiry uses the monotonic clock, so wall-clock changes never resurrect or
    expire entries early.
    """

    def __init__(self) -> None:
        self._entries: dict[str, tuple[Any, Optional[float]]] = {}  # key → (value, expires_at)

    def get_item(self, key: str) -> PoolItem:
        entry = self._entries.get(key)
        if entry is None:
            return PoolItem(key)

        value, expires_at = entry
        if expires_at is not None and time.monotonic() >= expires_at:
            del self._entries[key]
            return PoolItem(key)

        return PoolItem(key, value, hit=True)

    def save(self, item: CacheItem) -> bool:
        if not isinstance(item, PoolItem):
            return False
        self._entries[item.key] = (item.value, item.expiry_from(time.monotonic()))
        return True

    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

"""Fake cache pool for testing.

Stores items without expiry and records every lookup and save. Can be told
to raise from either operation to exercise the client's failure handling.
"""

from __future__ import annotations

from typing import Any, Optional

from pyflickr.adapters.cache.item import PoolItem
from pyflickr.core.protocols.cache import CacheItem


class FakeCachePool:
    """Test implementation of CacheItemPool.

    Usage:
        fake = FakeCachePool()
        client = FlickrClient("key", cache=fake)
        client.send("test.echo")

        assert len(fake.saved) == 1
        fake.fail_reads = True  # next get_item raises
    """

    def __init__(self) -> None:
        """Initialize with empty state."""
        self._values: dict[str, Any] = {}
        self.lookups: list[str] = []  # ordered log of get_item calls
        self.saved: list[tuple[str, Any, Optional[float]]] = []  # (key, value, ttl)
        self.fail_reads = False
        self.fail_writes = False

    def get_item(self, key: str) -> PoolItem:
        self.lookups.append(key)
        if self.fail_reads:
            raise RuntimeError("cache backend unavailable")
        if key in self._values:
            return PoolItem(key, self._values[key], hit=True)
        return PoolItem(key)

    def save(self, item: CacheItem) -> bool:
        if self.fail_writes:
            raise RuntimeError("cache backend unavailable")
        if not isinstance(item, PoolItem):
            return False
        self._values[item.key] = item.value
        self.saved.append((item.key, item.value, item.ttl_seconds))
        return True

    # Test helpers

    def seed(self, key: str, value: Any) -> None:
        """Pre-populate a cache entry."""
        self._values[key] = value

    def contains(self, key: str) -> bool:
        return key in self._values

    def clear(self) -> None:
        """Reset all state."""
        self._values.clear()
        self.lookups.clear()
        self.saved.clear()

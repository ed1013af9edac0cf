"""Cache pool protocol for response caching.

The client caches raw response bodies in a pool supplied by the caller.
The contract mirrors a PSR-6 style item pool: fetch an item by key, check
whether it is a hit, and save a value with a time-to-live.

Usage:
    item = pool.get_item(key)
    if item.is_hit():
        return item.get()
    item.set(body)
    item.expires_after(600)
    pool.save(item)
"""

from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class CacheItem(Protocol):
    """A single cache slot returned by a pool."""

    @property
    def key(self) -> str:
        """The key this item was fetched with."""
        ...

    def is_hit(self) -> bool:
        """True if the item holds an unexpired value."""
        ...

    def get(self) -> Any:
        """Return the stored value, or None on a miss."""
        ...

    def set(self, value: Any) -> "CacheItem":
        """Set the value to be stored on the next save."""
        ...

    def expires_after(self, ttl_seconds: Optional[float]) -> "CacheItem":
        """Set the time-to-live; None means no expiry."""
        ...


@runtime_checkable
class CacheItemPool(Protocol):
    """Protocol for pluggable cache backends.

    Implementations may raise on backend failures; callers are expected to
    treat any exception as a miss.
    """

    def get_item(self, key: str) -> CacheItem:
        """Fetch the item for ``key``; always returns an item, hit or not."""
        ...

    def save(self, item: CacheItem) -> bool:
        """Persist an item. Returns True if it was stored."""
        ...

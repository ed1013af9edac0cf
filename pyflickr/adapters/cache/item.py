"""Cache item shared by the bundled cache pools."""

from __future__ import annotations

from typing import Any, Optional


class PoolItem:
    """Concrete CacheItem.

    ``ttl_seconds`` is relative; pools turn it into an absolute expiry when
    the item is saved.
    """

    def __init__(self, key: str, value: Any = None, hit: bool = False) -> None:
        self._key = key
        self._value = value
        self._hit = hit
        self.ttl_seconds: Optional[float] = None

    @property
    def key(self) -> str:
        return self._key

    def is_hit(self) -> bool:
        return self._hit

    def get(self) -> Any:
        return self._value if self._hit else None

    def set(self, value: Any) -> PoolItem:
        self._value = value
        return self

    def expires_after(self, ttl_seconds: Optional[float]) -> PoolItem:
        self.ttl_seconds = ttl_seconds
        return self

    @property
    def value(self) -> Any:
        """The value to be stored, regardless of hit state."""
        return self._value

    def expiry_from(self, now: float) -> Optional[float]:
        """Absolute expiry for an item saved at ``now``; None never expires."""
        if self.ttl_seconds is None:
            return None
        return now + self.ttl_seconds

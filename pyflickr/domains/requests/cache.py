"""Response cache keyed by API method and normalized parameters."""

import hashlib
import json
from typing import Mapping, Optional

from pyflickr.core.logging import ContextualLogger, logger as default_logger
from pyflickr.core.protocols.cache import CacheItemPool

DEFAULT_CACHE_TTL_SECONDS = 600


def compute_cache_key(method: str, params: Mapping[str, str]) -> str:
    """Deterministic key for a request.

    ``params`` must already be normalized. Items are sorted so insertion
    order never changes the key.
    """
    canonical = json.dumps(
        [method, sorted(params.items())], ensure_ascii=False, separators=(",", ":")
    )
    return hashlib.md5(canonical.encode("utf-8")).hexdigest()


class ResponseCache:
    """Reads and writes raw response bodies through an optional cache pool.

    Caching is opt-in: without a pool every read misses and every write
    reports failure. Backend exceptions are logged and treated the same way,
    so a broken cache never fails a request.
    """

    def __init__(
        self,
        pool: Optional[CacheItemPool] = None,
        ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        logger: Optional[ContextualLogger] = None,
    ) -> None:
        self.pool = pool
        self.ttl_seconds = ttl_seconds
        self.logger = (logger or default_logger).with_context(component="response_cache")

    @property
    def enabled(self) -> bool:
        return self.pool is not None

    def get(self, key: str) -> Optional[str]:
        """Return the cached raw body for ``key``, or None on a miss."""
        if self.pool is None:
            return None
        try:
            item = self.pool.get_item(key)
            if not item.is_hit():
                return None
            return item.get()
        except Exception as e:
            self.logger.warning(f"Cache read failed for {key}, treating as miss: {e}")
            return None

    def put(self, key: str, body: str) -> bool:
        """Store a raw body under ``key``. Returns True if the pool saved it."""
        if self.pool is None:
            return False
        try:
            item = self.pool.get_item(key)
            item.set(body)
            item.expires_after(self.ttl_seconds)
            return bool(self.pool.save(item))
        except Exception as e:
            self.logger.warning(f"Cache write failed for {key}: {e}")
            return False

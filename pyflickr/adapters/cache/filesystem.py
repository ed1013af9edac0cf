"""Filesystem cache pool.

Persists raw response bodies as one JSON file per key, so cached responses
survive process restarts and can be shared between runs of a script.

Cache Structure:
    cache_dir/
    └─ <cache_key>.json
       {
           "key": "3f2a...",
           "value": "{\"stat\":\"ok\", ...}",
           "expires_at": 1735000000.0,
           "cached_at": "2024-12-24T10:30:00"
       }
"""

from __future__ import annotations

import json
import re
import time
from datetime import datetime
from pathlib import Path
from typing import Optional

from pyflickr.adapters.cache.item import PoolItem
from pyflickr.core.logging import ContextualLogger, logger as default_logger
from pyflickr.core.protocols.cache import CacheItem


class FilesystemCachePool:
    """File-backed implementation of the CacheItemPool protocol.

    Expiry is stored as a wall-clock timestamp. Unreadable or corrupt files
    are reported as misses and removed.
    """

    def __init__(self, cache_dir: Path, logger: Optional[ContextualLogger] = None) -> None:
        """Initialize the pool.

        Args:
            cache_dir: Directory for cached responses; created if missing.
            logger: Logger instance (defaults to the package logger)
        """
        self.cache_dir = Path(cache_dir)
        self.logger = (logger or default_logger).with_context(component="filesystem_cache")
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.logger.debug(f"FilesystemCachePool initialized at: {self.cache_dir}")

    def get_item(self, key: str) -> PoolItem:
        cache_file = self._get_cache_path(key)
        if not cache_file.exists():
            return PoolItem(key)

        try:
            data = json.loads(cache_file.read_text(encoding="utf-8"))
            expires_at = data.get("expires_at")
            value = data["value"]
        except (OSError, ValueError, KeyError, AttributeError) as e:
            self.logger.warning(f"Discarding unreadable cache file {cache_file}: {e}")
            cache_file.unlink(missing_ok=True)
            return PoolItem(key)

        if expires_at is not None and time.time() >= expires_at:
            cache_file.unlink(missing_ok=True)
            return PoolItem(key)

        return PoolItem(key, value, hit=True)

    def save(self, item: CacheItem) -> bool:
        if not isinstance(item, PoolItem):
            return False

        cache_file = self._get_cache_path(item.key)
        cache_data = {
            "key": item.key,
            "value": item.value,
            "expires_at": item.expiry_from(time.time()),
            "cached_at": datetime.now().isoformat(),
        }
        try:
            cache_file.write_text(json.dumps(cache_data, ensure_ascii=False), encoding="utf-8")
        except OSError as e:
            self.logger.error(f"Failed to write cache file {cache_file}: {e}")
            return False
        return True

    def clear(self) -> int:
        """Remove every cached response.

        Returns:
            Number of cache files removed
        """
        count = 0
        for cache_file in self.cache_dir.glob("*.json"):
            cache_file.unlink(missing_ok=True)
            count += 1
        self.logger.info(f"Cleared {count} cache files")
        return count

    def _get_cache_path(self, key: str) -> Path:
        safe_name = re.sub(r"[^\w\-.]", "_", key)[:150]
        return self.cache_dir / f"{safe_name}.json"

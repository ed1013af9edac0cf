"""Cache pool adapters."""

from pyflickr.adapters.cache.fake import FakeCachePool
from pyflickr.adapters.cache.filesystem import FilesystemCachePool
from pyflickr.adapters.cache.in_memory import InMemoryCachePool
from pyflickr.adapters.cache.item import PoolItem

__all__ = ["FakeCachePool", "FilesystemCachePool", "InMemoryCachePool", "PoolItem"]

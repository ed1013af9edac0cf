"""Core protocols for pluggable collaborators."""

from pyflickr.core.protocols.cache import CacheItem, CacheItemPool
from pyflickr.core.protocols.token_store import TokenStore

__all__ = [
    "CacheItem",
    "CacheItemPool",
    "TokenStore",
]

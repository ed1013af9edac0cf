"""Token store adapters."""

from pyflickr.adapters.token_store.in_memory import InMemoryTokenStore

__all__ = ["InMemoryTokenStore"]

"""In-memory token store.

Holds one token per service name in a dict. Suitable for scripts and for
unauthenticated use; tokens are lost when the process exits.
"""

from __future__ import annotations

from typing import Optional

from pyflickr.core.constants import TOKEN_SERVICE_NAME
from pyflickr.core.exceptions import AuthStateError
from pyflickr.domains.oauth.types import OAuth1Token


class InMemoryTokenStore:
    """In-memory implementation of the TokenStore protocol."""

    def __init__(self) -> None:
        self._tokens: dict[str, OAuth1Token] = {}

    @classmethod
    def with_empty_token(cls, service: str = TOKEN_SERVICE_NAME) -> InMemoryTokenStore:
        """Build a store seeded with an empty token, good for unauthenticated calls."""
        store = cls()
        store.store_access_token(service, OAuth1Token.empty())
        return store

    def retrieve_access_token(self, service: str) -> OAuth1Token:
        token: Optional[OAuth1Token] = self._tokens.get(service)
        if token is None:
            raise AuthStateError(f"No token stored for service '{service}'")
        return token

    def store_access_token(self, service: str, token: OAuth1Token) -> None:
        self._tokens[service] = token

    def has_access_token(self, service: str) -> bool:
        return service in self._tokens

    def clear_token(self, service: str) -> None:
        self._tokens.pop(service, None)

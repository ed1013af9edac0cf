"""TokenStore protocol for OAuth token persistence.

The auth client keeps exactly one current token per service name. Stores
may be in-memory, file-backed, or backed by an application's session.
"""

from typing import Protocol, runtime_checkable

from pyflickr.domains.oauth.types import OAuth1Token


@runtime_checkable
class TokenStore(Protocol):
    """Protocol for storing the current OAuth1 token."""

    def retrieve_access_token(self, service: str) -> OAuth1Token:
        """Return the current token for ``service``.

        Raises:
            AuthStateError: If no token has been stored for the service.
        """
        ...

    def store_access_token(self, service: str, token: OAuth1Token) -> None:
        """Replace the current token for ``service``."""
        ...

    def has_access_token(self, service: str) -> bool:
        """True if a token (of any kind) is stored for ``service``."""
        ...

    def clear_token(self, service: str) -> None:
        """Forget the token for ``service``."""
        ...

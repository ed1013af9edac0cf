"""Protocols for OAuth domain dependencies."""

from typing import Mapping, Optional, Protocol

from pyflickr.domains.oauth.types import OAuth1Token, OAuth1TokenResponse


class OAuth1ServiceProtocol(Protocol):
    """OAuth1 handshake and signed-request capability."""

    def get_request_token(self, *, callback_url: str) -> OAuth1TokenResponse:
        """Obtain temporary credentials (request token)."""
        ...

    def exchange_token(
        self,
        *,
        oauth_token: str,
        oauth_token_secret: str,
        oauth_verifier: str,
    ) -> OAuth1TokenResponse:
        """Exchange temporary credentials for access token credentials."""
        ...

    def build_authorization_url(self, *, oauth_token: str, perms: Optional[str] = None) -> str:
        """Build the authorization URL for user consent."""
        ...

    def request_json(
        self,
        method: str,
        params: Mapping[str, str],
        *,
        headers: Optional[Mapping[str, str]] = None,
        token: Optional[OAuth1Token] = None,
    ) -> str:
        """POST a signed API call and return the raw response body."""
        ...

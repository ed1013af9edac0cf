"""Fake OAuth1 service for testing."""

from typing import Any, Mapping, Optional
from urllib.parse import urlencode

from pyflickr.domains.oauth.types import OAuth1Token, OAuth1TokenResponse


class FakeOAuth1Service:
    """In-memory fake for OAuth1ServiceProtocol.

    Seed handshake responses and raw API bodies, then inspect recorded calls.
    API bodies are served per method; an unseeded method answers with an
    empty ``stat: ok`` envelope.
    """

    def __init__(self) -> None:
        self._request_token: Optional[OAuth1TokenResponse] = None
        self._access_token: Optional[OAuth1TokenResponse] = None
        self._bodies: dict[str, str] = {}
        self._calls: list[tuple[Any, ...]] = []
        self._should_raise: Optional[Exception] = None

    # -- seeding helpers --

    def seed_request_token(self, token: str, secret: str, **extra: str) -> None:
        self._request_token = OAuth1TokenResponse(token, secret, **extra)

    def seed_access_token(self, token: str, secret: str, **extra: str) -> None:
        self._access_token = OAuth1TokenResponse(token, secret, **extra)

    def seed_body(self, method: str, body: str) -> None:
        self._bodies[method] = body

    def set_error(self, error: Exception) -> None:
        self._should_raise = error

    def clear_error(self) -> None:
        self._should_raise = None

    @property
    def calls(self) -> list[tuple[Any, ...]]:
        return list(self._calls)

    def calls_for(self, name: str) -> list[tuple[Any, ...]]:
        return [c for c in self._calls if c[0] == name]

    # -- public methods matching OAuth1ServiceProtocol --

    def get_request_token(self, *, callback_url: str) -> OAuth1TokenResponse:
        self._calls.append(("get_request_token", callback_url))
        if self._should_raise:
            raise self._should_raise
        if self._request_token is None:
            raise ValueError("No seeded request token")
        return self._request_token

    def exchange_token(
        self,
        *,
        oauth_token: str,
        oauth_token_secret: str,
        oauth_verifier: str,
    ) -> OAuth1TokenResponse:
        self._calls.append(("exchange_token", oauth_token, oauth_token_secret, oauth_verifier))
        if self._should_raise:
            raise self._should_raise
        if self._access_token is None:
            raise ValueError("No seeded access token")
        return self._access_token

    def build_authorization_url(self, *, oauth_token: str, perms: Optional[str] = None) -> str:
        params = {"oauth_token": oauth_token}
        if perms:
            params["perms"] = perms
        return f"https://fake.flickr.test/services/oauth/authorize?{urlencode(params)}"

    def request_json(
        self,
        method: str,
        params: Mapping[str, str],
        *,
        headers: Optional[Mapping[str, str]] = None,
        token: Optional[OAuth1Token] = None,
    ) -> str:
        self._calls.append(("request_json", method, dict(params), dict(headers or {}), token))
        if self._should_raise:
            raise self._should_raise
        return self._bodies.get(method, '{"stat":"ok"}')

"""Unit tests for AuthClient.

Covers the token lifecycle (empty → request → access), the errors raised
when a step is taken out of order, and lazy construction of the service.
"""

from dataclasses import dataclass
from typing import Optional

import pytest

from pyflickr.core.config import Permission, TokenKind
from pyflickr.core.constants import TOKEN_SERVICE_NAME
from pyflickr.core.exceptions import AuthStateError
from pyflickr.domains.oauth.auth_client import AuthClient
from pyflickr.domains.oauth.types import ConsumerCredentials, OAuth1Token


def _client(service, token_store=None, secret: Optional[str] = "cs") -> AuthClient:
    built = []

    def factory(credentials):
        built.append(credentials)
        return service

    client = AuthClient(ConsumerCredentials("ck", secret), factory, token_store=token_store)
    client.built = built
    return client


@pytest.fixture
def seeded_service(fake_oauth1_service):
    fake_oauth1_service.seed_request_token("req-tok", "req-sec", oauth_callback_confirmed="true")
    fake_oauth1_service.seed_access_token("acc-tok", "acc-sec", user_nsid="1@N00", username="jane")
    return fake_oauth1_service


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------


def test_token_store_defaults_to_empty_token(fake_oauth1_service):
    client = _client(fake_oauth1_service)

    token = client.current_token()

    assert token == OAuth1Token.empty()
    assert client.token_store.has_access_token(TOKEN_SERVICE_NAME)
    assert not client.is_authorized


def test_service_is_built_lazily_and_memoized(fake_oauth1_service):
    client = _client(fake_oauth1_service)
    assert client.built == []
    assert not client.has_service

    assert client.service is client.service
    assert len(client.built) == 1

    client.reset_service()
    assert not client.has_service
    client.service
    assert len(client.built) == 2


def test_current_token_is_empty_when_store_was_cleared(fake_oauth1_service, token_store):
    client = _client(fake_oauth1_service, token_store=token_store)
    token_store.clear_token(TOKEN_SERVICE_NAME)

    assert client.current_token() == OAuth1Token.empty()


def test_set_access_token(fake_oauth1_service, token_store):
    client = _client(fake_oauth1_service, token_store=token_store)

    token = client.set_access_token("acc", "sec", user_nsid="1@N00")

    assert token.kind == TokenKind.ACCESS
    assert token_store.retrieve_access_token(TOKEN_SERVICE_NAME) == token
    assert client.is_authorized
    assert client.current_token().user_nsid == "1@N00"


# ---------------------------------------------------------------------------
# get_auth_url
# ---------------------------------------------------------------------------


@dataclass
class AuthUrlCase:
    desc: str
    perm: object
    expect_perm: str


AUTH_URL_CASES = [
    AuthUrlCase("default read", Permission.READ, "read"),
    AuthUrlCase("write enum", Permission.WRITE, "write"),
    AuthUrlCase("delete as string", "delete", "delete"),
]


@pytest.mark.parametrize("case", AUTH_URL_CASES, ids=lambda c: c.desc)
def test_get_auth_url(case: AuthUrlCase, seeded_service, token_store):
    client = _client(seeded_service, token_store=token_store)

    url = client.get_auth_url(case.perm)

    assert "oauth_token=req-tok" in url
    assert f"perms={case.expect_perm}" in url
    stored = token_store.retrieve_access_token(TOKEN_SERVICE_NAME)
    assert stored.kind == TokenKind.REQUEST
    assert stored.token == "req-tok"
    assert stored.secret == "req-sec"


def test_get_auth_url_uses_callback(seeded_service):
    client = _client(seeded_service)

    client.get_auth_url(callback_url="https://app.example/cb")
    client.get_auth_url()

    assert seeded_service.calls_for("get_request_token") == [
        ("get_request_token", "https://app.example/cb"),
        ("get_request_token", "oob"),
    ]


def test_get_auth_url_rejects_unknown_permission(seeded_service):
    with pytest.raises(ValueError):
        _client(seeded_service).get_auth_url("admin")
    assert seeded_service.calls == []


def test_get_auth_url_requires_secret(seeded_service):
    with pytest.raises(AuthStateError):
        _client(seeded_service, secret=None).get_auth_url()
    assert seeded_service.calls == []


# ---------------------------------------------------------------------------
# retrieve_access_token
# ---------------------------------------------------------------------------


def test_full_handshake(seeded_service, token_store):
    client = _client(seeded_service, token_store=token_store)

    client.get_auth_url(Permission.WRITE)
    token = client.retrieve_access_token("verifier-1")

    assert seeded_service.calls_for("exchange_token") == [
        ("exchange_token", "req-tok", "req-sec", "verifier-1")
    ]
    assert token.is_access_token
    assert token.username == "jane"
    assert token_store.retrieve_access_token(TOKEN_SERVICE_NAME) == token
    assert client.is_authorized


def test_retrieve_before_get_auth_url_raises(seeded_service):
    client = _client(seeded_service)

    with pytest.raises(AuthStateError):
        client.retrieve_access_token("verifier-1")
    assert seeded_service.calls_for("exchange_token") == []


def test_retrieve_on_new_instance_uses_stored_request_token(seeded_service, token_store):
    # Web flows start the handshake in one request and finish it in another.
    _client(seeded_service, token_store=token_store).get_auth_url()

    fresh = _client(seeded_service, token_store=token_store)
    token = fresh.retrieve_access_token("verifier-1", request_token="req-tok")

    assert token.token == "acc-tok"


def test_retrieve_with_mismatched_request_token_raises(seeded_service, token_store):
    client = _client(seeded_service, token_store=token_store)
    client.get_auth_url()

    with pytest.raises(AuthStateError):
        client.retrieve_access_token("verifier-1", request_token="other-tok")


def test_retrieve_twice_raises(seeded_service):
    client = _client(seeded_service)
    client.get_auth_url()
    client.retrieve_access_token("verifier-1")

    with pytest.raises(AuthStateError):
        client.retrieve_access_token("verifier-1")


def test_retrieve_requires_secret(seeded_service, token_store):
    token_store.store_access_token(
        TOKEN_SERVICE_NAME, OAuth1Token("req-tok", "req-sec", TokenKind.REQUEST)
    )
    client = _client(seeded_service, token_store=token_store, secret=None)

    with pytest.raises(AuthStateError):
        client.retrieve_access_token("verifier-1")


def test_exchange_failure_keeps_request_token(seeded_service, token_store):
    from pyflickr.core.exceptions import OAuthExchangeError

    client = _client(seeded_service, token_store=token_store)
    client.get_auth_url()
    seeded_service.set_error(OAuthExchangeError("token_rejected"))

    with pytest.raises(OAuthExchangeError):
        client.retrieve_access_token("bad-verifier")

    assert token_store.retrieve_access_token(TOKEN_SERVICE_NAME).is_request_token

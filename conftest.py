"""Root conftest for pytest configuration and shared fixtures.

This conftest is loaded before both testpaths (tests/ and pyflickr/),
making its fixtures available to centralized tests AND colocated domain tests.
"""

import os
from typing import Callable, Dict, List, Optional, Union
from urllib.parse import parse_qsl

import httpx
import pytest

# ---------------------------------------------------------------------------
# Environment variables: must be set before any pyflickr module import
# Uses setdefault so real env vars (CI) are never overridden.
# ---------------------------------------------------------------------------
os.environ.setdefault("FLICKR_LOG_LEVEL", "DEBUG")


# ---------------------------------------------------------------------------
# Stub Flickr server
# ---------------------------------------------------------------------------

Body = Union[str, Callable[[Dict[str, str]], str]]


class StubFlickrServer:
    """MockTransport handler that plays the REST and OAuth endpoints.

    REST bodies are seeded per API method; an unseeded method answers
    ``{"stat":"ok"}``. Every request is recorded for assertions.
    """

    def __init__(self) -> None:
        self.bodies: Dict[str, Body] = {}
        self.statuses: Dict[str, int] = {}
        self.request_token_body = "oauth_callback_confirmed=true&oauth_token=req-tok&oauth_token_secret=req-sec"
        self.access_token_body = (
            "fullname=Jane%20Doe&oauth_token=acc-tok&oauth_token_secret=acc-sec"
            "&user_nsid=12345678%40N00&username=jane"
        )
        self.requests: List[httpx.Request] = []

    def seed(self, method: str, body: Body, status: int = 200) -> None:
        self.bodies[method] = body
        self.statuses[method] = status

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.endswith("/oauth/request_token"):
            return httpx.Response(200, text=self.request_token_body)
        if path.endswith("/oauth/access_token"):
            return httpx.Response(200, text=self.access_token_body)

        form = self.form(request)
        method = form.get("method", "")
        body = self.bodies.get(method, '{"stat":"ok"}')
        if callable(body):
            body = body(form)
        return httpx.Response(self.statuses.get(method, 200), text=body)

    @staticmethod
    def form(request: httpx.Request) -> Dict[str, str]:
        return dict(parse_qsl(request.content.decode("utf-8"), keep_blank_values=True))

    @property
    def api_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith("/rest/")]

    def api_calls(self, method: Optional[str] = None) -> List[Dict[str, str]]:
        forms = [self.form(r) for r in self.api_requests]
        if method is None:
            return forms
        return [f for f in forms if f.get("method") == method]


@pytest.fixture
def stub_server():
    """Stub Flickr server recording every request."""
    return StubFlickrServer()


@pytest.fixture
def http_client(stub_server):
    """httpx client wired to the stub server."""
    client = httpx.Client(transport=httpx.MockTransport(stub_server.handler))
    yield client
    client.close()


# ---------------------------------------------------------------------------
# Shared fake fixtures: individual protocol fakes
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_cache_pool():
    """Fake CacheItemPool that records lookups and saves."""
    from pyflickr.adapters.cache.fake import FakeCachePool

    return FakeCachePool()


@pytest.fixture
def fake_oauth1_service():
    """Fake OAuth1 service with seedable handshake and API responses."""
    from pyflickr.domains.oauth.fakes.oauth1_service import FakeOAuth1Service

    return FakeOAuth1Service()


@pytest.fixture
def token_store():
    """In-memory token store seeded with an empty token."""
    from pyflickr.adapters.token_store.in_memory import InMemoryTokenStore

    return InMemoryTokenStore.with_empty_token()


@pytest.fixture
def flickr_settings():
    """Settings isolated from FLICKR_* env vars other than explicit values."""
    from pyflickr.core.config import FlickrSettings

    return FlickrSettings(
        API_KEY="test-key",
        API_SECRET="test-secret",
        PROXY_BASE_URL=None,
        REST_BASE_URL="https://api.flickr.com/services",
        OAUTH_BASE_URL="https://www.flickr.com/services",
        CALLBACK_URL="oob",
        CACHE_TTL_SECONDS=600,
        USER_AGENT="pyflickr-tests/1.0",
    )

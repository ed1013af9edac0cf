"""Flickr API client.

Usage:
    from pyflickr import FlickrClient
    from pyflickr.adapters.cache import InMemoryCachePool

    client = FlickrClient("api-key", "api-secret", cache=InMemoryCachePool())
    photo = client.call("photos.getInfo", "52817281928")
    echo = client.send("test.echo", {"foo": "bar"})
    recent = client.group("photos").get_recent(per_page=10)
"""

from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import httpx

from pyflickr.core.config import FlickrSettings, Permission, settings as default_settings
from pyflickr.core.exceptions import ConfigurationError
from pyflickr.core.logging import ContextualLogger, LoggerConfigurator
from pyflickr.core.protocols.cache import CacheItemPool
from pyflickr.core.protocols.token_store import TokenStore
from pyflickr.domains.endpoints import helpers
from pyflickr.domains.endpoints.registry import EndpointRegistry, MethodGroup, default_registry
from pyflickr.domains.oauth.auth_client import AuthClient
from pyflickr.domains.oauth.oauth1_service import OAuth1Service
from pyflickr.domains.oauth.types import ConsumerCredentials, OAuth1Token
from pyflickr.domains.requests.cache import ResponseCache
from pyflickr.domains.requests.pipeline import RequestPipeline


class FlickrClient:
    """Entry point for calling the Flickr API.

    Args:
        api_key: Consumer key.
        secret: Consumer secret; needed for the OAuth handshake and for any
            call made on behalf of a user.
        cache: Cache pool for raw responses. Caching is off without one.
        token_store: Where the current OAuth token lives. Defaults to an
            in-memory store holding an empty token.
        settings: Endpoint roots, TTL, User-Agent and timeout.
        http_client: httpx client to send requests with.
        registry: Endpoint table; defaults to the bundled one.
    """

    def __init__(
        self,
        api_key: str,
        secret: Optional[str] = None,
        *,
        cache: Optional[CacheItemPool] = None,
        token_store: Optional[TokenStore] = None,
        settings: Optional[FlickrSettings] = None,
        http_client: Optional[httpx.Client] = None,
        registry: Optional[EndpointRegistry] = None,
    ) -> None:
        if not api_key:
            raise ConfigurationError("An API key is required")

        self.settings = (settings or default_settings).model_copy()
        self._http_client = http_client
        self._user_agent = self.settings.USER_AGENT
        self.registry = registry or default_registry()
        self.logger: ContextualLogger = LoggerConfigurator.configure_logger(
            "pyflickr.client", dimensions={"api_key": api_key[:6]}
        )

        self.auth = AuthClient(
            ConsumerCredentials(api_key, secret, self.settings.CALLBACK_URL),
            service_factory=self._build_service,
            token_store=token_store,
            logger=self.logger,
        )
        self.cache = ResponseCache(cache, self.settings.CACHE_TTL_SECONDS, logger=self.logger)
        self.pipeline = RequestPipeline(
            service_factory=lambda: self.auth.service,
            token_provider=self.auth.current_token,
            cache=self.cache,
            user_agent_provider=lambda: self._user_agent,
            logger=self.logger,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Optional[FlickrSettings] = None,
        *,
        cache_dir: Optional[Union[str, Path]] = None,
        **kwargs: Any,
    ) -> "FlickrClient":
        """Build a client from ``FLICKR_*`` environment configuration.

        Args:
            settings: Settings to use; defaults to the env-loaded singleton.
            cache_dir: If given, responses are cached on disk there.

        Raises:
            ConfigurationError: If ``FLICKR_API_KEY`` is not set.
        """
        settings = settings or default_settings
        if not settings.API_KEY:
            raise ConfigurationError("FLICKR_API_KEY is not set")

        LoggerConfigurator.configure_root(settings.LOG_LEVEL)
        if cache_dir is not None and "cache" not in kwargs:
            from pyflickr.adapters.cache.filesystem import FilesystemCachePool

            kwargs["cache"] = FilesystemCachePool(Path(cache_dir))
        return cls(settings.API_KEY, settings.API_SECRET, settings=settings, **kwargs)

    def _build_service(self, credentials: ConsumerCredentials) -> OAuth1Service:
        return OAuth1Service(
            credentials,
            settings=self.settings,
            http_client=self._http_client,
            logger=self.logger,
        )

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def set_cache(self, pool: Optional[CacheItemPool]) -> None:
        """Enable caching with ``pool``, or disable it with None."""
        self.cache.pool = pool

    def set_cache_ttl(self, ttl_seconds: float) -> None:
        """Time-to-live for every cache entry written from now on."""
        self.cache.ttl_seconds = ttl_seconds

    def set_proxy_base_url(self, base_url: Optional[str]) -> None:
        """Route every request through an API proxy; None restores Flickr's URLs."""
        self.settings = self.settings.model_copy(
            update={"PROXY_BASE_URL": base_url.rstrip("/") if base_url else None}
        )
        self._drop_service()

    @property
    def user_agent(self) -> str:
        return self._user_agent

    @user_agent.setter
    def user_agent(self, value: str) -> None:
        """Should be of the form ``product/product-version comment``."""
        self._user_agent = value

    @property
    def token_store(self) -> TokenStore:
        return self.auth.token_store

    @token_store.setter
    def token_store(self, store: TokenStore) -> None:
        self.auth.token_store = store

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    def get_auth_url(
        self, perm: Union[Permission, str] = Permission.READ, callback_url: Optional[str] = None
    ) -> str:
        """Start the OAuth handshake; see ``AuthClient.get_auth_url``."""
        return self.auth.get_auth_url(perm, callback_url)

    def retrieve_access_token(self, verifier: str, request_token: Optional[str] = None) -> OAuth1Token:
        """Finish the OAuth handshake; see ``AuthClient.retrieve_access_token``."""
        return self.auth.retrieve_access_token(verifier, request_token)

    def set_access_token(self, token: str, secret: str, **additional_params: str) -> OAuth1Token:
        """Authenticate with an access token obtained earlier."""
        return self.auth.set_access_token(token, secret, **additional_params)

    # ------------------------------------------------------------------
    # Calls
    # ------------------------------------------------------------------

    def send(
        self,
        method: str,
        params: Optional[Mapping[str, Any]] = None,
        force_no_cache: bool = False,
    ) -> Dict[str, Any]:
        """Call any API method and return the normalized envelope.

        Raises:
            ApiError: If Flickr reports failure.
            DecodeError: If the response is not JSON.
        """
        return self.pipeline.send(method, params, force_no_cache=force_no_cache)

    def call(self, endpoint: str, *args: Any, **kwargs: Any) -> Any:
        """Call an endpoint from the table with Python arguments.

        Arguments bind positionally in the table's declared order, or by
        name. The result is shaped as the table says: the full envelope, one
        unwrapped sub-object, or a bool for mutations.

        Raises:
            AuthStateError: If the endpoint needs an access token and none is set.
        """
        return self.registry.call(
            self.send, endpoint, *args, is_authorized=self._is_authorized, **kwargs
        )

    def group(self, name: str) -> MethodGroup:
        """Attribute-style access to one method group, e.g. ``group("photos.geo")``."""
        return MethodGroup(self.registry, self.send, name, is_authorized=self._is_authorized)

    def get_largest_size(self, photo_id: Any) -> Optional[Dict[str, Any]]:
        return helpers.get_largest_size(self.call, photo_id)

    def get_sets(self, photo_ids: Iterable[Any], user_id: Optional[str] = None) -> List[Dict[str, Any]]:
        return helpers.get_sets(self.call, photo_ids, user_id)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _is_authorized(self) -> bool:
        return self.auth.is_authorized

    def _drop_service(self) -> None:
        if self.auth.has_service:
            service = self.auth.service
            if isinstance(service, OAuth1Service):
                service.close()
            self.auth.reset_service()

    def close(self) -> None:
        """Close the HTTP client if the client opened it."""
        self._drop_service()

    def __enter__(self) -> "FlickrClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

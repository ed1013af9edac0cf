"""OAuth1 token lifecycle for a Flickr client.

States follow the token held in the store:

    Unauthenticated ──get_auth_url──▶ RequestTokenObtained
    RequestTokenObtained ──retrieve_access_token──▶ Authorized

The signing service is built lazily and memoized, so a client that never
makes a network call never opens an HTTP connection.
"""

from typing import Callable, Optional, Union

from pyflickr.adapters.token_store.in_memory import InMemoryTokenStore
from pyflickr.core.config.enums import Permission, TokenKind
from pyflickr.core.constants import TOKEN_SERVICE_NAME
from pyflickr.core.exceptions import AuthStateError
from pyflickr.core.logging import ContextualLogger, logger as default_logger
from pyflickr.core.protocols.token_store import TokenStore
from pyflickr.domains.oauth.protocols import OAuth1ServiceProtocol
from pyflickr.domains.oauth.types import ConsumerCredentials, OAuth1Token

ServiceFactory = Callable[[ConsumerCredentials], OAuth1ServiceProtocol]


class AuthClient:
    """Owns consumer credentials, the token store and the signing service."""

    def __init__(
        self,
        credentials: ConsumerCredentials,
        service_factory: ServiceFactory,
        token_store: Optional[TokenStore] = None,
        logger: Optional[ContextualLogger] = None,
    ) -> None:
        self.credentials = credentials
        self._service_factory = service_factory
        self._service: Optional[OAuth1ServiceProtocol] = None
        self._token_store = token_store
        self._request_token: Optional[OAuth1Token] = None
        self.logger = (logger or default_logger).with_context(component="auth")

    # ------------------------------------------------------------------
    # Collaborators
    # ------------------------------------------------------------------

    @property
    def token_store(self) -> TokenStore:
        """The token store, created with an empty token on first access."""
        if self._token_store is None:
            self._token_store = InMemoryTokenStore.with_empty_token(TOKEN_SERVICE_NAME)
        return self._token_store

    @token_store.setter
    def token_store(self, store: TokenStore) -> None:
        self._token_store = store

    @property
    def service(self) -> OAuth1ServiceProtocol:
        """The signing service, built on first use."""
        if self._service is None:
            self._service = self._service_factory(self.credentials)
        return self._service

    def reset_service(self) -> None:
        """Drop the memoized service so the next call rebuilds it."""
        self._service = None

    @property
    def has_service(self) -> bool:
        return self._service is not None

    # ------------------------------------------------------------------
    # Token access
    # ------------------------------------------------------------------

    def current_token(self) -> OAuth1Token:
        """The stored token; an empty token if the store holds none."""
        if not self.token_store.has_access_token(TOKEN_SERVICE_NAME):
            return OAuth1Token.empty()
        return self.token_store.retrieve_access_token(TOKEN_SERVICE_NAME)

    def set_access_token(self, token: str, secret: str, **additional_params: str) -> OAuth1Token:
        """Store a previously obtained access token."""
        access_token = OAuth1Token(
            token=token,
            secret=secret,
            kind=TokenKind.ACCESS,
            additional_params=dict(additional_params),
        )
        self.token_store.store_access_token(TOKEN_SERVICE_NAME, access_token)
        return access_token

    @property
    def is_authorized(self) -> bool:
        return self.current_token().is_access_token

    # ------------------------------------------------------------------
    # Handshake
    # ------------------------------------------------------------------

    def _require_secret(self, action: str) -> None:
        if not self.credentials.secret:
            raise AuthStateError(f"A consumer secret is required to {action}")

    def get_auth_url(
        self,
        perm: Union[Permission, str] = Permission.READ,
        callback_url: Optional[str] = None,
    ) -> str:
        """Start the handshake and return the URL the user must visit.

        This sends a request-token call to Flickr, so only call it when the
        user has asked to log in.

        Args:
            perm: One of ``read``, ``write`` or ``delete``.
            callback_url: Where Flickr redirects after consent; defaults to the
                credentials' callback (``oob`` for console use).

        Returns:
            The authorization URL.
        """
        perm = Permission(perm)
        self._require_secret("request an OAuth token")

        response = self.service.get_request_token(
            callback_url=callback_url or self.credentials.callback_url
        )
        self._request_token = response.to_token(TokenKind.REQUEST)
        self.token_store.store_access_token(TOKEN_SERVICE_NAME, self._request_token)
        self.logger.info("Obtained request token; awaiting user authorization")

        return self.service.build_authorization_url(
            oauth_token=self._request_token.token, perms=perm.value
        )

    def _resolve_request_token(self, request_token: Optional[str]) -> OAuth1Token:
        stored = self.current_token()
        pending = self._request_token

        if request_token is None:
            if pending is not None and pending.is_request_token:
                return pending
            if stored.is_request_token:
                return stored
            raise AuthStateError(
                "No request token available; call get_auth_url() before retrieve_access_token()"
            )

        for candidate in (pending, stored):
            if candidate is not None and candidate.is_request_token:
                if candidate.token == request_token:
                    return candidate
        raise AuthStateError(
            f"Request token '{request_token}' does not match the pending handshake"
        )

    def retrieve_access_token(self, verifier: str, request_token: Optional[str] = None) -> OAuth1Token:
        """Exchange the user's verifier for an access token and store it.

        Args:
            verifier: The verification code Flickr showed the user or passed
                to the callback.
            request_token: The request token from the handshake. Can be left
                out on the client instance that called ``get_auth_url``, or
                when the token store still holds the request token.

        Returns:
            The stored access token.

        Raises:
            AuthStateError: If no matching request token is available.
        """
        self._require_secret("exchange an OAuth verifier")
        pending = self._resolve_request_token(request_token)

        response = self.service.exchange_token(
            oauth_token=pending.token,
            oauth_token_secret=pending.secret,
            oauth_verifier=verifier,
        )
        access_token = response.to_token(TokenKind.ACCESS)
        self.token_store.store_access_token(TOKEN_SERVICE_NAME, access_token)
        self._request_token = None
        self.logger.info("Stored OAuth access token")
        return access_token

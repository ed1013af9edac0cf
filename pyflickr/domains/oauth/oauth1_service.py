"""OAuth1 signing and transport for the Flickr API.

This service handles the 3-legged OAuth1 flow:
1. Obtain temporary credentials (request token)
2. Redirect user for authorization
3. Exchange for access token

and signs every REST call with the consumer credentials plus, once the
handshake has completed, the access token.

Reference: RFC 5849 - The OAuth 1.0 Protocol
"""

import base64
import hashlib
import hmac
import secrets
import time
from typing import Dict, Mapping, Optional
from urllib.parse import parse_qsl, quote, urlencode

import httpx

from pyflickr.core.config import FlickrSettings, settings as default_settings
from pyflickr.core.exceptions import OAuthExchangeError
from pyflickr.core.logging import ContextualLogger, logger as default_logger
from pyflickr.domains.oauth.protocols import OAuth1ServiceProtocol
from pyflickr.domains.oauth.types import ConsumerCredentials, OAuth1Token, OAuth1TokenResponse

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class OAuth1Service(OAuth1ServiceProtocol):
    """Service for signing Flickr requests and running the OAuth1 handshake."""

    def __init__(
        self,
        credentials: ConsumerCredentials,
        *,
        settings: Optional[FlickrSettings] = None,
        http_client: Optional[httpx.Client] = None,
        logger: Optional[ContextualLogger] = None,
    ) -> None:
        """Initialize the service.

        Args:
            credentials: Consumer key/secret and callback URL.
            settings: Endpoint roots and timeout; defaults to the env settings.
            http_client: Pre-built httpx client (tests pass one with a MockTransport).
            logger: Logger for debugging.
        """
        self.credentials = credentials
        self.settings = settings or default_settings
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=self.settings.TIMEOUT_SECONDS)
        self.logger = (logger or default_logger).with_context(component="oauth1")

    # ------------------------------------------------------------------
    # Signing primitives
    # ------------------------------------------------------------------

    def _generate_nonce(self) -> str:
        """Generate a cryptographically secure random nonce."""
        return secrets.token_urlsafe(32)

    def _get_timestamp(self) -> str:
        """Get current Unix timestamp as string."""
        return str(int(time.time()))

    def _percent_encode(self, value: str) -> str:
        """Percent-encode a value according to RFC 3986.

        Encodes all characters except unreserved: A-Z, a-z, 0-9, -, ., _, ~
        """
        return quote(str(value), safe="~")

    def _build_signature_base_string(self, method: str, url: str, params: Mapping[str, str]) -> str:
        """Build the signature base string per RFC 5849.

        Format: HTTP_METHOD&URL&NORMALIZED_PARAMS
        """
        encoded = sorted(
            (self._percent_encode(k), self._percent_encode(v)) for k, v in params.items()
        )
        param_str = "&".join(f"{k}={v}" for k, v in encoded)

        parts = [
            method.upper(),
            self._percent_encode(url),
            self._percent_encode(param_str),
        ]
        return "&".join(parts)

    def _sign_hmac_sha1(self, base_string: str, consumer_secret: str, token_secret: str = "") -> str:
        """Sign the base string using HMAC-SHA1.

        Signing key: percent_encode(consumer_secret)&percent_encode(token_secret)
        """
        encoded_consumer = self._percent_encode(consumer_secret)
        encoded_token = self._percent_encode(token_secret)
        key = f"{encoded_consumer}&{encoded_token}"

        signature_bytes = hmac.new(
            key.encode("utf-8"), base_string.encode("utf-8"), hashlib.sha1
        ).digest()
        return base64.b64encode(signature_bytes).decode("utf-8")

    def _build_authorization_header(self, params: Mapping[str, str]) -> str:
        """Build OAuth1 Authorization header.

        Format: OAuth oauth_consumer_key="...", oauth_nonce="...", ...
        """
        sorted_items = sorted(params.items())
        param_strings = [
            f'{self._percent_encode(k)}="{self._percent_encode(v)}"' for k, v in sorted_items
        ]
        return "OAuth " + ", ".join(param_strings)

    def _oauth_params(self, **extra: str) -> Dict[str, str]:
        params = {
            "oauth_consumer_key": self.credentials.key,
            "oauth_signature_method": "HMAC-SHA1",
            "oauth_timestamp": self._get_timestamp(),
            "oauth_nonce": self._generate_nonce(),
            "oauth_version": "1.0",
        }
        params.update(extra)
        return params

    def sign(
        self,
        url: str,
        oauth_params: Dict[str, str],
        body: Optional[Mapping[str, str]] = None,
        token_secret: str = "",
    ) -> str:
        """Sign a POST and return the Authorization header value.

        Form body parameters take part in the signature alongside the oauth_*
        parameters, as RFC 5849 section 3.4.1.3 requires.
        """
        signed = dict(body or {})
        signed.update(oauth_params)
        base_string = self._build_signature_base_string("POST", url, signed)
        oauth_params["oauth_signature"] = self._sign_hmac_sha1(
            base_string, self.credentials.secret or "", token_secret
        )
        return self._build_authorization_header(oauth_params)

    # ------------------------------------------------------------------
    # Handshake
    # ------------------------------------------------------------------

    @property
    def request_token_url(self) -> str:
        return f"{self.settings.oauth_root}/request_token"

    @property
    def authorize_url(self) -> str:
        return f"{self.settings.oauth_root}/authorize"

    @property
    def access_token_url(self) -> str:
        return f"{self.settings.oauth_root}/access_token"

    def _post_token_endpoint(self, url: str, auth_header: str, step: str) -> OAuth1TokenResponse:
        try:
            response = self._client.post(
                url,
                headers={"Authorization": auth_header, "Content-Type": FORM_CONTENT_TYPE},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            self.logger.error(
                f"HTTP error during {step}: {e.response.status_code} - {e.response.text}"
            )
            raise OAuthExchangeError(
                f"Failed to {step}: {e.response.text}", response_text=e.response.text
            ) from e

        response_params = dict(parse_qsl(response.text))

        if "oauth_token" not in response_params or "oauth_token_secret" not in response_params:
            self.logger.error(f"Invalid response from OAuth1 provider: {response.text}")
            raise OAuthExchangeError(
                "Invalid response from OAuth1 provider", response_text=response.text
            )

        return OAuth1TokenResponse(
            oauth_token=response_params["oauth_token"],
            oauth_token_secret=response_params["oauth_token_secret"],
            **{
                k: v
                for k, v in response_params.items()
                if k not in ["oauth_token", "oauth_token_secret"]
            },
        )

    def get_request_token(self, *, callback_url: str) -> OAuth1TokenResponse:
        """Obtain temporary credentials (request token) from Flickr.

        Args:
            callback_url: Callback URL for the OAuth flow, or ``oob``.

        Returns:
            OAuth1TokenResponse with temporary credentials

        Raises:
            OAuthExchangeError: If request token retrieval fails
        """
        oauth_params = self._oauth_params(oauth_callback=callback_url)
        auth_header = self.sign(self.request_token_url, oauth_params)

        self.logger.info(f"Requesting OAuth1 temporary credentials from {self.request_token_url}")
        token = self._post_token_endpoint(
            self.request_token_url, auth_header, "obtain request token"
        )
        self.logger.info("Successfully obtained OAuth1 temporary credentials")
        return token

    def exchange_token(
        self,
        *,
        oauth_token: str,
        oauth_token_secret: str,
        oauth_verifier: str,
    ) -> OAuth1TokenResponse:
        """Exchange temporary credentials for access token credentials.

        Args:
            oauth_token: Temporary token from step 1
            oauth_token_secret: Temporary token secret from step 1
            oauth_verifier: Verification code from user authorization

        Returns:
            OAuth1TokenResponse with access token credentials

        Raises:
            OAuthExchangeError: If token exchange fails
        """
        oauth_params = self._oauth_params(oauth_token=oauth_token, oauth_verifier=oauth_verifier)
        auth_header = self.sign(
            self.access_token_url, oauth_params, token_secret=oauth_token_secret
        )

        self.logger.info(
            f"Exchanging OAuth1 temporary credentials for access token at {self.access_token_url}"
        )
        token = self._post_token_endpoint(
            self.access_token_url, auth_header, "exchange OAuth1 token"
        )
        self.logger.info("Successfully obtained OAuth1 access token")
        return token

    def build_authorization_url(self, *, oauth_token: str, perms: Optional[str] = None) -> str:
        """Build the authorization URL for user consent (step 2 of OAuth1 flow).

        Args:
            oauth_token: Temporary token from step 1
            perms: One of read, write or delete

        Returns:
            Complete authorization URL for user redirect
        """
        params = {"oauth_token": oauth_token}
        if perms:
            params["perms"] = perms
        return f"{self.authorize_url}?{urlencode(params)}"

    # ------------------------------------------------------------------
    # API calls
    # ------------------------------------------------------------------

    def request_json(
        self,
        method: str,
        params: Mapping[str, str],
        *,
        headers: Optional[Mapping[str, str]] = None,
        token: Optional[OAuth1Token] = None,
    ) -> str:
        """POST a signed API call and return the raw response body.

        Only an access token is attached to the signature. Empty and request
        tokens leave the call signed with consumer credentials alone.
        The ``method``, ``format`` and ``nojsoncallback`` fields always take
        the values this method sets, whatever ``params`` holds.

        Raises:
            httpx.HTTPError: Transport and HTTP status errors, unmodified.
        """
        url = self.settings.rest_endpoint
        body = {**params, "method": method, "format": "json", "nojsoncallback": "1"}

        if token is not None and token.is_access_token:
            oauth_params = self._oauth_params(oauth_token=token.token)
            token_secret = token.secret
        else:
            oauth_params = self._oauth_params()
            token_secret = ""
        auth_header = self.sign(url, oauth_params, body=body, token_secret=token_secret)

        request_headers = {"Authorization": auth_header, "Content-Type": FORM_CONTENT_TYPE}
        request_headers.update(headers or {})

        response = self._client.post(url, data=body, headers=request_headers)
        response.raise_for_status()
        return response.text

    def close(self) -> None:
        """Close the underlying HTTP client if this service created it."""
        if self._owns_client:
            self._client.close()

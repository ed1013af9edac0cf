"""Request pipeline for Flickr API calls.

Each call goes through the same steps:
cache lookup → signed POST on a miss → cache write → JSON decode →
text-node normalization → envelope status check.

Cache hits and misses share the decode path because the cache only ever
holds undecoded bodies.
"""

import json
from typing import Any, Callable, Dict, Mapping, Optional

from pyflickr.core.config.enums import ResponseStatus
from pyflickr.core.constants import METHOD_PREFIX, STATUS_FIELD
from pyflickr.core.exceptions import ApiError, DecodeError
from pyflickr.core.logging import ContextualLogger, logger as default_logger
from pyflickr.domains.oauth.protocols import OAuth1ServiceProtocol
from pyflickr.domains.oauth.types import OAuth1Token
from pyflickr.domains.requests.cache import ResponseCache, compute_cache_key
from pyflickr.domains.requests.params import normalize_params
from pyflickr.domains.requests.text_nodes import normalize_text_nodes


def namespaced(method: str) -> str:
    """Prefix ``flickr.`` onto a method name that lacks it."""
    if method.startswith(METHOD_PREFIX):
        return method
    return f"{METHOD_PREFIX}{method}"


def decode_envelope(method: str, body: str) -> Dict[str, Any]:
    """Decode a raw body into a normalized envelope, raising on API failure.

    Raises:
        DecodeError: If the body is not a JSON object.
        ApiError: If the envelope reports ``stat: fail``.
    """
    try:
        decoded = json.loads(body)
    except (TypeError, ValueError) as e:
        raise DecodeError(method, body) from e
    if not isinstance(decoded, dict):
        raise DecodeError(method, body)

    envelope = normalize_text_nodes(decoded)

    if envelope.get(STATUS_FIELD) == ResponseStatus.FAIL.value:
        try:
            code = int(envelope.get("code", 0))
        except (TypeError, ValueError):
            code = 0
        raise ApiError(code, str(envelope.get("message", "")), method)
    return envelope


class RequestPipeline:
    """Runs API calls through cache, transport and response normalization.

    Args:
        service_factory: Returns the signing service; called on cache misses
            only, so building it can be deferred until the first network call.
        token_provider: Returns the token to sign with.
        cache: Response cache; a pool-less cache disables caching.
        user_agent_provider: Returns the User-Agent header value.
    """

    def __init__(
        self,
        service_factory: Callable[[], OAuth1ServiceProtocol],
        token_provider: Callable[[], Optional[OAuth1Token]],
        cache: ResponseCache,
        user_agent_provider: Callable[[], str],
        logger: Optional[ContextualLogger] = None,
    ) -> None:
        self._service_factory = service_factory
        self._token_provider = token_provider
        self.cache = cache
        self._user_agent_provider = user_agent_provider
        self.logger = (logger or default_logger).with_context(component="pipeline")

    def send(
        self,
        method: str,
        params: Optional[Mapping[str, Any]] = None,
        force_no_cache: bool = False,
    ) -> Dict[str, Any]:
        """Call an API method and return its normalized envelope.

        Args:
            method: API method, with or without the ``flickr.`` prefix.
            params: Request arguments; empty values are dropped.
            force_no_cache: Skip both the cache read and the cache write.
                Use for mutating calls whose result must not be replayed.

        Returns:
            The decoded envelope with text nodes collapsed.

        Raises:
            DecodeError: If the body is not valid JSON.
            ApiError: If the API reports failure.
            httpx.HTTPError: Transport errors, unmodified.
        """
        method = namespaced(method)
        normalized = normalize_params(params)
        cache_key = compute_cache_key(method, normalized)
        call_logger = self.logger.with_context(method=method)

        body: Optional[str] = None
        if not force_no_cache:
            body = self.cache.get(cache_key)
            if body is not None:
                call_logger.debug("Cache hit")

        if body is None:
            call_logger.debug("Sending request")
            body = self._service_factory().request_json(
                method,
                normalized,
                headers={"User-Agent": self._user_agent_provider()},
                token=self._token_provider(),
            )
            if not force_no_cache:
                self.cache.put(cache_key, body)

        return decode_envelope(method, body)

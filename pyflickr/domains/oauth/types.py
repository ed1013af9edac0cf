"""Value types for the OAuth domain.

These live in a separate module to avoid circular imports between
service implementations and protocol definitions.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from pyflickr.core.config.enums import TokenKind


@dataclass(frozen=True)
class ConsumerCredentials:
    """Application credentials issued by Flickr."""

    key: str
    secret: Optional[str] = None
    callback_url: str = "oob"


@dataclass(frozen=True)
class OAuth1Token:
    """An OAuth1 token at one stage of the handshake.

    An empty token signs requests with consumer credentials only. A request
    token is short-lived and only good for the access-token exchange. An
    access token identifies an authenticated account.
    """

    token: str = ""
    secret: str = ""
    kind: TokenKind = TokenKind.EMPTY
    additional_params: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> "OAuth1Token":
        """Token used before any handshake has happened."""
        return cls()

    @property
    def is_access_token(self) -> bool:
        return self.kind == TokenKind.ACCESS and bool(self.token)

    @property
    def is_request_token(self) -> bool:
        return self.kind == TokenKind.REQUEST and bool(self.token)

    @property
    def user_nsid(self) -> Optional[str]:
        """NSID of the authorized account, when Flickr returned one."""
        return self.additional_params.get("user_nsid")

    @property
    def username(self) -> Optional[str]:
        return self.additional_params.get("username")


class OAuth1TokenResponse:
    """Response from OAuth1 token exchange."""

    def __init__(self, oauth_token: str, oauth_token_secret: str, **kwargs: str) -> None:
        """Initialize with token, secret, and any additional provider params."""
        self.oauth_token = oauth_token
        self.oauth_token_secret = oauth_token_secret
        self.additional_params = kwargs

    def to_token(self, kind: TokenKind) -> OAuth1Token:
        """Convert to a storable token of the given kind."""
        return OAuth1Token(
            token=self.oauth_token,
            secret=self.oauth_token_secret,
            kind=kind,
            additional_params=dict(self.additional_params),
        )

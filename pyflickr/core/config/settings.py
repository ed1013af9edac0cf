"""Client settings with defaults.

All defaults are defined here in the schema.
Uses Pydantic Settings for automatic env var loading.
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pyflickr.core.constants import DEFAULT_USER_AGENT

DEFAULT_REST_BASE_URL = "https://api.flickr.com/services"
DEFAULT_OAUTH_BASE_URL = "https://www.flickr.com/services"


class FlickrSettings(BaseSettings):
    """Client configuration with automatic env var loading.

    Env vars use the ``FLICKR_`` prefix:
        FLICKR_API_KEY=abc123
        FLICKR_CACHE_TTL_SECONDS=3600
    """

    model_config = SettingsConfigDict(
        env_prefix="FLICKR_",
        case_sensitive=False,
        extra="ignore",
    )

    API_KEY: Optional[str] = Field(None, description="Consumer key issued by Flickr")
    API_SECRET: Optional[str] = Field(
        None, description="Consumer secret; required for authenticated or write calls"
    )
    CALLBACK_URL: str = Field("oob", description="OAuth callback URL ('oob' for out-of-band)")
    PROXY_BASE_URL: Optional[str] = Field(
        None, description="Base URL of an API proxy that replaces both service roots"
    )
    CACHE_TTL_SECONDS: int = Field(600, ge=0, description="Time-to-live for cached responses")
    USER_AGENT: str = Field(DEFAULT_USER_AGENT, description="User-Agent sent with API calls")
    REST_BASE_URL: str = Field(DEFAULT_REST_BASE_URL, description="Root of the REST service")
    OAUTH_BASE_URL: str = Field(DEFAULT_OAUTH_BASE_URL, description="Root of the OAuth service")
    TIMEOUT_SECONDS: float = Field(30.0, gt=0, description="HTTP timeout for every request")
    LOG_LEVEL: str = Field("INFO", description="Level for the pyflickr logger")

    @field_validator("PROXY_BASE_URL", "REST_BASE_URL", "OAUTH_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, value: Optional[str]) -> Optional[str]:
        """Service roots are stored without a trailing slash."""
        if value is None:
            return None
        return value.rstrip("/")

    @property
    def rest_endpoint(self) -> str:
        """URL every API method is POSTed to."""
        return f"{self.PROXY_BASE_URL or self.REST_BASE_URL}/rest/"

    @property
    def oauth_root(self) -> str:
        """Root of the request-token, authorize and access-token endpoints."""
        return f"{self.PROXY_BASE_URL or self.OAUTH_BASE_URL}/oauth"

"""pyflickr: a client for the Flickr REST API."""

from pyflickr.client import FlickrClient
from pyflickr.core.config import FlickrSettings, Permission
from pyflickr.core.constants import VERSION
from pyflickr.core.exceptions import (
    ApiError,
    AuthStateError,
    ConfigurationError,
    DecodeError,
    FlickrException,
    OAuthExchangeError,
)

__version__ = VERSION

__all__ = [
    "ApiError",
    "AuthStateError",
    "ConfigurationError",
    "DecodeError",
    "FlickrClient",
    "FlickrException",
    "FlickrSettings",
    "OAuthExchangeError",
    "Permission",
    "__version__",
]

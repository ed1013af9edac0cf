"""Configuration module for pyflickr.

Provides centralized configuration management with type-safe enums.

Usage:
    from pyflickr.core.config import settings, Permission

    client = FlickrClient.from_settings(settings)
    url = client.get_auth_url(Permission.WRITE)
"""

from pyflickr.core.config.enums import Permission, ResponseStatus, TokenKind
from pyflickr.core.config.settings import FlickrSettings

__all__ = [
    "FlickrSettings",
    "Permission",
    "ResponseStatus",
    "TokenKind",
    "settings",
]

# Singleton settings instance
settings = FlickrSettings()

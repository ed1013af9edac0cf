"""Logging for pyflickr.

Wraps the standard library logger in a ``ContextualLogger`` that carries
key/value dimensions (API method, cache key, token kind) on every record.

Usage:
    from pyflickr.core.logging import logger

    call_logger = logger.with_context(method="flickr.photos.getInfo")
    call_logger.debug("Cache miss")
"""

import logging
import sys
from typing import Any, Dict, MutableMapping, Optional, Tuple

from pyflickr.core.config import settings

_ROOT_LOGGER_NAME = "pyflickr"


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter that appends contextual dimensions to each message."""

    def __init__(
        self,
        logger: logging.Logger,
        dimensions: Optional[Dict[str, Any]] = None,
        prefix: str = "",
    ) -> None:
        """Initialize with an underlying logger, dimensions, and message prefix."""
        super().__init__(logger, dict(dimensions or {}))
        self.dimensions: Dict[str, Any] = dict(dimensions or {})
        self.prefix = prefix

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        """Prefix the message and attach dimensions as ``extra``."""
        extra = dict(kwargs.get("extra") or {})
        extra.setdefault("dimensions", self.dimensions)
        kwargs["extra"] = extra
        if self.dimensions:
            dims = " ".join(f"{k}={v}" for k, v in self.dimensions.items())
            return f"{self.prefix}{msg} [{dims}]", kwargs
        return f"{self.prefix}{msg}", kwargs

    def with_context(self, **dimensions: Any) -> "ContextualLogger":
        """Return a new logger with additional dimensions merged in."""
        merged = {**self.dimensions, **dimensions}
        return ContextualLogger(self.logger, merged, self.prefix)

    def with_prefix(self, prefix: str) -> "ContextualLogger":
        """Return a new logger that prepends ``prefix`` to every message."""
        return ContextualLogger(self.logger, self.dimensions, prefix)


class LoggerConfigurator:
    """Builds ``ContextualLogger`` instances under the ``pyflickr`` hierarchy."""

    _configured = False

    @classmethod
    def configure_root(cls, level: Optional[str] = None) -> logging.Logger:
        """Attach a stream handler to the package logger once.

        Args:
            level: Log level name; defaults to ``FLICKR_LOG_LEVEL``.

        Returns:
            The package root logger.
        """
        root = logging.getLogger(_ROOT_LOGGER_NAME)
        root.setLevel((level or settings.LOG_LEVEL).upper())
        if not cls._configured:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(
                logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
            )
            root.addHandler(handler)
            root.propagate = False
            cls._configured = True
        return root

    @classmethod
    def configure_logger(
        cls, name: str, dimensions: Optional[Dict[str, Any]] = None
    ) -> ContextualLogger:
        """Create a contextual logger for a component.

        Args:
            name: Dotted logger name, e.g. ``pyflickr.pipeline``.
            dimensions: Key/value pairs attached to every record.

        Returns:
            A configured ContextualLogger.
        """
        return ContextualLogger(logging.getLogger(name), dimensions)


logger = LoggerConfigurator.configure_logger(_ROOT_LOGGER_NAME)

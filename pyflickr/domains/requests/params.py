"""Request parameter normalization.

The same normalized mapping feeds the cache key and the signed request body,
so two calls that differ only in unset arguments share a cache entry.
"""

from typing import Any, Dict, Mapping, Optional


def is_empty(value: Any) -> bool:
    """True for values that must never reach the wire."""
    if value is None:
        return True
    if isinstance(value, (str, bytes)):
        return len(value) == 0
    if isinstance(value, (list, tuple, set, frozenset, dict)):
        return len(value) == 0
    return False


def to_wire_value(value: Any) -> str:
    """Render a scalar the way the API expects it."""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)


def normalize_params(params: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    """Drop empty parameters and stringify the rest.

    Container values are not flattened; callers join lists (tags, extras)
    before they get here.
    """
    if not params:
        return {}
    return {str(k): to_wire_value(v) for k, v in params.items() if not is_empty(v)}

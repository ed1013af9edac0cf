"""Argument transforms for list- and date-valued endpoint arguments."""

from datetime import date, datetime
from typing import Any

from pyflickr.domains.endpoints.types import ArgumentTransform


def join_csv(value: Any) -> Any:
    """Join a list of extras or ids with commas; strings pass through."""
    if isinstance(value, (list, tuple, set)):
        return ",".join(str(v) for v in value)
    return value


def quote_tags(tags: Any) -> Any:
    """Render tags as the space-separated string the API expects.

    A string is sent as-is. For a list, double quotes are removed from each
    tag and tags containing spaces are wrapped in double quotes.
    """
    if not isinstance(tags, (list, tuple, set)):
        return tags
    return " ".join(_quote_tag(tag) for tag in tags)


def _quote_tag(tag: Any) -> str:
    clean = str(tag).replace('"', "")
    return f'"{clean}"' if " " in clean else clean


def format_datetime(value: Any) -> Any:
    """MySQL-style datetime, as used by the ``*_taken_date`` arguments."""
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M:%S")
    if isinstance(value, date):
        return value.strftime("%Y-%m-%d 00:00:00")
    return value


def format_timestamp(value: Any) -> Any:
    """Unix timestamp, as used by the ``*_upload_date`` arguments."""
    if isinstance(value, datetime):
        return str(int(value.timestamp()))
    if isinstance(value, date):
        return str(int(datetime(value.year, value.month, value.day).timestamp()))
    return value


_TRANSFORMS = {
    ArgumentTransform.CSV: join_csv,
    ArgumentTransform.TAGS: quote_tags,
    ArgumentTransform.DATETIME: format_datetime,
    ArgumentTransform.TIMESTAMP: format_timestamp,
}


def apply_transform(transform: ArgumentTransform, value: Any) -> Any:
    if value is None:
        return None
    return _TRANSFORMS[transform](value)

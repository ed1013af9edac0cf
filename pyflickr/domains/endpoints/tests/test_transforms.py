"""Unit tests for endpoint argument transforms."""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any

import pytest

from pyflickr.domains.endpoints.transforms import (
    apply_transform,
    format_datetime,
    format_timestamp,
    join_csv,
    quote_tags,
)
from pyflickr.domains.endpoints.types import ArgumentTransform


@dataclass
class TransformCase:
    desc: str
    transform: ArgumentTransform
    value: Any
    expected: Any


TRANSFORM_CASES = [
    TransformCase("csv list", ArgumentTransform.CSV, ["url_o", "tags"], "url_o,tags"),
    TransformCase("csv tuple of ints", ArgumentTransform.CSV, (1, 2, 3), "1,2,3"),
    TransformCase("csv string passes", ArgumentTransform.CSV, "a,b", "a,b"),
    TransformCase("tags list", ArgumentTransform.TAGS, ["cat", "dog"], "cat dog"),
    TransformCase(
        "tags with spaces quoted", ArgumentTransform.TAGS, ["new york", "cat"], '"new york" cat'
    ),
    TransformCase(
        "tags strip embedded quotes", ArgumentTransform.TAGS, ['say "hi"', "x"], '"say hi" x'
    ),
    TransformCase("tags string passes", ArgumentTransform.TAGS, 'cat "new york"', 'cat "new york"'),
    TransformCase(
        "datetime",
        ArgumentTransform.DATETIME,
        datetime(2024, 5, 1, 13, 4, 5),
        "2024-05-01 13:04:05",
    ),
    TransformCase("date", ArgumentTransform.DATETIME, date(2024, 5, 1), "2024-05-01 00:00:00"),
    TransformCase("datetime string passes", ArgumentTransform.DATETIME, "2024-05-01", "2024-05-01"),
    TransformCase(
        "aware timestamp",
        ArgumentTransform.TIMESTAMP,
        datetime(2024, 1, 1, tzinfo=timezone.utc),
        "1704067200",
    ),
    TransformCase("timestamp int passes", ArgumentTransform.TIMESTAMP, 1704067200, 1704067200),
    TransformCase("None passes", ArgumentTransform.CSV, None, None),
]


@pytest.mark.parametrize("case", TRANSFORM_CASES, ids=lambda c: c.desc)
def test_apply_transform(case: TransformCase):
    assert apply_transform(case.transform, case.value) == case.expected


def test_direct_helpers():
    assert join_csv({"x"}) == "x"
    assert quote_tags([]) == ""
    assert format_datetime(42) == 42
    assert format_timestamp("now") == "now"

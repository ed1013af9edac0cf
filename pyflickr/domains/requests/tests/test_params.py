"""Unit tests for request parameter normalization."""

from dataclasses import dataclass
from typing import Any

import pytest

from pyflickr.domains.requests.params import is_empty, normalize_params, to_wire_value


@dataclass
class EmptyCase:
    desc: str
    value: Any
    expected: bool


EMPTY_CASES = [
    EmptyCase("None", None, True),
    EmptyCase("empty string", "", True),
    EmptyCase("empty bytes", b"", True),
    EmptyCase("empty list", [], True),
    EmptyCase("empty dict", {}, True),
    EmptyCase("zero int", 0, False),
    EmptyCase("zero string", "0", False),
    EmptyCase("False", False, False),
    EmptyCase("whitespace", " ", False),
]


@pytest.mark.parametrize("case", EMPTY_CASES, ids=lambda c: c.desc)
def test_is_empty(case: EmptyCase):
    assert is_empty(case.value) is case.expected


@pytest.mark.parametrize(
    "value, expected",
    [(True, "1"), (False, "0"), (42, "42"), (1.5, "1.5"), (b"caf\xc3\xa9", "café"), ("x", "x")],
)
def test_to_wire_value(value, expected):
    assert to_wire_value(value) == expected


def test_normalize_params_drops_empty_values():
    result = normalize_params(
        {"user_id": "1@N00", "tags": "", "page": 0, "extras": None, "safe": True, "ids": []}
    )
    assert result == {"user_id": "1@N00", "page": "0", "safe": "1"}


@pytest.mark.parametrize("params", [None, {}], ids=["None", "empty mapping"])
def test_normalize_params_of_nothing(params):
    assert normalize_params(params) == {}

"""Tests for id parsing and formatting."""

from __future__ import annotations

import pytest

from library_service.core.exceptions import ValidationException
from library_service.features.catalog.identifiers import (
    MAX_ID,
    format_id,
    parse_id,
    try_parse_id,
)


@pytest.mark.parametrize("value", ["1", "42", str(MAX_ID)])
def test_parse_id_round_trips_canonical_strings(value: str) -> None:
    assert format_id(parse_id(value)) == value


def test_parse_id_accepts_positive_ints() -> None:
    assert parse_id(7) == 7


@pytest.mark.parametrize(
    "value",
    ["", "0", "-1", "01", " 1", "1.0", "abc", "1e3", str(MAX_ID + 1), 0, -5, True, None, 1.5],
)
def test_parse_id_rejects_malformed(value: object) -> None:
    with pytest.raises(ValidationException) as exc_info:
        parse_id(value, field="bookId")

    assert exc_info.value.field == "bookId"
    assert exc_info.value.status_code == 422


def test_try_parse_id_returns_none_for_malformed() -> None:
    assert try_parse_id("nope") is None
    assert try_parse_id("12") == 12

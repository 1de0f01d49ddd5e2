"""Conversion between public string ids and store-native integer ids."""

from __future__ import annotations

import re

from library_service.core.exceptions import ValidationException

MAX_ID = 2**31 - 1
_ID_PATTERN = re.compile(r"^[1-9][0-9]*$")


def parse_id(value: object, field: str = "id") -> int:
    """Return the store id for ``value``.

    Accepts a positive ``int`` or its canonical decimal string (no sign,
    whitespace or leading zeros) up to the stores' 32-bit signed limit, so
    ``format_id(parse_id(s)) == s`` for every accepted string.

    Raises:
        ValidationException: ``value`` is not a valid id.
    """
    if isinstance(value, bool):
        number = None
    elif isinstance(value, int):
        number = value
    elif isinstance(value, str) and _ID_PATTERN.fullmatch(value):
        number = int(value)
    else:
        number = None

    if number is None or number < 1 or number > MAX_ID:
        raise ValidationException(
            detail=f"{field} must be a positive integer id, got {value!r}",
            extra={"field": field, "value": str(value)},
        )
    return number


def try_parse_id(value: object) -> int | None:
    """Like :func:`parse_id` but returns ``None`` for malformed input."""
    try:
        return parse_id(value)
    except ValidationException:
        return None


def format_id(value: int) -> str:
    return str(value)

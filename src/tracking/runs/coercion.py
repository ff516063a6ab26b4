"""Field coercion helpers for decoded tracking payloads.

Older tracking servers serialize int64 fields (experiment ids, timestamps,
steps) as JSON strings, and protobuf JSON encodes non-finite doubles as
``"NaN"``/``"Infinity"``. These helpers accept both forms.
"""

from __future__ import annotations

import math
import re
from typing import Any, Mapping

from .errors import FieldParseError, MissingFieldError

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_NON_FINITE = {
    "nan": math.nan,
    "infinity": math.inf,
    "+infinity": math.inf,
    "-infinity": -math.inf,
    "inf": math.inf,
    "+inf": math.inf,
    "-inf": -math.inf,
}


def _check_int64(field: str, raw: Any, value: int) -> int:
    if not INT64_MIN <= value <= INT64_MAX:
        raise FieldParseError(field, raw)
    return value


def parse_int64(value: Any, field: str) -> int:
    """
    Coerce a payload value to a signed 64-bit integer.

    Integers pass through, integral floats are converted and decimal strings
    are parsed. Booleans, fractional floats, other strings and out-of-range
    values raise FieldParseError.
    """
    if isinstance(value, bool):
        raise FieldParseError(field, value)
    if isinstance(value, int):
        return _check_int64(field, value, value)
    if isinstance(value, float):
        if not value.is_integer():
            raise FieldParseError(field, value)
        return _check_int64(field, value, int(value))
    if isinstance(value, str):
        text = value.strip()
        if not _INT_PATTERN.fullmatch(text):
            raise FieldParseError(field, value)
        return _check_int64(field, value, int(text))
    raise FieldParseError(field, value)


def parse_float64(value: Any, field: str) -> float:
    """Coerce a payload value to a float, accepting protobuf non-finite spellings."""
    if isinstance(value, bool):
        raise FieldParseError(field, value, expected="float")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if text.lower() in _NON_FINITE:
            return _NON_FINITE[text.lower()]
        if not text.isascii():
            raise FieldParseError(field, value, expected="float")
        try:
            return float(text)
        except ValueError:
            raise FieldParseError(field, value, expected="float") from None
    raise FieldParseError(field, value, expected="float")


def parse_str(value: Any, field: str) -> str:
    """Accept only string values; anything else raises FieldParseError."""
    if not isinstance(value, str):
        raise FieldParseError(field, value, expected="string")
    return value


def require(mapping: Mapping[str, Any], field: str, record: str) -> Any:
    """Look up a required key, raising MissingFieldError when it is absent."""
    try:
        return mapping[field]
    except KeyError:
        raise MissingFieldError(field, record) from None

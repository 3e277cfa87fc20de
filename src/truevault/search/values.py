"""Search – SearchValue variants and their wire encoding.

A search value is one of five frozen value objects. ``String``, ``Float64``
and ``Int`` encode to bare JSON scalars, ``Time`` to an RFC 3339 string and
``RangeValue`` to an object holding only the bounds that were set::

    encode_value(String("alice"))            # "alice"
    encode_value(Time(datetime.min))          # "0001-01-01T00:00:00Z"
    encode_value(RangeValue(gt=3, lt=5))      # {"gt": 3.0, "lt": 5.0}

Numbers are written by ``format_float`` when serialised, so the range above
goes out as ``{"gt":3,"lt":5}``.
"""
from __future__ import annotations

import dataclasses
import math
from datetime import datetime
from decimal import Decimal
from typing import Any

from truevault.kernel.errors import SearchEncodingError

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

# floats outside [1e-6, 1e21) are written in exponent notation
_FLOAT_FIXED_MIN = 1e-6
_FLOAT_FIXED_MAX = 1e21


@dataclasses.dataclass(frozen=True, slots=True)
class String:
    """Holds a string search value."""

    value: str


@dataclasses.dataclass(frozen=True, slots=True)
class Float64:
    """Holds a floating point search value."""

    value: float


@dataclasses.dataclass(frozen=True, slots=True)
class Int:
    """Holds a 64-bit integer search value."""

    value: int


@dataclasses.dataclass(frozen=True, slots=True)
class Time:
    """Holds a timestamp search value; naive datetimes are taken as UTC."""

    value: datetime


@dataclasses.dataclass(frozen=True, slots=True)
class RangeValue:
    """Numeric bounds for a range condition.

    Any subset of bounds may be set. Ordering between ``gt``/``gte`` and
    ``lt``/``lte`` is left to the remote API.
    """

    gt: float | None = None
    gte: float | None = None
    lt: float | None = None
    lte: float | None = None

    def bounds(self) -> dict[str, float]:
        """Return the bounds that are set, in wire order."""
        return {
            name: bound
            for name in ("gt", "gte", "lt", "lte")
            if (bound := getattr(self, name)) is not None
        }


type SearchValue = String | Float64 | Int | Time | RangeValue


def encode_value(value: SearchValue, *, path: str = "value") -> Any:
    """Return the JSON-ready form of *value*.

    Raises
    ------
    SearchEncodingError
        When the payload cannot be represented in JSON (NaN, infinity, an
        integer outside int64) or *value* is not a search value at all.
    """
    match value:
        case String(value=s):
            if not isinstance(s, str):
                raise SearchEncodingError(f"String expects str, got {type(s).__name__}", path=path)
            return s
        case Float64(value=f):
            return _encode_float(f, path)
        case Int(value=i):
            return _encode_int(i, path)
        case Time(value=t):
            if not isinstance(t, datetime):
                raise SearchEncodingError(f"Time expects datetime, got {type(t).__name__}", path=path)
            return format_rfc3339(t)
        case RangeValue():
            return {name: _encode_float(bound, f"{path}.{name}") for name, bound in value.bounds().items()}
        case _:
            raise SearchEncodingError(f"{type(value).__name__} is not a search value", path=path)


def format_rfc3339(value: datetime) -> str:
    """Format *value* as RFC 3339 with the shortest exact fractional second.

    UTC (and naive) datetimes end in ``Z``; other offsets render as
    ``+HH:MM``. ``datetime.min`` renders as ``0001-01-01T00:00:00Z``.
    """
    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    if value.microsecond:
        text += "." + f"{value.microsecond:06d}".rstrip("0")

    offset = value.utcoffset()
    if offset is None or not offset:
        return text + "Z"
    # whole minutes, truncated toward zero: -05:30:30 -> -05:30
    zone = int(offset.total_seconds() / 60)
    sign = "-" if zone < 0 else "+"
    hours, minutes = divmod(abs(zone), 60)
    return f"{text}{sign}{hours:02d}:{minutes:02d}"


def format_float(value: float) -> str:
    """Format a finite float as JSON number text, the way Go's encoding/json does.

    Magnitudes in ``[1e-6, 1e21)`` are written as plain decimals with the
    shortest round-tripping digits (``3.0`` -> ``3``, ``1e-05`` ->
    ``0.00001``); anything else uses exponent notation without zero
    padding (``1e-07`` -> ``1e-7``, ``1e+21`` stays ``1e+21``).
    """
    magnitude = abs(value)
    if magnitude and not _FLOAT_FIXED_MIN <= magnitude < _FLOAT_FIXED_MAX:
        mantissa, _, exponent = repr(value).partition("e")
        sign, digits = exponent[0], exponent[1:].lstrip("0")
        return f"{mantissa}e{sign}{digits.rjust(1, '0')}"

    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _encode_float(f: Any, path: str) -> float:
    if isinstance(f, bool) or not isinstance(f, (int, float)):
        raise SearchEncodingError(f"expected a number, got {type(f).__name__}", path=path)
    try:
        f = float(f)
    except OverflowError as exc:
        raise SearchEncodingError(f"{f} is outside the float64 range", path=path, cause=exc) from exc
    if not math.isfinite(f):
        raise SearchEncodingError(f"{f!r} is not representable in JSON", path=path)
    return f


def _encode_int(i: Any, path: str) -> int:
    if isinstance(i, bool) or not isinstance(i, int):
        raise SearchEncodingError(f"Int expects int, got {type(i).__name__}", path=path)
    if not _INT64_MIN <= i <= _INT64_MAX:
        raise SearchEncodingError(f"{i} is outside the int64 range", path=path)
    return i


__all__ = [
    "Float64",
    "Int",
    "RangeValue",
    "SearchValue",
    "String",
    "Time",
    "encode_value",
    "format_float",
    "format_rfc3339",
]

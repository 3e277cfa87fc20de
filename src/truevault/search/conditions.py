"""Search – SearchCondition variants and their wire encoding.

Every condition encodes to a tagged object::

    {"type": "<tag>", "value": <encoded value(s)>, "case_sensitive": true}

``case_sensitive`` only appears when it is set. ``Range`` never carries it.
"""
from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from typing import Any, ClassVar

from truevault.kernel.errors import SearchEncodingError
from truevault.search.values import RangeValue, SearchValue, encode_value


@dataclasses.dataclass(frozen=True, slots=True)
class Eq:
    """Field equals *value*."""

    tag: ClassVar[str] = "eq"

    value: SearchValue
    case_sensitive: bool = False


@dataclasses.dataclass(frozen=True, slots=True)
class Not:
    """Field does not equal *value*."""

    tag: ClassVar[str] = "not"

    value: SearchValue
    case_sensitive: bool = False


@dataclasses.dataclass(frozen=True, slots=True)
class In:
    """Field equals one of *values*; caller order is kept on the wire."""

    tag: ClassVar[str] = "in"

    values: tuple[SearchValue, ...] = ()
    case_sensitive: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", _freeze(self.values))


@dataclasses.dataclass(frozen=True, slots=True)
class NotIn:
    """Field equals none of *values*."""

    tag: ClassVar[str] = "not_in"

    values: tuple[SearchValue, ...] = ()
    case_sensitive: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", _freeze(self.values))


@dataclasses.dataclass(frozen=True, slots=True)
class Wildcard:
    """Field matches a glob pattern such as ``String("smi*")``.

    The pattern is passed through untouched.
    """

    tag: ClassVar[str] = "wildcard"

    value: SearchValue
    case_sensitive: bool = False


@dataclasses.dataclass(frozen=True, slots=True)
class Range:
    """Field lies within the bounds of *value*."""

    tag: ClassVar[str] = "range"

    value: RangeValue = dataclasses.field(default_factory=RangeValue)


type SearchCondition = Eq | Not | In | NotIn | Wildcard | Range


def encode_condition(condition: SearchCondition, *, path: str = "condition") -> dict[str, Any]:
    """Return the tagged JSON object for *condition*.

    Raises
    ------
    SearchEncodingError
        When a wrapped value cannot be encoded, or *condition* is not one of
        the six condition types.
    """
    match condition:
        case Eq() | Not() | Wildcard():
            out: dict[str, Any] = {
                "type": condition.tag,
                "value": encode_value(condition.value, path=f"{path}.value"),
            }
        case In() | NotIn():
            out = {
                "type": condition.tag,
                "value": [
                    encode_value(v, path=f"{path}.value[{i}]")
                    for i, v in enumerate(condition.values)
                ],
            }
        case Range():
            if not isinstance(condition.value, RangeValue):
                raise SearchEncodingError(
                    f"Range expects RangeValue, got {type(condition.value).__name__}",
                    path=f"{path}.value",
                )
            return {"type": condition.tag, "value": encode_value(condition.value, path=f"{path}.value")}
        case _:
            raise SearchEncodingError(f"{type(condition).__name__} is not a search condition", path=path)

    if condition.case_sensitive:
        out["case_sensitive"] = True
    return out


def encode_conditions(conditions: Any, *, path: str = "filter") -> dict[str, Any]:
    """Encode a field-name → condition mapping with field names sorted."""
    for name in conditions:
        if not isinstance(name, str):
            raise SearchEncodingError(f"field names must be str, got {type(name).__name__}", path=path)
    encoded: dict[str, Any] = {}
    for name in sorted(conditions):
        encoded[name] = encode_condition(conditions[name], path=f"{path}.{name}")
    return encoded


def _freeze(values: Iterable[SearchValue]) -> tuple[SearchValue, ...]:
    if isinstance(values, tuple):
        return values
    return tuple(values)


__all__ = [
    "Eq",
    "In",
    "Not",
    "NotIn",
    "Range",
    "SearchCondition",
    "Wildcard",
    "encode_condition",
    "encode_conditions",
]

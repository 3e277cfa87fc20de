"""Search – SearchFilter query document."""
from __future__ import annotations

import dataclasses
import json
import math
import uuid
from collections.abc import Mapping
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from truevault.kernel.errors import SearchEncodingError
from truevault.search.conditions import (
    Eq,
    In,
    Not,
    NotIn,
    Range,
    SearchCondition,
    Wildcard,
    encode_condition,
    encode_conditions,
)
from truevault.search.values import Float64, Int, RangeValue, String, Time, encode_value, format_float

_NIL_UUID = uuid.UUID(int=0)


class FilterType(StrEnum):
    """How the per-field conditions of a filter are combined."""

    AND = "and"
    OR = "or"


class SortOrder(StrEnum):
    ASC = "asc"
    DESC = "desc"


@dataclasses.dataclass(frozen=True)
class SearchFilter:
    """Request body for ``POST /v1/vaults/{vault_id}/search``.

    Zero-valued fields are left out of the encoded document entirely::

        SearchFilter(
            filter={"name": Wildcard(String("smi*")), "age": Range(RangeValue(gte=18))},
            filter_type=FilterType.AND,
            per_page=50,
            sort=[{"name": SortOrder.ASC}],
        ).to_json()
    """

    filter: Mapping[str, SearchCondition] = dataclasses.field(default_factory=dict, hash=False)
    filter_type: FilterType | None = None
    page: int = 0
    per_page: int = 0
    sort: tuple[Mapping[str, SortOrder], ...] = dataclasses.field(default=(), hash=False)
    schema_id: uuid.UUID | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "filter", MappingProxyType(dict(self.filter)))
        object.__setattr__(self, "sort", tuple(MappingProxyType(dict(s)) for s in self.sort))

    def to_dict(self) -> dict[str, Any]:
        return encode_filter(self)

    def to_json(self, *, indent: int | None = None) -> str:
        return dumps(self, indent=indent)


def encode_filter(search_filter: SearchFilter) -> dict[str, Any]:
    """Return the JSON-ready request body for *search_filter*.

    Keys come out in a fixed order and only when non-zero; ``filter``
    entries are sorted by field name so repeated encodes are identical.

    Raises
    ------
    SearchEncodingError
        On any value the wire format cannot carry, including a negative
        ``page``/``per_page`` and unknown filter types or sort orders.
    """
    body: dict[str, Any] = {}

    if search_filter.filter:
        body["filter"] = encode_conditions(search_filter.filter)

    if search_filter.filter_type:
        body["filter_type"] = _enum_value(FilterType, search_filter.filter_type, "filter_type")

    for name in ("page", "per_page"):
        number = getattr(search_filter, name)
        if isinstance(number, bool) or not isinstance(number, int):
            raise SearchEncodingError(f"{name} must be an int, got {type(number).__name__}", path=name)
        if number < 0:
            raise SearchEncodingError(f"{name} must not be negative, got {number}", path=name)
        if number:
            body[name] = number

    if search_filter.sort:
        body["sort"] = [
            {
                field: _enum_value(SortOrder, order, f"sort[{i}].{field}")
                for field, order in sorted(entry.items())
            }
            for i, entry in enumerate(search_filter.sort)
        ]

    schema_id = search_filter.schema_id
    if schema_id is not None and schema_id != _NIL_UUID:
        if not isinstance(schema_id, uuid.UUID):
            raise SearchEncodingError(
                f"schema_id must be a UUID, got {type(schema_id).__name__}", path="schema_id"
            )
        body["schema_id"] = str(schema_id)

    return body


def dumps(obj: Any, *, indent: int | None = None) -> str:
    """Serialise a filter, a condition, a condition mapping or a value to JSON text.

    Compact by default. ``indent=2`` gives the two-space layout used by the
    golden fixtures. Numbers are written by :func:`format_float`, so their
    text matches the Go client byte for byte.

    Strings differ from Go's ``encoding/json`` in two ways. Non-ASCII text is
    written as-is rather than ``\\u`` escaped, and ``<``, ``>`` and ``&`` are
    not HTML-escaped to ``\\u003c``, ``\\u003e`` and ``\\u0026``. Both forms
    parse to the same document, but a byte comparison against the Go client
    only holds for strings free of those characters.
    """
    match obj:
        case SearchFilter():
            encoded = encode_filter(obj)
        case Eq() | Not() | In() | NotIn() | Wildcard() | Range():
            encoded = encode_condition(obj)
        case String() | Float64() | Int() | Time() | RangeValue():
            encoded = encode_value(obj)
        case Mapping():
            encoded = encode_conditions(obj)
        case _:
            raise SearchEncodingError(f"cannot encode {type(obj).__name__} as a search document")

    return _render(encoded, indent, 0)


def _render(value: Any, indent: int | None, depth: int) -> str:
    match value:
        case bool() | None:
            return json.dumps(value)
        case str():
            return json.dumps(value, ensure_ascii=False)
        case int():
            return str(value)
        case float():
            if not math.isfinite(value):
                raise SearchEncodingError(f"{value!r} is not representable in JSON")
            return format_float(value)
        case dict():
            colon = ": " if indent is not None else ":"
            parts = [
                f"{json.dumps(key, ensure_ascii=False)}{colon}{_render(item, indent, depth + 1)}"
                for key, item in value.items()
            ]
            return _layout(parts, "{", "}", indent, depth)
        case list():
            return _layout([_render(item, indent, depth + 1) for item in value], "[", "]", indent, depth)
        case _:
            raise SearchEncodingError(f"cannot write {type(value).__name__} as JSON")


def _layout(parts: list[str], opener: str, closer: str, indent: int | None, depth: int) -> str:
    if not parts:
        return opener + closer
    if indent is None:
        return opener + ",".join(parts) + closer
    inner = "\n" + " " * (indent * (depth + 1))
    return opener + inner + ("," + inner).join(parts) + "\n" + " " * (indent * depth) + closer


def _enum_value(enum_cls: type[StrEnum], value: Any, path: str) -> str:
    try:
        return enum_cls(value).value
    except ValueError as exc:
        raise SearchEncodingError(f"{value!r} is not a valid {enum_cls.__name__}", path=path, cause=exc) from exc


__all__ = ["FilterType", "SearchFilter", "SortOrder", "dumps", "encode_filter"]

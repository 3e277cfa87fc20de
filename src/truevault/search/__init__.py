"""Search – typed search filters and their wire encoding."""
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
from truevault.search.filter import FilterType, SearchFilter, SortOrder, dumps, encode_filter
from truevault.search.values import (
    Float64,
    Int,
    RangeValue,
    SearchValue,
    String,
    Time,
    encode_value,
    format_float,
    format_rfc3339,
)

__all__ = [
    "Eq",
    "FilterType",
    "Float64",
    "In",
    "Int",
    "Not",
    "NotIn",
    "Range",
    "RangeValue",
    "SearchCondition",
    "SearchFilter",
    "SearchValue",
    "SortOrder",
    "String",
    "Time",
    "Wildcard",
    "dumps",
    "encode_condition",
    "encode_conditions",
    "encode_filter",
    "encode_value",
    "format_float",
    "format_rfc3339",
]

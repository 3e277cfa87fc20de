"""Unit tests for search conditions and their tagged encoding."""

from __future__ import annotations

from datetime import datetime

import pytest

from truevault.kernel.errors import SearchEncodingError
from truevault.search import (
    Eq,
    Float64,
    In,
    Int,
    Not,
    NotIn,
    Range,
    RangeValue,
    String,
    Time,
    Wildcard,
    dumps,
    encode_condition,
    encode_conditions,
)


class TestScalarConditions:
    @pytest.mark.parametrize(
        ("condition", "tag"),
        [
            (Eq(String("a")), "eq"),
            (Not(String("a")), "not"),
            (Wildcard(String("a*")), "wildcard"),
        ],
    )
    def test_tag_and_value(self, condition, tag) -> None:
        assert encode_condition(condition) == {"type": tag, "value": condition.value.value}

    def test_case_sensitive_emitted_only_when_true(self) -> None:
        assert encode_condition(Eq(String("a"), case_sensitive=True)) == {
            "type": "eq",
            "value": "a",
            "case_sensitive": True,
        }
        assert "case_sensitive" not in encode_condition(Eq(String("a")))

    def test_eq_zero_time(self) -> None:
        assert dumps(Eq(Time(datetime.min))) == '{"type":"eq","value":"0001-01-01T00:00:00Z"}'

    def test_type_tag_survives_empty_string_value(self) -> None:
        assert encode_condition(Not(String(""))) == {"type": "not", "value": ""}


class TestMembershipConditions:
    def test_in_preserves_order(self) -> None:
        assert dumps(In([String("test1"), String("test2")])) == '{"type":"in","value":["test1","test2"]}'

    def test_not_in_with_mixed_values(self) -> None:
        encoded = encode_condition(NotIn([Int(1), Float64(2.5), String("x")], case_sensitive=True))
        assert encoded == {"type": "not_in", "value": [1, 2.5, "x"], "case_sensitive": True}

    @pytest.mark.parametrize("cls, tag", [(In, "in"), (NotIn, "not_in")])
    def test_empty_list_still_has_value_key(self, cls, tag) -> None:
        assert encode_condition(cls([])) == {"type": tag, "value": []}
        assert encode_condition(cls()) == {"type": tag, "value": []}

    def test_values_are_frozen_to_tuple(self) -> None:
        values = [String("a")]
        condition = In(values)
        values.append(String("b"))
        assert condition.values == (String("a"),)

    def test_accepts_generator(self) -> None:
        condition = In(String(s) for s in ("x", "y"))
        assert encode_condition(condition)["value"] == ["x", "y"]

    def test_bad_member_reports_index(self) -> None:
        with pytest.raises(SearchEncodingError) as exc_info:
            encode_condition(In([String("a"), Float64(float("nan"))]))
        assert exc_info.value.path == "condition.value[1]"


class TestRangeCondition:
    def test_range_golden(self) -> None:
        assert dumps(Range(RangeValue(gt=3, lt=5))) == '{"type":"range","value":{"gt":3,"lt":5}}'

    def test_range_never_has_case_sensitive(self) -> None:
        encoded = encode_condition(Range(RangeValue(gte=1)))
        assert set(encoded) == {"type", "value"}

    def test_default_range_encodes_empty_bounds(self) -> None:
        assert encode_condition(Range()) == {"type": "range", "value": {}}

    def test_range_requires_range_value(self) -> None:
        with pytest.raises(SearchEncodingError):
            encode_condition(Range(String("3..5")))  # type: ignore[arg-type]


class TestConditionMapping:
    def test_field_names_come_out_sorted(self) -> None:
        encoded = encode_conditions({"b": Eq(String("2")), "a": Eq(String("1"))})
        assert list(encoded) == ["a", "b"]

    def test_mixed_key_types_raise_encoding_error(self) -> None:
        with pytest.raises(SearchEncodingError) as exc_info:
            encode_conditions({1: Eq(String("a")), "a": Eq(String("b"))})
        assert exc_info.value.path == "filter"

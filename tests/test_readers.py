"""Tests for the constraint reader registry."""

from __future__ import annotations

import pytest
from datetime import datetime, timezone
from decimal import Decimal

from datagen.core import FieldType, ProfileValidationError
from datagen.constraints import (
    AndConstraint,
    AtomicConstraintType,
    ConstraintRecord,
    EqualToConstraint,
    IsGranularToConstraint,
    IsInSetConstraint,
    IsOfTypeConstraint,
    IsStringLongerThanConstraint,
    StringHasLengthConstraint,
    lookup,
    read_constraint,
    type_codes,
)


class TestRegistry:
    """Test type code lookup."""

    def test_every_type_code_is_registered(self):
        assert type_codes() == frozenset(t.value for t in AtomicConstraintType)

    def test_lookup_unknown_code(self):
        assert lookup("between") is None

    def test_read_unknown_code_fails(self, profile_fields):
        with pytest.raises(ProfileValidationError) as exc_info:
            read_constraint({"field": "price", "is": "between", "value": 1}, profile_fields)
        assert "Unrecognised constraint type 'between'" in str(exc_info.value)
        assert exc_info.value.constraint_code == "between"

    def test_unknown_field_fails(self, profile_fields):
        with pytest.raises(ProfileValidationError, match="not declared") as exc_info:
            read_constraint({"field": "volume", "is": "greaterThan", "value": 1}, profile_fields)
        assert exc_info.value.field == "volume"
        assert exc_info.value.constraint_code == "greaterThan"

    def test_malformed_record_fails(self, profile_fields):
        with pytest.raises(ProfileValidationError, match="Malformed constraint record"):
            read_constraint({"is": "greaterThan", "value": 1}, profile_fields)

    def test_accepts_record_model(self, profile_fields, rule):
        record = ConstraintRecord(field="price", type_code="greaterThan", value=5)
        constraint = read_constraint(record, profile_fields, rule)
        assert constraint.value == Decimal(5)
        assert constraint.get_rule() == rule


class TestFixtureRecords:
    """Test records from the YAML fixtures."""

    def test_valid_records(self, valid_constraint_cases, profile_fields):
        for case in valid_constraint_cases:
            constraint = read_constraint(case["record"], profile_fields)
            assert constraint.to_label() == case["label"], case["record"]

    def test_invalid_records(self, invalid_constraint_cases, profile_fields):
        for case in invalid_constraint_cases:
            with pytest.raises(ProfileValidationError) as exc_info:
                read_constraint(case["record"], profile_fields)
            assert case["error"] in str(exc_info.value), (case["record"], str(exc_info.value))

    def test_errors_name_field_and_code(self, invalid_constraint_cases, profile_fields):
        for case in invalid_constraint_cases:
            with pytest.raises(ProfileValidationError) as exc_info:
                read_constraint(case["record"], profile_fields)
            assert exc_info.value.field == case["record"]["field"]
            assert exc_info.value.constraint_code == case["record"]["is"]


class TestLengthReaders:
    """Test string length operand validation."""

    def test_trailing_zeros_are_integral(self, profile_fields):
        constraint = read_constraint({"field": "name", "is": "ofLength", "value": Decimal("5.000")}, profile_fields)
        assert constraint == StringHasLengthConstraint(profile_fields.get_by_name("name"), 5)

    def test_longer_than_upper_bound_is_exclusive(self, profile_fields):
        constraint = read_constraint({"field": "name", "is": "longerThan", "value": 2147483646}, profile_fields)
        assert isinstance(constraint, IsStringLongerThanConstraint)
        with pytest.raises(ProfileValidationError, match="less than 2147483647"):
            read_constraint({"field": "name", "is": "longerThan", "value": 2147483647}, profile_fields)

    def test_shorter_than_upper_bound_is_inclusive(self, profile_fields):
        constraint = read_constraint({"field": "name", "is": "shorterThan", "value": 2147483647}, profile_fields)
        assert constraint.length == 2147483647

    def test_of_length_rejects_above_max_int(self, profile_fields):
        with pytest.raises(ProfileValidationError, match="less than or equal to 2147483647"):
            read_constraint({"field": "name", "is": "ofLength", "value": 2147483648}, profile_fields)


class TestDateReaders:
    """Test date object parsing."""

    def test_offset_is_normalized_to_utc(self, profile_fields):
        constraint = read_constraint(
            {"field": "traded", "is": "after", "value": {"date": "2020-01-01T02:30:00.000+0230"}},
            profile_fields,
        )
        assert constraint.value == datetime(2020, 1, 1, tzinfo=timezone.utc)

    def test_missing_offset_is_utc(self, profile_fields):
        constraint = read_constraint(
            {"field": "traded", "is": "before", "value": {"date": "2020-01-01T00:00:00.000"}},
            profile_fields,
        )
        assert constraint.value.tzinfo == timezone.utc

    def test_year_one_is_accepted(self, profile_fields):
        constraint = read_constraint(
            {"field": "traded", "is": "afterOrAt", "value": {"date": "0001-01-01T00:00:00.000Z"}},
            profile_fields,
        )
        assert constraint.value.year == 1

    def test_year_zero_is_rejected(self, profile_fields):
        with pytest.raises(ProfileValidationError, match="must be between"):
            read_constraint(
                {"field": "traded", "is": "after", "value": {"date": "0000-12-31T00:00:00.000Z"}},
                profile_fields,
            )

    def test_offset_out_of_range_is_rejected(self, profile_fields):
        with pytest.raises(ProfileValidationError, match="invalid UTC offset"):
            read_constraint(
                {"field": "traded", "is": "after", "value": {"date": "2020-01-01T00:00:00.000+19:00"}},
                profile_fields,
            )

    @pytest.mark.parametrize(
        "literal",
        [
            "2020-01-01T00:00:00.000Z\n",
            "2020-01-01T00:00:00.000Zjunk",
            "\u0662\u0660\u0662\u0660-01-01T00:00:00.000Z",
        ],
    )
    def test_whole_literal_must_be_ascii_iso(self, profile_fields, literal):
        with pytest.raises(ProfileValidationError, match="ISO-8601"):
            read_constraint({"field": "traded", "is": "after", "value": {"date": literal}}, profile_fields)

    def test_extra_keys_are_rejected(self, profile_fields):
        with pytest.raises(ProfileValidationError, match="single 'date' key"):
            read_constraint(
                {"field": "traded", "is": "after", "value": {"date": "2020-01-01T00:00:00.000Z", "tz": "UTC"}},
                profile_fields,
            )


class TestLiteralReaders:
    """Test equalTo and inSet operands."""

    def test_equal_to_unwraps_date_object(self, profile_fields):
        constraint = read_constraint(
            {"field": "traded", "is": "equalTo", "value": {"date": "2021-03-04T05:06:07.008Z"}},
            profile_fields,
        )
        assert constraint.value == datetime(2021, 3, 4, 5, 6, 7, 8000, tzinfo=timezone.utc)

    def test_in_set_unwraps_date_objects(self, profile_fields):
        constraint = read_constraint(
            {
                "field": "traded",
                "is": "inSet",
                "values": [{"date": "2021-01-01T00:00:00.000Z"}, {"date": "2021-01-01T01:00:00.000+01:00"}],
            },
            profile_fields,
        )
        # Both literals name the same instant
        assert constraint.values == (datetime(2021, 1, 1, tzinfo=timezone.utc),)

    def test_numbers_become_decimals(self, profile_fields):
        constraint = read_constraint({"field": "price", "is": "inSet", "values": [1, 2.5]}, profile_fields)
        assert constraint.values == (Decimal(1), Decimal("2.5"))

    def test_booleans_stay_booleans(self, profile_fields):
        constraint = read_constraint({"field": "active", "is": "equalTo", "value": True}, profile_fields)
        assert constraint.value is True

    def test_true_and_one_are_distinct_members(self, profile_fields):
        constraint = read_constraint({"field": "price", "is": "inSet", "values": [True, 1]}, profile_fields)
        assert isinstance(constraint, IsInSetConstraint)
        assert len(constraint.values) == 2

    def test_scalar_and_set_share_representation(self, profile_fields):
        scalar = read_constraint({"field": "price", "is": "equalTo", "value": 3}, profile_fields)
        members = read_constraint({"field": "price", "is": "inSet", "values": [3]}, profile_fields)
        assert isinstance(scalar, EqualToConstraint)
        assert scalar.value == members.values[0]


class TestTypeReader:
    """Test ofType expansion and legacy names."""

    def test_integer_expands_to_decimal_granular_to_one(self, profile_fields, price):
        constraint = read_constraint({"field": "price", "is": "ofType", "value": "integer"}, profile_fields)
        assert constraint == AndConstraint((
            IsOfTypeConstraint(price, FieldType.NUMERIC),
            IsGranularToConstraint(price, Decimal(1)),
        ))

    @pytest.mark.parametrize("type_name,expected", [
        ("decimal", FieldType.NUMERIC),
        ("string", FieldType.STRING),
        ("datetime", FieldType.DATETIME),
        ("boolean", FieldType.BOOLEAN),
    ])
    def test_type_names(self, profile_fields, type_name, expected):
        constraint = read_constraint({"field": "price", "is": "ofType", "value": type_name}, profile_fields)
        assert constraint.type is expected

    @pytest.mark.parametrize("legacy,recommendation", [
        ("numeric", "decimal"),
        ("temporal", "datetime"),
    ])
    def test_legacy_names_recommend_replacement(self, profile_fields, legacy, recommendation):
        with pytest.raises(ProfileValidationError, match=recommendation):
            read_constraint({"field": "price", "is": "ofType", "value": legacy}, profile_fields)

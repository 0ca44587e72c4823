"""Tests for typed restrictions."""

from __future__ import annotations

import pytest
from datetime import datetime, timezone
from decimal import Decimal

from datagen.restrictions import (
    BooleanRestrictions,
    DateTimeGranularity,
    DateTimeRestrictions,
    Impossible,
    Limit,
    Nullness,
    NumericGranularity,
    NumericRestrictions,
    StandardFormat,
    StringRestrictions,
    Timescale,
    default_datetime_restrictions,
    default_numeric_restrictions,
    default_string_restrictions,
    is_valid_cusip,
    is_valid_isin,
    is_valid_sedol,
)


def numeric(lower, upper, scale=20, lower_inclusive=True, upper_inclusive=True) -> NumericRestrictions:
    return NumericRestrictions(
        min=Limit(Decimal(lower), lower_inclusive),
        max=Limit(Decimal(upper), upper_inclusive),
        granularity=NumericGranularity(scale),
    )


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


class TestNumericRestrictions:
    """Test numeric range intersection."""

    def test_intersection_tightens_both_bounds(self):
        merged = numeric(0, 100).intersect(numeric(10, 50))
        assert merged == numeric(10, 50)

    def test_tie_prefers_exclusive(self):
        merged = numeric(0, 10).intersect(numeric(0, 10, lower_inclusive=False, upper_inclusive=False))
        assert merged.min == Limit(Decimal(0), False)
        assert merged.max == Limit(Decimal(10), False)

    def test_intersection_is_commutative(self):
        a, b = numeric(0, 10, scale=2), numeric(5, 20, scale=1)
        assert a.intersect(b) == b.intersect(a)

    def test_crossed_bounds_are_impossible(self):
        assert isinstance(numeric(0, 5).intersect(numeric(6, 10)), Impossible)

    def test_granularity_takes_coarser_step(self):
        merged = numeric(0, 10, scale=2).intersect(numeric(0, 10, scale=0))
        assert merged.granularity == NumericGranularity(0)

    def test_empty_grid_is_impossible(self):
        # No integer lies strictly between 1 and 2
        restriction = numeric(1, 2, scale=0, lower_inclusive=False, upper_inclusive=False)
        assert isinstance(restriction.validated(), Impossible)

    def test_grid_value_inside_range(self):
        restriction = numeric("0.5", "1.5", scale=0)
        assert restriction.lowest_value() == Decimal(1)
        assert restriction.highest_value() == Decimal(1)
        assert restriction.validated() is restriction

    def test_contains(self):
        restriction = numeric(0, 10, scale=1, lower_inclusive=False)
        assert restriction.contains(5)
        assert restriction.contains(Decimal("9.9"))
        assert restriction.contains(10)
        assert not restriction.contains(0)
        assert not restriction.contains(Decimal("9.95"))
        assert not restriction.contains(True)
        assert not restriction.contains("5")

    def test_non_finite_floats_are_not_contained(self):
        restriction = numeric(-10, 10)
        assert not restriction.contains(float("nan"))
        assert not restriction.contains(float("inf"))
        assert not restriction.contains(float("-inf"))

    def test_different_kinds_are_impossible(self):
        assert isinstance(numeric(0, 1).intersect(default_string_restrictions()), Impossible)

    def test_granularity_from_step(self):
        assert NumericGranularity.from_step(Decimal("0.01")) == NumericGranularity(2)
        assert NumericGranularity.from_step(Decimal("1")) == NumericGranularity(0)


class TestDateTimeRestrictions:
    """Test datetime range intersection."""

    def test_intersection_tightens_bounds(self):
        base = default_datetime_restrictions()
        after = base.with_min(Limit(utc(2020, 1, 1), False))
        before = base.with_max(Limit(utc(2021, 1, 1), True))
        merged = after.intersect(before)
        assert merged.min == Limit(utc(2020, 1, 1), False)
        assert merged.max == Limit(utc(2021, 1, 1), True)

    def test_granularity_takes_coarser_unit(self):
        assert DateTimeGranularity(Timescale.HOURS).merge(DateTimeGranularity(Timescale.DAYS)) == DateTimeGranularity(
            Timescale.DAYS
        )

    def test_no_whole_day_in_range_is_impossible(self):
        restriction = DateTimeRestrictions(
            min=Limit(utc(2020, 1, 1, 1), True),
            max=Limit(utc(2020, 1, 1, 23), True),
            granularity=DateTimeGranularity(Timescale.DAYS),
        )
        assert isinstance(restriction.validated(), Impossible)

    def test_month_rounding(self):
        granularity = DateTimeGranularity(Timescale.MONTHS)
        assert granularity.round_up(utc(2020, 12, 15)) == utc(2021, 1, 1)
        assert granularity.round_down(utc(2020, 12, 15)) == utc(2020, 12, 1)

    def test_after_calendar_end_is_impossible(self):
        base = default_datetime_restrictions()
        assert isinstance(base.with_min(Limit(base.max.value, False)), Impossible)

    def test_contains_compares_in_utc(self):
        restriction = default_datetime_restrictions().with_min(Limit(utc(2020, 1, 1), True))
        assert restriction.contains(datetime(2020, 1, 1))
        assert not restriction.contains(utc(2019, 12, 31, 23, 59, 59))
        assert not restriction.contains("2020-01-01")


class TestStringRestrictions:
    """Test string restriction intersection."""

    def test_lengths_tighten(self):
        merged = StringRestrictions(max_length=10, min_length=2).intersect(StringRestrictions(max_length=5))
        assert (merged.min_length, merged.max_length) == (2, 5)

    def test_crossed_lengths_are_impossible(self):
        result = StringRestrictions(max_length=3).intersect(StringRestrictions(max_length=10, min_length=4))
        assert isinstance(result, Impossible)

    def test_patterns_accumulate(self):
        merged = StringRestrictions(max_length=10, matching=frozenset({"[a-z]+"})).intersect(
            StringRestrictions(max_length=10, containing=frozenset({"q"}))
        )
        assert merged.contains("aqa")
        assert not merged.contains("aaa")
        assert not merged.contains("AQA")

    def test_two_standards_are_impossible(self):
        result = StringRestrictions(max_length=20, standard=StandardFormat.ISIN).intersect(
            StringRestrictions(max_length=20, standard=StandardFormat.SEDOL)
        )
        assert isinstance(result, Impossible)

    def test_every_length_excluded_is_impossible(self):
        result = StringRestrictions(max_length=1, excluded_lengths=frozenset({0, 1})).validated()
        assert isinstance(result, Impossible)

    def test_excluded_length(self):
        restriction = StringRestrictions(max_length=5, excluded_lengths=frozenset({3}))
        assert restriction.contains("ab")
        assert not restriction.contains("abc")

    def test_standard(self):
        restriction = StringRestrictions(max_length=20, standard=StandardFormat.ISIN)
        assert restriction.contains("US0378331005")
        assert not restriction.contains("US0378331006")

    def test_default_uses_settings(self, monkeypatch):
        monkeypatch.setenv("DATAGEN_MAX_STRING_LENGTH", "12")
        assert default_string_restrictions().max_length == 12


class TestBooleanRestrictions:
    """Test boolean restriction intersection."""

    def test_intersection(self):
        merged = BooleanRestrictions().intersect(BooleanRestrictions(frozenset({True})))
        assert merged == BooleanRestrictions(frozenset({True}))

    def test_disjoint_is_impossible(self):
        result = BooleanRestrictions(frozenset({True})).intersect(BooleanRestrictions(frozenset({False})))
        assert isinstance(result, Impossible)

    def test_one_is_not_true(self):
        assert not BooleanRestrictions().contains(1)


class TestNullness:
    """Test null policy merge."""

    def test_contradiction(self):
        assert isinstance(Nullness.MUST_BE_NULL.merge(Nullness.MUST_NOT_BE_NULL), Impossible)

    @pytest.mark.parametrize("policy", list(Nullness))
    def test_unconstrained_is_identity(self, policy):
        assert Nullness.UNCONSTRAINED.merge(policy) is policy
        assert policy.merge(Nullness.UNCONSTRAINED) is policy


class TestStandards:
    """Test check-digit validation of standard identifiers."""

    def test_isin(self):
        assert is_valid_isin("US0378331005")
        assert is_valid_isin("GB0002634946")
        assert not is_valid_isin("US0378331004")
        assert not is_valid_isin("us0378331005")

    def test_sedol(self):
        assert is_valid_sedol("0263494")
        assert not is_valid_sedol("0263495")
        assert not is_valid_sedol("A263494")

    def test_cusip(self):
        assert is_valid_cusip("037833100")
        assert not is_valid_cusip("037833101")


class TestDefaults:
    """Test configured default restrictions."""

    def test_numeric_defaults(self):
        restriction = default_numeric_restrictions()
        assert restriction.min == Limit(Decimal("-1e20"), True)
        assert restriction.max == Limit(Decimal("1e20"), True)

    def test_numeric_defaults_follow_environment(self, monkeypatch):
        monkeypatch.setenv("DATAGEN_NUMERIC_MAX", "1000")
        assert default_numeric_restrictions().max.value == Decimal(1000)

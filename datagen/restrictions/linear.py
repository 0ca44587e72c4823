"""Linear (ordered) restrictions for numeric and datetime fields.

A linear restriction is a lower and an upper ``Limit`` plus a granularity,
the step between adjacent legal values. Emptiness is judged on the
granularity grid: the range is contradictory when the first on-grid value
above the lower limit lies past the last on-grid value below the upper one.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from decimal import ROUND_CEILING, ROUND_FLOOR, Context, Decimal
from enum import Enum
from typing import Any, Generic, Protocol, TypeVar

from datagen.core.config import Settings, get_settings
from .impossible import Impossible

T = TypeVar("T")

# Wide enough to quantize any in-bounds value at any configured scale
_DECIMAL_CONTEXT = Context(prec=100)


# =============================================================================
# Limits
# =============================================================================

@dataclass(frozen=True)
class Limit(Generic[T]):
    """One end of a range."""

    value: T
    inclusive: bool

    def __str__(self) -> str:
        return f"{self.value}{'' if self.inclusive else ' (exclusive)'}"


def _tighter_lower(a: Limit, b: Limit) -> Limit:
    if a.value > b.value:
        return a
    if b.value > a.value:
        return b
    return a if not a.inclusive else b


def _tighter_upper(a: Limit, b: Limit) -> Limit:
    if a.value < b.value:
        return a
    if b.value < a.value:
        return b
    return a if not a.inclusive else b


# =============================================================================
# Granularity
# =============================================================================

class Granularity(Protocol[T]):
    """Step between adjacent legal values of a linear restriction."""

    def merge(self, other: Any) -> Granularity[T]: ...

    def is_correct_scale(self, value: T) -> bool: ...

    def round_up(self, value: T) -> T | None: ...

    def round_down(self, value: T) -> T | None: ...

    def next(self, value: T) -> T | None: ...

    def previous(self, value: T) -> T | None: ...


@dataclass(frozen=True)
class NumericGranularity:
    """Granularity expressed as a number of decimal places."""

    scale: int

    @classmethod
    def from_step(cls, step: Decimal) -> NumericGranularity:
        return cls(max(0, -step.normalize().as_tuple().exponent))

    @property
    def step(self) -> Decimal:
        return Decimal(1).scaleb(-self.scale)

    def merge(self, other: NumericGranularity) -> NumericGranularity:
        # A value granular to both steps is granular to the coarser one
        return NumericGranularity(min(self.scale, other.scale))

    def is_correct_scale(self, value: Decimal) -> bool:
        return value == value.quantize(self.step, rounding=ROUND_FLOOR, context=_DECIMAL_CONTEXT)

    def round_up(self, value: Decimal) -> Decimal:
        return value.quantize(self.step, rounding=ROUND_CEILING, context=_DECIMAL_CONTEXT)

    def round_down(self, value: Decimal) -> Decimal:
        return value.quantize(self.step, rounding=ROUND_FLOOR, context=_DECIMAL_CONTEXT)

    def next(self, value: Decimal) -> Decimal:
        return _DECIMAL_CONTEXT.add(value, self.step)

    def previous(self, value: Decimal) -> Decimal:
        return _DECIMAL_CONTEXT.subtract(value, self.step)


class Timescale(str, Enum):
    """Datetime units, ordered from finest to coarsest."""

    MILLIS = "millis"
    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"
    MONTHS = "months"
    YEARS = "years"

    @property
    def rank(self) -> int:
        return _TIMESCALE_ORDER.index(self)


_TIMESCALE_ORDER = list(Timescale)

_FIXED_STEPS = {
    Timescale.MILLIS: timedelta(milliseconds=1),
    Timescale.SECONDS: timedelta(seconds=1),
    Timescale.MINUTES: timedelta(minutes=1),
    Timescale.HOURS: timedelta(hours=1),
    Timescale.DAYS: timedelta(days=1),
}


@dataclass(frozen=True)
class DateTimeGranularity:
    """Granularity expressed as a datetime unit."""

    timescale: Timescale

    def merge(self, other: DateTimeGranularity) -> DateTimeGranularity:
        if other.timescale.rank > self.timescale.rank:
            return other
        return self

    def truncate(self, value: datetime) -> datetime:
        ts = self.timescale
        if ts is Timescale.MILLIS:
            return value.replace(microsecond=value.microsecond // 1000 * 1000)
        value = value.replace(microsecond=0)
        if ts is Timescale.SECONDS:
            return value
        value = value.replace(second=0)
        if ts is Timescale.MINUTES:
            return value
        value = value.replace(minute=0)
        if ts is Timescale.HOURS:
            return value
        value = value.replace(hour=0)
        if ts is Timescale.DAYS:
            return value
        value = value.replace(day=1)
        if ts is Timescale.MONTHS:
            return value
        return value.replace(month=1)

    def offset(self, value: datetime, steps: int) -> datetime | None:
        """Move an on-grid value by whole steps; None when leaving the calendar."""
        try:
            if self.timescale in _FIXED_STEPS:
                return value + _FIXED_STEPS[self.timescale] * steps
            if self.timescale is Timescale.MONTHS:
                year, month = divmod(value.year * 12 + value.month - 1 + steps, 12)
                return value.replace(year=year, month=month + 1)
            return value.replace(year=value.year + steps)
        except (OverflowError, ValueError):
            return None

    def is_correct_scale(self, value: datetime) -> bool:
        return self.truncate(value) == value

    def round_up(self, value: datetime) -> datetime | None:
        truncated = self.truncate(value)
        if truncated < value:
            return self.offset(truncated, 1)
        return truncated

    def round_down(self, value: datetime) -> datetime:
        return self.truncate(value)

    def next(self, value: datetime) -> datetime | None:
        return self.offset(value, 1)

    def previous(self, value: datetime) -> datetime | None:
        return self.offset(value, -1)


# =============================================================================
# Linear Restrictions
# =============================================================================

@dataclass(frozen=True)
class LinearRestrictions(Generic[T]):
    """A bounded, stepped range of ordered values."""

    min: Limit[T]
    max: Limit[T]
    granularity: Granularity[T]

    def intersect(self, other: Any) -> LinearRestrictions[T] | Impossible:
        if type(other) is not type(self):
            return Impossible(
                f"cannot combine {type(self).__name__} with {type(other).__name__}"
            )
        merged = replace(
            self,
            min=_tighter_lower(self.min, other.min),
            max=_tighter_upper(self.max, other.max),
            granularity=self.granularity.merge(other.granularity),
        )
        return merged.validated()

    def with_min(self, limit: Limit[T]) -> LinearRestrictions[T] | Impossible:
        return replace(self, min=limit).validated()

    def with_max(self, limit: Limit[T]) -> LinearRestrictions[T] | Impossible:
        return replace(self, max=limit).validated()

    def with_granularity(self, granularity: Granularity[T]) -> LinearRestrictions[T] | Impossible:
        return replace(self, granularity=granularity).validated()

    def validated(self) -> LinearRestrictions[T] | Impossible:
        if self.is_contradictory():
            return Impossible(f"no value lies between {self.min} and {self.max}")
        return self

    def lowest_value(self) -> T | None:
        """First on-grid value permitted by the lower limit."""
        value = self.granularity.round_up(self.min.value)
        if value is not None and value == self.min.value and not self.min.inclusive:
            value = self.granularity.next(value)
        return value

    def highest_value(self) -> T | None:
        """Last on-grid value permitted by the upper limit."""
        value = self.granularity.round_down(self.max.value)
        if value is not None and value == self.max.value and not self.max.inclusive:
            value = self.granularity.previous(value)
        return value

    def is_contradictory(self) -> bool:
        lowest = self.lowest_value()
        highest = self.highest_value()
        return lowest is None or highest is None or lowest > highest

    def contains(self, value: Any) -> bool:
        value = self._coerce(value)
        if value is None:
            return False
        if value < self.min.value or (value == self.min.value and not self.min.inclusive):
            return False
        if value > self.max.value or (value == self.max.value and not self.max.inclusive):
            return False
        return self.granularity.is_correct_scale(value)

    def _coerce(self, value: Any) -> T | None:
        raise NotImplementedError


class NumericRestrictions(LinearRestrictions[Decimal]):
    """Numeric range with decimal-place granularity."""

    def _coerce(self, value: Any) -> Decimal | None:
        if isinstance(value, bool):
            return None
        if isinstance(value, Decimal):
            return value if value.is_finite() else None
        if isinstance(value, int):
            return Decimal(value)
        if isinstance(value, float):
            return Decimal(str(value)) if math.isfinite(value) else None
        return None


class DateTimeRestrictions(LinearRestrictions[datetime]):
    """Datetime range with unit granularity; values are compared in UTC."""

    def _coerce(self, value: Any) -> datetime | None:
        if not isinstance(value, datetime):
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


def default_numeric_restrictions(settings: Settings | None = None) -> NumericRestrictions:
    settings = settings or get_settings()
    return NumericRestrictions(
        min=Limit(settings.numeric_min, True),
        max=Limit(settings.numeric_max, True),
        granularity=NumericGranularity(settings.default_numeric_scale),
    )


def default_datetime_restrictions(settings: Settings | None = None) -> DateTimeRestrictions:
    settings = settings or get_settings()
    return DateTimeRestrictions(
        min=Limit(settings.datetime_min, True),
        max=Limit(settings.datetime_max, True),
        granularity=DateTimeGranularity(Timescale.MILLIS),
    )

"""
Common type definitions shared across the transformation engine.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from ..errors import NaiveDatetimeError


class TimeUnit(Enum):
    """Bucket granularity, ordered from finest to coarsest."""
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @property
    def level(self) -> int:
        """Position in the finest-to-coarsest ordering."""
        return _TIME_UNIT_LEVELS[self]

    def is_smaller_than(self, other: "TimeUnit") -> bool:
        """True if this unit is finer than other."""
        return self.level < other.level

    def is_smaller_than_or_equal(self, other: "TimeUnit") -> bool:
        """True if this unit is finer than or equal to other."""
        return self.level <= other.level

    def is_bigger_than(self, other: "TimeUnit") -> bool:
        """True if this unit is coarser than other."""
        return self.level > other.level


_TIME_UNIT_LEVELS = {unit: level for level, unit in enumerate(TimeUnit)}


class AggregationType(Enum):
    """How contributions landing in the same bucket collapse into one value."""
    SUM = "sum"
    DAILY_AVERAGE = "daily_average"
    DURATION_SUM = "duration_sum"
    MIN_MAX = "min_max"


@dataclass(frozen=True)
class Mass:
    """Mass value stored in grams."""

    in_grams: float
    """Mass in grams"""

    @classmethod
    def grams(cls, value: float) -> "Mass":
        return cls(float(value))

    @classmethod
    def kilograms(cls, value: float) -> "Mass":
        return cls(value * 1000.0)

    @classmethod
    def pounds(cls, value: float) -> "Mass":
        return cls(value * 453.59237)

    def to_grams(self) -> float:
        return self.in_grams

    def to_kilograms(self) -> float:
        return self.in_grams / 1000.0

    def to_pounds(self) -> float:
        return self.in_grams / 453.59237

    def to_ounces(self) -> float:
        return self.in_grams / 28.3495231

    def __str__(self) -> str:
        return f"{self.to_kilograms()} kg"


class MassUnit(Enum):
    """Unit a mass is charted in."""
    KILOGRAM = "kg"
    POUND = "lb"
    GRAM = "g"
    OUNCE = "oz"

    def convert(self, mass: Mass) -> float:
        """Express mass in this unit."""
        if self == MassUnit.POUND:
            return mass.to_pounds()
        if self == MassUnit.GRAM:
            return mass.to_grams()
        if self == MassUnit.OUNCE:
            return mass.to_ounces()
        return mass.to_kilograms()


# Validation helpers
def require_aware(instant: datetime, field_name: str = "instant") -> datetime:
    """Return instant unchanged, or raise if it carries no UTC offset."""
    if instant.tzinfo is None or instant.utcoffset() is None:
        raise NaiveDatetimeError(
            f"{field_name} must be timezone-aware, got naive {instant.isoformat()}"
        )
    return instant

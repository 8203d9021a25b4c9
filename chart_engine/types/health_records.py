"""
Type definitions for health record data structures.

Records are immutable. Interval records carry a start/end pair, point records
a single instant. All instants must be timezone-aware.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Union

from ..errors import InvalidIntervalError
from .common import Mass, require_aware


class RecordKind(Enum):
    """Kind of health record; the value is the name used as dispatch key."""
    STEP_COUNT = "StepCount"
    EXERCISE = "Exercise"
    DIET = "Diet"
    HEART_RATE = "HeartRate"
    SLEEP_SESSION = "SleepSession"
    BLOOD_PRESSURE = "BloodPressure"
    BLOOD_GLUCOSE = "BloodGlucose"
    WEIGHT = "Weight"
    BODY_FAT = "BodyFat"
    SKELETAL_MUSCLE_MASS = "SkeletalMuscleMass"


class SleepStageType(Enum):
    """Sleep stage classification."""
    AWAKE = "AWAKE"
    REM = "REM"
    LIGHT = "LIGHT"
    DEEP = "DEEP"
    UNKNOWN = "UNKNOWN"


def _check_interval(start_time: datetime, end_time: datetime) -> None:
    require_aware(start_time, "start_time")
    require_aware(end_time, "end_time")
    if end_time < start_time:
        raise InvalidIntervalError(start_time, end_time)


# Interval records
@dataclass(frozen=True)
class StepCount:
    """Step count over a time period."""

    start_time: datetime
    end_time: datetime
    step_count: int

    def __post_init__(self):
        _check_interval(self.start_time, self.end_time)


@dataclass(frozen=True)
class Exercise:
    """Exercise session with calories burned."""

    start_time: datetime
    end_time: datetime
    calories_burned: float

    def __post_init__(self):
        _check_interval(self.start_time, self.end_time)


@dataclass(frozen=True)
class Diet:
    """Meal or intake period with nutrient totals."""

    start_time: datetime
    end_time: datetime
    calories: float
    protein: Mass
    carbohydrate: Mass
    fat: Mass
    meal_type: int = 0

    def __post_init__(self):
        _check_interval(self.start_time, self.end_time)


@dataclass(frozen=True)
class SleepStage:
    """Individual classified period within a sleep session."""

    start_time: datetime
    end_time: datetime
    stage: SleepStageType

    def __post_init__(self):
        _check_interval(self.start_time, self.end_time)

    def get_duration_minutes(self) -> float:
        """Get duration of this sleep stage in minutes."""
        return (self.end_time - self.start_time).total_seconds() / 60


@dataclass(frozen=True)
class SleepSession:
    """Sleep session with optional stage breakdown."""

    start_time: datetime
    end_time: datetime
    stages: tuple[SleepStage, ...] = ()

    def __post_init__(self):
        _check_interval(self.start_time, self.end_time)
        object.__setattr__(self, "stages", tuple(self.stages))

    def get_duration_hours(self) -> float:
        """Time in bed in hours."""
        return (self.end_time - self.start_time).total_seconds() / 3600


@dataclass(frozen=True)
class HeartRateSample:
    """Individual heart rate measurement sample."""

    time: datetime
    beats_per_minute: int

    def __post_init__(self):
        require_aware(self.time, "time")


@dataclass(frozen=True)
class HeartRate:
    """Heart rate series recorded over a time period."""

    start_time: datetime
    end_time: datetime
    samples: tuple[HeartRateSample, ...] = field(default=())

    def __post_init__(self):
        _check_interval(self.start_time, self.end_time)
        object.__setattr__(self, "samples", tuple(self.samples))


# Point-in-time records
@dataclass(frozen=True)
class BloodPressure:
    """Blood pressure reading in mmHg."""

    time: datetime
    systolic: float
    diastolic: float

    def __post_init__(self):
        require_aware(self.time, "time")


@dataclass(frozen=True)
class BloodGlucose:
    """Blood glucose reading in mg/dL."""

    time: datetime
    level: float

    def __post_init__(self):
        require_aware(self.time, "time")


@dataclass(frozen=True)
class Weight:
    """Body weight measurement."""

    time: datetime
    weight: Mass

    def __post_init__(self):
        require_aware(self.time, "time")


@dataclass(frozen=True)
class BodyFat:
    """Body fat percentage measurement."""

    time: datetime
    body_fat_percentage: float

    def __post_init__(self):
        require_aware(self.time, "time")


@dataclass(frozen=True)
class SkeletalMuscleMass:
    """Skeletal muscle mass measurement in kilograms."""

    time: datetime
    skeletal_muscle_mass: float

    def __post_init__(self):
        require_aware(self.time, "time")


HealthRecord = Union[
    StepCount,
    Exercise,
    Diet,
    HeartRate,
    SleepSession,
    BloodPressure,
    BloodGlucose,
    Weight,
    BodyFat,
    SkeletalMuscleMass,
]

RECORD_KINDS: dict[type, RecordKind] = {
    StepCount: RecordKind.STEP_COUNT,
    Exercise: RecordKind.EXERCISE,
    Diet: RecordKind.DIET,
    HeartRate: RecordKind.HEART_RATE,
    SleepSession: RecordKind.SLEEP_SESSION,
    BloodPressure: RecordKind.BLOOD_PRESSURE,
    BloodGlucose: RecordKind.BLOOD_GLUCOSE,
    Weight: RecordKind.WEIGHT,
    BodyFat: RecordKind.BODY_FAT,
    SkeletalMuscleMass: RecordKind.SKELETAL_MUSCLE_MASS,
}


def record_kind_of(record: object) -> RecordKind | None:
    """Return the kind of record, or None for objects outside the record union."""
    return RECORD_KINDS.get(type(record))

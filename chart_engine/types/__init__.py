"""
Type definitions for the chart engine.

Immutable health record variants, the time unit and aggregation enums, and
the Mass value type with its charting units.
"""

from .common import AggregationType, Mass, MassUnit, TimeUnit, require_aware
from .health_records import (
    RECORD_KINDS,
    BloodGlucose,
    BloodPressure,
    BodyFat,
    Diet,
    Exercise,
    HealthRecord,
    HeartRate,
    HeartRateSample,
    RecordKind,
    SkeletalMuscleMass,
    SleepSession,
    SleepStage,
    SleepStageType,
    StepCount,
    Weight,
    record_kind_of,
)

__all__ = [
    # Common types
    "AggregationType",
    "Mass",
    "MassUnit",
    "TimeUnit",
    "require_aware",

    # Health record types
    "HealthRecord",
    "StepCount",
    "Exercise",
    "Diet",
    "HeartRate",
    "HeartRateSample",
    "SleepSession",
    "SleepStage",
    "BloodPressure",
    "BloodGlucose",
    "Weight",
    "BodyFat",
    "SkeletalMuscleMass",

    # Enums
    "RecordKind",
    "SleepStageType",

    # Lookup
    "RECORD_KINDS",
    "record_kind_of",
]

"""
Pytest fixtures for chart engine tests.

Provides common records and raw payloads for unit tests.
"""

from datetime import UTC, datetime, timedelta

import pytest

from chart_engine.types import (
    BloodGlucose,
    BloodPressure,
    BodyFat,
    Diet,
    Exercise,
    HeartRate,
    HeartRateSample,
    Mass,
    SkeletalMuscleMass,
    SleepSession,
    SleepStage,
    SleepStageType,
    StepCount,
    Weight,
)


def utc(year, month, day, hour=0, minute=0, second=0):
    return datetime(year, month, day, hour, minute, second, tzinfo=UTC)


def epoch_millis(instant: datetime) -> int:
    return int(instant.timestamp() * 1000)


@pytest.fixture
def base_time():
    """Thursday 2025-05-08 08:00 UTC"""
    return utc(2025, 5, 8, 8)


@pytest.fixture
def step_record(base_time):
    """900 steps over 90 minutes"""
    return StepCount(
        start_time=base_time,
        end_time=base_time + timedelta(minutes=90),
        step_count=900,
    )


@pytest.fixture
def mixed_records(base_time):
    """One record of every kind, all on 2025-05-08"""
    return [
        StepCount(base_time, base_time + timedelta(minutes=30), 3000),
        Exercise(base_time + timedelta(hours=1), base_time + timedelta(hours=2), 450.0),
        Diet(
            base_time + timedelta(hours=4),
            base_time + timedelta(hours=4, minutes=30),
            calories=650.0,
            protein=Mass.grams(35.0),
            carbohydrate=Mass.grams(80.0),
            fat=Mass.grams(20.0),
        ),
        HeartRate(
            base_time,
            base_time + timedelta(minutes=2),
            samples=(
                HeartRateSample(base_time, 62),
                HeartRateSample(base_time + timedelta(minutes=1), 75),
            ),
        ),
        SleepSession(base_time - timedelta(hours=8), base_time - timedelta(hours=1)),
        BloodPressure(base_time + timedelta(hours=2), systolic=121.0, diastolic=79.0),
        BloodGlucose(base_time + timedelta(hours=3), level=98.0),
        Weight(base_time, weight=Mass.kilograms(70.5)),
        BodyFat(base_time, body_fat_percentage=18.2),
        SkeletalMuscleMass(base_time, skeletal_muscle_mass=31.4),
    ]


@pytest.fixture
def sleep_stages():
    """Night with alternating stages and no adjacent duplicates"""
    return [
        SleepStage(utc(2025, 5, 7, 22, 29), utc(2025, 5, 7, 22, 45), SleepStageType.LIGHT),
        SleepStage(utc(2025, 5, 7, 22, 45), utc(2025, 5, 7, 23, 30), SleepStageType.DEEP),
        SleepStage(utc(2025, 5, 7, 23, 30), utc(2025, 5, 8, 0, 10), SleepStageType.LIGHT),
        SleepStage(utc(2025, 5, 8, 0, 10), utc(2025, 5, 8, 0, 20), SleepStageType.AWAKE),
        SleepStage(utc(2025, 5, 8, 0, 20), utc(2025, 5, 8, 1, 0), SleepStageType.REM),
    ]


@pytest.fixture
def raw_records(base_time):
    """Health Connect style export covering several record types"""
    start = epoch_millis(base_time)
    return [
        {
            "recordType": "StepsRecord",
            "count": 900,
            "startTime": {"epochMillis": start},
            "endTime": {"epochMillis": start + 90 * 60_000},
        },
        {
            "recordType": "BloodPressureRecord",
            "systolic": {"inMillimetersOfMercury": 120.0},
            "diastolic": {"inMillimetersOfMercury": 80.0},
            "time": {"epochMillis": start},
        },
        {
            "recordType": "BloodGlucoseRecord",
            "level": {"inMilligramsPerDeciliter": 110.5},
            "time": {"epochMillis": start + 3_600_000},
        },
        {
            "recordType": "SleepSessionRecord",
            "startTime": {"epochMillis": start - 8 * 3_600_000},
            "endTime": {"epochMillis": start},
            "stages": [
                {
                    "stage": "LIGHT",
                    "startTime": {"epochMillis": start - 8 * 3_600_000},
                    "endTime": {"epochMillis": start - 6 * 3_600_000},
                },
                {
                    "stage": 5,
                    "startTime": {"epochMillis": start - 6 * 3_600_000},
                    "endTime": {"epochMillis": start},
                },
            ],
        },
    ]

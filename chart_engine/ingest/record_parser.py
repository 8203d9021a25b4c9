"""
Record parser for Health Connect style dictionaries.

Converts raw exports such as

    {"recordType": "StepsRecord", "count": 900,
     "startTime": {"epochMillis": 1715126400000},
     "endTime": {"epochMillis": 1715131800000}}

into health record objects. Entries that cannot be parsed are skipped and
counted; a bad entry never aborts the batch.
"""

import json
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import structlog

from ..errors import InvalidIntervalError
from ..types.common import Mass
from ..types.health_records import (
    BloodGlucose,
    BloodPressure,
    BodyFat,
    Diet,
    Exercise,
    HealthRecord,
    HeartRate,
    HeartRateSample,
    SkeletalMuscleMass,
    SleepSession,
    SleepStage,
    SleepStageType,
    StepCount,
    Weight,
)

logger = structlog.get_logger(__name__)

# Health Connect SleepSessionRecord stage constants
SLEEP_STAGE_CODES = {
    0: SleepStageType.UNKNOWN,
    1: SleepStageType.AWAKE,
    2: SleepStageType.UNKNOWN,  # sleeping, stage not classified
    3: SleepStageType.AWAKE,  # out of bed
    4: SleepStageType.LIGHT,
    5: SleepStageType.DEEP,
    6: SleepStageType.REM,
    7: SleepStageType.AWAKE,  # awake in bed
}


@dataclass
class ParseResult:
    """
    Outcome of parsing a batch of raw records.

    Attributes:
        records: Successfully parsed records, in input order
        skipped: Entries dropped because they were malformed
        unsupported: Entries dropped because their record type is unknown
    """
    records: list[HealthRecord] = field(default_factory=list)
    skipped: int = 0
    unsupported: int = 0

    @property
    def total(self) -> int:
        return len(self.records) + self.skipped + self.unsupported


def _instant(raw: dict[str, Any], key: str) -> datetime:
    """Read {"<key>": {"epochMillis": ...}} or "<key>EpochMillis" as a UTC datetime."""
    epoch_millis = raw.get(f"{key}EpochMillis")
    if epoch_millis is None:
        epoch_millis = raw[key]["epochMillis"]
    return datetime.fromtimestamp(epoch_millis / 1000, tz=UTC)


def _mass(raw: dict[str, Any] | None) -> Mass:
    if not raw:
        return Mass.grams(0.0)
    if "inGrams" in raw:
        return Mass.grams(raw["inGrams"])
    if "inKilograms" in raw:
        return Mass.kilograms(raw["inKilograms"])
    if "inPounds" in raw:
        return Mass.pounds(raw["inPounds"])
    raise ValueError(f"Mass without a known unit: {sorted(raw)}")


def _sleep_stage_type(value: Any) -> SleepStageType:
    if isinstance(value, int):
        return SLEEP_STAGE_CODES.get(value, SleepStageType.UNKNOWN)
    try:
        return SleepStageType[str(value).upper()]
    except KeyError:
        return SleepStageType.UNKNOWN


def _parse_steps(raw: dict[str, Any]) -> StepCount:
    return StepCount(
        start_time=_instant(raw, "startTime"),
        end_time=_instant(raw, "endTime"),
        step_count=int(raw["count"]),
    )


def _parse_exercise(raw: dict[str, Any]) -> Exercise:
    energy = raw.get("energy", {})
    calories = energy.get("inKilocalories")
    if calories is None:
        calories = energy.get("inCalories", raw.get("caloriesBurned"))
    if calories is None:
        raise KeyError("energy")
    return Exercise(
        start_time=_instant(raw, "startTime"),
        end_time=_instant(raw, "endTime"),
        calories_burned=float(calories),
    )


def _parse_nutrition(raw: dict[str, Any]) -> Diet:
    energy = raw.get("energy") or {}
    return Diet(
        start_time=_instant(raw, "startTime"),
        end_time=_instant(raw, "endTime"),
        calories=float(energy.get("inKilocalories", energy.get("inCalories", 0.0))),
        protein=_mass(raw.get("protein")),
        carbohydrate=_mass(raw.get("totalCarbohydrate")),
        fat=_mass(raw.get("totalFat")),
        meal_type=int(raw.get("mealType", 0)),
    )


def _parse_heart_rate(raw: dict[str, Any]) -> HeartRate:
    # Sample time falls back to the record time, as in single-sample exports
    record_time = raw.get("time")
    samples = []
    for sample in raw.get("samples", []):
        sample_time = sample.get("time") or record_time
        samples.append(
            HeartRateSample(
                time=_instant({"time": sample_time}, "time"),
                beats_per_minute=int(sample["beatsPerMinute"]),
            )
        )

    if "startTime" in raw or "startTimeEpochMillis" in raw:
        start_time = _instant(raw, "startTime")
        end_time = _instant(raw, "endTime")
    elif samples:
        start_time = min(sample.time for sample in samples)
        end_time = max(sample.time for sample in samples)
    else:
        start_time = end_time = _instant(raw, "time")

    return HeartRate(start_time=start_time, end_time=end_time, samples=tuple(samples))


def _parse_sleep_session(raw: dict[str, Any]) -> SleepSession:
    stages = tuple(
        SleepStage(
            start_time=_instant(stage, "startTime"),
            end_time=_instant(stage, "endTime"),
            stage=_sleep_stage_type(stage.get("stage")),
        )
        for stage in raw.get("stages", [])
    )
    return SleepSession(
        start_time=_instant(raw, "startTime"),
        end_time=_instant(raw, "endTime"),
        stages=stages,
    )


def _parse_blood_pressure(raw: dict[str, Any]) -> BloodPressure:
    return BloodPressure(
        time=_instant(raw, "time"),
        systolic=float(raw["systolic"]["inMillimetersOfMercury"]),
        diastolic=float(raw["diastolic"]["inMillimetersOfMercury"]),
    )


def _parse_blood_glucose(raw: dict[str, Any]) -> BloodGlucose:
    # Flat and nested level layouts are both in circulation
    level = raw.get("levelInMilligramsPerDeciliter")
    if level is None:
        level = raw["level"]["inMilligramsPerDeciliter"]
    return BloodGlucose(time=_instant(raw, "time"), level=float(level))


def _parse_weight(raw: dict[str, Any]) -> Weight:
    return Weight(time=_instant(raw, "time"), weight=_mass(raw["weight"]))


def _parse_body_fat(raw: dict[str, Any]) -> BodyFat:
    percentage = raw["percentage"]
    if isinstance(percentage, dict):
        percentage = percentage["value"]
    return BodyFat(time=_instant(raw, "time"), body_fat_percentage=float(percentage))


def _parse_skeletal_muscle_mass(raw: dict[str, Any]) -> SkeletalMuscleMass:
    return SkeletalMuscleMass(
        time=_instant(raw, "time"),
        skeletal_muscle_mass=_mass(raw["mass"]).to_kilograms(),
    )


RECORD_PARSERS: dict[str, Callable[[dict[str, Any]], HealthRecord]] = {
    "StepsRecord": _parse_steps,
    "ActiveCaloriesBurnedRecord": _parse_exercise,
    "ExerciseSessionRecord": _parse_exercise,
    "NutritionRecord": _parse_nutrition,
    "HeartRateRecord": _parse_heart_rate,
    "SleepSessionRecord": _parse_sleep_session,
    "BloodPressureRecord": _parse_blood_pressure,
    "BloodGlucoseRecord": _parse_blood_glucose,
    "WeightRecord": _parse_weight,
    "BodyFatRecord": _parse_body_fat,
    "SkeletalMuscleMassRecord": _parse_skeletal_muscle_mass,
}

# Record kind names are accepted as record types too
RECORD_TYPE_ALIASES = {
    "StepCount": "StepsRecord",
    "Exercise": "ExerciseSessionRecord",
    "Diet": "NutritionRecord",
    "HeartRate": "HeartRateRecord",
    "SleepSession": "SleepSessionRecord",
    "BloodPressure": "BloodPressureRecord",
    "BloodGlucose": "BloodGlucoseRecord",
    "Weight": "WeightRecord",
    "BodyFat": "BodyFatRecord",
    "SkeletalMuscleMass": "SkeletalMuscleMassRecord",
}


def parse_record(raw: dict[str, Any]) -> HealthRecord:
    """
    Parse one raw record.

    Raises:
        ValueError: If the record type is missing or unsupported
        AttributeError, KeyError, TypeError, ValueError: If required fields are
            missing or malformed
        InvalidIntervalError: If the record ends before it starts
    """
    record_type = raw.get("recordType")
    record_type = RECORD_TYPE_ALIASES.get(record_type, record_type)
    parser = RECORD_PARSERS.get(record_type)
    if parser is None:
        raise ValueError(f"Unsupported record type: {record_type}")
    return parser(raw)


def parse_records(raw_records: Iterable[dict[str, Any]]) -> ParseResult:
    """
    Parse a batch of raw records, skipping entries that cannot be parsed.

    Args:
        raw_records: Health Connect style record dictionaries

    Returns:
        ParseResult with the parsed records and skip counters
    """
    result = ParseResult()

    for index, raw in enumerate(raw_records):
        if not isinstance(raw, dict):
            result.skipped += 1
            logger.debug("skipping_malformed_record", index=index, reason="not an object")
            continue

        record_type = raw.get("recordType")
        if (
            not isinstance(record_type, str)
            or RECORD_TYPE_ALIASES.get(record_type, record_type) not in RECORD_PARSERS
        ):
            result.unsupported += 1
            logger.debug("skipping_unsupported_record", index=index, record_type=record_type)
            continue

        try:
            result.records.append(parse_record(raw))
        except InvalidIntervalError as e:
            result.skipped += 1
            logger.warning(
                "record_end_before_start",
                index=index,
                record_type=record_type,
                start_time=e.start.isoformat(),
                end_time=e.end.isoformat(),
            )
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            result.skipped += 1
            logger.debug(
                "skipping_malformed_record",
                index=index,
                record_type=record_type,
                error=str(e),
                record_sample=str(raw)[:100],
            )

    logger.info(
        "records_parsed",
        total_records=result.total,
        parsed=len(result.records),
        skipped=result.skipped,
        unsupported=result.unsupported,
    )
    return result


def load_records(path: str | Path) -> ParseResult:
    """
    Load and parse records from a JSON file.

    The file holds either a list of records or an object with a "records"
    list.
    """
    with open(path, encoding="utf-8") as f:
        payload = json.load(f)

    if isinstance(payload, dict):
        payload = payload.get("records", [])
    if not isinstance(payload, list):
        raise ValueError(f"Expected a list of records in {path}")

    return parse_records(payload)

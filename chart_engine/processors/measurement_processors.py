"""
Processors for point-in-time measurements.

Vitals and body measurements are instantaneous readings. Each reading enters
the bucketing pipeline as a zero-length interval at its instant, so it lands
whole in a single minute bucket. Heart rate series and sleep sessions are
recorded over an interval but charted as readings:

- HeartRate contributes one reading per sample
- SleepSession contributes its duration in hours at its end instant
"""

from ..transform.splitter import TimedContribution
from ..types.common import MassUnit
from ..types.health_records import (
    BloodGlucose,
    BloodPressure,
    BodyFat,
    HeartRate,
    RecordKind,
    SkeletalMuscleMass,
    SleepSession,
    Weight,
)
from .base_processor import BaseRecordProcessor, point


class HeartRateProcessor(BaseRecordProcessor):
    """Beats per minute, one reading per sample."""

    kind = RecordKind.HEART_RATE
    record_type = HeartRate
    measurement_names = ("heartRate",)
    default_measurement = "heartRate"
    instantaneous = True

    def extract(self, record: HeartRate) -> list[TimedContribution]:
        samples = sorted(record.samples, key=lambda sample: sample.time)
        if not samples:
            self.logger.debug("heart_rate_without_samples", start_time=record.start_time.isoformat())
        return [
            point(sample.time, {"heartRate": float(sample.beats_per_minute)})
            for sample in samples
        ]


class SleepSessionProcessor(BaseRecordProcessor):
    """Hours asleep per session, credited to the night the session ends."""

    kind = RecordKind.SLEEP_SESSION
    record_type = SleepSession
    measurement_names = ("sleepHours",)
    default_measurement = "sleepHours"
    instantaneous = True

    def extract(self, record: SleepSession) -> list[TimedContribution]:
        return [point(record.end_time, {"sleepHours": record.get_duration_hours()})]


class BloodPressureProcessor(BaseRecordProcessor):
    """Systolic and diastolic pressure in mmHg; systolic by default."""

    kind = RecordKind.BLOOD_PRESSURE
    record_type = BloodPressure
    measurement_names = ("systolic", "diastolic")
    default_measurement = "systolic"
    instantaneous = True

    def extract(self, record: BloodPressure) -> list[TimedContribution]:
        return [
            point(
                record.time,
                {"systolic": float(record.systolic), "diastolic": float(record.diastolic)},
            )
        ]


class BloodGlucoseProcessor(BaseRecordProcessor):
    kind = RecordKind.BLOOD_GLUCOSE
    record_type = BloodGlucose
    measurement_names = ("level",)
    default_measurement = "level"
    instantaneous = True

    def extract(self, record: BloodGlucose) -> list[TimedContribution]:
        return [point(record.time, {"level": float(record.level)})]


class WeightProcessor(BaseRecordProcessor):
    """Body weight, kilograms unless another mass unit is requested."""

    kind = RecordKind.WEIGHT
    record_type = Weight
    measurement_names = ("weight",)
    default_measurement = "weight"
    instantaneous = True

    def __init__(self, mass_unit: MassUnit = MassUnit.KILOGRAM):
        super().__init__()
        self.mass_unit = mass_unit

    def extract(self, record: Weight) -> list[TimedContribution]:
        return [point(record.time, {"weight": self.mass_unit.convert(record.weight)})]


class BodyFatProcessor(BaseRecordProcessor):
    kind = RecordKind.BODY_FAT
    record_type = BodyFat
    measurement_names = ("bodyFat",)
    default_measurement = "bodyFat"
    instantaneous = True

    def extract(self, record: BodyFat) -> list[TimedContribution]:
        return [point(record.time, {"bodyFat": float(record.body_fat_percentage)})]


class SkeletalMuscleMassProcessor(BaseRecordProcessor):
    kind = RecordKind.SKELETAL_MUSCLE_MASS
    record_type = SkeletalMuscleMass
    measurement_names = ("skeletalMuscleMass",)
    default_measurement = "skeletalMuscleMass"
    instantaneous = True

    def extract(self, record: SkeletalMuscleMass) -> list[TimedContribution]:
        return [point(record.time, {"skeletalMuscleMass": float(record.skeletal_muscle_mass)})]

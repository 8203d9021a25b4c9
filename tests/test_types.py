"""
Tests for record types, enums and the Mass value type.
"""

from dataclasses import FrozenInstanceError
from datetime import UTC, datetime, timedelta

import pytest

from chart_engine.errors import ChartEngineError, InvalidIntervalError, NaiveDatetimeError
from chart_engine.types import (
    BloodGlucose,
    BloodPressure,
    Mass,
    MassUnit,
    RecordKind,
    SleepSession,
    SleepStage,
    SleepStageType,
    StepCount,
    TimeUnit,
    record_kind_of,
)


@pytest.mark.unit
class TestRecordValidation:
    """Records validate their instants at construction"""

    def test_end_before_start_rejected(self, base_time):
        with pytest.raises(InvalidIntervalError) as exc_info:
            StepCount(base_time, base_time - timedelta(minutes=1), 10)

        assert exc_info.value.start == base_time
        assert isinstance(exc_info.value, ValueError)
        assert isinstance(exc_info.value, ChartEngineError)

    def test_zero_duration_allowed(self, base_time):
        record = StepCount(base_time, base_time, 10)
        assert record.start_time == record.end_time

    def test_naive_datetime_rejected(self):
        with pytest.raises(NaiveDatetimeError):
            BloodGlucose(datetime(2025, 5, 8, 8, 0), level=100.0)

    def test_records_are_immutable(self, base_time):
        record = BloodPressure(base_time, systolic=120.0, diastolic=80.0)
        with pytest.raises(FrozenInstanceError):
            record.systolic = 130.0

    def test_sequences_stored_as_tuples(self, base_time):
        stage = SleepStage(base_time, base_time + timedelta(hours=1), SleepStageType.DEEP)
        session = SleepSession(base_time, base_time + timedelta(hours=1), stages=[stage])
        assert session.stages == (stage,)


@pytest.mark.unit
def test_sleep_duration_hours(base_time):
    """Verify time in bed is reported in hours"""
    session = SleepSession(base_time, base_time + timedelta(hours=7, minutes=30))
    assert session.get_duration_hours() == pytest.approx(7.5)


@pytest.mark.unit
def test_record_kind_of(base_time):
    """Verify kind lookup for records and non-records"""
    assert record_kind_of(StepCount(base_time, base_time, 1)) == RecordKind.STEP_COUNT
    assert record_kind_of(BloodGlucose(base_time, 90.0)) == RecordKind.BLOOD_GLUCOSE
    assert record_kind_of("StepCount") is None
    assert RecordKind.BLOOD_PRESSURE.value == "BloodPressure"


@pytest.mark.unit
class TestMass:
    """Mass conversions"""

    def test_constructors(self):
        assert Mass.kilograms(1.5).to_grams() == 1500.0
        assert Mass.grams(250).to_kilograms() == 0.25
        assert Mass.pounds(1).to_grams() == pytest.approx(453.59237)

    def test_conversions(self):
        mass = Mass.kilograms(70)
        assert mass.to_pounds() == pytest.approx(154.3236, rel=1e-5)
        assert Mass.grams(28.3495231).to_ounces() == pytest.approx(1.0)

    def test_equality(self):
        assert Mass.kilograms(1) == Mass.grams(1000)

    def test_mass_unit_convert(self):
        mass = Mass.kilograms(2)

        assert MassUnit.KILOGRAM.convert(mass) == 2.0
        assert MassUnit.GRAM.convert(mass) == 2000.0
        assert MassUnit("lb").convert(mass) == pytest.approx(4.40924, rel=1e-5)
        assert MassUnit.OUNCE.convert(mass) == pytest.approx(70.5479, rel=1e-5)


@pytest.mark.unit
class TestTimeUnit:
    """Ordering of time units"""

    def test_ordering(self):
        assert TimeUnit.MINUTE.is_smaller_than(TimeUnit.HOUR)
        assert TimeUnit.YEAR.is_bigger_than(TimeUnit.MONTH)
        assert TimeUnit.DAY.is_smaller_than_or_equal(TimeUnit.DAY)
        assert not TimeUnit.WEEK.is_smaller_than(TimeUnit.DAY)

    def test_levels_follow_declaration_order(self):
        assert [unit.level for unit in TimeUnit] == list(range(6))


@pytest.mark.unit
def test_aware_non_utc_instants_accepted():
    """Verify records accept any aware instant"""
    seoul_offset = datetime(2025, 5, 8, 17, 0, tzinfo=UTC).astimezone()
    record = BloodGlucose(seoul_offset, 100.0)
    assert record.time == seoul_offset

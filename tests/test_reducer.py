"""
Tests for bucket reduction and aggregation policies.
"""

from datetime import UTC, datetime, timedelta

import pytest

from chart_engine.transform.reducer import reduce_buckets
from chart_engine.transform.splitter import TimedContribution, accumulate_intervals
from chart_engine.types import AggregationType, TimeUnit


def at(day, hour=10, minute=0):
    return datetime(2025, 5, day, hour, minute, tzinfo=UTC)


@pytest.mark.unit
def test_sum_rekeys_minutes_to_hours():
    """Verify 900 steps over 08:00-09:30 split 600 / 300 per hour"""
    partials = accumulate_intervals(
        [TimedContribution(at(8, 8), at(8, 9, 30), {"stepCount": 900.0})]
    )
    reduced = reduce_buckets(partials, AggregationType.SUM, TimeUnit.HOUR)

    assert reduced == {
        at(8, 8): {"stepCount": 600.0},
        at(8, 9): {"stepCount": 300.0},
    }


@pytest.mark.unit
class TestDailyAverage:
    """DAILY_AVERAGE divides by distinct local days"""

    def test_three_days_in_one_week(self):
        # Mon, Tue, Wed of the week starting Sunday 2025-05-04
        partials = {
            at(5): {"stepCount": 300.0},
            at(6): {"stepCount": 600.0},
            at(7): {"stepCount": 900.0},
        }
        reduced = reduce_buckets(partials, AggregationType.DAILY_AVERAGE, TimeUnit.WEEK)

        assert reduced == {datetime(2025, 5, 4, tzinfo=UTC): {"stepCount": 600.0}}

    def test_several_buckets_per_day_count_once(self):
        partials = {
            at(5, 9): {"stepCount": 100.0},
            at(5, 17): {"stepCount": 200.0},
            at(6, 9): {"stepCount": 300.0},
        }
        reduced = reduce_buckets(partials, AggregationType.DAILY_AVERAGE, TimeUnit.MONTH)

        assert reduced[datetime(2025, 5, 1, tzinfo=UTC)]["stepCount"] == 300.0

    def test_instantaneous_readings_average_per_day(self):
        partials = {
            at(5, 8): {"systolic": [120.0]},
            at(5, 20): {"systolic": [130.0]},
            at(6, 8): {"systolic": [110.0]},
        }
        week = datetime(2025, 5, 4, tzinfo=UTC)

        instantaneous = reduce_buckets(
            partials, AggregationType.DAILY_AVERAGE, TimeUnit.WEEK, instantaneous=True
        )
        summed = reduce_buckets(partials, AggregationType.DAILY_AVERAGE, TimeUnit.WEEK)

        assert instantaneous[week]["systolic"] == pytest.approx(117.5)
        assert summed[week]["systolic"] == pytest.approx(180.0)

    def test_single_reading_per_day(self):
        partials = {at(day, 8): {"systolic": [115.0 + day]} for day in (5, 6, 7)}
        reduced = reduce_buckets(
            partials, AggregationType.DAILY_AVERAGE, TimeUnit.DAY, instantaneous=True
        )

        assert [values["systolic"] for values in reduced.values()] == [120.0, 121.0, 122.0]

    def test_day_boundaries_follow_time_zone(self):
        # 20:00 UTC on the 5th and 02:00 UTC on the 6th are both the 6th in Seoul
        partials = {
            at(5, 20): {"stepCount": 100.0},
            at(6, 2): {"stepCount": 300.0},
        }
        reduced = reduce_buckets(
            partials, AggregationType.DAILY_AVERAGE, TimeUnit.WEEK, "Asia/Seoul"
        )

        assert list(reduced.values()) == [{"stepCount": 400.0}]


@pytest.mark.unit
def test_duration_sum_counts_minutes():
    """Verify each contributing minute counts once regardless of magnitude"""
    partials = {
        at(8, 8, 0): {"heartRate": [60.0, 62.0]},
        at(8, 8, 1): {"heartRate": [70.0]},
        at(8, 8, 5): {"heartRate": [0.5]},
        at(8, 9, 0): {"heartRate": [80.0]},
    }
    reduced = reduce_buckets(partials, AggregationType.DURATION_SUM, TimeUnit.HOUR)

    assert reduced == {
        at(8, 8): {"heartRate": 3.0},
        at(8, 9): {"heartRate": 1.0},
    }


@pytest.mark.unit
def test_min_max_over_contributions():
    """Verify MIN_MAX reports the extremes of the bucket"""
    partials = {
        at(8, 8, 0): {"heartRate": [62.0, 58.0]},
        at(8, 14, 0): {"heartRate": [121.0]},
        at(9, 8, 0): {"heartRate": [70.0]},
    }
    reduced = reduce_buckets(partials, AggregationType.MIN_MAX, TimeUnit.DAY, instantaneous=True)

    assert reduced == {
        datetime(2025, 5, 8, tzinfo=UTC): {"heartRate": (58.0, 121.0)},
        datetime(2025, 5, 9, tzinfo=UTC): {"heartRate": (70.0, 70.0)},
    }


@pytest.mark.unit
def test_min_max_interval_shares_summed_per_minute():
    """Verify overlapping interval shares form one minute total before MIN_MAX"""
    partials = {
        at(8, 8, 0): {"stepCount": [10.0, 20.0]},
        at(8, 8, 1): {"stepCount": [5.0]},
    }
    reduced = reduce_buckets(partials, AggregationType.MIN_MAX, TimeUnit.DAY)

    assert reduced == {datetime(2025, 5, 8, tzinfo=UTC): {"stepCount": (5.0, 30.0)}}


@pytest.mark.unit
def test_output_keys_sorted_and_empty_input():
    """Verify ascending keys and empty output for empty input"""
    partials = {
        at(9): {"level": 1.0},
        at(7): {"level": 2.0},
        at(8): {"level": 3.0},
    }
    reduced = reduce_buckets(partials, AggregationType.SUM, TimeUnit.DAY)

    assert list(reduced) == sorted(reduced)
    assert reduce_buckets({}, AggregationType.SUM, TimeUnit.DAY) == {}


@pytest.mark.unit
def test_measurements_reduced_independently():
    """Verify each measurement name keeps its own totals"""
    start = at(8, 12)
    partials = accumulate_intervals(
        [
            TimedContribution(
                start,
                start + timedelta(minutes=30),
                {"calories": 600.0, "protein": 30.0},
            )
        ]
    )
    reduced = reduce_buckets(partials, AggregationType.SUM, TimeUnit.DAY)
    values = reduced[datetime(2025, 5, 8, tzinfo=UTC)]

    assert values["calories"] == pytest.approx(600.0)
    assert values["protein"] == pytest.approx(30.0)

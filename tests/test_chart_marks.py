"""
Tests for chart marks, time labels and mark regrouping.
"""

from dataclasses import FrozenInstanceError
from datetime import UTC, datetime

import pytest

from chart_engine.chart import (
    ChartMark,
    ProgressChartMark,
    RangeChartMark,
    StackedChartMark,
    to_range_chart_marks,
    to_range_chart_marks_from_pairs,
    to_stacked_chart_marks,
)
from chart_engine.errors import UnknownMeasurementError, UnsupportedAggregationError
from chart_engine.transform.chart_marks import (
    generate_time_labels,
    to_chart_marks,
    to_chart_marks_by_property,
    to_chart_marks_map,
    to_range_chart_marks_from_min_max,
)
from chart_engine.transform.dataset import TemporalDataSet
from chart_engine.types import TimeUnit


def labels_for(key, time_unit, time_zone="UTC"):
    data = TemporalDataSet(x=[key], y=[0.0], time_unit=time_unit)
    return generate_time_labels(data, time_zone)


@pytest.mark.unit
@pytest.mark.parametrize(
    "key, time_unit, expected",
    [
        (datetime(2025, 5, 8, 8, 5, tzinfo=UTC), TimeUnit.MINUTE, "8:05"),
        (datetime(2025, 5, 8, 14, tzinfo=UTC), TimeUnit.HOUR, "14h"),
        (datetime(2025, 5, 8, tzinfo=UTC), TimeUnit.DAY, "5/8 Thu"),
        (datetime(2025, 5, 4, tzinfo=UTC), TimeUnit.WEEK, "May W1"),
        (datetime(2025, 5, 11, tzinfo=UTC), TimeUnit.WEEK, "May W2"),
        (datetime(2025, 4, 27, tzinfo=UTC), TimeUnit.WEEK, "Apr W4"),
        (datetime(2025, 5, 1, tzinfo=UTC), TimeUnit.MONTH, "May 2025"),
        (datetime(2025, 1, 1, tzinfo=UTC), TimeUnit.YEAR, "2025"),
    ],
)
def test_time_labels(key, time_unit, expected):
    """Verify one label format per time unit"""
    assert labels_for(key, time_unit) == [expected]


@pytest.mark.unit
def test_labels_use_time_zone():
    """Verify labels describe the bucket in local time"""
    # Midnight 2025-05-09 in Seoul
    key = datetime(2025, 5, 8, 15, tzinfo=UTC)
    assert labels_for(key, TimeUnit.DAY, "Asia/Seoul") == ["5/9 Fri"]


@pytest.mark.unit
class TestToChartMarks:
    """Data set to mark conversion"""

    def test_ordinal_x_and_labels(self):
        data = TemporalDataSet(
            x=[datetime(2025, 5, 8, tzinfo=UTC), datetime(2025, 5, 9, tzinfo=UTC)],
            y=[900.0, 1200.0],
            time_unit=TimeUnit.DAY,
        )
        marks = to_chart_marks(data)

        assert marks == [
            ChartMark(x=0.0, y=900.0, label="5/8 Thu"),
            ChartMark(x=1.0, y=1200.0, label="5/9 Fri"),
        ]

    def test_fill_gaps(self):
        data = TemporalDataSet(
            x=[datetime(2025, 5, 8, tzinfo=UTC), datetime(2025, 5, 10, tzinfo=UTC)],
            y=[1.0, 3.0],
            time_unit=TimeUnit.DAY,
        )
        marks = to_chart_marks(data, fill_gaps=True)

        assert [mark.y for mark in marks] == [1.0, 0.0, 3.0]
        assert [mark.x for mark in marks] == [0.0, 1.0, 2.0]
        assert marks[1].label == "5/9 Fri"

    def test_multi_value_rejected(self):
        data = TemporalDataSet(x=[datetime(2025, 5, 8, tzinfo=UTC)], y_multiple={"a": [1.0]})
        with pytest.raises(UnsupportedAggregationError):
            to_chart_marks(data)

    def test_by_property_and_map(self):
        data = TemporalDataSet(
            x=[datetime(2025, 5, 8, tzinfo=UTC)],
            y_multiple={"systolic": [120.0], "diastolic": [80.0]},
            time_unit=TimeUnit.DAY,
        )

        assert to_chart_marks_by_property(data, "diastolic") == [
            ChartMark(x=0.0, y=80.0, label="5/8 Thu")
        ]
        marks_map = to_chart_marks_map(data)
        assert list(marks_map) == ["systolic", "diastolic"]
        assert marks_map["systolic"][0].y == 120.0

        with pytest.raises(UnknownMeasurementError):
            to_chart_marks_by_property(data, "pulse")

    def test_range_marks_from_min_max(self):
        data = TemporalDataSet(
            x=[datetime(2025, 5, 8, tzinfo=UTC)],
            y_multiple={"min": [55.0], "max": [130.0]},
            time_unit=TimeUnit.DAY,
        )
        [mark] = to_range_chart_marks_from_min_max(data)

        assert mark.min_point.y == 55.0
        assert mark.max_point.y == 130.0
        assert mark.y == 75.0
        assert mark.label == "5/8 Thu"

    def test_range_marks_require_min_max(self):
        data = TemporalDataSet(x=[datetime(2025, 5, 8, tzinfo=UTC)], y=[1.0])
        with pytest.raises(UnsupportedAggregationError):
            to_range_chart_marks_from_min_max(data)


@pytest.mark.unit
class TestMarkTypes:
    """Derived values on mark types"""

    def test_chart_mark_defaults_and_immutability(self):
        mark = ChartMark(x=1.0, y=2.0)
        assert mark.label is None
        assert mark.color is None
        assert mark.is_selected is False
        with pytest.raises(FrozenInstanceError):
            mark.y = 3.0

    def test_stacked_total(self):
        mark = StackedChartMark(
            x=0.0, segments=[ChartMark(0.0, 2.0), ChartMark(0.0, 3.5)]
        )
        assert mark.y == 5.5
        assert isinstance(mark.segments, tuple)
        assert StackedChartMark(x=0.0).y == 0

    @pytest.mark.parametrize(
        "current, target, progress",
        [(50.0, 100.0, 0.5), (150.0, 100.0, 1.0), (-5.0, 100.0, 0.0), (10.0, 0.0, 0.0)],
    )
    def test_progress_clamped(self, current, target, progress):
        mark = ProgressChartMark(x=0.0, current=current, target=target)
        assert mark.progress == progress
        assert mark.y == progress
        assert mark.percentage == progress * 100.0


@pytest.mark.unit
class TestPointTransforms:
    """Regrouping marks that share an x"""

    def test_range_grouping(self):
        marks = [
            ChartMark(1.0, 70.0, label="b"),
            ChartMark(0.0, 60.0, label="a"),
            ChartMark(0.0, 90.0, label="a"),
            ChartMark(1.0, 65.0, label="b"),
        ]
        ranges = to_range_chart_marks(marks)

        assert [r.x for r in ranges] == [0.0, 1.0]
        assert (ranges[0].min_point.y, ranges[0].max_point.y) == (60.0, 90.0)
        assert (ranges[1].min_point.y, ranges[1].max_point.y) == (65.0, 70.0)
        assert ranges[1].label == "b"

    def test_stacked_grouping_default_order(self):
        marks = [ChartMark(0.0, 1.0), ChartMark(0.0, 5.0), ChartMark(0.0, 3.0)]
        [stack] = to_stacked_chart_marks(marks)

        assert [segment.y for segment in stack.segments] == [5.0, 3.0, 1.0]
        assert stack.y == 9.0

    def test_stacked_grouping_custom_order(self):
        marks = [ChartMark(0.0, 1.0, label="x"), ChartMark(0.0, 5.0, label="y")]
        [stack] = to_stacked_chart_marks(marks, segment_ordering=list)
        assert [segment.label for segment in stack.segments] == ["x", "y"]

    def test_pairs(self):
        marks = [ChartMark(0.0, 10.0), ChartMark(0.0, 20.0), ChartMark(1.0, 5.0), ChartMark(1.0, 8.0)]
        ranges = to_range_chart_marks_from_pairs(marks)

        assert len(ranges) == 2
        assert isinstance(ranges[0], RangeChartMark)
        assert ranges[1].y == 3.0

        with pytest.raises(ValueError):
            to_range_chart_marks_from_pairs(marks[:3])

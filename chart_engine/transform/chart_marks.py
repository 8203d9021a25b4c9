"""
Conversion of temporal data sets into chart marks.

Marks get an ordinal x (0..n-1) following the ascending bucket order and a
label describing the bucket in the requested time zone.

Gap filling is off by default: sparse measurements filled with 0.0 distort
charts and min/max statistics.
"""

from datetime import date, timedelta, tzinfo

from ..chart.marks import ChartMark, RangeChartMark
from ..errors import UnknownMeasurementError, UnsupportedAggregationError
from ..types.common import TimeUnit
from .alignment import WEEK_START, resolve_time_zone
from .dataset import MAX_KEY, MIN_KEY, TemporalDataSet
from .gap_fill import fill_temporal_gaps

WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def _week_of_month(week_start: date) -> int:
    first = week_start.replace(day=1)
    first_week_start = first + timedelta(days=(WEEK_START - first.weekday()) % 7)
    return max((week_start - first_week_start).days // 7 + 1, 1)


def generate_time_labels(data: TemporalDataSet, time_zone: str | tzinfo = "UTC") -> list[str]:
    """
    Build one label per bucket of data.

    Examples:
    - MINUTE: "14:05"
    - HOUR: "14h"
    - DAY: "5/8 Thu"
    - WEEK: "May W2" (week of month, weeks start on Sunday)
    - MONTH: "May 2025"
    - YEAR: "2025"
    """
    zone = resolve_time_zone(time_zone)
    labels = []

    for key in data.x:
        local = key.astimezone(zone)
        if data.time_unit == TimeUnit.MINUTE:
            labels.append(f"{local.hour}:{local.minute:02d}")
        elif data.time_unit == TimeUnit.HOUR:
            labels.append(f"{local.hour}h")
        elif data.time_unit == TimeUnit.DAY:
            labels.append(f"{local.month}/{local.day} {WEEKDAY_NAMES[local.weekday()]}")
        elif data.time_unit == TimeUnit.WEEK:
            week_start = local.date()
            labels.append(f"{MONTH_NAMES[week_start.month - 1]} W{_week_of_month(week_start)}")
        elif data.time_unit == TimeUnit.MONTH:
            labels.append(f"{MONTH_NAMES[local.month - 1]} {local.year}")
        else:
            labels.append(str(local.year))

    return labels


def _prepare(
    data: TemporalDataSet,
    time_zone: str | tzinfo,
    fill_gaps: bool,
    fill_value: float,
) -> tuple[TemporalDataSet, list[str]]:
    if fill_gaps:
        data = fill_temporal_gaps(data, time_zone, fill_value)
    return data, generate_time_labels(data, time_zone)


def _marks(values, labels) -> list[ChartMark]:
    return [
        ChartMark(x=float(index), y=value, label=labels[index])
        for index, value in enumerate(values)
    ]


def to_chart_marks(
    data: TemporalDataSet,
    time_zone: str | tzinfo = "UTC",
    fill_gaps: bool = False,
    fill_value: float = 0.0,
) -> list[ChartMark]:
    """Convert a single-value data set into chart marks."""
    if not data.is_single_value:
        raise UnsupportedAggregationError(
            "Use to_chart_marks_by_property() for multi-value TemporalDataSet"
        )
    data, labels = _prepare(data, time_zone, fill_gaps, fill_value)
    return _marks(data.y, labels)


def to_chart_marks_by_property(
    data: TemporalDataSet,
    name: str,
    time_zone: str | tzinfo = "UTC",
    fill_gaps: bool = False,
    fill_value: float = 0.0,
) -> list[ChartMark]:
    """
    Convert one named series of a multi-value data set into chart marks.

    Raises:
        UnknownMeasurementError: If the data set has no series called name
    """
    if not data.is_multi_value:
        raise UnsupportedAggregationError("Use to_chart_marks() for single-value TemporalDataSet")
    if name not in data.property_names:
        raise UnknownMeasurementError("TemporalDataSet", name, data.property_names)
    data, labels = _prepare(data, time_zone, fill_gaps, fill_value)
    return _marks(data.get_values(name), labels)


def to_chart_marks_map(
    data: TemporalDataSet,
    time_zone: str | tzinfo = "UTC",
    fill_gaps: bool = False,
    fill_value: float = 0.0,
) -> dict[str, list[ChartMark]]:
    """Convert every series of a multi-value data set into chart marks."""
    if not data.is_multi_value:
        raise UnsupportedAggregationError("Use to_chart_marks() for single-value TemporalDataSet")
    data, labels = _prepare(data, time_zone, fill_gaps, fill_value)
    return {name: _marks(data.get_values(name), labels) for name in data.property_names}


def to_range_chart_marks_from_min_max(
    data: TemporalDataSet,
    time_zone: str | tzinfo = "UTC",
    fill_gaps: bool = False,
    fill_value: float = 0.0,
) -> list[RangeChartMark]:
    """
    Convert a MIN_MAX data set ("min" and "max" series) into range marks.

    Raises:
        UnsupportedAggregationError: If the data set has no min/max series
    """
    if not data.is_min_max:
        raise UnsupportedAggregationError(
            "TemporalDataSet must contain 'min' and 'max' series. "
            f"Available series: {', '.join(data.property_names)}. "
            "Aggregate with AggregationType.MIN_MAX first."
        )
    data, labels = _prepare(data, time_zone, fill_gaps, fill_value)
    minimums = data.get_values(MIN_KEY)
    maximums = data.get_values(MAX_KEY)

    return [
        RangeChartMark(
            x=float(index),
            min_point=ChartMark(x=float(index), y=minimums[index], label=label),
            max_point=ChartMark(x=float(index), y=maximums[index], label=label),
            label=label,
        )
        for index, label in enumerate(labels)
    ]

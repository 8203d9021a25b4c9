"""
Bucket reducer.

Re-keys minute-level partials to a coarser time unit and collapses every
bucket's contributions into one value per measurement according to an
aggregation policy. The policy is applied once, after minute-level
accumulation.
"""

import statistics
from collections.abc import Mapping, Sequence
from datetime import date, datetime, tzinfo

import structlog

from ..types.common import AggregationType, TimeUnit
from .alignment import align_to_bucket, local_date, resolve_time_zone

logger = structlog.get_logger(__name__)

ReducedValue = float | tuple[float, float]


def _as_contributions(value: float | Sequence[float]) -> list[float]:
    if isinstance(value, (int, float)):
        return [float(value)]
    return [float(v) for v in value]


def _daily_average(
    by_day: Mapping[date, list[float]],
    instantaneous: bool,
) -> float:
    if not by_day:
        return 0.0
    if instantaneous:
        day_values = [statistics.fmean(values) for values in by_day.values()]
    else:
        day_values = [sum(values) for values in by_day.values()]
    return sum(day_values) / len(day_values)


def reduce_buckets(
    partials: Mapping[datetime, Mapping[str, float | Sequence[float]]],
    aggregation: AggregationType,
    time_unit: TimeUnit,
    time_zone: str | tzinfo = "UTC",
    instantaneous: bool = False,
) -> dict[datetime, dict[str, ReducedValue]]:
    """
    Reduce minute-level partials to one value per bucket and measurement.

    Aggregation semantics:
    - SUM: total of all contributions
    - DAILY_AVERAGE: total divided by the number of distinct local calendar
      days contributing. For instantaneous series each day first collapses to
      the mean of its readings.
    - DURATION_SUM: number of distinct minute buckets contributing; each
      counts as one minute regardless of magnitude
    - MIN_MAX: (min, max) over the minute totals in the bucket, or over the
      individual readings for instantaneous series

    Args:
        partials: Minute bucket key -> measurement -> share or list of shares
        aggregation: Aggregation policy
        time_unit: Target bucket granularity
        time_zone: Zone used for re-alignment and day boundaries
        instantaneous: True when contributions are point readings

    Returns:
        Bucket key -> measurement -> reduced value, keys ascending
    """
    zone = resolve_time_zone(time_zone)

    # bucket -> measurement -> minute key -> contributions
    grouped: dict[datetime, dict[str, dict[datetime, list[float]]]] = {}
    for minute_key, values in partials.items():
        bucket = align_to_bucket(minute_key, time_unit, zone)
        bucket_values = grouped.setdefault(bucket, {})
        for name, value in values.items():
            bucket_values.setdefault(name, {}).setdefault(minute_key, []).extend(
                _as_contributions(value)
            )

    reduced: dict[datetime, dict[str, ReducedValue]] = {}
    for bucket in sorted(grouped):
        reduced[bucket] = {
            name: _reduce_measurement(by_minute, aggregation, zone, instantaneous)
            for name, by_minute in grouped[bucket].items()
        }

    logger.debug(
        "buckets_reduced",
        aggregation=aggregation.value,
        time_unit=time_unit.value,
        input_buckets=len(partials),
        output_buckets=len(reduced),
    )
    return reduced


def _reduce_measurement(
    by_minute: Mapping[datetime, list[float]],
    aggregation: AggregationType,
    zone: tzinfo,
    instantaneous: bool,
) -> ReducedValue:
    if not instantaneous:
        # shares of overlapping records landing in one minute form a single total
        by_minute = {key: [sum(values)] for key, values in by_minute.items()}
    contributions = [value for values in by_minute.values() for value in values]

    if aggregation == AggregationType.SUM:
        return sum(contributions)

    if aggregation == AggregationType.DAILY_AVERAGE:
        by_day: dict[date, list[float]] = {}
        for minute_key, values in by_minute.items():
            by_day.setdefault(local_date(minute_key, zone), []).extend(values)
        return _daily_average(by_day, instantaneous)

    if aggregation == AggregationType.DURATION_SUM:
        return float(len(by_minute))

    if not contributions:
        return (0.0, 0.0)
    return (min(contributions), max(contributions))

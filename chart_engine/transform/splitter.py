"""
Interval splitter.

Distributes interval-valued measurements across the minute buckets they
overlap, weighted by the actual overlap duration. Summing the per-minute
shares of one record reproduces the record's totals.
"""

from collections.abc import Iterable, Mapping
from datetime import datetime, timedelta, tzinfo
from typing import NamedTuple

import structlog

from ..errors import InvalidIntervalError
from ..types.common import TimeUnit, require_aware
from .alignment import ONE_MINUTE, align_to_bucket, resolve_time_zone

logger = structlog.get_logger(__name__)

ZERO = timedelta(0)
MICROSECOND = timedelta(microseconds=1)


class TimedContribution(NamedTuple):
    """Named measurements observed over [start, end]; start == end for point readings."""
    start: datetime
    end: datetime
    values: Mapping[str, float]


def split_interval(
    start: datetime,
    end: datetime,
    measurements: Mapping[str, float],
    time_zone: str | tzinfo = "UTC",
) -> dict[datetime, dict[str, float]]:
    """
    Split one interval's measurements across minute buckets.

    Each bucket receives value * overlap / total_duration, where overlap is the
    part of [start, end] falling inside [bucket, bucket + 1 minute). When start
    and end align to the same minute (including zero-length intervals) that
    minute receives the full values.

    Args:
        start: Interval start (timezone-aware)
        end: Interval end (timezone-aware)
        measurements: Measurement name -> total value over the interval
        time_zone: Zone used for minute alignment

    Returns:
        Minute bucket key -> measurement name -> share

    Raises:
        InvalidIntervalError: If end precedes start
    """
    require_aware(start, "start")
    require_aware(end, "end")
    if end < start:
        raise InvalidIntervalError(start, end)

    zone = resolve_time_zone(time_zone)
    start_bucket = align_to_bucket(start, TimeUnit.MINUTE, zone)
    end_bucket = align_to_bucket(end, TimeUnit.MINUTE, zone)
    total_duration = end - start

    if start_bucket == end_bucket or not total_duration:
        return {start_bucket: {name: float(value) for name, value in measurements.items()}}

    total_us = total_duration // MICROSECOND
    shares: dict[datetime, dict[str, float]] = {}
    current = start_bucket
    while current <= end_bucket:
        overlap = min(end, current + ONE_MINUTE) - max(start, current)
        if overlap > ZERO:
            overlap_us = overlap // MICROSECOND
            shares[current] = {
                name: value * overlap_us / total_us for name, value in measurements.items()
            }
        current = current + ONE_MINUTE

    return shares


def collect_partials(
    intervals: Iterable[TimedContribution],
    time_zone: str | tzinfo = "UTC",
) -> dict[datetime, dict[str, list[float]]]:
    """
    Split every interval and keep each record's share as its own contribution.

    The reducer sums the shares of interval kinds per minute and keeps point
    readings apart.

    Returns:
        Minute bucket key -> measurement name -> shares, in input order,
        with keys sorted ascending
    """
    zone = resolve_time_zone(time_zone)
    partials: dict[datetime, dict[str, list[float]]] = {}

    for interval in intervals:
        for bucket, shares in split_interval(
            interval.start, interval.end, interval.values, zone
        ).items():
            bucket_values = partials.setdefault(bucket, {})
            for name, share in shares.items():
                bucket_values.setdefault(name, []).append(share)

    return {key: partials[key] for key in sorted(partials)}


def accumulate_intervals(
    intervals: Iterable[TimedContribution],
    time_zone: str | tzinfo = "UTC",
) -> dict[datetime, dict[str, float]]:
    """
    Split every interval and sum the shares landing in the same minute.

    Returns:
        Minute bucket key -> measurement name -> summed share
    """
    partials = collect_partials(intervals, time_zone)
    accumulated = {
        key: {name: sum(shares) for name, shares in values.items()}
        for key, values in partials.items()
    }
    logger.debug("intervals_accumulated", bucket_count=len(accumulated))
    return accumulated

"""
Gap filling for aggregated data sets.

Inserts the buckets missing between the first and last key so charts can
render a continuous time axis. Use after aggregation: every bucket must hold
exactly one value.

Sparse measurements (blood pressure, glucose, weight) filled with 0.0 distort
averages and ranges; pass fill_value=float("nan") to mark gaps instead.
"""

from datetime import tzinfo

import structlog

from ..errors import DuplicateBucketError
from .alignment import align_to_bucket, iter_buckets, resolve_time_zone
from .dataset import TemporalDataSet

logger = structlog.get_logger(__name__)


def fill_temporal_gaps(
    data: TemporalDataSet,
    time_zone: str | tzinfo = "UTC",
    fill_value: float = 0.0,
) -> TemporalDataSet:
    """
    Return a copy of data with every bucket between its first and last key.

    Raises:
        DuplicateBucketError: If two points normalize to the same bucket
    """
    if not data.x:
        return data

    zone = resolve_time_zone(time_zone)
    normalized = [align_to_bucket(key, data.time_unit, zone) for key in data.x]
    duplicates = len(normalized) - len(set(normalized))
    if duplicates:
        raise DuplicateBucketError(
            f"fill_temporal_gaps() requires one value per '{data.time_unit.value}' bucket. "
            f"Found {duplicates} duplicate bucket(s). Aggregate before filling gaps."
        )

    complete = list(iter_buckets(min(normalized), max(normalized), data.time_unit, zone))
    if len(complete) > len(normalized):
        logger.debug(
            "temporal_gaps_filled",
            time_unit=data.time_unit.value,
            filled=len(complete) - len(normalized),
        )

    if data.is_single_value:
        existing = dict(zip(normalized, data.y))
        return TemporalDataSet(
            x=tuple(complete),
            y=tuple(existing.get(key, fill_value) for key in complete),
            time_unit=data.time_unit,
            instantaneous=data.instantaneous,
        )

    filled = {}
    for name, series in data.y_multiple.items():
        existing = dict(zip(normalized, series))
        filled[name] = tuple(existing.get(key, fill_value) for key in complete)

    return TemporalDataSet(
        x=tuple(complete),
        y_multiple=filled,
        time_unit=data.time_unit,
        instantaneous=data.instantaneous,
    )

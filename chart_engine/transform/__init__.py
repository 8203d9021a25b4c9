"""
Time bucketing pipeline: alignment, interval splitting, reduction, data sets,
gap filling and chart mark conversion.
"""

from .alignment import (
    WEEK_START,
    align_to_bucket,
    iter_buckets,
    local_date,
    next_bucket,
    resolve_time_zone,
)
from .chart_marks import (
    generate_time_labels,
    to_chart_marks,
    to_chart_marks_by_property,
    to_chart_marks_map,
    to_range_chart_marks_from_min_max,
)
from .dataset import MAX_KEY, MIN_KEY, TemporalDataSet, dataset_from_reduced, transform_dataset
from .gap_fill import fill_temporal_gaps
from .reducer import reduce_buckets
from .splitter import TimedContribution, accumulate_intervals, collect_partials, split_interval

__all__ = [
    # Alignment
    "WEEK_START",
    "align_to_bucket",
    "iter_buckets",
    "local_date",
    "next_bucket",
    "resolve_time_zone",

    # Splitting and reduction
    "TimedContribution",
    "split_interval",
    "collect_partials",
    "accumulate_intervals",
    "reduce_buckets",

    # Data sets
    "MIN_KEY",
    "MAX_KEY",
    "TemporalDataSet",
    "dataset_from_reduced",
    "transform_dataset",
    "fill_temporal_gaps",

    # Chart marks
    "generate_time_labels",
    "to_chart_marks",
    "to_chart_marks_by_property",
    "to_chart_marks_map",
    "to_range_chart_marks_from_min_max",
]

"""
Chart Engine

Turns irregularly timed health records into time-bucketed chart series:
interval splitting across minute buckets, calendar-aware re-bucketing with an
aggregation policy, per-kind dispatch and sleep stage merging.
"""

from .chart import ChartMark, ProgressChartMark, RangeChartMark, StackedChartMark
from .errors import (
    ChartEngineError,
    ConfigurationError,
    DuplicateBucketError,
    InvalidIntervalError,
    InvalidTimeZoneError,
    NaiveDatetimeError,
    UnknownMeasurementError,
    UnsortedInputError,
    UnsupportedAggregationError,
)
from .processors import dispatch_by_type, transform_measurements, transform_records
from .sleep import merge_consecutive_stages, to_sleep_stage_range_marks
from .transform import (
    TemporalDataSet,
    accumulate_intervals,
    align_to_bucket,
    fill_temporal_gaps,
    reduce_buckets,
    split_interval,
)
from .types import AggregationType, RecordKind, TimeUnit

__version__ = "0.1.0"

__all__ = [
    # Pipeline
    "align_to_bucket",
    "split_interval",
    "accumulate_intervals",
    "reduce_buckets",
    "fill_temporal_gaps",
    "TemporalDataSet",

    # Dispatch
    "dispatch_by_type",
    "transform_records",
    "transform_measurements",

    # Sleep stages
    "merge_consecutive_stages",
    "to_sleep_stage_range_marks",

    # Types
    "AggregationType",
    "RecordKind",
    "TimeUnit",
    "ChartMark",
    "RangeChartMark",
    "StackedChartMark",
    "ProgressChartMark",

    # Errors
    "ChartEngineError",
    "ConfigurationError",
    "DuplicateBucketError",
    "InvalidIntervalError",
    "InvalidTimeZoneError",
    "NaiveDatetimeError",
    "UnknownMeasurementError",
    "UnsortedInputError",
    "UnsupportedAggregationError",
]

"""
Normalized time-series container.

A TemporalDataSet holds time-indexed values after bucketing and before they
are mapped to chart marks. It carries either a single series (y) or several
named series (y_multiple), never both.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, tzinfo

from ..errors import UnsupportedAggregationError
from ..types.common import AggregationType, TimeUnit
from .reducer import ReducedValue, reduce_buckets

MIN_KEY = "min"
MAX_KEY = "max"


@dataclass(frozen=True)
class TemporalDataSet:
    """
    Time-bucketed values for one record kind.

    Attributes:
        x: Bucket start instants, ascending
        y: Single-value series (None for multi-value data sets)
        y_multiple: Measurement name -> series (None for single-value data sets)
        time_unit: Granularity of x
        instantaneous: True when values come from point readings
    """
    x: tuple[datetime, ...]
    y: tuple[float, ...] | None = None
    y_multiple: Mapping[str, tuple[float, ...]] | None = None
    time_unit: TimeUnit = TimeUnit.MINUTE
    instantaneous: bool = field(default=False, compare=False)

    def __post_init__(self):
        if (self.y is None) == (self.y_multiple is None):
            raise ValueError("Exactly one of 'y' or 'y_multiple' must be provided.")

        object.__setattr__(self, "x", tuple(self.x))

        if self.y is not None:
            object.__setattr__(self, "y", tuple(self.y))
            if len(self.x) != len(self.y):
                raise ValueError(
                    f"Size mismatch: x({len(self.x)}) and y({len(self.y)}) must have the same length."
                )

        if self.y_multiple is not None:
            if not self.y_multiple:
                raise ValueError("y_multiple cannot be empty.")
            normalized = {name: tuple(values) for name, values in self.y_multiple.items()}
            for name, values in normalized.items():
                if len(values) != len(self.x):
                    raise ValueError(
                        f"Size mismatch: x({len(self.x)}) and y_multiple['{name}']"
                        f"({len(values)}) must have the same length."
                    )
            object.__setattr__(self, "y_multiple", normalized)

    @property
    def is_single_value(self) -> bool:
        return self.y is not None

    @property
    def is_multi_value(self) -> bool:
        return self.y_multiple is not None

    @property
    def property_names(self) -> list[str]:
        """Series names of a multi-value data set; empty for single-value ones."""
        return list(self.y_multiple) if self.y_multiple is not None else []

    @property
    def is_min_max(self) -> bool:
        return self.is_multi_value and {MIN_KEY, MAX_KEY} <= set(self.y_multiple)

    def get_values(self, name: str) -> tuple[float, ...] | None:
        if self.y_multiple is None:
            return None
        return self.y_multiple.get(name)

    @property
    def values(self) -> tuple[float, ...]:
        return self.y if self.y is not None else ()

    def __len__(self) -> int:
        return len(self.x)


def dataset_from_reduced(
    reduced: Mapping[datetime, Mapping[str, ReducedValue]],
    time_unit: TimeUnit,
    measurement: str | None = None,
    instantaneous: bool = False,
) -> TemporalDataSet:
    """
    Build a data set from reducer output.

    With a measurement name the data set is single-value, or a min/max pair
    when the reduced values are ranges. Without one every measurement becomes
    a named series; buckets missing a measurement get 0.0.
    """
    x = tuple(sorted(reduced))

    if measurement is not None:
        present = [reduced[key][measurement] for key in x if measurement in reduced[key]]
        if any(isinstance(value, tuple) for value in present):
            ranges = [reduced[key].get(measurement, (0.0, 0.0)) for key in x]
            return TemporalDataSet(
                x=x,
                y_multiple={
                    MIN_KEY: tuple(low for low, _ in ranges),
                    MAX_KEY: tuple(high for _, high in ranges),
                },
                time_unit=time_unit,
                instantaneous=instantaneous,
            )
        values = tuple(reduced[key].get(measurement, 0.0) for key in x)
        return TemporalDataSet(x=x, y=values, time_unit=time_unit, instantaneous=instantaneous)

    if any(isinstance(value, tuple) for values in reduced.values() for value in values.values()):
        raise UnsupportedAggregationError(
            "MIN_MAX results need a measurement name; build one data set per measurement."
        )

    names: list[str] = []
    for key in x:
        for name in reduced[key]:
            if name not in names:
                names.append(name)

    if not names:
        return TemporalDataSet(x=x, y=(), time_unit=time_unit, instantaneous=instantaneous)

    return TemporalDataSet(
        x=x,
        y_multiple={name: tuple(reduced[key].get(name, 0.0) for key in x) for name in names},
        time_unit=time_unit,
        instantaneous=instantaneous,
    )


def transform_dataset(
    data: TemporalDataSet,
    time_unit: TimeUnit,
    aggregation: AggregationType = AggregationType.SUM,
    time_zone: str | tzinfo = "UTC",
) -> TemporalDataSet:
    """
    Re-bucket a data set into a coarser time unit.

    Raises:
        UnsupportedAggregationError: For MIN_MAX on a multi-value data set
    """
    if aggregation == AggregationType.MIN_MAX and not data.is_single_value:
        raise UnsupportedAggregationError(
            "MIN_MAX is only supported for single-value TemporalDataSet."
        )

    if data.time_unit == time_unit and aggregation == AggregationType.SUM:
        return data

    if data.is_single_value:
        partials = {key: {"value": value} for key, value in zip(data.x, data.y)}
        reduced = reduce_buckets(partials, aggregation, time_unit, time_zone, data.instantaneous)
        return dataset_from_reduced(reduced, time_unit, "value", data.instantaneous)

    partials = {
        key: {name: series[index] for name, series in data.y_multiple.items()}
        for index, key in enumerate(data.x)
    }
    reduced = reduce_buckets(partials, aggregation, time_unit, time_zone, data.instantaneous)
    return dataset_from_reduced(reduced, time_unit, None, data.instantaneous)

"""
Base record processor interface for the chart engine.

Every record kind (StepCount, BloodPressure, SleepSession, etc.) implements
this interface so the dispatcher can turn a homogeneous group of records into
a time-bucketed data set.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import datetime, tzinfo
from typing import Any, ClassVar

import structlog

from ..errors import UnknownMeasurementError
from ..transform.dataset import TemporalDataSet, dataset_from_reduced
from ..transform.reducer import reduce_buckets
from ..transform.splitter import TimedContribution, collect_partials
from ..types.common import AggregationType, TimeUnit
from ..types.health_records import RecordKind


def point(time: datetime, values: dict[str, float]) -> TimedContribution:
    """Express a point-in-time reading as a zero-length interval."""
    return TimedContribution(time, time, values)


class BaseRecordProcessor(ABC):
    """
    Abstract base class for all record processors.

    Subclasses declare which record kind they handle, the measurements they
    produce and which of them is charted by default, and implement extract().

    Attributes:
        kind: Record kind handled by the processor
        record_type: Record class handled by the processor
        measurement_names: Every measurement extract() produces
        default_measurement: Measurement charted when the caller picks none
        instantaneous: True when the kind is made of point readings
    """

    kind: ClassVar[RecordKind]
    record_type: ClassVar[type]
    measurement_names: ClassVar[tuple[str, ...]]
    default_measurement: ClassVar[str]
    instantaneous: ClassVar[bool] = False

    def __init__(self):
        """Initialize the processor"""
        self.logger = structlog.get_logger(processor=self.__class__.__name__)

    @abstractmethod
    def extract(self, record: Any) -> list[TimedContribution]:
        """
        Extract timed named measurements from one record.

        Interval kinds return (start, end, values); point kinds return a
        zero-length interval at their instant (see point()).
        """
        pass

    def resolve_measurement(self, measurement: str | None = None) -> str:
        """
        Return measurement, or the default one when None.

        Raises:
            UnknownMeasurementError: If the kind does not produce measurement
        """
        if measurement is None:
            return self.default_measurement
        if measurement not in self.measurement_names:
            raise UnknownMeasurementError(
                self.kind.value, measurement, list(self.measurement_names)
            )
        return measurement

    def contributions(self, records: Iterable[Any]) -> list[TimedContribution]:
        return [contribution for record in records for contribution in self.extract(record)]

    def build_dataset(
        self,
        records: Iterable[Any],
        time_unit: TimeUnit,
        aggregation: AggregationType,
        time_zone: str | tzinfo = "UTC",
        measurement: str | None = None,
    ) -> TemporalDataSet:
        """
        Run records through the split/reduce pipeline.

        Args:
            records: Records of this processor's kind
            time_unit: Target bucket granularity
            aggregation: Aggregation policy
            time_zone: Zone for bucket alignment and day boundaries
            measurement: Measurement to chart; None selects the default

        Returns:
            Single-value data set for one measurement, or "min"/"max" series
            for MIN_MAX
        """
        selected = self.resolve_measurement(measurement)
        partials = collect_partials(self.contributions(records), time_zone)
        reduced = reduce_buckets(
            partials, aggregation, time_unit, time_zone, self.instantaneous
        )
        dataset = dataset_from_reduced(reduced, time_unit, selected, self.instantaneous)

        self.logger.debug(
            "dataset_built",
            kind=self.kind.value,
            measurement=selected,
            aggregation=aggregation.value,
            time_unit=time_unit.value,
            buckets=len(dataset),
        )
        return dataset

"""
Type dispatcher.

Groups a mixed collection of health records by kind and runs each group
through its processor's default transform, producing one chart mark series
per kind present in the input.
"""

from collections.abc import Iterable, Mapping
from datetime import tzinfo
from functools import lru_cache
from typing import Any

import structlog

from ..chart.marks import BaseChartMark
from ..transform.alignment import resolve_time_zone
from ..transform.chart_marks import to_chart_marks, to_range_chart_marks_from_min_max
from ..transform.dataset import TemporalDataSet
from ..types.common import AggregationType, MassUnit, TimeUnit
from ..types.health_records import RecordKind
from .base_processor import BaseRecordProcessor
from .processor_factory import ProcessorFactory

logger = structlog.get_logger(__name__)

MeasurementOverrides = Mapping[RecordKind | str, str]


@lru_cache
def get_processor_factory(mass_unit: MassUnit = MassUnit.KILOGRAM) -> ProcessorFactory:
    """Get the shared processor factory for a mass unit."""
    return ProcessorFactory(mass_unit)


def _factory(factory: ProcessorFactory | None, mass_unit: MassUnit | str) -> ProcessorFactory:
    return factory or get_processor_factory(MassUnit(mass_unit))


def _to_marks(
    dataset: TemporalDataSet,
    aggregation: AggregationType,
    time_zone: tzinfo,
    fill_gaps: bool,
    fill_value: float,
) -> list[BaseChartMark]:
    if aggregation == AggregationType.MIN_MAX:
        return to_range_chart_marks_from_min_max(dataset, time_zone, fill_gaps, fill_value)
    return to_chart_marks(dataset, time_zone, fill_gaps, fill_value)


def _resolve_overrides(
    factory: ProcessorFactory,
    measurements: MeasurementOverrides | None,
) -> dict[RecordKind, str]:
    """Validate per-kind measurement overrides up front."""
    resolved: dict[RecordKind, str] = {}
    for kind, measurement in (measurements or {}).items():
        processor = factory.get_processor(kind)
        resolved[processor.kind] = processor.resolve_measurement(measurement)
    return resolved


def _group_records(
    records: Iterable[Any],
    factory: ProcessorFactory,
) -> dict[RecordKind, list[Any]]:
    groups: dict[RecordKind, list[Any]] = {}
    skipped = 0

    for record in records:
        processor = factory.processor_for(record)
        if processor is None:
            skipped += 1
            logger.warning("record_skipped", record_type=type(record).__name__)
            continue
        groups.setdefault(processor.kind, []).append(record)

    if skipped:
        logger.info("unsupported_records_skipped", skipped=skipped)
    return groups


def dispatch_by_type(
    records: Iterable[Any],
    time_unit: TimeUnit = TimeUnit.DAY,
    aggregation: AggregationType = AggregationType.SUM,
    time_zone: str | tzinfo = "UTC",
    measurements: MeasurementOverrides | None = None,
    fill_gaps: bool = False,
    fill_value: float = 0.0,
    mass_unit: MassUnit | str = MassUnit.KILOGRAM,
    factory: ProcessorFactory | None = None,
) -> dict[str, list[BaseChartMark]]:
    """
    Transform a mixed collection of records into one mark series per kind.

    Only kinds present in records get an entry. Entries follow the processor
    registration order and every series ascends by x. Multi-valued kinds chart
    their default measurement (Diet: calories, BloodPressure: systolic) unless
    measurements overrides it, e.g. {RecordKind.DIET: "protein"}.

    Args:
        records: Health records of any kind; other objects are skipped
        time_unit: Target bucket granularity
        aggregation: Aggregation policy; MIN_MAX yields RangeChartMarks
        time_zone: Zone for bucket alignment and labels
        measurements: Per-kind measurement overrides
        fill_gaps: Insert missing buckets between the first and last key
        fill_value: Value of inserted buckets
        mass_unit: Unit weight series are charted in
        factory: Processor factory; the shared one for mass_unit when None

    Returns:
        Kind name -> chart marks

    Raises:
        UnknownMeasurementError: If an override names a measurement the kind
            does not produce
        InvalidTimeZoneError: If time_zone cannot be resolved
        ValueError: If mass_unit is not a known unit
    """
    factory = _factory(factory, mass_unit)
    zone = resolve_time_zone(time_zone)
    overrides = _resolve_overrides(factory, measurements)
    groups = _group_records(records, factory)

    result: dict[str, list[BaseChartMark]] = {}
    for kind in factory.kinds:
        group = groups.get(kind)
        if not group:
            continue
        processor = factory.get_processor(kind)
        dataset = processor.build_dataset(
            group, time_unit, aggregation, zone, overrides.get(kind)
        )
        result[kind.value] = _to_marks(dataset, aggregation, zone, fill_gaps, fill_value)

    logger.info(
        "dispatch_completed",
        kinds=list(result),
        time_unit=time_unit.value,
        aggregation=aggregation.value,
        series_lengths={name: len(marks) for name, marks in result.items()},
    )
    return result


def _records_of_kind(
    records: Iterable[Any],
    processor: BaseRecordProcessor,
) -> list[Any]:
    selected = []
    for record in records:
        if isinstance(record, processor.record_type):
            selected.append(record)
        else:
            logger.warning(
                "record_skipped",
                record_type=type(record).__name__,
                expected=processor.kind.value,
            )
    return selected


def transform_records(
    records: Iterable[Any],
    kind: RecordKind | str,
    time_unit: TimeUnit = TimeUnit.DAY,
    aggregation: AggregationType = AggregationType.SUM,
    time_zone: str | tzinfo = "UTC",
    measurement: str | None = None,
    fill_gaps: bool = False,
    fill_value: float = 0.0,
    mass_unit: MassUnit | str = MassUnit.KILOGRAM,
    factory: ProcessorFactory | None = None,
) -> list[BaseChartMark]:
    """
    Transform records of a single kind into chart marks.

    Records of any other kind are skipped. Raises ValueError for an
    unsupported kind and UnknownMeasurementError for an unknown measurement.
    """
    factory = _factory(factory, mass_unit)
    zone = resolve_time_zone(time_zone)
    processor = factory.get_processor(kind)
    selected = processor.resolve_measurement(measurement)

    dataset = processor.build_dataset(
        _records_of_kind(records, processor), time_unit, aggregation, zone, selected
    )
    return _to_marks(dataset, aggregation, zone, fill_gaps, fill_value)


def transform_measurements(
    records: Iterable[Any],
    kind: RecordKind | str,
    time_unit: TimeUnit = TimeUnit.DAY,
    aggregation: AggregationType = AggregationType.SUM,
    time_zone: str | tzinfo = "UTC",
    fill_gaps: bool = False,
    fill_value: float = 0.0,
    mass_unit: MassUnit | str = MassUnit.KILOGRAM,
    factory: ProcessorFactory | None = None,
) -> dict[str, list[BaseChartMark]]:
    """
    Transform records of a single kind into one mark series per measurement.

    Useful for multi-valued kinds, e.g. systolic and diastolic pressure
    charted together.
    """
    factory = _factory(factory, mass_unit)
    zone = resolve_time_zone(time_zone)
    processor = factory.get_processor(kind)
    selected_records = _records_of_kind(records, processor)
    if not selected_records:
        return {}

    return {
        name: _to_marks(
            processor.build_dataset(selected_records, time_unit, aggregation, zone, name),
            aggregation,
            zone,
            fill_gaps,
            fill_value,
        )
        for name in processor.measurement_names
    }

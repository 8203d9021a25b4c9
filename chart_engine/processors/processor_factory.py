"""
Processor factory for routing records to the processor of their kind.

Registration order is the order in which the dispatcher emits kinds.
"""

import structlog

from ..types.common import MassUnit
from ..types.health_records import RecordKind, record_kind_of
from .activity_processors import DietProcessor, ExerciseProcessor, StepCountProcessor
from .base_processor import BaseRecordProcessor
from .measurement_processors import (
    BloodGlucoseProcessor,
    BloodPressureProcessor,
    BodyFatProcessor,
    HeartRateProcessor,
    SkeletalMuscleMassProcessor,
    SleepSessionProcessor,
    WeightProcessor,
)

logger = structlog.get_logger(__name__)


class ProcessorFactory:
    """
    Factory for record processors keyed by record kind.

    Usage:
        factory = ProcessorFactory()
        processor = factory.get_processor(RecordKind.BLOOD_PRESSURE)
        dataset = processor.build_dataset(records, TimeUnit.DAY, AggregationType.DAILY_AVERAGE)
    """

    SUPPORTED_TYPES = [
        RecordKind.STEP_COUNT,
        RecordKind.EXERCISE,
        RecordKind.DIET,
        RecordKind.HEART_RATE,
        RecordKind.SLEEP_SESSION,
        RecordKind.BLOOD_PRESSURE,
        RecordKind.BLOOD_GLUCOSE,
        RecordKind.WEIGHT,
        RecordKind.BODY_FAT,
        RecordKind.SKELETAL_MUSCLE_MASS,
    ]

    def __init__(self, mass_unit: MassUnit = MassUnit.KILOGRAM):
        """
        Create one processor per supported kind.

        Args:
            mass_unit: Unit weight series are charted in
        """
        self._processors: dict[RecordKind, BaseRecordProcessor] = {}
        for processor_class in (
            StepCountProcessor,
            ExerciseProcessor,
            DietProcessor,
            HeartRateProcessor,
            SleepSessionProcessor,
            BloodPressureProcessor,
            BloodGlucoseProcessor,
            WeightProcessor,
            BodyFatProcessor,
            SkeletalMuscleMassProcessor,
        ):
            if processor_class is WeightProcessor:
                processor = WeightProcessor(mass_unit)
            else:
                processor = processor_class()
            self._processors[processor.kind] = processor

        logger.debug(
            "processor_factory_initialized",
            processor_count=len(self._processors),
            mass_unit=mass_unit.value,
            processors=[kind.value for kind in self._processors],
        )

    @property
    def kinds(self) -> list[RecordKind]:
        """Supported kinds in registration order."""
        return [kind for kind in self.SUPPORTED_TYPES if kind in self._processors]

    def get_processor(self, kind: RecordKind | str) -> BaseRecordProcessor:
        """
        Get processor for a record kind.

        Args:
            kind: Record kind, or its name (e.g. "BloodPressure")

        Returns:
            Processor instance

        Raises:
            ValueError: If kind is not supported
        """
        if isinstance(kind, str):
            try:
                kind = RecordKind(kind)
            except ValueError:
                raise ValueError(
                    f"Unsupported record type: {kind}. "
                    f"Supported types: {[k.value for k in self.SUPPORTED_TYPES]}"
                ) from None

        processor = self._processors.get(kind)
        if processor is None:
            raise ValueError(
                f"Unsupported record type: {kind.value}. "
                f"Supported types: {[k.value for k in self.SUPPORTED_TYPES]}"
            )
        return processor

    def processor_for(self, record: object) -> BaseRecordProcessor | None:
        """Return the processor for record, or None if it is not a known record."""
        kind = record_kind_of(record)
        if kind is None:
            return None
        return self._processors.get(kind)

"""
Per-kind record processors and the type dispatcher.
"""

from .activity_processors import DietProcessor, ExerciseProcessor, StepCountProcessor
from .base_processor import BaseRecordProcessor, point
from .dispatcher import (
    dispatch_by_type,
    get_processor_factory,
    transform_measurements,
    transform_records,
)
from .measurement_processors import (
    BloodGlucoseProcessor,
    BloodPressureProcessor,
    BodyFatProcessor,
    HeartRateProcessor,
    SkeletalMuscleMassProcessor,
    SleepSessionProcessor,
    WeightProcessor,
)
from .processor_factory import ProcessorFactory

__all__ = [
    "BaseRecordProcessor",
    "point",
    "ProcessorFactory",
    "get_processor_factory",
    "dispatch_by_type",
    "transform_records",
    "transform_measurements",
    "StepCountProcessor",
    "ExerciseProcessor",
    "DietProcessor",
    "HeartRateProcessor",
    "SleepSessionProcessor",
    "BloodPressureProcessor",
    "BloodGlucoseProcessor",
    "WeightProcessor",
    "BodyFatProcessor",
    "SkeletalMuscleMassProcessor",
]

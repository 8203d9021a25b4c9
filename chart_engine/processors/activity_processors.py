"""
Processors for interval-based activity records.

Step counts, exercise sessions and meals carry totals over a time span; the
totals are spread across the minutes they cover before bucketing.
"""

from ..transform.splitter import TimedContribution
from ..types.health_records import Diet, Exercise, RecordKind, StepCount
from .base_processor import BaseRecordProcessor


class StepCountProcessor(BaseRecordProcessor):
    """Steps taken over an interval."""

    kind = RecordKind.STEP_COUNT
    record_type = StepCount
    measurement_names = ("stepCount",)
    default_measurement = "stepCount"

    def extract(self, record: StepCount) -> list[TimedContribution]:
        return [
            TimedContribution(
                record.start_time, record.end_time, {"stepCount": float(record.step_count)}
            )
        ]


class ExerciseProcessor(BaseRecordProcessor):
    """Calories burned during an exercise session."""

    kind = RecordKind.EXERCISE
    record_type = Exercise
    measurement_names = ("caloriesBurned",)
    default_measurement = "caloriesBurned"

    def extract(self, record: Exercise) -> list[TimedContribution]:
        return [
            TimedContribution(
                record.start_time,
                record.end_time,
                {"caloriesBurned": float(record.calories_burned)},
            )
        ]


class DietProcessor(BaseRecordProcessor):
    """
    Nutrient intake of a meal.

    Produces calories (kcal) and protein, carbohydrate and fat in grams.
    Calories are charted unless another nutrient is requested.
    """

    kind = RecordKind.DIET
    record_type = Diet
    measurement_names = ("calories", "protein", "carbohydrate", "fat")
    default_measurement = "calories"

    def extract(self, record: Diet) -> list[TimedContribution]:
        return [
            TimedContribution(
                record.start_time,
                record.end_time,
                {
                    "calories": float(record.calories),
                    "protein": record.protein.to_grams(),
                    "carbohydrate": record.carbohydrate.to_grams(),
                    "fat": record.fat.to_grams(),
                },
            )
        ]

"""
Chart mark model consumed by the rendering layer.
"""

from .marks import BaseChartMark, ChartMark, ProgressChartMark, RangeChartMark, StackedChartMark
from .point_transforms import (
    to_range_chart_marks,
    to_range_chart_marks_from_pairs,
    to_stacked_chart_marks,
)

__all__ = [
    "BaseChartMark",
    "ChartMark",
    "RangeChartMark",
    "StackedChartMark",
    "ProgressChartMark",
    "to_range_chart_marks",
    "to_range_chart_marks_from_pairs",
    "to_stacked_chart_marks",
]

"""
Chart mark value types.

A mark is one logical datum handed to the rendering layer. Marks are
immutable; derived values (range span, stack height, progress) are computed
from their parts.

Coordinate conventions:
- x is the logical X position (ordinal index or time-derived value)
- y is the value used for rendering
- label is optional display text; None means "let the renderer decide"
"""

from dataclasses import dataclass, field


class BaseChartMark:
    """Common base for all chart marks; every mark exposes x, y and label."""

    __slots__ = ()


@dataclass(frozen=True)
class ChartMark(BaseChartMark):
    """
    Default mark used by line, bar, scatter and pie charts.

    Attributes:
        x: Logical X position
        y: Value
        label: Optional label for tooltips, legends and axes
        color: Optional ARGB color override; None uses the chart palette
        is_selected: Selection state
    """
    x: float
    y: float
    label: str | None = None
    color: int | None = None
    is_selected: bool = False


@dataclass(frozen=True)
class RangeChartMark(BaseChartMark):
    """Vertical span from min_point to max_point at x; y is the span height."""
    x: float
    min_point: ChartMark
    max_point: ChartMark
    label: str | None = None

    @property
    def y(self) -> float:
        return self.max_point.y - self.min_point.y


@dataclass(frozen=True)
class StackedChartMark(BaseChartMark):
    """Stacked bar made of ordered segments; y is the total height."""
    x: float
    segments: tuple[ChartMark, ...] = field(default=())
    label: str | None = None

    def __post_init__(self):
        object.__setattr__(self, "segments", tuple(self.segments))

    @property
    def y(self) -> float:
        return sum(segment.y for segment in self.segments)


@dataclass(frozen=True)
class ProgressChartMark(BaseChartMark):
    """
    Progress ring or bar.

    progress is current / target clamped to [0, 1], and 0 when target <= 0.
    """
    x: float
    current: float
    target: float
    label: str | None = None
    unit: str | None = None
    color: int | None = None
    is_selected: bool = False

    @property
    def progress(self) -> float:
        if self.target <= 0.0:
            return 0.0
        return min(max(self.current / self.target, 0.0), 1.0)

    @property
    def percentage(self) -> float:
        return self.progress * 100.0

    @property
    def y(self) -> float:
        return self.progress

"""
Regrouping of simple chart marks into range and stacked marks.
"""

from collections.abc import Callable, Sequence

from .marks import ChartMark, RangeChartMark, StackedChartMark


def _group_by_x(marks: Sequence[ChartMark]) -> dict[float, list[ChartMark]]:
    groups: dict[float, list[ChartMark]] = {}
    for mark in marks:
        groups.setdefault(mark.x, []).append(mark)
    return groups


def to_range_chart_marks(
    marks: Sequence[ChartMark],
    min_selector: Callable[[list[ChartMark]], ChartMark] = lambda group: min(group, key=lambda m: m.y),
    max_selector: Callable[[list[ChartMark]], ChartMark] = lambda group: max(group, key=lambda m: m.y),
) -> list[RangeChartMark]:
    """
    Group marks sharing an x into min/max ranges.

    Args:
        marks: Marks, several of which may share an x
        min_selector: Picks the minimum point of a group
        max_selector: Picks the maximum point of a group

    Returns:
        One RangeChartMark per distinct x, ascending by x
    """
    return [
        RangeChartMark(
            x=x,
            min_point=min_selector(group),
            max_point=max_selector(group),
            label=group[0].label,
        )
        for x, group in sorted(_group_by_x(marks).items())
    ]


def to_stacked_chart_marks(
    marks: Sequence[ChartMark],
    segment_ordering: Callable[[list[ChartMark]], list[ChartMark]] = lambda group: sorted(
        group, key=lambda m: m.y, reverse=True
    ),
) -> list[StackedChartMark]:
    """
    Group marks sharing an x into stacked bars.

    Segments are ordered by segment_ordering, largest value first by default.
    """
    return [
        StackedChartMark(x=x, segments=tuple(segment_ordering(group)), label=group[0].label)
        for x, group in sorted(_group_by_x(marks).items())
    ]


def to_range_chart_marks_from_pairs(marks: Sequence[ChartMark]) -> list[RangeChartMark]:
    """
    Build ranges from marks laid out as (min, max) pairs.

    Raises:
        ValueError: If the number of marks is odd
    """
    if len(marks) % 2:
        raise ValueError(f"Expected (min, max) pairs, got {len(marks)} marks")
    return [
        RangeChartMark(x=low.x, min_point=low, max_point=high, label=low.label)
        for low, high in zip(marks[::2], marks[1::2])
    ]

"""
Sleep stage merging and stage chart marks.

Coalesces adjacent sleep stages of the same classification into contiguous
blocks. After merging no two neighbouring blocks share a classification
unless a gap separates them.
"""

from collections.abc import Sequence
from datetime import datetime

import structlog

from ..chart.marks import ChartMark, RangeChartMark
from ..errors import UnsortedInputError
from ..types.health_records import SleepSession, SleepStage, SleepStageType

logger = structlog.get_logger(__name__)

# Row of each classification on a sleep stage chart, deepest first
STAGE_ROWS = {
    SleepStageType.DEEP: 0.0,
    SleepStageType.LIGHT: 1.0,
    SleepStageType.REM: 2.0,
    SleepStageType.AWAKE: 3.0,
    SleepStageType.UNKNOWN: 4.0,
}


def _check_sorted(stages: Sequence[SleepStage]) -> None:
    for index in range(1, len(stages)):
        if stages[index].start_time < stages[index - 1].start_time:
            raise UnsortedInputError(index)


def merge_consecutive_stages(stages: Sequence[SleepStage]) -> list[SleepStage]:
    """
    Merge touching or overlapping stages that share a classification.

    A stage extends the running block when its classification matches and it
    starts no later than the block ends; the block then ends at the later of
    the two ends. Anything else closes the block.

    Args:
        stages: Stages sorted by start time

    Returns:
        Merged stages in input order

    Raises:
        UnsortedInputError: If stages are not sorted by start time
    """
    if not stages:
        return []
    _check_sorted(stages)
    if len(stages) == 1:
        return list(stages)

    merged: list[SleepStage] = []
    current = stages[0]

    for stage in stages[1:]:
        if stage.stage == current.stage and stage.start_time <= current.end_time:
            current = SleepStage(
                start_time=current.start_time,
                end_time=max(current.end_time, stage.end_time),
                stage=current.stage,
            )
        else:
            merged.append(current)
            current = stage

    merged.append(current)

    if len(merged) < len(stages):
        logger.debug("sleep_stages_merged", input_count=len(stages), output_count=len(merged))
    return merged


def merge_session_stages(session: SleepSession) -> SleepSession:
    """Return a copy of session with its stages merged."""
    return SleepSession(
        start_time=session.start_time,
        end_time=session.end_time,
        stages=tuple(merge_consecutive_stages(session.stages)),
    )


def _epoch_millis(instant: datetime) -> float:
    return instant.timestamp() * 1000.0


def to_sleep_stage_range_marks(stages: Sequence[SleepStage]) -> list[RangeChartMark]:
    """
    Convert stages into horizontal range marks.

    Each mark spans from the stage's start to its end in epoch milliseconds
    (min_point.x and max_point.x) on the classification's row (y of both
    points, see STAGE_ROWS). The mark's own x is the start.
    """
    marks = []
    for stage in stages:
        row = STAGE_ROWS[stage.stage]
        start = _epoch_millis(stage.start_time)
        end = _epoch_millis(stage.end_time)
        marks.append(
            RangeChartMark(
                x=start,
                min_point=ChartMark(x=start, y=row, label=stage.stage.name),
                max_point=ChartMark(x=end, y=row, label=stage.stage.name),
                label=stage.stage.name,
            )
        )
    return marks


def stage_minutes(stages: Sequence[SleepStage]) -> dict[SleepStageType, float]:
    """Total minutes per classification, for classifications present in stages."""
    totals: dict[SleepStageType, float] = {}
    for stage in stages:
        totals[stage.stage] = totals.get(stage.stage, 0.0) + stage.get_duration_minutes()
    return totals

"""
Sleep stage merging and sleep stage chart marks.
"""

from .stage_merger import (
    STAGE_ROWS,
    merge_consecutive_stages,
    merge_session_stages,
    stage_minutes,
    to_sleep_stage_range_marks,
)

__all__ = [
    "STAGE_ROWS",
    "merge_consecutive_stages",
    "merge_session_stages",
    "stage_minutes",
    "to_sleep_stage_range_marks",
]

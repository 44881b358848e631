"""Progress query package."""

from src.queries.progress import (
    EMPTY_STATE_MESSAGE,
    build_progress_series,
    collect_tags,
    compute_statistics,
    describe_filter,
    filter_by_difficulty,
    format_display_date,
)

__all__ = [
    "EMPTY_STATE_MESSAGE",
    "build_progress_series",
    "collect_tags",
    "compute_statistics",
    "describe_filter",
    "filter_by_difficulty",
    "format_display_date",
]

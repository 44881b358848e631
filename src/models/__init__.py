"""
Data Models Package

This package contains all Pydantic models used by the progress tracker.
Everything stored or derived by the tracker conforms to these schemas.
"""

from src.models.problem import (
    DIFFICULTY_FILTER_ALL,
    Difficulty,
    DifficultyFilter,
    Problem,
    ProblemEntry,
    ProblemStats,
    ProgressSeries,
    ValidationIssue,
    ValidationResult,
    new_problem_id,
    parse_difficulty_filter,
    parse_tags,
)
from src.models.audit import (
    ActivityEvent,
    ActivityEventBuilder,
    ActivityEventType,
    ActivitySeverity,
)

__all__ = [
    # Problem models
    "DIFFICULTY_FILTER_ALL",
    "Difficulty",
    "DifficultyFilter",
    "Problem",
    "ProblemEntry",
    "ProblemStats",
    "ProgressSeries",
    "ValidationIssue",
    "ValidationResult",
    "new_problem_id",
    "parse_difficulty_filter",
    "parse_tags",
    # Activity models
    "ActivityEvent",
    "ActivityEventBuilder",
    "ActivityEventType",
    "ActivitySeverity",
]

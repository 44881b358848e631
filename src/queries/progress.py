"""
Progress Queries

DESIGN DECISION: Everything the pages display is derived from the stored
collection by these pure functions. Nothing derived is ever stored, so the
tile counts and the chart can never drift from the list of problems.

- filtering by difficulty for the card list
- per-difficulty counts for the stat tiles
- the cumulative series for the progress chart
"""

from collections import Counter
from datetime import date
from typing import Iterable, Optional, Union

from src.models.problem import (
    DIFFICULTY_FILTER_ALL,
    Difficulty,
    DifficultyFilter,
    Problem,
    ProblemStats,
    ProgressSeries,
    parse_difficulty_filter,
)


EMPTY_STATE_MESSAGE = "No problems found. Add your first problem!"


def filter_by_difficulty(
    problems: Iterable[Problem],
    difficulty_filter: Optional[DifficultyFilter] = DIFFICULTY_FILTER_ALL,
) -> list[Problem]:
    """
    Keep problems matching the filter, preserving order.

    "all" (or None) keeps everything.
    """
    difficulty = parse_difficulty_filter(difficulty_filter)
    if difficulty is None:
        return list(problems)
    return [problem for problem in problems if problem.difficulty == difficulty]


def compute_statistics(problems: Iterable[Problem]) -> ProblemStats:
    """Total and per-difficulty counts."""
    counts = Counter(problem.difficulty for problem in problems)
    return ProblemStats(
        total=sum(counts.values()),
        easy=counts[Difficulty.EASY],
        medium=counts[Difficulty.MEDIUM],
        hard=counts[Difficulty.HARD],
    )


def build_progress_series(problems: Iterable[Problem]) -> ProgressSeries:
    """
    Cumulative number of problems solved, one point per solved date.

    Problems are grouped by the day they were solved; the distinct days are
    sorted ascending and each point carries the running total up to and
    including that day.
    """
    per_day = Counter(problem.solved_on for problem in problems)

    dates = sorted(per_day)
    counts = []
    total = 0
    for day in dates:
        total += per_day[day]
        counts.append(total)

    return ProgressSeries(
        dates=dates,
        labels=[format_display_date(day) for day in dates],
        counts=counts,
    )


def format_display_date(value: Union[date, str]) -> str:
    """
    Long human form of a date: "January 5, 2025".

    Accepts a date or an ISO "YYYY-MM-DD" string.
    """
    if isinstance(value, str):
        value = date.fromisoformat(value)
    return f"{value:%B} {value.day}, {value.year}"


def describe_filter(
    difficulty_filter: Optional[DifficultyFilter],
    count: int,
    tag: Optional[str] = None,
) -> str:
    """Short header for the card list, naming the tag when one is selected."""
    difficulty = parse_difficulty_filter(difficulty_filter)
    if count == 0:
        return EMPTY_STATE_MESSAGE
    noun = "problem" if count == 1 else "problems"
    suffix = f" tagged {tag}" if tag else ""
    if difficulty is None:
        if suffix:
            return f"Showing {count} {noun}{suffix}"
        return f"Showing all {count} {noun}"
    return f"Showing {count} {difficulty.label.lower()} {noun}{suffix}"


def collect_tags(problems: Iterable[Problem]) -> list[str]:
    """Distinct tags across the collection, most used first."""
    counts = Counter()
    display = {}
    for problem in problems:
        for tag in problem.tags:
            key = tag.lower()
            counts[key] += 1
            display.setdefault(key, tag)
    ordered = sorted(counts, key=lambda key: (-counts[key], key))
    return [display[key] for key in ordered]

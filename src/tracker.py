"""
Problem Tracker Service

This module ties the components together and defines the operations the
pages call:
1. Add (entry -> problem -> prepend -> persist -> log)
2. List with a difficulty filter
3. Delete, only after the user confirmed
4. Statistics and the progress series, always recomputed from storage

DESIGN DECISION: The tracker never caches the collection. Every read goes
to storage, so the card list, the tiles and the chart always agree with
what is on disk after any mutation.
"""

from datetime import date
from typing import Callable, Optional, TypeVar

import structlog

from src.audit import ActivityLogger, configure_logging
from src.config import get_settings
from src.models.problem import (
    DIFFICULTY_FILTER_ALL,
    Difficulty,
    DifficultyFilter,
    Problem,
    ProblemEntry,
    ProblemStats,
    ProgressSeries,
    ValidationResult,
    new_problem_id,
    parse_difficulty_filter,
)
from src.queries import build_progress_series, compute_statistics, filter_by_difficulty
from src.services.storage import (
    InMemoryProblemStorage,
    JsonFileProblemStorage,
    JsonLinesActivityStorage,
    NotFoundError,
    ProblemStorageInterface,
    StorageError,
)
from src.validation import ProblemValidator


logger = structlog.get_logger(__name__)

T = TypeVar("T")

SAMPLE_PROBLEM_ID = "1"


def build_sample_problem(today: Optional[date] = None) -> Problem:
    """The problem an empty collection is seeded with."""
    return Problem(
        id=SAMPLE_PROBLEM_ID,
        title="Two Sum",
        link="https://leetcode.com/problems/two-sum/",
        solved_on=today or date.today(),
        difficulty=Difficulty.EASY,
        solution=(
            "Used hash map to store numbers and their indices. "
            "For each number, check if complement exists in map."
        ),
        time_complexity="O(n)",
        space_complexity="O(n)",
        tags=["Array", "Hash Table"],
    )


class ProblemTracker:
    """
    Orchestrates every operation on the problem collection.

    Deletion requires explicit confirmation from the caller.
    """

    def __init__(
        self,
        storage: ProblemStorageInterface,
        activity_logger: Optional[ActivityLogger] = None,
        validator: Optional[ProblemValidator] = None,
        seed_sample_data: bool = True,
    ):
        self._storage = storage
        self._activity = activity_logger or ActivityLogger()
        self._validator = validator or ProblemValidator()
        self._seed_sample_data = seed_sample_data

    @property
    def storage(self) -> ProblemStorageInterface:
        return self._storage

    @property
    def activity(self) -> ActivityLogger:
        return self._activity

    @property
    def validator(self) -> ProblemValidator:
        return self._validator

    def _call_storage(
        self,
        operation: str,
        func: Callable[[], T],
        problem_id: Optional[str] = None,
    ) -> T:
        """Run a storage call, recording failures before re-raising."""
        try:
            return func()
        except StorageError as e:
            self._activity.log_storage_error(
                operation=operation,
                error_message=str(e),
                problem_id=problem_id,
            )
            raise

    def initialize(self, today: Optional[date] = None) -> int:
        """
        Load the collection, seeding the sample problem if it is empty.

        Returns:
            Number of problems in the collection afterwards
        """
        problems = self._call_storage("load", self._storage.load_problems)
        self._activity.log_store_loaded(self._storage.location, len(problems))

        if not problems and self._seed_sample_data:
            sample = build_sample_problem(today)
            self._call_storage(
                "seed",
                lambda: self._storage.save_problems([sample]),
                problem_id=sample.id,
            )
            self._activity.log_sample_seeded(sample.id, sample.title)
            return 1

        return len(problems)

    def check_entry(self, entry: ProblemEntry) -> ValidationResult:
        """Advisory checks for an entry against the stored collection."""
        existing = self._call_storage("load", self._storage.load_problems)
        return self._validator.validate(entry, existing)

    def add_problem(self, entry: ProblemEntry) -> Problem:
        """
        Record a new problem at the front of the collection.

        Returns:
            The stored Problem with its new id
        """
        problem = Problem.from_entry(entry, problem_id=new_problem_id())
        self._call_storage(
            "add",
            lambda: self._storage.add_problem(problem),
            problem_id=problem.id,
        )
        self._activity.log_problem_added(
            problem_id=problem.id,
            title=problem.title,
            difficulty=problem.difficulty.value,
            solved_on=problem.solved_on.isoformat(),
        )
        return problem

    def list_problems(
        self,
        difficulty_filter: Optional[DifficultyFilter] = DIFFICULTY_FILTER_ALL,
        tag: Optional[str] = None,
    ) -> list[Problem]:
        """Problems matching the filter, newest first."""
        # Validate the filter before touching storage
        parse_difficulty_filter(difficulty_filter)
        problems = self._call_storage(
            "list",
            lambda: self._storage.list_problems(tag=tag),
        )
        return filter_by_difficulty(problems, difficulty_filter)

    def get_problem(self, problem_id: str) -> Problem:
        """
        Raises:
            NotFoundError: If no problem has this id
        """
        problem = self._call_storage(
            "get",
            lambda: self._storage.get_problem_by_id(problem_id),
            problem_id=problem_id,
        )
        if problem is None:
            raise NotFoundError(f"Problem not found: {problem_id}")
        return problem

    def problem_link(self, problem_id: str) -> str:
        """Link to open for 'View on LeetCode'."""
        return self.get_problem(problem_id).link

    def delete_problem(self, problem_id: str, confirmed: bool) -> bool:
        """
        Delete a problem once the user has confirmed.

        Returns:
            True if the problem was removed. False if the user declined
            or the id is unknown; the collection is unchanged in both cases.
        """
        if not confirmed:
            self._activity.log_delete_cancelled(problem_id)
            return False

        existing = self._call_storage(
            "get",
            lambda: self._storage.get_problem_by_id(problem_id),
            problem_id=problem_id,
        )
        if existing is None:
            self._activity.log_delete_missing(problem_id)
            return False

        removed = self._call_storage(
            "delete",
            lambda: self._storage.delete_problem(problem_id),
            problem_id=problem_id,
        )
        if removed:
            self._activity.log_problem_deleted(problem_id, existing.title)
        return removed

    def get_statistics(self) -> ProblemStats:
        problems = self._call_storage("load", self._storage.load_problems)
        return compute_statistics(problems)

    def get_progress_series(self) -> ProgressSeries:
        problems = self._call_storage("load", self._storage.load_problems)
        return build_progress_series(problems)


def create_app_components(use_file_storage: bool = True) -> ProblemTracker:
    """
    Factory function to create a fully wired tracker.

    Args:
        use_file_storage: Whether to use the JSON file in the data directory.
                    Set to False to keep everything in memory.

    Falls back to in-memory storage if the data directory cannot be created.
    """
    settings = get_settings()
    app_settings = settings.app
    storage_settings = settings.storage

    configure_logging(app_settings.log_level)

    storage: ProblemStorageInterface
    activity_logger = ActivityLogger()

    if use_file_storage:
        try:
            storage_settings.data_dir.mkdir(parents=True, exist_ok=True)
            storage = JsonFileProblemStorage(
                storage_settings.problems_path,
                key=storage_settings.storage_key,
            )
            if storage_settings.persist_activity:
                activity_logger = ActivityLogger(
                    JsonLinesActivityStorage(storage_settings.activity_path)
                )
        except OSError as e:
            logger.warning(
                "file_storage_unavailable",
                data_dir=str(storage_settings.data_dir),
                error=str(e),
            )
            storage = InMemoryProblemStorage()
    else:
        storage = InMemoryProblemStorage()

    return ProblemTracker(
        storage=storage,
        activity_logger=activity_logger,
        validator=ProblemValidator(app_settings.future_date_tolerance_days),
        seed_sample_data=app_settings.seed_sample_data,
    )

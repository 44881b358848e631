"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep the JSON file format out of the tracker logic
2. Use in-memory storage for testing
3. Fall back to in-memory storage when the data directory is unusable

The interface is intentionally small: one collection, whole-document
reads and writes, plus the handful of operations the tracker needs.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.models.audit import ActivityEvent
from src.models.problem import Difficulty, Problem


class ProblemStorageInterface(ABC):
    """
    Abstract interface for problem storage operations.

    The collection is ordered: index 0 is the most recently added problem.
    Implementations only need load_problems/save_problems; the other
    operations are expressed in terms of those two.
    """

    @abstractmethod
    def load_problems(self) -> list[Problem]:
        """
        Load the whole collection in stored order.

        Raises:
            StorageError: If the backing store cannot be read
        """
        pass

    @abstractmethod
    def save_problems(self, problems: list[Problem]) -> None:
        """
        Replace the whole collection.

        Raises:
            StorageError: If the backing store cannot be written
        """
        pass

    @property
    def location(self) -> str:
        """Human-readable description of where the data lives."""
        return type(self).__name__

    def add_problem(self, problem: Problem) -> Problem:
        """
        Insert a problem at the front of the collection and persist.

        Raises:
            DuplicateError: If a problem with the same id already exists
        """
        problems = self.load_problems()
        if any(existing.id == problem.id for existing in problems):
            raise DuplicateError(f"Problem already exists: {problem.id}")
        problems.insert(0, problem)
        self.save_problems(problems)
        return problem

    def get_problem_by_id(self, problem_id: str) -> Optional[Problem]:
        """Return the problem with this id, or None."""
        for problem in self.load_problems():
            if problem.id == problem_id:
                return problem
        return None

    def delete_problem(self, problem_id: str) -> bool:
        """
        Remove the problem with this id and persist.

        Returns:
            True if a problem was removed, False if the id was unknown
        """
        problems = self.load_problems()
        remaining = [problem for problem in problems if problem.id != problem_id]
        if len(remaining) == len(problems):
            return False
        self.save_problems(remaining)
        return True

    def list_problems(
        self,
        difficulty: Optional[Difficulty] = None,
        tag: Optional[str] = None,
    ) -> list[Problem]:
        """
        List problems in stored order with optional filters.

        Args:
            difficulty: Keep only problems with exactly this difficulty
            tag: Keep only problems carrying this tag (case-insensitive)
        """
        problems = self.load_problems()
        if difficulty is not None:
            problems = [p for p in problems if p.difficulty == difficulty]
        if tag:
            wanted = tag.strip().lower()
            problems = [
                p for p in problems
                if any(t.lower() == wanted for t in p.tags)
            ]
        return problems

    def count(self) -> int:
        return len(self.load_problems())


class ActivityStorageInterface(ABC):
    """
    Abstract interface for activity log storage.

    Activity logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_event(self, event: ActivityEvent) -> bool:
        """
        Append an event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    def get_recent_events(self, limit: int = 100) -> list[ActivityEvent]:
        """
        Get the most recent events, newest first.
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class DuplicateError(StorageError):
    """Attempted to insert a duplicate entity."""
    pass


class CorruptStoreError(StorageError):
    """The backing file exists but does not hold a readable collection."""
    pass

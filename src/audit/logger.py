"""
Activity Logger

DESIGN DECISION: Every change to the collection is logged.
This provides:
1. A history of additions and confirmed deletions
2. Debugging capability when the data file misbehaves
3. A trail for changes that cannot be undone

The activity logger:
- Always logs locally through structlog
- Gracefully handles failures (doesn't crash the app if logging fails)
- Optionally persists events to an append-only activity file
"""

import logging
import sys
from typing import Optional

import structlog

from src.models.audit import ActivityEvent, ActivityEventBuilder
from src.services.storage import ActivityStorageInterface


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """
    Route stdlib logging (and therefore structlog) to stderr at `level`.

    Safe to call more than once; only the level changes after the first call.
    """
    root = logging.getLogger()
    if not any(getattr(h, "_tracker_handler", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(message)s"))
        handler._tracker_handler = True
        root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


class ActivityLogger:
    """
    Central activity logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. The activity file (for persistence), when configured
    """

    def __init__(
        self,
        storage: Optional[ActivityStorageInterface] = None,
    ):
        """
        Initialize activity logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger("tracker.activity")

    def log(self, event: ActivityEvent) -> bool:
        """
        Log an activity event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity.value == "error":
            self._logger.error("activity_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("activity_event", **log_dict)
        elif event.severity.value == "debug":
            self._logger.debug("activity_event", **log_dict)
        else:
            self._logger.info("activity_event", **log_dict)

        if self._storage:
            try:
                return self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "activity_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_store_loaded(self, location: str, problem_count: int) -> None:
        self.log(ActivityEventBuilder.store_loaded(location, problem_count))

    def log_sample_seeded(self, problem_id: str, title: str) -> None:
        """Log seeding of the sample problem."""
        self.log(ActivityEventBuilder.sample_seeded(problem_id, title))

    def log_problem_added(
        self,
        problem_id: str,
        title: str,
        difficulty: str,
        solved_on: str,
    ) -> None:
        """Log a newly added problem."""
        self.log(ActivityEventBuilder.problem_added(
            problem_id=problem_id,
            title=title,
            difficulty=difficulty,
            solved_on=solved_on,
        ))

    def log_problem_deleted(self, problem_id: str, title: Optional[str]) -> None:
        """Log a confirmed deletion."""
        self.log(ActivityEventBuilder.problem_deleted(problem_id, title))

    def log_delete_cancelled(self, problem_id: str) -> None:
        self.log(ActivityEventBuilder.delete_cancelled(problem_id))

    def log_delete_missing(self, problem_id: str) -> None:
        self.log(ActivityEventBuilder.delete_missing(problem_id))

    def log_storage_error(
        self,
        operation: str,
        error_message: str,
        problem_id: Optional[str] = None,
    ) -> None:
        """Log a storage failure."""
        self.log(ActivityEventBuilder.storage_error(
            operation=operation,
            error_message=error_message,
            problem_id=problem_id,
        ))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        """Log an unexpected error."""
        self.log(ActivityEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
        ))

    def recent_events(self, limit: int = 20) -> list[ActivityEvent]:
        """Most recent persisted events, newest first (empty without storage)."""
        if not self._storage:
            return []
        return self._storage.get_recent_events(limit=limit)

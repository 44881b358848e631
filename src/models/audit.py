"""
Activity Models for the Progress Tracker

Every change to the collection is recorded as an activity event.
This provides:
1. A history of what was added and removed, and when
2. Debugging information when the data file goes wrong
3. A record of deletions the user confirmed (there is no undo)

DESIGN DECISION: The activity log is append-only. We never delete or modify it.
"""

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


DESCRIPTION_MAX_LENGTH = 500
DESCRIPTION_TITLE_LENGTH = 80


def _shorten(text: str, limit: int = DESCRIPTION_TITLE_LENGTH) -> str:
    """Clip user text embedded in a description; details keep the full value."""
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


class ActivityEventType(str, Enum):
    """Types of events we record."""
    # Collection lifecycle
    STORE_LOADED = "store_loaded"
    SAMPLE_SEEDED = "sample_seeded"

    # User actions
    PROBLEM_ADDED = "problem_added"
    PROBLEM_DELETED = "problem_deleted"
    DELETE_CANCELLED = "delete_cancelled"
    DELETE_MISSING = "delete_missing"

    # Failures
    STORAGE_ERROR = "storage_error"
    SYSTEM_ERROR = "system_error"


class ActivitySeverity(str, Enum):
    """Severity level for activity events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class ActivityEvent(BaseModel):
    """
    A single activity event.

    Every significant change creates one of these.
    """

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    event_type: ActivityEventType = Field(
        ...,
        description="Type of event"
    )
    severity: ActivitySeverity = Field(
        default=ActivitySeverity.INFO,
        description="Event severity"
    )

    problem_id: Optional[str] = Field(
        default=None,
        description="Problem this event relates to, if any"
    )

    description: str = Field(
        ...,
        max_length=DESCRIPTION_MAX_LENGTH,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "problem_id": self.problem_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }

    def to_json_line(self) -> str:
        """Serialize as one line of the activity log file."""
        return json.dumps(self.model_dump(mode="json"), ensure_ascii=False)


class ActivityEventBuilder:
    """
    Helper class to build activity events with common patterns.

    Usage:
        event = ActivityEventBuilder.problem_added(problem_id, title, difficulty)
        event = ActivityEventBuilder.problem_deleted(problem_id, title)
    """

    @staticmethod
    def store_loaded(location: str, problem_count: int) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.STORE_LOADED,
            severity=ActivitySeverity.DEBUG,
            description=f"Loaded {problem_count} problems from {_shorten(location, 300)}",
            details={
                "location": location,
                "problem_count": problem_count,
            },
        )

    @staticmethod
    def sample_seeded(problem_id: str, title: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.SAMPLE_SEEDED,
            problem_id=problem_id,
            description=f"Empty collection seeded with sample problem: {_shorten(title)}",
            details={"title": title},
        )

    @staticmethod
    def problem_added(
        problem_id: str,
        title: str,
        difficulty: str,
        solved_on: str,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.PROBLEM_ADDED,
            problem_id=problem_id,
            description=f"Problem added: {_shorten(title)} ({difficulty})",
            details={
                "title": title,
                "difficulty": difficulty,
                "date": solved_on,
            },
            is_user_action=True,
        )

    @staticmethod
    def problem_deleted(problem_id: str, title: Optional[str]) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.PROBLEM_DELETED,
            problem_id=problem_id,
            description=f"Problem deleted: {_shorten(title or problem_id)}",
            details={"title": title},
            is_user_action=True,
        )

    @staticmethod
    def delete_cancelled(problem_id: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.DELETE_CANCELLED,
            severity=ActivitySeverity.DEBUG,
            problem_id=problem_id,
            description="User declined the delete confirmation",
            is_user_action=True,
        )

    @staticmethod
    def delete_missing(problem_id: str) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.DELETE_MISSING,
            severity=ActivitySeverity.WARNING,
            problem_id=problem_id,
            description=f"Delete requested for unknown problem id: {_shorten(problem_id)}",
            is_user_action=True,
        )

    @staticmethod
    def storage_error(
        operation: str,
        error_message: str,
        problem_id: Optional[str] = None,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.STORAGE_ERROR,
            severity=ActivitySeverity.ERROR,
            problem_id=problem_id,
            description=f"Storage error during {operation}",
            error_message=error_message,
            details={"operation": operation},
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> ActivityEvent:
        return ActivityEvent(
            event_type=ActivityEventType.SYSTEM_ERROR,
            severity=ActivitySeverity.ERROR,
            description=f"System error: {_shorten(error_type)}",
            error_message=error_message,
            details=details or {},
        )

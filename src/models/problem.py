"""
Core Data Models for the Progress Tracker

These models define the schemas for everything the tracker stores or derives.
They are designed to:
1. Parse the raw add-form input (including comma-separated tags)
2. Be serializable in the same camelCase shape the browser version stored
3. Carry derived views (statistics, progress series) with checked invariants

DESIGN DECISION: Stored documents use camelCase keys (timeComplexity,
spaceComplexity) so an existing `problems` export loads unchanged.
Python code always uses the snake_case attribute names.
"""

from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional, Union
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_problem_id() -> str:
    """Generate a fresh problem id."""
    return uuid4().hex


def parse_tags(raw: Union[str, list, tuple, None]) -> list[str]:
    """
    Split the tags input into a clean list.

    "Array, Hash Table,, " -> ["Array", "Hash Table"]
    """
    if raw is None:
        return []
    if isinstance(raw, str):
        pieces = raw.split(",")
    else:
        pieces = [str(piece) for piece in raw]
    return [piece.strip() for piece in pieces if piece.strip()]


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class Difficulty(str, Enum):
    """Problem difficulty as shown on the judge."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def label(self) -> str:
        """Display form: first letter upper-cased."""
        return self.value[:1].upper() + self.value[1:]


# Pseudo-difficulty that matches every problem
DIFFICULTY_FILTER_ALL = "all"

DifficultyFilter = Union[Difficulty, str]


def parse_difficulty_filter(value: Optional[DifficultyFilter]) -> Optional[Difficulty]:
    """
    Resolve a filter value to a Difficulty, or None for "all".

    Raises ValueError for anything that is neither "all" nor a difficulty.
    """
    if value is None or value == DIFFICULTY_FILTER_ALL:
        return None
    if isinstance(value, Difficulty):
        return value
    return Difficulty(str(value).strip().lower())


# =============================================================================
# PROBLEM MODELS
# =============================================================================

class ProblemEntry(BaseModel):
    """
    A problem as submitted from the add form.

    Nothing here is required beyond the shape: the tracker records
    whatever the user typed. Advisory checks live in the validator.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    title: str = Field(
        ...,
        description="Problem title, e.g. 'Two Sum'"
    )
    link: str = Field(
        default="",
        description="URL of the problem on the judge"
    )
    solved_on: date = Field(
        ...,
        alias="date",
        description="Day the problem was solved"
    )
    difficulty: Difficulty = Field(
        ...,
        description="Problem difficulty"
    )
    solution: str = Field(
        default="",
        description="Solution approach in the user's own words"
    )
    time_complexity: str = Field(
        default="",
        description="Time complexity note, e.g. O(n)"
    )
    space_complexity: str = Field(
        default="",
        description="Space complexity note, e.g. O(1)"
    )
    tags: list[str] = Field(
        default_factory=list,
        description="Topic tags"
    )

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v):
        """Accept the raw comma-separated form text as well as a list."""
        return parse_tags(v)

    @field_validator("difficulty", mode="before")
    @classmethod
    def normalize_difficulty(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v


class Problem(ProblemEntry):
    """
    A problem that has been recorded in the collection.

    Ids are opaque strings. Ids read back from storage are kept as-is
    (the seeded sample uses "1"), new ones come from new_problem_id().
    """

    id: str = Field(
        default_factory=new_problem_id,
        min_length=1,
        description="Unique problem id"
    )
    created_at: datetime = Field(
        default_factory=_utcnow,
        description="When the problem was recorded"
    )

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        # Older exports stored numeric timestamps
        if isinstance(v, int):
            return str(v)
        return v

    @classmethod
    def from_entry(cls, entry: ProblemEntry, problem_id: Optional[str] = None) -> "Problem":
        """Record an entry under a fresh (or given) id."""
        data = entry.model_dump()
        if problem_id is not None:
            data["id"] = problem_id
        return cls(**data)

    def to_document(self) -> dict:
        """Convert to the JSON document stored on disk."""
        return self.model_dump(mode="json", by_alias=True)

    def to_log_dict(self) -> dict:
        """Compact form for structured logging."""
        return {
            "problem_id": self.id,
            "title": self.title,
            "difficulty": self.difficulty.value,
            "date": self.solved_on.isoformat(),
            "tags": list(self.tags),
        }


# =============================================================================
# DERIVED VIEWS
# =============================================================================

class ProblemStats(BaseModel):
    """Aggregate counts shown in the stat tiles."""

    total: int = Field(default=0, ge=0)
    easy: int = Field(default=0, ge=0)
    medium: int = Field(default=0, ge=0)
    hard: int = Field(default=0, ge=0)

    def count_for(self, difficulty: Difficulty) -> int:
        return getattr(self, difficulty.value)


class ProgressSeries(BaseModel):
    """
    Cumulative problems solved over time.

    One point per distinct solved date, dates ascending.
    counts[i] is the number of problems solved on or before dates[i].
    """

    dates: list[date] = Field(default_factory=list)
    labels: list[str] = Field(default_factory=list)
    counts: list[int] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_shape(self) -> "ProgressSeries":
        if not (len(self.dates) == len(self.labels) == len(self.counts)):
            raise ValueError("dates, labels and counts must have the same length")
        if any(b < a for a, b in zip(self.counts, self.counts[1:])):
            raise ValueError("cumulative counts must be non-decreasing")
        if any(b <= a for a, b in zip(self.dates, self.dates[1:])):
            raise ValueError("dates must be strictly ascending")
        return self

    @property
    def is_empty(self) -> bool:
        return not self.dates

    @property
    def total(self) -> int:
        """Final cumulative count (0 for an empty series)."""
        return self.counts[-1] if self.counts else 0


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single advisory finding about an entry."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'duplicate')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """
    Result of checking an entry before it is added.

    These findings never block a save.
    """

    checked_at: datetime = Field(default_factory=_utcnow)
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return any(issue.severity == "warning" for issue in self.issues)

    @property
    def warnings(self) -> list[str]:
        return [issue.message for issue in self.issues if issue.severity == "warning"]

    @property
    def is_clean(self) -> bool:
        return not self.issues

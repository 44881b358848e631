"""
Advisory Entry Checks

DESIGN DECISION: Checks here only ever produce findings for the user to
read. They never block a save and never rewrite what the user typed; the
tracker records whatever was submitted.

Checks:
- Missing title
- Missing or non-http link
- Solved date in the future
- Same title already recorded
- Missing complexity notes
"""

from datetime import date, timedelta
from typing import Iterable, Optional
from urllib.parse import urlparse

from src.config import get_settings
from src.models.problem import (
    Problem,
    ProblemEntry,
    ValidationIssue,
    ValidationResult,
)


class ProblemValidator:
    """Checks a new entry against the existing collection."""

    def __init__(self, future_date_tolerance_days: Optional[int] = None):
        if future_date_tolerance_days is None:
            future_date_tolerance_days = get_settings().app.future_date_tolerance_days
        self._tolerance = timedelta(days=future_date_tolerance_days)

    def _check_fields(self, entry: ProblemEntry, today: date) -> list[ValidationIssue]:
        issues = []

        if not entry.title:
            issues.append(ValidationIssue(
                field="title",
                issue_type="missing",
                message="Title is empty",
                severity="warning",
            ))

        if not entry.link:
            issues.append(ValidationIssue(
                field="link",
                issue_type="missing",
                message="No link recorded; 'View on LeetCode' will have nowhere to go",
                severity="info",
            ))
        else:
            parsed = urlparse(entry.link)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                issues.append(ValidationIssue(
                    field="link",
                    issue_type="invalid_format",
                    message=f"Link does not look like a web address: {entry.link}",
                    severity="warning",
                ))

        if entry.solved_on > today + self._tolerance:
            issues.append(ValidationIssue(
                field="date",
                issue_type="future_date",
                message=f"Solved date ({entry.solved_on.isoformat()}) is in the future",
                severity="warning",
            ))

        missing = [
            name for name, value in (
                ("time", entry.time_complexity),
                ("space", entry.space_complexity),
            )
            if not value
        ]
        if missing:
            issues.append(ValidationIssue(
                field="complexity",
                issue_type="missing",
                message=f"No {' or '.join(missing)} complexity noted",
                severity="info",
            ))

        return issues

    def _check_duplicates(
        self,
        entry: ProblemEntry,
        existing: Iterable[Problem],
    ) -> list[ValidationIssue]:
        if not entry.title:
            return []
        wanted = entry.title.casefold()
        for problem in existing:
            if problem.title.casefold() == wanted:
                return [ValidationIssue(
                    field="title",
                    issue_type="duplicate",
                    message=(
                        f"'{problem.title}' is already recorded "
                        f"(solved {problem.solved_on.isoformat()})"
                    ),
                    severity="warning",
                )]
        return []

    def validate(
        self,
        entry: ProblemEntry,
        existing: Iterable[Problem] = (),
        today: Optional[date] = None,
    ) -> ValidationResult:
        """Run every check and collect the findings."""
        today = today or date.today()
        issues = self._check_fields(entry, today)
        issues.extend(self._check_duplicates(entry, existing))
        return ValidationResult(issues=issues)

    def summary(self, result: ValidationResult) -> str:
        """Short message for display next to the add form."""
        if result.is_clean:
            return "All good."

        lines = []
        if result.has_warnings:
            lines.append("Please double-check:")
            for issue in result.issues:
                if issue.severity == "warning":
                    lines.append(f"   • {issue.message}")

        notes = [issue.message for issue in result.issues if issue.severity == "info"]
        if notes:
            if lines:
                lines.append("")
            lines.append("Notes:")
            lines.extend(f"   • {note}" for note in notes)

        return "\n".join(lines)

"""
Local File Storage Implementation

DESIGN DECISION: A single JSON document on the local filesystem is the
storage backend because:
1. It is the direct counterpart of the browser's localStorage entry
2. No database setup required
3. The user can open, back up, or hand-edit the file
4. A list exported from the browser version loads unchanged

TRADEOFFS:
- Whole-document rewrite on every change (fine for a personal list)
- No locking (single user, single process)
- Filtering happens in Python

The document looks like {"problems": [ {...}, {...} ]}. Other top-level
keys are preserved on write, the same way other localStorage keys would be.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

import structlog
from pydantic import ValidationError

from src.models.audit import ActivityEvent
from src.models.problem import Problem
from src.services.storage.interface import (
    ActivityStorageInterface,
    CorruptStoreError,
    ProblemStorageInterface,
    StorageError,
)


logger = structlog.get_logger(__name__)


def _atomic_write_text(path: Path, text: str) -> None:
    """Write text to path via a temporary file and rename."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        dir=str(path.parent),
        prefix=f".{path.name}.",
        suffix=".tmp",
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


class JsonFileProblemStorage(ProblemStorageInterface):
    """
    JSON file implementation of problem storage.

    Problems are stored as camelCase documents in a list under `key`.
    """

    def __init__(self, path: Union[str, Path], key: str = "problems"):
        self._path = Path(path)
        self._key = key

    @property
    def path(self) -> Path:
        return self._path

    @property
    def location(self) -> str:
        return str(self._path)

    def _read_document(self) -> dict:
        """Read the whole JSON document (empty dict if no file yet)."""
        if not self._path.exists():
            return {}
        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to read {self._path}: {e}")

        if not text.strip():
            return {}

        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise CorruptStoreError(f"{self._path} is not valid JSON: {e}")

        # A bare list is the raw value of the browser's `problems` entry
        if isinstance(document, list):
            return {self._key: document}
        if not isinstance(document, dict):
            raise CorruptStoreError(
                f"{self._path} must hold a JSON object, found {type(document).__name__}"
            )
        return document

    def _records(self, document: dict) -> list:
        records = document.get(self._key)
        if records is None:
            return []
        if not isinstance(records, list):
            raise CorruptStoreError(
                f"'{self._key}' in {self._path} must be a list, "
                f"found {type(records).__name__}"
            )
        return records

    def _parse_records(self, records: list) -> tuple[list[Problem], list]:
        """Split stored records into problems and raw records that do not parse."""
        problems = []
        unreadable = []
        for record in records:
            try:
                problems.append(Problem.model_validate(record))
            except ValidationError:
                unreadable.append(record)
        return problems, unreadable

    def load_problems(self) -> list[Problem]:
        """Load the collection, skipping records that do not parse."""
        problems, unreadable = self._parse_records(self._records(self._read_document()))
        if unreadable:
            logger.warning(
                "problem_records_skipped",
                path=str(self._path),
                count=len(unreadable),
            )
        return problems

    def save_problems(self, problems: list[Problem]) -> None:
        """
        Write the collection back, preserving unrelated keys.

        Records that do not parse are written back unchanged after the
        problems, so a save never loses data the tracker cannot display.
        """
        # CorruptStoreError propagates: never overwrite a file we could not read
        document = self._read_document()
        _, unreadable = self._parse_records(self._records(document))
        document[self._key] = [problem.to_document() for problem in problems] + unreadable
        try:
            _atomic_write_text(
                self._path,
                json.dumps(document, indent=2, ensure_ascii=False) + "\n",
            )
        except OSError as e:
            raise StorageError(f"Failed to write {self._path}: {e}")


class InMemoryProblemStorage(ProblemStorageInterface):
    """
    List-backed problem storage.

    Used in tests and when the data directory cannot be used.
    Stored values are copies, so callers cannot mutate the collection
    behind the storage's back.
    """

    def __init__(self, problems: Optional[list[Problem]] = None):
        self._problems: list[Problem] = [p.model_copy(deep=True) for p in problems or []]

    @property
    def location(self) -> str:
        return "memory"

    def load_problems(self) -> list[Problem]:
        return [p.model_copy(deep=True) for p in self._problems]

    def save_problems(self, problems: list[Problem]) -> None:
        self._problems = [p.model_copy(deep=True) for p in problems]


class JsonLinesActivityStorage(ActivityStorageInterface):
    """
    Append-only activity log, one JSON object per line.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def append_event(self, event: ActivityEvent) -> bool:
        """Append an event. Failures are reported, never raised."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("a", encoding="utf-8") as handle:
                handle.write(event.to_json_line() + "\n")
            return True
        except OSError as e:
            logger.warning(
                "activity_write_failed",
                path=str(self._path),
                error=str(e),
                event_id=str(event.event_id),
            )
            return False

    def get_recent_events(self, limit: int = 100) -> list[ActivityEvent]:
        """Get recent events, newest first. Unreadable lines are skipped."""
        if not self._path.exists():
            return []
        try:
            lines = self._path.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            raise StorageError(f"Failed to read {self._path}: {e}")

        events = []
        for line in lines:
            if not line.strip():
                continue
            try:
                events.append(ActivityEvent.model_validate_json(line))
            except ValidationError:
                continue

        # Append-only, so file order is chronological
        events.reverse()
        return events[:limit]

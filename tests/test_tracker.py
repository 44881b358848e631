"""
Tests for the tracker service and its wiring.
"""

import pytest
from datetime import date

from src.audit import ActivityLogger
from src.config import get_settings
from src.models.audit import ActivityEvent, ActivityEventType
from src.models.problem import Difficulty, ProblemEntry
from src.services.storage import (
    ActivityStorageInterface,
    InMemoryProblemStorage,
    JsonFileProblemStorage,
    NotFoundError,
    StorageError,
)
from src.tracker import (
    SAMPLE_PROBLEM_ID,
    ProblemTracker,
    build_sample_problem,
    create_app_components,
)
from src.validation import ProblemValidator


class RecordingActivityStorage(ActivityStorageInterface):
    """Keeps appended events in a list."""

    def __init__(self):
        self.events: list[ActivityEvent] = []

    def append_event(self, event: ActivityEvent) -> bool:
        self.events.append(event)
        return True

    def get_recent_events(self, limit: int = 100) -> list[ActivityEvent]:
        return list(reversed(self.events))[:limit]

    @property
    def types(self) -> list[ActivityEventType]:
        return [event.event_type for event in self.events]


class FailingStorage(InMemoryProblemStorage):
    """Reads fine, every write fails."""

    def save_problems(self, problems):
        raise StorageError("disk full")


def make_entry(title="Two Sum", difficulty="easy", solved_on=date(2024, 1, 5), tags=""):
    return ProblemEntry(
        title=title,
        link=f"https://leetcode.com/problems/{title.lower().replace(' ', '-')}/",
        solved_on=solved_on,
        difficulty=difficulty,
        solution="Hash map",
        time_complexity="O(n)",
        space_complexity="O(n)",
        tags=tags,
    )


@pytest.fixture
def activity():
    return RecordingActivityStorage()


@pytest.fixture
def tracker(activity):
    return ProblemTracker(
        storage=InMemoryProblemStorage(),
        activity_logger=ActivityLogger(activity),
        validator=ProblemValidator(future_date_tolerance_days=1),
        seed_sample_data=False,
    )


class TestInitialize:
    """Tests for start-up and sample seeding."""

    def test_seeds_sample_when_empty(self, activity):
        tracker = ProblemTracker(
            storage=InMemoryProblemStorage(),
            activity_logger=ActivityLogger(activity),
            validator=ProblemValidator(future_date_tolerance_days=1),
        )

        assert tracker.initialize(today=date(2025, 3, 1)) == 1

        problems = tracker.list_problems()
        assert len(problems) == 1
        assert problems[0].id == SAMPLE_PROBLEM_ID
        assert problems[0].title == "Two Sum"
        assert problems[0].solved_on == date(2025, 3, 1)
        assert problems[0].tags == ["Array", "Hash Table"]
        assert ActivityEventType.SAMPLE_SEEDED in activity.types

    def test_does_not_seed_when_disabled(self, tracker):
        assert tracker.initialize() == 0
        assert tracker.list_problems() == []

    def test_does_not_seed_non_empty_collection(self, activity):
        storage = InMemoryProblemStorage()
        storage.add_problem(build_sample_problem(date(2024, 1, 1)).model_copy(update={"id": "x"}))
        tracker = ProblemTracker(
            storage=storage,
            activity_logger=ActivityLogger(activity),
            validator=ProblemValidator(future_date_tolerance_days=1),
        )

        assert tracker.initialize() == 1
        assert [p.id for p in tracker.list_problems()] == ["x"]
        assert ActivityEventType.SAMPLE_SEEDED not in activity.types

    def test_reseeds_after_everything_is_deleted(self, activity):
        """Test that an emptied collection is seeded again on next start-up."""
        storage = InMemoryProblemStorage()
        tracker = ProblemTracker(
            storage=storage,
            activity_logger=ActivityLogger(activity),
            validator=ProblemValidator(future_date_tolerance_days=1),
        )
        tracker.initialize()
        tracker.delete_problem(SAMPLE_PROBLEM_ID, confirmed=True)
        assert tracker.list_problems() == []

        assert tracker.initialize() == 1


class TestAddProblem:
    """Tests for adding problems."""

    def test_add_returns_stored_problem(self, tracker):
        problem = tracker.add_problem(make_entry(tags="Array, Hash Table"))
        assert problem.id
        assert problem.tags == ["Array", "Hash Table"]
        assert tracker.get_problem(problem.id).title == "Two Sum"

    def test_latest_first(self, tracker):
        """Test that the newest problem is listed first."""
        first = tracker.add_problem(make_entry("Two Sum"))
        second = tracker.add_problem(make_entry("LRU Cache", "medium"))
        assert [p.id for p in tracker.list_problems()] == [second.id, first.id]

    def test_each_add_gets_new_id(self, tracker):
        a = tracker.add_problem(make_entry())
        b = tracker.add_problem(make_entry())
        assert a.id != b.id

    def test_statistics_follow_adds(self, tracker):
        tracker.add_problem(make_entry("Two Sum", "easy"))
        tracker.add_problem(make_entry("LRU Cache", "medium"))
        tracker.add_problem(make_entry("Median of Two Sorted Arrays", "hard"))
        tracker.add_problem(make_entry("Valid Anagram", "easy"))

        stats = tracker.get_statistics()
        assert stats.total == 4
        assert stats.easy == 2
        assert stats.medium == 1
        assert stats.hard == 1

    def test_series_follows_adds(self, tracker):
        tracker.add_problem(make_entry("A", solved_on=date(2024, 1, 2)))
        tracker.add_problem(make_entry("B", solved_on=date(2024, 1, 1)))
        tracker.add_problem(make_entry("C", solved_on=date(2024, 1, 2)))

        series = tracker.get_progress_series()
        assert series.dates == [date(2024, 1, 1), date(2024, 1, 2)]
        assert series.counts == [1, 3]
        assert series.labels == ["January 1, 2024", "January 2, 2024"]

    def test_add_is_logged(self, tracker, activity):
        problem = tracker.add_problem(make_entry())
        event = activity.events[-1]
        assert event.event_type == ActivityEventType.PROBLEM_ADDED
        assert event.problem_id == problem.id
        assert event.is_user_action is True

    def test_very_long_title_is_added_and_deleted(self, tracker, activity):
        """Test that a long free-text title never breaks activity logging."""
        problem = tracker.add_problem(make_entry(title="x" * 600))

        assert tracker.get_problem(problem.id).title == "x" * 600
        assert activity.events[-1].details["title"] == "x" * 600

        assert tracker.delete_problem(problem.id, confirmed=True) is True
        assert tracker.list_problems() == []
        assert activity.events[-1].event_type == ActivityEventType.PROBLEM_DELETED

    def test_check_entry_flags_duplicate_title(self, tracker):
        tracker.add_problem(make_entry("Two Sum"))
        result = tracker.check_entry(make_entry("two sum"))
        assert any(issue.issue_type == "duplicate" for issue in result.issues)

    def test_check_entry_does_not_store(self, tracker):
        tracker.check_entry(make_entry())
        assert tracker.list_problems() == []


class TestListProblems:
    """Tests for filtering."""

    @pytest.fixture
    def filled(self, tracker):
        tracker.add_problem(make_entry("Two Sum", "easy", tags="Array"))
        tracker.add_problem(make_entry("LRU Cache", "medium", tags="Design"))
        tracker.add_problem(make_entry("Trapping Rain Water", "hard", tags="Array, Stack"))
        return tracker

    def test_all(self, filled):
        assert len(filled.list_problems("all")) == 3

    def test_by_difficulty(self, filled):
        assert [p.title for p in filled.list_problems("hard")] == ["Trapping Rain Water"]
        assert [p.title for p in filled.list_problems(Difficulty.EASY)] == ["Two Sum"]

    def test_by_tag(self, filled):
        titles = [p.title for p in filled.list_problems(tag="array")]
        assert titles == ["Trapping Rain Water", "Two Sum"]

    def test_unknown_filter_raises(self, filled):
        with pytest.raises(ValueError):
            filled.list_problems("extreme")


class TestDeleteProblem:
    """Tests for confirmed deletion."""

    def test_confirmed_delete(self, tracker, activity):
        problem = tracker.add_problem(make_entry())

        assert tracker.delete_problem(problem.id, confirmed=True) is True
        assert tracker.list_problems() == []
        assert tracker.get_statistics().total == 0
        assert tracker.get_progress_series().is_empty
        assert activity.events[-1].event_type == ActivityEventType.PROBLEM_DELETED

    def test_unconfirmed_delete_changes_nothing(self, tracker, activity):
        """Test that declining the confirmation keeps the problem."""
        problem = tracker.add_problem(make_entry())

        assert tracker.delete_problem(problem.id, confirmed=False) is False
        assert [p.id for p in tracker.list_problems()] == [problem.id]
        assert activity.events[-1].event_type == ActivityEventType.DELETE_CANCELLED

    def test_delete_unknown_id(self, tracker, activity):
        tracker.add_problem(make_entry())

        assert tracker.delete_problem("nope", confirmed=True) is False
        assert len(tracker.list_problems()) == 1
        assert activity.events[-1].event_type == ActivityEventType.DELETE_MISSING

    def test_delete_only_removes_target(self, tracker):
        keep = tracker.add_problem(make_entry("Two Sum"))
        drop = tracker.add_problem(make_entry("LRU Cache", "medium"))

        tracker.delete_problem(drop.id, confirmed=True)

        assert [p.id for p in tracker.list_problems()] == [keep.id]
        assert tracker.get_statistics().medium == 0


class TestLookups:
    """Tests for single-problem lookups."""

    def test_get_problem_missing(self, tracker):
        with pytest.raises(NotFoundError):
            tracker.get_problem("missing")

    def test_problem_link(self, tracker):
        problem = tracker.add_problem(make_entry("Two Sum"))
        assert tracker.problem_link(problem.id) == "https://leetcode.com/problems/two-sum/"


class TestStorageFailures:
    """Tests for error propagation and logging."""

    def test_failed_add_is_logged_and_raised(self, activity):
        tracker = ProblemTracker(
            storage=FailingStorage(),
            activity_logger=ActivityLogger(activity),
            validator=ProblemValidator(future_date_tolerance_days=1),
            seed_sample_data=False,
        )

        with pytest.raises(StorageError, match="disk full"):
            tracker.add_problem(make_entry())

        event = activity.events[-1]
        assert event.event_type == ActivityEventType.STORAGE_ERROR
        assert event.details["operation"] == "add"
        assert ActivityEventType.PROBLEM_ADDED not in activity.types

    def test_activity_storage_failure_does_not_break_tracker(self):
        """Test that a broken activity log never blocks an add."""

        class ExplodingActivityStorage(RecordingActivityStorage):
            def append_event(self, event):
                raise RuntimeError("boom")

        tracker = ProblemTracker(
            storage=InMemoryProblemStorage(),
            activity_logger=ActivityLogger(ExplodingActivityStorage()),
            validator=ProblemValidator(future_date_tolerance_days=1),
            seed_sample_data=False,
        )

        problem = tracker.add_problem(make_entry())
        assert tracker.get_problem(problem.id)


class TestCreateAppComponents:
    """Tests for the factory wiring."""

    @pytest.fixture(autouse=True)
    def isolated_settings(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TRACKER_STORAGE_DATA_DIR", str(tmp_path / "tracker"))
        get_settings.cache_clear()
        yield tmp_path / "tracker"
        get_settings.cache_clear()

    def test_file_storage(self, isolated_settings):
        tracker = create_app_components(use_file_storage=True)
        assert isinstance(tracker.storage, JsonFileProblemStorage)
        assert tracker.storage.path == isolated_settings / "problems.json"

    def test_file_storage_persists_between_instances(self, isolated_settings):
        """Test that a second tracker sees what the first one saved."""
        first = create_app_components(use_file_storage=True)
        first.initialize()
        added = first.add_problem(make_entry("LRU Cache", "medium"))

        second = create_app_components(use_file_storage=True)
        assert second.initialize() == 2
        assert [p.id for p in second.list_problems()] == [added.id, SAMPLE_PROBLEM_ID]
        assert (isolated_settings / "activity.jsonl").exists()

    def test_memory_storage(self):
        tracker = create_app_components(use_file_storage=False)
        assert isinstance(tracker.storage, InMemoryProblemStorage)

    def test_falls_back_to_memory_when_data_dir_unusable(self, monkeypatch, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        monkeypatch.setenv("TRACKER_STORAGE_DATA_DIR", str(blocker / "tracker"))
        get_settings.cache_clear()

        tracker = create_app_components(use_file_storage=True)
        assert isinstance(tracker.storage, InMemoryProblemStorage)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

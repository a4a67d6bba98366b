"""Tests for the day-bucket TaskStore."""

import json

import pytest

from src.core.dates import InvalidDateKeyError
from src.core.task_store import (
    DuplicateTaskError,
    InvalidTaskStateError,
    TaskNotFoundError,
    TaskStore,
    new_task,
)
from src.domain.task import EnergyLevel


@pytest.mark.unit
class TestTaskStoreBuckets:
    """Tests for get/put/add/update."""

    def test_get_missing_bucket_is_empty(self, store):
        """Unknown dates read as empty lists."""
        assert store.get("2024-05-06") == []

    def test_put_preserves_order(self, store, make_task):
        """Bucket order is insertion order."""
        tasks = [make_task(title=f"Task {i}") for i in range(3)]

        store.put("2024-05-06", tasks)

        assert [t.title for t in store.get("2024-05-06")] == ["Task 0", "Task 1", "Task 2"]

    def test_get_returns_copies(self, store, make_task):
        """Mutating a returned task does not change the store."""
        store.put("2024-05-06", [make_task(title="Original")])

        store.get("2024-05-06")[0].title = "Changed"

        assert store.get("2024-05-06")[0].title == "Original"

    def test_put_replaces_bucket(self, store, make_task):
        """Putting again replaces the previous rows."""
        first = make_task()
        store.put("2024-05-06", [first])

        replacement = make_task()
        store.put("2024-05-06", [replacement])

        assert [t.id for t in store.get("2024-05-06")] == [replacement.id]
        with pytest.raises(TaskNotFoundError):
            store.find(first.id)

    def test_put_same_ids_into_same_bucket(self, store, make_task):
        """Re-putting a bucket's own rows is allowed."""
        task = make_task()
        store.put("2024-05-06", [task])

        store.put("2024-05-06", [task.model_copy(update={"title": "Renamed"})])

        assert store.get("2024-05-06")[0].title == "Renamed"

    def test_put_rejects_id_from_other_bucket(self, store, make_task):
        """IDs are unique across the whole store."""
        task = make_task("2024-05-06")
        store.put("2024-05-06", [task])

        clash = task.model_copy(update={"scheduled_date": "2024-05-07"})
        with pytest.raises(DuplicateTaskError, match="already exists in 2024-05-06"):
            store.put("2024-05-07", [clash])

    def test_put_rejects_duplicate_ids_in_list(self, store, make_task):
        """The same ID twice in one bucket is rejected."""
        task = make_task()

        with pytest.raises(DuplicateTaskError, match="appears twice"):
            store.put("2024-05-06", [task, task])

    def test_put_rejects_wrong_scheduled_date(self, store, make_task):
        """A task must be owned by the bucket of its scheduled date."""
        with pytest.raises(InvalidTaskStateError, match="scheduled for 2024-05-07"):
            store.put("2024-05-06", [make_task("2024-05-07")])

    def test_add_appends(self, store, make_task):
        """Add keeps existing rows and appends new ones."""
        existing = make_task()
        store.put("2024-05-06", [existing])

        added = store.add("2024-05-06", [make_task(title="New")])

        assert [t.id for t in store.get("2024-05-06")] == [existing.id, added[0].id]
        assert len(store) == 2

    def test_add_rejects_existing_id(self, store, make_task):
        """Adding a row whose ID is already stored fails."""
        task = make_task()
        store.put("2024-05-06", [task])

        with pytest.raises(DuplicateTaskError):
            store.add("2024-05-06", [task])

    def test_update_in_place(self, store, make_task):
        """Update keeps the row's position."""
        tasks = [make_task(title=f"Task {i}") for i in range(3)]
        store.put("2024-05-06", tasks)

        store.update("2024-05-06", tasks[1].model_copy(update={"title": "Middle"}))

        assert [t.title for t in store.get("2024-05-06")] == ["Task 0", "Middle", "Task 2"]

    def test_update_missing_task(self, store, make_task):
        """Updating an unknown task raises TaskNotFoundError."""
        with pytest.raises(TaskNotFoundError):
            store.update("2024-05-06", make_task())

    def test_invalid_date_key(self, store):
        """Bucket keys must be YYYY-MM-DD."""
        with pytest.raises(InvalidDateKeyError):
            store.get("May 6")

    def test_dates_sorted(self, store):
        """dates() lists keys ascending regardless of insertion order."""
        store.put("2024-05-07", [])
        store.put("2024-04-30", [])

        assert store.dates() == ["2024-04-30", "2024-05-07"]


@pytest.mark.unit
class TestTaskStoreFind:
    """Tests for find and send_to_back."""

    def test_find_anywhere(self, store, make_task):
        """Without a date, find searches all buckets."""
        task = make_task("2024-05-07")
        store.put("2024-05-07", [task])

        date, found = store.find(task.id)

        assert date == "2024-05-07"
        assert found == task

    def test_find_in_wrong_bucket(self, store, make_task):
        """A date restricts the lookup to that bucket."""
        task = make_task("2024-05-07")
        store.put("2024-05-07", [task])

        with pytest.raises(TaskNotFoundError, match="in 2024-05-06"):
            store.find(task.id, "2024-05-06")

    def test_find_with_invalid_date(self, store, make_task):
        """A malformed date filter is rejected before the lookup."""
        task = make_task()
        store.put("2024-05-06", [task])

        with pytest.raises(InvalidDateKeyError):
            store.find(task.id, "2024-5-6")

    def test_send_to_back(self, store, make_task):
        """The row moves to the end of its bucket."""
        tasks = [make_task(title=f"Task {i}") for i in range(3)]
        store.put("2024-05-06", tasks)

        store.send_to_back("2024-05-06", tasks[0].id)

        assert [t.title for t in store.get("2024-05-06")] == ["Task 1", "Task 2", "Task 0"]


@pytest.mark.unit
class TestTaskStoreMove:
    """Tests for rescheduling between buckets."""

    def test_round_trip(self, store, make_task):
        """Successor gets a fresh ID; the source row stays, tagged, with its notes."""
        task = make_task("2024-05-06", energy=EnergyLevel.HIGH, duration=60, notes="Prep slides first")
        store.put("2024-05-06", [task])

        successor = store.move(task.id, "2024-05-06", "2024-05-08")

        (source,) = store.get("2024-05-06")
        assert source.id == task.id
        assert source.rescheduled_to == "2024-05-08"
        assert source.notes == "Prep slides first"

        assert store.get("2024-05-08") == [successor]
        assert successor.id != task.id
        assert successor.rescheduled_to is None
        assert successor.notes is None
        assert successor.scheduled_date == "2024-05-08"
        assert successor.title == task.title
        assert successor.energy == EnergyLevel.HIGH
        assert successor.duration_minutes == 60

    def test_notes_override(self, store, make_task):
        """Reschedule notes replace the source row's notes."""
        task = make_task(notes="old")
        store.put("2024-05-06", [task])

        store.move(task.id, "2024-05-06", "2024-05-07", notes="Blocked on legal")

        assert store.get("2024-05-06")[0].notes == "Blocked on legal"

    def test_successor_appended_after_existing(self, store, make_task):
        """The successor joins the end of the target bucket."""
        task = make_task("2024-05-06")
        existing = make_task("2024-05-07")
        store.put("2024-05-06", [task])
        store.put("2024-05-07", [existing])

        successor = store.move(task.id, "2024-05-06", "2024-05-07")

        assert [t.id for t in store.get("2024-05-07")] == [existing.id, successor.id]

    def test_successor_is_findable(self, store, make_task):
        """The new row is indexed under its target date."""
        task = make_task()
        store.put("2024-05-06", [task])

        successor = store.move(task.id, "2024-05-06", "2024-05-09")

        assert store.find(successor.id)[0] == "2024-05-09"

    def test_move_unknown_task(self, store):
        """Moving an unknown task raises TaskNotFoundError."""
        with pytest.raises(TaskNotFoundError):
            store.move("missing", "2024-05-06", "2024-05-07")

    def test_move_completed_task(self, store, make_task):
        """Completed tasks cannot be rescheduled."""
        task = make_task(completed=True)
        store.put("2024-05-06", [task])

        with pytest.raises(InvalidTaskStateError, match="completed"):
            store.move(task.id, "2024-05-06", "2024-05-07")

    def test_move_twice(self, store, make_task):
        """A source row can only be rescheduled once."""
        task = make_task()
        store.put("2024-05-06", [task])
        store.move(task.id, "2024-05-06", "2024-05-07")

        with pytest.raises(InvalidTaskStateError, match="already rescheduled"):
            store.move(task.id, "2024-05-06", "2024-05-08")

    def test_move_to_same_date(self, store, make_task):
        """Rescheduling onto the same day is rejected."""
        task = make_task()
        store.put("2024-05-06", [task])

        with pytest.raises(InvalidTaskStateError, match="already scheduled"):
            store.move(task.id, "2024-05-06", "2024-05-06")


@pytest.mark.unit
class TestTaskStoreSnapshot:
    """Tests for snapshot export/import."""

    def test_snapshot_layout(self, store):
        """Snapshot uses camelCase fields and omits unset optionals."""
        task = new_task(date="2024-05-06", title="Reply to emails", energy=EnergyLevel.LOW, duration_minutes=20)
        store.put("2024-05-06", [task])

        snapshot = store.to_snapshot()

        assert snapshot == {
            "2024-05-06": [
                {
                    "id": task.id,
                    "title": "Reply to emails",
                    "energy": "low",
                    "durationMinutes": 20,
                    "completed": False,
                    "scheduledDate": "2024-05-06",
                }
            ]
        }

    def test_from_snapshot_round_trip(self, two_day_store):
        """Loading a snapshot reproduces the store."""
        restored = TaskStore.from_snapshot(two_day_store.to_snapshot())

        assert restored.as_mapping() == two_day_store.as_mapping()

    def test_save_and_load(self, two_day_store, tmp_path):
        """Snapshots survive a trip through a JSON file."""
        path = tmp_path / "snapshots" / "tasks.json"

        two_day_store.save(path)
        restored = TaskStore.load(path)

        assert json.loads(path.read_text())["2024-05-07"][0]["energy"] == "low"
        assert restored.to_snapshot() == two_day_store.to_snapshot()

    def test_load_missing_file(self, tmp_path):
        """A missing snapshot starts an empty store."""
        restored = TaskStore.load(tmp_path / "absent.json")

        assert len(restored) == 0
        assert restored.dates() == []

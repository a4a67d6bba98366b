"""Unit tests for intake_service module."""

import pytest

from src.core.dates import InvalidDateKeyError
from src.domain.create_models import TaskCreate
from src.domain.task import EnergyLevel, Priority
from src.services import intake_service


@pytest.mark.unit
class TestSplitBrainDump:
    """Tests for split_brain_dump."""

    def test_trims_and_drops_blank_lines(self):
        """Whitespace-only lines are dropped and titles trimmed."""
        raw = "  Reply to emails \n\n   \nPresent budget proposal\r\n"

        assert intake_service.split_brain_dump(raw) == ["Reply to emails", "Present budget proposal"]

    def test_empty_text(self):
        """Empty text has no lines."""
        assert intake_service.split_brain_dump("") == []


@pytest.mark.unit
class TestAnalyzeBrainDump:
    """Tests for analyze_brain_dump."""

    def test_drafts_follow_line_order(self):
        """Each line becomes a classified draft in order."""
        drafts = intake_service.analyze_brain_dump("Reply to emails\nURGENT: present budget")

        assert [d.title for d in drafts] == ["Reply to emails", "URGENT: present budget"]
        assert drafts[0].energy == EnergyLevel.LOW
        assert drafts[1].priority == Priority.URGENT

    def test_draft_ids_are_unique(self):
        """Duplicate lines still get distinct draft IDs."""
        drafts = intake_service.analyze_brain_dump("Reply to emails\nReply to emails")

        assert drafts[0].id != drafts[1].id
        assert drafts[0].id.startswith("draft-")

    def test_blank_text_gives_no_drafts(self):
        """Nothing to analyze yields an empty list."""
        assert intake_service.analyze_brain_dump(" \n \n") == []


@pytest.mark.unit
class TestConfirmIntake:
    """Tests for confirm_intake."""

    def test_creates_tasks_in_bucket(self, store):
        """Confirmed entries become open tasks scheduled for the date."""
        entries = [
            TaskCreate(title="Reply to emails", energy=EnergyLevel.LOW, duration_minutes=15),
            TaskCreate(title="Present budget", energy=EnergyLevel.HIGH, duration_minutes=90),
        ]

        created = intake_service.confirm_intake(store, "2024-05-06", entries)

        assert store.get("2024-05-06") == created
        assert [t.title for t in created] == ["Reply to emails", "Present budget"]
        assert all(t.scheduled_date == "2024-05-06" for t in created)
        assert all(not t.completed and t.rescheduled_to is None for t in created)
        assert created[1].duration_minutes == 90

    def test_appends_after_existing_rows(self, store, make_task):
        """Intake adds to a day instead of replacing it."""
        existing = make_task()
        store.put("2024-05-06", [existing])

        intake_service.confirm_intake(
            store, "2024-05-06", [TaskCreate(title="Organize files", energy=EnergyLevel.LOW)]
        )

        assert store.get("2024-05-06")[0] == existing
        assert len(store.get("2024-05-06")) == 2

    def test_empty_confirmation_leaves_store_untouched(self, store):
        """Confirming nothing does not create a bucket."""
        assert intake_service.confirm_intake(store, "2024-05-06", []) == []
        assert store.dates() == []

    def test_invalid_date(self, store):
        """Dates must be YYYY-MM-DD."""
        with pytest.raises(InvalidDateKeyError):
            intake_service.confirm_intake(store, "06/05/2024", [])

    def test_default_duration(self, store):
        """Entries without a duration get the quick-add default."""
        (task,) = intake_service.confirm_intake(
            store, "2024-05-06", [TaskCreate(title="Organize files", energy=EnergyLevel.LOW)]
        )

        assert task.duration_minutes == 25

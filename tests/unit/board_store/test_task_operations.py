"""Unit tests for BoardStore task operations."""

from datetime import date

import pytest

from vulnboard.board_store import (
    BoardStore,
    CommandStatus,
    Priority,
    TaskFields,
    TaskNotFoundError,
    TaskType,
)


def _ids(store: BoardStore, column_id: str) -> list[str]:
    return [task.id for task in store.get_column(column_id).tasks]


@pytest.mark.unit
class TestMoveTask:
    """Tests for move_task."""

    def test_move_to_other_column(self, two_column_store: BoardStore) -> None:
        """Moving T1 from A to B at index 0 leaves A=[T2] and B=[T1]."""
        result = two_column_store.move_task("T1", "A", "B", 0)

        assert result.status == CommandStatus.APPLIED
        assert result.entity_id == "T1"
        assert _ids(two_column_store, "A") == ["T2"]
        assert _ids(two_column_store, "B") == ["T1"]

    def test_moved_task_keeps_fields(self, two_column_store: BoardStore) -> None:
        """The task is relocated, not copied or rebuilt."""
        before = two_column_store.get_task("T1")

        two_column_store.move_task("T1", "A", "B", 0)

        assert two_column_store.get_task("T1") is before

    def test_insert_at_index(self, two_column_store: BoardStore) -> None:
        """Tasks are inserted at the requested position."""
        two_column_store.move_task("T1", "A", "B", 0)
        two_column_store.move_task("T2", "A", "B", 0)

        assert _ids(two_column_store, "B") == ["T2", "T1"]

    def test_index_above_length_clamps_to_end(self, two_column_store: BoardStore) -> None:
        """An index past the end appends."""
        two_column_store.move_task("T1", "A", "B", 0)
        two_column_store.move_task("T2", "A", "B", 99)

        assert _ids(two_column_store, "B") == ["T1", "T2"]

    def test_negative_index_clamps_to_start(self, two_column_store: BoardStore) -> None:
        """A negative index inserts at the front."""
        two_column_store.move_task("T1", "A", "B", 0)
        two_column_store.move_task("T2", "A", "B", -5)

        assert _ids(two_column_store, "B") == ["T2", "T1"]

    def test_same_column_is_noop(self, two_column_store: BoardStore) -> None:
        """Same source and destination leaves the board unchanged."""
        before = two_column_store.snapshot()

        result = two_column_store.move_task("T1", "A", "A", 1)

        assert result.status == CommandStatus.UNCHANGED
        assert two_column_store.snapshot() == before

    def test_unknown_source_column(self, two_column_store: BoardStore) -> None:
        """Unknown source column is NOT_FOUND and changes nothing."""
        before = two_column_store.snapshot()

        result = two_column_store.move_task("T1", "nope", "B", 0)

        assert result.status == CommandStatus.NOT_FOUND
        assert "nope" in result.message
        assert two_column_store.snapshot() == before

    def test_unknown_destination_column(self, two_column_store: BoardStore) -> None:
        """Unknown destination column is NOT_FOUND and the task stays put."""
        result = two_column_store.move_task("T1", "A", "nope", 0)

        assert result.status == CommandStatus.NOT_FOUND
        assert _ids(two_column_store, "A") == ["T1", "T2"]

    def test_task_not_in_source_column(self, two_column_store: BoardStore) -> None:
        """A task that lives elsewhere is NOT_FOUND in the given source."""
        result = two_column_store.move_task("T1", "B", "A", 0)

        assert result.status == CommandStatus.NOT_FOUND
        assert _ids(two_column_store, "A") == ["T1", "T2"]


@pytest.mark.unit
class TestReorderTask:
    """Tests for reorder_task."""

    def test_reorder_within_column(self, default_store: BoardStore) -> None:
        """A task can be moved to a new position in its own column."""
        result = default_store.reorder_task("9", "solved", 0)

        assert result.status == CommandStatus.APPLIED
        assert _ids(default_store, "solved") == ["9", "6", "7", "8"]

    def test_reorder_clamps_to_last_position(self, default_store: BoardStore) -> None:
        """An index past the end moves the task to the last position."""
        default_store.reorder_task("6", "solved", 50)

        assert _ids(default_store, "solved") == ["7", "8", "9", "6"]

    def test_reorder_same_position_unchanged(self, default_store: BoardStore) -> None:
        """Reordering to the current position is UNCHANGED."""
        result = default_store.reorder_task("7", "solved", 1)

        assert result.status == CommandStatus.UNCHANGED

    def test_reorder_unknown_task(self, default_store: BoardStore) -> None:
        """Unknown task is NOT_FOUND."""
        result = default_store.reorder_task("1", "solved", 0)

        assert result.status == CommandStatus.NOT_FOUND


@pytest.mark.unit
class TestAddTask:
    """Tests for add_task."""

    def test_appends_to_end(self, two_column_store: BoardStore, make_fields) -> None:
        """New tasks go to the end of the column."""
        result = two_column_store.add_task("A", make_fields("Third"))

        assert result.status == CommandStatus.APPLIED
        assert _ids(two_column_store, "A") == ["T1", "T2", result.entity_id]

    def test_assigns_fresh_ids(self, two_column_store: BoardStore, make_fields) -> None:
        """Each new task gets a distinct id, even in quick succession."""
        ids = {
            two_column_store.add_task("B", make_fields(f"Task {i}")).entity_id for i in range(50)
        }

        assert len(ids) == 50
        assert not ids & {"T1", "T2", "A", "B"}

    def test_copies_fields(self, two_column_store: BoardStore, make_fields) -> None:
        """Stored task carries every submitted field."""
        fields = make_fields("Stored XSS", description="in comments", assignee="kim")

        result = two_column_store.add_task("B", fields)
        task = two_column_store.get_task(result.entity_id)

        assert task.title == "Stored XSS"
        assert task.priority == Priority.HIGH
        assert task.type == TaskType.BUG
        assert task.score == 7.0
        assert task.date == date(2024, 2, 1)
        assert task.labels == ("Bug",)
        assert task.description == "in comments"
        assert task.assignee == "kim"

    def test_unknown_column(self, two_column_store: BoardStore, make_fields) -> None:
        """Unknown column is NOT_FOUND and adds nothing."""
        result = two_column_store.add_task("nope", make_fields())

        assert result.status == CommandStatus.NOT_FOUND
        assert two_column_store.task_count == 2

    def test_ids_never_collide_with_seeded(self, make_fields) -> None:
        """New ids skip ids already on the board."""
        store = BoardStore()

        new_id = store.add_task("draft", make_fields()).entity_id

        assert new_id not in {str(i) for i in range(1, 11)}


@pytest.mark.unit
class TestEditTask:
    """Tests for edit_task."""

    def test_replaces_fields_in_place(self, default_store: BoardStore) -> None:
        """Edited task keeps its id and position."""
        original = default_store.get_task("7")
        edited = TaskFields.from_task(original)
        edited = TaskFields(
            title="PI Disclosure (confirmed)",
            priority=Priority.CRITICAL,
            type=edited.type,
            score=9.1,
            date=edited.date,
            labels=("Documentation", "Confirmed"),
        ).to_task("7")

        result = default_store.edit_task(edited)

        assert result.status == CommandStatus.APPLIED
        assert _ids(default_store, "solved") == ["6", "7", "8", "9"]
        task = default_store.get_task("7")
        assert task.title == "PI Disclosure (confirmed)"
        assert task.priority == Priority.CRITICAL
        assert task.labels == ("Documentation", "Confirmed")

    def test_add_then_edit_unchanged_is_identity(
        self, two_column_store: BoardStore, make_fields
    ) -> None:
        """Editing with the same fields leaves the task identical."""
        fields = make_fields("Same same")
        task_id = two_column_store.add_task("A", fields).entity_id
        before = two_column_store.get_task(task_id)

        two_column_store.edit_task(fields.to_task(task_id))

        assert two_column_store.get_task(task_id) == before
        assert _ids(two_column_store, "A")[-1] == task_id

    def test_unknown_task(self, two_column_store: BoardStore, make_fields) -> None:
        """Editing an unknown id is NOT_FOUND and changes nothing."""
        before = two_column_store.snapshot()

        result = two_column_store.edit_task(make_fields().to_task("ghost"))

        assert result.status == CommandStatus.NOT_FOUND
        assert two_column_store.snapshot() == before


@pytest.mark.unit
class TestDeleteTask:
    """Tests for delete_task."""

    def test_removes_task(self, two_column_store: BoardStore) -> None:
        """Deleted task disappears from its column."""
        result = two_column_store.delete_task("T1")

        assert result.status == CommandStatus.APPLIED
        assert _ids(two_column_store, "A") == ["T2"]
        with pytest.raises(TaskNotFoundError):
            two_column_store.get_task("T1")

    def test_unknown_task(self, two_column_store: BoardStore) -> None:
        """Deleting an unknown id is NOT_FOUND."""
        result = two_column_store.delete_task("ghost")

        assert result.status == CommandStatus.NOT_FOUND
        assert two_column_store.task_count == 2


@pytest.mark.unit
class TestTaskReads:
    """Tests for task read helpers."""

    def test_get_task_not_found_raises(self, default_store: BoardStore) -> None:
        """TaskNotFoundError for invalid ID."""
        with pytest.raises(TaskNotFoundError) as exc_info:
            default_store.get_task("nonexistent-id")

        assert "nonexistent-id" in str(exc_info.value)

    def test_find_column_by_task_id(self, default_store: BoardStore) -> None:
        """Returns the column holding a task, or None."""
        column = default_store.find_column_by_task_id("5")

        assert column is not None
        assert column.id == "under-review"
        assert default_store.find_column_by_task_id("ghost") is None

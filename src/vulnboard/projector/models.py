"""Data models for the View Projector."""

from __future__ import annotations

from dataclasses import dataclass

from vulnboard.board_store import ColumnColor, SortKey, Task  # noqa: TC001


@dataclass(frozen=True)
class ColumnView:
    """A column as it should be displayed.

    Attributes:
        id: Column id.
        title: Column title.
        color: Column color.
        tasks: Tasks that pass the search and filter, in sorted order.
        total: Number of tasks stored in the column, ignoring search and filter.
    """

    id: str
    title: str
    color: ColumnColor
    tasks: tuple[Task, ...]
    total: int

    @property
    def visible(self) -> int:
        """Number of tasks shown after search and filter."""
        return len(self.tasks)


@dataclass(frozen=True)
class BoardView:
    """Projected board handed to the rendering collaborator."""

    columns: tuple[ColumnView, ...]
    search_term: str
    filter_label: str
    sort_by: SortKey

    @property
    def total_tasks(self) -> int:
        """Number of tasks on the board, ignoring search and filter."""
        return sum(column.total for column in self.columns)

    @property
    def visible_tasks(self) -> int:
        """Number of tasks shown across all columns."""
        return sum(column.visible for column in self.columns)

    def column(self, column_id: str) -> ColumnView | None:
        """Look up a projected column by id."""
        for column in self.columns:
            if column.id == column_id:
                return column
        return None

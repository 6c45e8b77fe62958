"""View Projector - derives display order from a board snapshot.

Nothing in this module mutates its inputs. Projection works on tuples of
frozen tasks and always returns new sequences.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from vulnboard.board_store import Priority, SortKey, Task, ViewSettings
from vulnboard.projector.models import BoardView, ColumnView

if TYPE_CHECKING:
    from vulnboard.board_store import BoardSnapshot, ColumnSnapshot

PRIORITY_RANK: dict[str, int] = {
    Priority.CRITICAL: 4,
    Priority.HIGH: 3,
    Priority.MEDIUM: 2,
    Priority.LOW: 1,
}


def priority_rank(priority: str) -> int:
    """Rank a priority for sorting; unknown priorities rank 0."""
    return PRIORITY_RANK.get(priority, 0)


def matches_search(task: Task, search_term: str) -> bool:
    """Case-insensitive substring match against the title or any label."""
    if not search_term:
        return True
    needle = search_term.lower()
    if needle in task.title.lower():
        return True
    return any(needle in label.lower() for label in task.labels)


def matches_filter(task: Task, filter_label: str) -> bool:
    """Keep a task whose labels contain the value or whose type equals it."""
    if not filter_label:
        return True
    return filter_label in task.labels or task.type == filter_label


def _sort_key(sort_by: SortKey):
    if sort_by == SortKey.PRIORITY:
        return lambda task: priority_rank(task.priority)
    if sort_by == SortKey.SCORE:
        return lambda task: task.score
    return lambda task: task.date


def sort_tasks(tasks: Iterable[Task], sort_by: SortKey) -> list[Task]:
    """Sort tasks descending by the given key.

    sorted() is stable with reverse=True as well, so ties keep the order
    they had in the input.
    """
    return sorted(tasks, key=_sort_key(SortKey(sort_by)), reverse=True)


def project_tasks(
    tasks: Sequence[Task],
    search_term: str = "",
    filter_label: str = "",
    sort_by: SortKey = SortKey.DATE,
) -> tuple[Task, ...]:
    """Search, filter, then sort a column's tasks for display.

    Args:
        tasks: The column's tasks in canonical order.
        search_term: Title/label substring; empty matches everything.
        filter_label: Label or type value; empty matches everything.
        sort_by: Descending sort key.

    Returns:
        A new tuple; the input sequence is left as-is.
    """
    visible = [
        task
        for task in tasks
        if matches_search(task, search_term) and matches_filter(task, filter_label)
    ]
    return tuple(sort_tasks(visible, sort_by))


def project_column(column: ColumnSnapshot, settings: ViewSettings) -> ColumnView:
    """Project a single column with the given view settings."""
    return ColumnView(
        id=column.id,
        title=column.title,
        color=column.color,
        tasks=project_tasks(
            column.tasks,
            search_term=settings.search_term,
            filter_label=settings.filter_label,
            sort_by=settings.sort_by,
        ),
        total=len(column.tasks),
    )


def project_board(snapshot: BoardSnapshot) -> BoardView:
    """Project every column of a snapshot using the snapshot's own settings."""
    settings = ViewSettings(
        search_term=snapshot.search_term,
        filter_label=snapshot.filter_label,
        sort_by=snapshot.sort_by,
    )
    return BoardView(
        columns=tuple(project_column(column, settings) for column in snapshot.columns),
        search_term=snapshot.search_term,
        filter_label=snapshot.filter_label,
        sort_by=snapshot.sort_by,
    )

"""Built-in default board used to seed new sessions."""

from __future__ import annotations

from datetime import date

from vulnboard.board_store.models import Column, ColumnColor, Priority, Task, TaskType


def _task(
    task_id: str,
    title: str,
    priority: Priority,
    task_type: TaskType,
    score: float,
    day: int,
) -> Task:
    # Every seeded task carries a single label equal to its type
    return Task(
        id=task_id,
        title=title,
        priority=priority,
        type=task_type,
        score=score,
        date=date(2024, 1, day),
        labels=(task_type.value,),
    )


def default_columns() -> list[Column]:
    """Build a fresh copy of the default 5-column, 10-task board."""
    return [
        Column(
            id="draft",
            title="Draft",
            color=ColumnColor.GRAY,
            tasks=[
                _task("1", "PI Disclosure", Priority.MEDIUM, TaskType.ENHANCEMENT, 4.5, 15),
                _task(
                    "2",
                    "Server Side Template Injection (Blind)",
                    Priority.CRITICAL,
                    TaskType.BUG,
                    8.8,
                    15,
                ),
            ],
        ),
        Column(
            id="unsolved",
            title="Unsolved",
            color=ColumnColor.ORANGE,
            tasks=[
                _task("3", ".svn/entries Found", Priority.LOW, TaskType.FEATURE, 2.3, 13),
            ],
        ),
        Column(
            id="under-review",
            title="Under Review",
            color=ColumnColor.BLUE,
            tasks=[
                _task(
                    "4",
                    "WordPress Database Backup File Found",
                    Priority.MEDIUM,
                    TaskType.ENHANCEMENT,
                    6.5,
                    11,
                ),
                _task(
                    "5",
                    "JSON Web Key Set Disclosed",
                    Priority.HIGH,
                    TaskType.DOCUMENTATION,
                    6.5,
                    12,
                ),
            ],
        ),
        Column(
            id="solved",
            title="Solved",
            color=ColumnColor.GREEN,
            tasks=[
                _task("6", ".svn/entries Found", Priority.MEDIUM, TaskType.FEATURE, 6.5, 8),
                _task("7", "PI Disclosure", Priority.MEDIUM, TaskType.DOCUMENTATION, 6.5, 9),
                _task(
                    "8",
                    "Phonypanel Information Schema Disclosed",
                    Priority.CRITICAL,
                    TaskType.BUG,
                    6.5,
                    10,
                ),
                _task(
                    "9",
                    "JSON Web Key Set Disclosed",
                    Priority.HIGH,
                    TaskType.DOCUMENTATION,
                    6.5,
                    12,
                ),
            ],
        ),
        Column(
            id="needs-info",
            title="Needs Info",
            color=ColumnColor.PURPLE,
            tasks=[
                _task("10", "JSON Web Key Set Disclosed", Priority.LOW, TaskType.FEATURE, 6.5, 14),
            ],
        ),
    ]

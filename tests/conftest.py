"""Shared pytest fixtures and configuration."""

from collections.abc import Callable
from datetime import date

import pytest

from vulnboard.board_store import (
    BoardStore,
    Column,
    ColumnColor,
    Priority,
    Task,
    TaskFields,
    TaskType,
)


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


# Shared fixtures


def _make_task(
    task_id: str,
    title: str = "Some task",
    priority: Priority = Priority.MEDIUM,
    task_type: TaskType = TaskType.FEATURE,
    score: float = 5.0,
    day: date = date(2024, 1, 1),
    labels: tuple[str, ...] = (),
) -> Task:
    return Task(
        id=task_id,
        title=title,
        priority=priority,
        type=task_type,
        score=score,
        date=day,
        labels=labels,
    )


def _make_fields(title: str = "New finding", **overrides) -> TaskFields:
    values = {
        "title": title,
        "priority": Priority.HIGH,
        "type": TaskType.BUG,
        "score": 7.0,
        "date": date(2024, 2, 1),
        "labels": ("Bug",),
    }
    values.update(overrides)
    return TaskFields(**values)


@pytest.fixture
def make_task() -> Callable[..., Task]:
    """Factory for Tasks with sensible defaults."""
    return _make_task


@pytest.fixture
def make_fields() -> Callable[..., TaskFields]:
    """Factory for TaskFields with sensible defaults."""
    return _make_fields


@pytest.fixture
def two_column_store() -> BoardStore:
    """Store with column A holding T1 ("Fix") and T2, and an empty column B."""
    return BoardStore(
        columns=[
            Column(
                id="A",
                title="Column A",
                tasks=[
                    _make_task("T1", title="Fix", score=5, day=date(2024, 1, 1)),
                    _make_task("T2", title="Second"),
                ],
            ),
            Column(id="B", title="Column B", color=ColumnColor.BLUE),
        ]
    )


@pytest.fixture
def default_store() -> BoardStore:
    """Store seeded with the built-in default board."""
    return BoardStore()

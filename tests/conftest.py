"""Pytest fixtures for habit_lightly tests."""

from datetime import datetime

import pytest

from habit_lightly.core.models import AppState, Habit
from habit_lightly.database.manager import MemoryStorage


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 3, 1, 9, 30)


@pytest.fixture
def empty_state() -> AppState:
    """State with no habits and no history."""
    return AppState(user_id="user-1", habits=(), days={}, last_seen=None)


@pytest.fixture
def two_habit_state() -> AppState:
    """State with two habits: 'read' and an archived 'run'."""
    return AppState(
        user_id="user-1",
        habits=(
            Habit(id="read", name="Read", color="sky", created_at="2024-01-01T00:00:00"),
            Habit(id="run", name="Run", color="rose", created_at="2024-01-01T00:00:00", archived=True),
        ),
        days={
            "2024-03-01": frozenset({"read", "run"}),
            "2024-02-29": frozenset({"read"}),
        },
        last_seen="2024-03-01T09:30:00",
    )


@pytest.fixture
def memory_storage() -> MemoryStorage:
    return MemoryStorage()

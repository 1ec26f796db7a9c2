"""Tests for HabitService, the imperative shell around the core."""

from pathlib import Path

import pytest

from habit_lightly.core.models import DEFAULT_HABIT_NAME
from habit_lightly.core.serialization import state_from_dict
from habit_lightly.database.manager import JsonFileStorage, MemoryStorage
from habit_lightly.services.habit_service import HabitService


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class DebounceConfig:
    """Minimal stand-in for AppConfig with a debounce interval."""

    class display:
        timezone = None
        prefers_dark = False
        heat_window_days = 7

    class storage:
        autosave_debounce_seconds = 5.0


class TestHabitServiceLifecycle:
    """Tests for loading and persisting."""

    def test_first_run_persists_fresh_state(self, memory_storage: MemoryStorage) -> None:
        service = HabitService(memory_storage)
        saved = state_from_dict(memory_storage.load())
        assert saved.user_id == service.state.user_id
        assert [h.name for h in saved.habits] == [DEFAULT_HABIT_NAME]

    def test_user_id_stable_across_sessions(self, tmp_path: Path) -> None:
        path = tmp_path / "state.json"
        first = HabitService(JsonFileStorage(path)).state.user_id
        second = HabitService(JsonFileStorage(path)).state.user_id
        assert first == second

    def test_corrupted_file_falls_back(self, tmp_path: Path) -> None:
        path = tmp_path / "state.json"
        path.write_text("][", encoding="utf-8")
        service = HabitService(JsonFileStorage(path, tmp_path / "backups"))
        assert [h.name for h in service.state.habits] == [DEFAULT_HABIT_NAME]
        assert path.exists()

    def test_context_manager_flushes(self, memory_storage: MemoryStorage) -> None:
        clock = FakeClock()
        with HabitService(memory_storage, DebounceConfig, clock=clock) as service:
            service.add_habit("Read")
            clock.now = 1.0
            service.add_habit("Write")
            assert service.has_pending_changes
        assert not service.has_pending_changes
        names = [h.name for h in state_from_dict(memory_storage.load()).habits]
        assert names == [DEFAULT_HABIT_NAME, "Read", "Write"]


class TestHabitServiceOperations:
    """Tests for mutations through the service."""

    def test_add_and_toggle(self, memory_storage: MemoryStorage) -> None:
        service = HabitService(memory_storage)
        assert service.add_habit("Read", "violet")
        habit = service.find_by_name("read")
        assert service.toggle(habit.id, "2024-03-01")
        assert service.state.is_completed(habit.id, "2024-03-01")
        assert service.streak(habit.id, "2024-03-01") == 1

    def test_noop_returns_false(self, memory_storage: MemoryStorage) -> None:
        service = HabitService(memory_storage)
        saves = memory_storage.save_count
        assert not service.add_habit("hydrate")
        assert not service.delete_habit("missing")
        assert memory_storage.save_count == saves

    def test_invalid_argument_is_contained(self, memory_storage: MemoryStorage) -> None:
        service = HabitService(memory_storage)
        before = service.state
        habit_id = before.habits[0].id
        assert not service.toggle(habit_id, "2024-02-30")
        assert not service.add_habit("Read", "plaid")
        assert service.state is before
        assert service.get_service_metrics()["failed_operations"] == 2

    def test_every_mutation_saved_without_debounce(self, memory_storage: MemoryStorage) -> None:
        service = HabitService(memory_storage)
        saves = memory_storage.save_count
        habit_id = service.state.habits[0].id
        service.toggle(habit_id, "2024-03-01")
        service.toggle(habit_id, "2024-03-02")
        assert memory_storage.save_count == saves + 2

    def test_debounced_saves(self, memory_storage: MemoryStorage) -> None:
        clock = FakeClock()
        service = HabitService(memory_storage, DebounceConfig, clock=clock)
        saves = memory_storage.save_count
        habit_id = service.state.habits[0].id

        clock.now = 1.0
        service.toggle(habit_id, "2024-03-01")
        assert memory_storage.save_count == saves
        clock.now = 6.0
        service.toggle(habit_id, "2024-03-02")
        assert memory_storage.save_count == saves + 1
        assert not service.has_pending_changes

    def test_mutation_updates_last_seen(self, memory_storage: MemoryStorage) -> None:
        service = HabitService(memory_storage)
        before = service.state.last_seen
        service.add_habit("Read")
        assert service.state.last_seen is not None
        assert service.state.last_seen >= before

    def test_archive_and_restore(self, memory_storage: MemoryStorage) -> None:
        service = HabitService(memory_storage)
        habit_id = service.state.habits[0].id
        assert service.archive_habit(habit_id)
        assert service.progress("2024-03-01").total == 0
        assert service.restore_habit(habit_id)
        assert service.progress("2024-03-01").total == 1

    def test_heat_and_message(self, memory_storage: MemoryStorage) -> None:
        service = HabitService(memory_storage)
        habit_id = service.state.habits[0].id
        service.set_completion(habit_id, "2024-03-01", True)
        cells = service.heat("2024-03-01")
        assert len(cells) == 7
        assert cells[-1].count == 1
        assert service.message("2024-03-01") == service.message("2024-03-01")


class FailingStorage(MemoryStorage):
    def save(self, data) -> None:
        raise OSError("disk full")


class TestSaveFailures:
    """Tests for persistence failures."""

    def test_memory_state_stays_authoritative(self) -> None:
        service = HabitService(FailingStorage())
        assert service.add_habit("Read")
        assert service.find_by_name("Read") is not None
        assert service.has_pending_changes
        assert service.get_service_metrics()["failed_saves"] >= 1

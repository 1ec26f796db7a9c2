# habit_lightly/services/habit_service.py

import logging
import threading
import time
from datetime import datetime
from typing import Callable, Dict, List, Optional, Any

from habit_lightly.config import AppConfig
from habit_lightly.core import statistics, store
from habit_lightly.core.messages import daily_message
from habit_lightly.core.models import AppState, DEFAULT_COLOR, InvalidArgument
from habit_lightly.core.serialization import load_state, state_to_dict
from habit_lightly.core.statistics import HeatCell, TodayProgress
from habit_lightly.database.manager import StorageAdapter
from habit_lightly.utils.datetime_utils import today_key

logger = logging.getLogger(__name__)

class HabitService:
    """
    Оболочка над чистым ядром

    Возможности:
    - Загрузка состояния с откатом к новому при повреждении
    - Применение переходов Habit Store и сохранение после каждого изменения
    - Отложенное сохранение при частых изменениях
    - Производные значения для отображения (прогресс, серии, тепловая полоса)

    Ошибки InvalidArgument не выходят наружу: метод логирует их, оставляет
    последнее корректное состояние и возвращает False.
    """

    def __init__(self, storage: StorageAdapter, config: Optional[AppConfig] = None,
                 clock: Callable[[], float] = time.monotonic):
        self.storage = storage
        self.timezone = config.display.timezone if config else None
        self.prefers_dark = config.display.prefers_dark if config else False
        self.heat_window_days = config.display.heat_window_days if config else 7
        self.debounce_seconds = config.storage.autosave_debounce_seconds if config else 0.0
        self._clock = clock

        self.lock = threading.RLock()
        self._dirty = False
        self._last_save_time: Optional[float] = None

        # Метрики
        self.total_operations = 0
        self.failed_operations = 0
        self.save_count = 0
        self.failed_saves = 0

        self._state = load_state(storage)
        # Новое или исправленное состояние сразу записывается, чтобы user_id не менялся
        self._dirty = True
        self.flush()
        logger.info(f"✅ HabitService инициализирован. Привычек: {len(self._state.habits)}")

    # ===== СОСТОЯНИЕ =====

    @property
    def state(self) -> AppState:
        with self.lock:
            return self._state

    @property
    def has_pending_changes(self) -> bool:
        return self._dirty

    def today(self) -> str:
        return today_key(self.timezone)

    def _apply(self, operation: str, transition: Callable[[AppState], AppState]) -> bool:
        """Применить переход; True, если состояние изменилось"""
        with self.lock:
            try:
                new_state = transition(self._state)
            except InvalidArgument as e:
                logger.warning(f"⚠️ {operation}: {e}")
                self.failed_operations += 1
                return False

            self.total_operations += 1
            if new_state == self._state:
                logger.debug(f"{operation}: без изменений")
                return False

            self._state = new_state.touch()
            self._dirty = True
            self._maybe_save()
            return True

    # ===== СОХРАНЕНИЕ =====

    def _maybe_save(self):
        now = self._clock()
        if (self.debounce_seconds <= 0 or self._last_save_time is None
                or now - self._last_save_time >= self.debounce_seconds):
            self.flush()

    def flush(self) -> bool:
        """Сохранить состояние, если есть несохранённые изменения"""
        with self.lock:
            if not self._dirty:
                return True
            try:
                self.storage.save(state_to_dict(self._state))
            except (OSError, TypeError, ValueError) as e:
                # Состояние в памяти остаётся основным, хранилище лишь его копия
                logger.error(f"❌ Ошибка сохранения состояния: {e}")
                self.failed_saves += 1
                return False

            self._dirty = False
            self._last_save_time = self._clock()
            self.save_count += 1
            logger.debug("💾 Состояние сохранено")
            return True

    # ===== ОПЕРАЦИИ С ПРИВЫЧКАМИ =====

    def add_habit(self, name: str, color: str = DEFAULT_COLOR) -> bool:
        return self._apply("add_habit", lambda s: store.add_habit(s, name, color))

    def delete_habit(self, habit_id: str) -> bool:
        return self._apply("delete_habit", lambda s: store.delete_habit(s, habit_id))

    def archive_habit(self, habit_id: str) -> bool:
        return self._apply("archive_habit", lambda s: store.archive_habit(s, habit_id))

    def restore_habit(self, habit_id: str) -> bool:
        return self._apply("restore_habit", lambda s: store.restore_habit(s, habit_id))

    def toggle(self, habit_id: str, date_key: Optional[str] = None) -> bool:
        day = date_key or self.today()
        return self._apply("toggle_completion", lambda s: store.toggle_completion(s, habit_id, day))

    def set_completion(self, habit_id: str, date_key: str, done: bool) -> bool:
        return self._apply(
            "set_completion", lambda s: store.set_completion(s, habit_id, date_key, done)
        )

    def find_by_name(self, name: str):
        key = name.strip().casefold()
        for habit in self.state.habits:
            if habit.name_key() == key:
                return habit
        return None

    # ===== ПРОИЗВОДНЫЕ ЗНАЧЕНИЯ =====

    def progress(self, date_key: Optional[str] = None) -> TodayProgress:
        return statistics.today_progress(self.state, date_key or self.today())

    def streak(self, habit_id: str, date_key: Optional[str] = None) -> int:
        return statistics.streak(self.state, habit_id, date_key or self.today())

    def heat(self, date_key: Optional[str] = None,
             window_days: Optional[int] = None) -> List[HeatCell]:
        return statistics.weekly_heat(
            self.state, date_key or self.today(), window_days or self.heat_window_days
        )

    def message(self, date_key: Optional[str] = None) -> str:
        return daily_message(self.state.user_id, date_key or self.today(), self.prefers_dark)

    def get_service_metrics(self) -> Dict[str, Any]:
        return {
            "habits": len(self.state.habits),
            "active_habits": len(self.state.active_habits),
            "recorded_days": len(self.state.days),
            "total_operations": self.total_operations,
            "failed_operations": self.failed_operations,
            "save_count": self.save_count,
            "failed_saves": self.failed_saves,
            "pending_changes": self._dirty,
            "timestamp": datetime.now().isoformat()
        }

    # ===== ЖИЗНЕННЫЙ ЦИКЛ =====

    def close(self):
        """Корректное закрытие сервиса"""
        logger.info("🛑 Закрытие HabitService...")
        if self._dirty:
            logger.info("💾 Сохранение отложенных изменений...")
            self.flush()
        logger.info("✅ HabitService закрыт")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

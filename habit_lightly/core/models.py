#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Habit Lightly - Core Data Models
Модели состояния трекера привычек и ошибки ядра

Версия: 1.0.0
Дата: 2025-07-02
"""

import uuid
from datetime import datetime
from typing import Dict, FrozenSet, List, Optional, Tuple, Any
from dataclasses import dataclass, field, asdict
from enum import Enum
import logging

logger = logging.getLogger(__name__)

# ===== ENUMS =====

class HabitColor(Enum):
    """Палитра цветов привычек"""
    EMERALD = "emerald"
    SKY = "sky"
    VIOLET = "violet"
    AMBER = "amber"
    ROSE = "rose"
    SLATE = "slate"

DEFAULT_COLOR = HabitColor.EMERALD.value
DEFAULT_HABIT_NAME = "Hydrate"

# ===== ERRORS =====

class HabitError(Exception):
    """Базовая ошибка ядра"""
    pass

class InvalidArgument(HabitError):
    """Неверный аргумент (ключ даты, цвет, размер окна)"""
    pass

class DeserializationFailure(HabitError):
    """Сохранённые данные не являются корректным состоянием"""
    pass

# ===== VALIDATION HELPERS =====

def validate_color(value: str) -> str:
    """Валидация цвета из палитры"""
    try:
        return HabitColor(value).value
    except ValueError:
        valid_values = [c.value for c in HabitColor]
        raise InvalidArgument(f"color должен быть одним из: {valid_values}")

def new_id() -> str:
    return str(uuid.uuid4())

# ===== CORE MODELS =====

@dataclass(frozen=True)
class Habit:
    """Привычка. id и created_at не меняются после создания"""
    id: str
    name: str
    color: str = DEFAULT_COLOR
    created_at: str = field(default_factory=lambda: datetime.now().isoformat())
    archived: bool = False

    @property
    def is_active(self) -> bool:
        return not self.archived

    def name_key(self) -> str:
        """Ключ для сравнения имён без учёта регистра"""
        return self.name.strip().casefold()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def create(cls, name: str, color: str = DEFAULT_COLOR,
               now: Optional[datetime] = None) -> "Habit":
        """Создание новой привычки"""
        return cls(
            id=new_id(),
            name=name,
            color=validate_color(color),
            created_at=(now or datetime.now()).isoformat()
        )

@dataclass(frozen=True)
class AppState:
    """
    Корневое состояние приложения

    Значение неизменяемо: переходы в core.store возвращают новый AppState.
    В days не хранятся пустые множества, отсутствие ключа означает
    "ничего не отмечено".
    """
    user_id: str
    habits: Tuple[Habit, ...] = ()
    days: Dict[str, FrozenSet[str]] = field(default_factory=dict)
    last_seen: Optional[str] = None

    # ===== PROPERTIES =====

    @property
    def habit_ids(self) -> FrozenSet[str]:
        return frozenset(h.id for h in self.habits)

    @property
    def active_habits(self) -> List[Habit]:
        return [h for h in self.habits if h.is_active]

    @property
    def archived_habits(self) -> List[Habit]:
        return [h for h in self.habits if h.archived]

    # ===== METHODS =====

    def get_habit(self, habit_id: str) -> Optional[Habit]:
        for habit in self.habits:
            if habit.id == habit_id:
                return habit
        return None

    def completed_on(self, date_key: str) -> FrozenSet[str]:
        """Множество id, отмеченных в указанный день"""
        return self.days.get(date_key, frozenset())

    def is_completed(self, habit_id: str, date_key: str) -> bool:
        return habit_id in self.completed_on(date_key)

    def touch(self, now: Optional[datetime] = None) -> "AppState":
        """Копия состояния с обновлённым last_seen"""
        return AppState(
            user_id=self.user_id,
            habits=self.habits,
            days=dict(self.days),
            last_seen=(now or datetime.now()).isoformat()
        )

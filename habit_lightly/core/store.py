#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Habit Lightly - Habit Store
Чистые переходы состояния: (состояние, аргументы) -> новое состояние

Ни одна функция не изменяет переданный AppState. Операции с неизвестным
id привычки ничего не делают и возвращают исходное состояние; неверный
ключ даты приводит к InvalidArgument.

Версия: 1.0.0
Дата: 2025-07-02
"""

import logging
from datetime import datetime
from typing import Dict, FrozenSet, List, Optional

from habit_lightly.core.models import (
    AppState, Habit, DEFAULT_COLOR, DEFAULT_HABIT_NAME, new_id, validate_color
)
from habit_lightly.utils.datetime_utils import parse_date_key
from habit_lightly.utils.validators import normalize_habit_name

logger = logging.getLogger(__name__)

# ===== INITIALIZATION =====

def new_state(user_id: Optional[str] = None, now: Optional[datetime] = None) -> AppState:
    """Состояние первого запуска: одна привычка по умолчанию, пустая история"""
    now = now or datetime.now()
    return AppState(
        user_id=user_id or new_id(),
        habits=(Habit.create(DEFAULT_HABIT_NAME, DEFAULT_COLOR, now=now),),
        days={},
        last_seen=now.isoformat()
    )

# ===== HELPERS =====

def find_habit(state: AppState, habit_id: str) -> Optional[Habit]:
    return state.get_habit(habit_id)

def active_habits(state: AppState) -> List[Habit]:
    return state.active_habits

def _replace(state: AppState, habits=None, days=None) -> AppState:
    return AppState(
        user_id=state.user_id,
        habits=state.habits if habits is None else tuple(habits),
        days=dict(state.days) if days is None else days,
        last_seen=state.last_seen
    )

def _with_day(state: AppState, date_key: str, ids: FrozenSet[str]) -> AppState:
    days: Dict[str, FrozenSet[str]] = dict(state.days)
    if ids:
        days[date_key] = ids
    else:
        days.pop(date_key, None)
    return _replace(state, days=days)

# ===== TRANSITIONS =====

def add_habit(state: AppState, name: str, color: str = DEFAULT_COLOR,
              now: Optional[datetime] = None) -> AppState:
    """Добавить привычку в конец списка

    Пустое имя или имя, совпадающее (без учёта регистра) с существующей
    привычкой, в том числе архивной, игнорируется.
    """
    name = normalize_habit_name(name)
    if not name:
        logger.debug("Пустое имя привычки, добавление пропущено")
        return state

    key = name.casefold()
    if any(h.name_key() == key for h in state.habits):
        logger.debug(f"Привычка '{name}' уже существует")
        return state

    habit = Habit.create(name, validate_color(color), now=now)
    return _replace(state, habits=state.habits + (habit,))

def delete_habit(state: AppState, habit_id: str) -> AppState:
    """Удалить привычку и все её отметки из истории"""
    if state.get_habit(habit_id) is None:
        logger.debug(f"Привычка {habit_id} не найдена, удаление пропущено")
        return state

    habits = [h for h in state.habits if h.id != habit_id]
    days = {}
    for date_key, ids in state.days.items():
        remaining = ids - {habit_id}
        if remaining:
            days[date_key] = remaining
    return _replace(state, habits=habits, days=days)

def set_completion(state: AppState, habit_id: str, date_key: str, done: bool) -> AppState:
    """Установить отметку за день (повторная установка ничего не меняет)"""
    parse_date_key(date_key)
    if state.get_habit(habit_id) is None:
        logger.debug(f"Привычка {habit_id} не найдена, отметка пропущена")
        return state

    current = state.completed_on(date_key)
    if (habit_id in current) == bool(done):
        return state

    if done:
        return _with_day(state, date_key, current | {habit_id})
    return _with_day(state, date_key, current - {habit_id})

def toggle_completion(state: AppState, habit_id: str, date_key: str) -> AppState:
    """Переключить отметку за день. Два вызова подряд возвращают исходное состояние"""
    parse_date_key(date_key)
    return set_completion(state, habit_id, date_key, not state.is_completed(habit_id, date_key))

def _set_archived(state: AppState, habit_id: str, archived: bool) -> AppState:
    habit = state.get_habit(habit_id)
    if habit is None or habit.archived == archived:
        return state

    habits = [
        Habit(id=h.id, name=h.name, color=h.color, created_at=h.created_at, archived=archived)
        if h.id == habit_id else h
        for h in state.habits
    ]
    return _replace(state, habits=habits)

def archive_habit(state: AppState, habit_id: str) -> AppState:
    """Архивировать привычку (история отметок сохраняется)"""
    return _set_archived(state, habit_id, True)

def restore_habit(state: AppState, habit_id: str) -> AppState:
    """Вернуть привычку из архива"""
    return _set_archived(state, habit_id, False)

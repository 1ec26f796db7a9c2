#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Habit Lightly - Statistics Engine
Серии, прогресс дня и тепловая полоса за последние дни

Все функции только читают AppState.

Версия: 1.0.0
Дата: 2025-07-02
"""

import math
from dataclasses import dataclass, asdict
from typing import Dict, FrozenSet, List, Optional, Any

from habit_lightly.core.models import AppState, InvalidArgument
from habit_lightly.utils.datetime_utils import (
    date_range, parse_date_key, shift, today_key, week_start
)

STREAK_CAP_DAYS = 3650
WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

# ===== RESULT TYPES =====

@dataclass(frozen=True)
class TodayProgress:
    """Прогресс за день"""
    total: int
    done: int
    percent: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

@dataclass(frozen=True)
class HeatCell:
    """Ячейка тепловой полосы"""
    date: str
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

@dataclass(frozen=True)
class WeekDay:
    """День недели с отмеченными привычками"""
    label: str
    date: str
    done_ids: FrozenSet[str]

# ===== HELPERS =====

def _resolve(as_of: Optional[str]) -> str:
    if as_of is None:
        return today_key()
    parse_date_key(as_of)
    return as_of

def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))

# ===== STREAKS =====

def streak(state: AppState, habit_id: str, as_of: Optional[str] = None) -> int:
    """Текущая серия: подряд идущие дни с отметкой, считая назад от as_of"""
    day = _resolve(as_of)
    count = 0
    while count < STREAK_CAP_DAYS and state.is_completed(habit_id, day):
        count += 1
        day = shift(day, -1)
    return count

def longest_streak(state: AppState, habit_id: str) -> int:
    """Самая длинная серия за всю историю"""
    completed_dates = sorted(
        parse_date_key(key) for key, ids in state.days.items() if habit_id in ids
    )
    if not completed_dates:
        return 0

    max_streak = 1
    current = 1
    for i in range(1, len(completed_dates)):
        if (completed_dates[i] - completed_dates[i - 1]).days == 1:
            current += 1
            max_streak = max(max_streak, current)
        else:
            current = 1
    return max_streak

# ===== PROGRESS =====

def today_progress(state: AppState, as_of: Optional[str] = None) -> TodayProgress:
    """Сколько активных привычек отмечено за день"""
    day = _resolve(as_of)
    active = state.active_habits
    completed = state.completed_on(day)

    total = len(active)
    done = sum(1 for h in active if h.id in completed)
    percent = _round_half_up(done / total * 100) if total else 0
    return TodayProgress(total=total, done=done, percent=percent)

def completion_rate(state: AppState, habit_id: str, as_of: Optional[str] = None,
                    window_days: int = 7) -> float:
    """Процент дней с отметкой за окно window_days, заканчивающееся as_of"""
    if window_days < 1:
        raise InvalidArgument(f"window_days должен быть положительным: {window_days}")
    keys = date_range(_resolve(as_of), window_days)
    done = sum(1 for key in keys if state.is_completed(habit_id, key))
    return done / window_days * 100

# ===== HEAT =====

def weekly_heat(state: AppState, as_of: Optional[str] = None,
                window_days: int = 7) -> List[HeatCell]:
    """Количество отметок по дням за окно, старые дни первыми

    Считаются все записи дня, включая архивные привычки.
    """
    if window_days < 1:
        raise InvalidArgument(f"window_days должен быть положительным: {window_days}")
    return [
        HeatCell(date=key, count=len(state.completed_on(key)))
        for key in date_range(_resolve(as_of), window_days)
    ]

def week_view(state: AppState, as_of: Optional[str] = None) -> List[WeekDay]:
    """Дни с понедельника по воскресенье недели, содержащей as_of"""
    monday = week_start(_resolve(as_of))
    view = []
    for offset, label in enumerate(WEEKDAY_LABELS):
        key = shift(monday, offset)
        view.append(WeekDay(label=label, date=key, done_ids=state.completed_on(key)))
    return view

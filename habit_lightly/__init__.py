#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Habit Lightly - Habit tracking core
Модель состояния привычек, статистика и сообщение дня

Версия: 1.0.0
Дата: 2025-07-02
"""

from .core.models import (
    AppState,
    Habit,
    HabitColor,
    HabitError,
    InvalidArgument,
    DeserializationFailure
)

from .utils.datetime_utils import (
    today_key,
    shift
)

from .core.store import (
    new_state,
    add_habit,
    delete_habit,
    toggle_completion,
    set_completion,
    archive_habit,
    restore_habit
)

from .core.statistics import (
    streak,
    longest_streak,
    today_progress,
    weekly_heat,
    completion_rate,
    week_view,
    TodayProgress,
    HeatCell
)

from .core.messages import (
    stable_hash,
    daily_message
)

from .core.serialization import (
    state_to_dict,
    state_from_dict,
    load_state
)

__version__ = "1.0.0"

__all__ = [
    # Models
    'AppState',
    'Habit',
    'HabitColor',

    # Errors
    'HabitError',
    'InvalidArgument',
    'DeserializationFailure',

    # Date keys
    'today_key',
    'shift',

    # Habit store
    'new_state',
    'add_habit',
    'delete_habit',
    'toggle_completion',
    'set_completion',
    'archive_habit',
    'restore_habit',

    # Statistics
    'streak',
    'longest_streak',
    'today_progress',
    'weekly_heat',
    'completion_rate',
    'week_view',
    'TodayProgress',
    'HeatCell',

    # Messages
    'stable_hash',
    'daily_message',

    # Persistence
    'state_to_dict',
    'state_from_dict',
    'load_state'
]

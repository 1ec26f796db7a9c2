#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Habit Lightly - State Serialization
Преобразование AppState в JSON-совместимый словарь и обратно

Версия: 1.0.0
Дата: 2025-07-02
"""

import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from habit_lightly.core.models import AppState, DeserializationFailure, Habit
from habit_lightly.core.store import new_state
from habit_lightly.shared.schemas import SCHEMA_VERSION, StateSchema

logger = logging.getLogger(__name__)

def state_to_dict(state: AppState) -> Dict[str, Any]:
    """Сериализация в словарь (только строки, числа, bool, списки и словари)"""
    return {
        "version": SCHEMA_VERSION,
        "user_id": state.user_id,
        "habits": [h.to_dict() for h in state.habits],
        "days": {
            key: sorted(ids)
            for key, ids in sorted(state.days.items())
            if ids
        },
        "last_seen": state.last_seen
    }

def state_from_dict(data: Any) -> AppState:
    """Десериализация из словаря

    Отметки несуществующих привычек отбрасываются.
    """
    if not isinstance(data, dict):
        raise DeserializationFailure(f"Ожидался объект, получено: {type(data).__name__}")

    try:
        schema = StateSchema.model_validate(data)
    except ValidationError as e:
        raise DeserializationFailure(f"Не удалось загрузить состояние: {e}")

    habits = tuple(
        Habit(
            id=h.id,
            name=h.name,
            color=h.color.value,
            created_at=h.created_at,
            archived=h.archived
        )
        for h in schema.habits
    )
    known_ids = {h.id for h in habits}

    days = {}
    orphaned = 0
    for key, ids in schema.days.items():
        valid = frozenset(i for i in ids if i in known_ids)
        orphaned += len(set(ids) - valid)
        if valid:
            days[key] = valid

    if orphaned:
        logger.warning(f"⚠️ Отброшено {orphaned} отметок несуществующих привычек")

    return AppState(
        user_id=schema.user_id,
        habits=habits,
        days=days,
        last_seen=schema.last_seen
    )

def load_state(storage) -> AppState:
    """Загрузка состояния через адаптер хранилища

    Никогда не выбрасывает исключение: при отсутствии или повреждении
    данных возвращается новое состояние.
    """
    try:
        data: Optional[Dict[str, Any]] = storage.load()
    except DeserializationFailure as e:
        logger.error(f"❌ Ошибка чтения хранилища: {e}")
        data = None

    if data is None:
        logger.info("📂 Сохранённое состояние не найдено, создаём новое")
        return new_state()

    try:
        state = state_from_dict(data)
        logger.info(f"📂 Загружено состояние: {len(state.habits)} привычек, {len(state.days)} дней")
        return state
    except DeserializationFailure as e:
        logger.error(f"❌ {e}")
        logger.info("🆕 Создано новое состояние")
        return new_state()

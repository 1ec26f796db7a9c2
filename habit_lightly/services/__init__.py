# habit_lightly/services/__init__.py

"""
Модуль сервисов Habit Lightly

Инициализация и закрытие HabitService по конфигурации окружения.
"""

import logging
from typing import Optional

from habit_lightly.config import AppConfig, get_config
from habit_lightly.database.manager import JsonFileStorage, StorageAdapter
from habit_lightly.utils.logger import configure_logging
from .habit_service import HabitService

logger = logging.getLogger(__name__)

_global_habit_service: Optional[HabitService] = None

def initialize_services(config: Optional[AppConfig] = None,
                        storage: Optional[StorageAdapter] = None) -> HabitService:
    """Настройка логирования и создание глобального HabitService"""
    global _global_habit_service
    config = config or get_config()
    configure_logging(config)

    if storage is None:
        config.ensure_directories()
        storage = JsonFileStorage(config.storage.path, config.storage.backup_dir)

    logger.info(f"🔧 Инициализация сервисов ({config.environment.value})...")
    if _global_habit_service is not None:
        _global_habit_service.close()
    _global_habit_service = HabitService(storage, config)
    return _global_habit_service

def get_habit_service() -> HabitService:
    """Получить глобальный экземпляр HabitService"""
    if _global_habit_service is None:
        return initialize_services()
    return _global_habit_service

def close_services():
    """Закрытие глобального HabitService"""
    global _global_habit_service
    if _global_habit_service:
        _global_habit_service.close()
        _global_habit_service = None

__all__ = [
    'HabitService',
    'initialize_services',
    'get_habit_service',
    'close_services'
]

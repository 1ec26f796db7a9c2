#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Habit Lightly - Configuration
Централизованная конфигурация с валидацией

Версия: 1.0.0
Дата: 2025-07-02
"""

import os
import sys
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass
from enum import Enum

import pytz

class Environment(Enum):
    """Среды выполнения"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"

class LogLevel(Enum):
    """Уровни логирования"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

@dataclass
class StorageConfig:
    """Конфигурация хранилища состояния"""
    path: Path
    backup_dir: Path
    autosave_debounce_seconds: float = 0.0

@dataclass
class DisplayConfig:
    """Параметры, которые передаёт слой отображения"""
    timezone: Optional[str] = None
    prefers_dark: bool = False
    heat_window_days: int = 7

def _env_bool(key: str, default: str = 'false') -> bool:
    return os.getenv(key, default).lower() == 'true'

class AppConfig:
    """Главный класс конфигурации"""

    def __init__(self):
        self.environment = Environment(os.getenv('HABIT_ENVIRONMENT', 'development'))
        self._load_config()
        self._validate_config()

    def _load_config(self):
        """Загрузка конфигурации из переменных окружения"""

        # Директории
        self.data_dir = Path(os.getenv('HABIT_DATA_DIR', 'data'))
        self.export_dir = Path(os.getenv('HABIT_EXPORT_DIR', 'exports'))
        self.backup_dir = Path(os.getenv('HABIT_BACKUP_DIR', 'backups'))
        self.log_dir = Path(os.getenv('HABIT_LOG_DIR', 'logs'))

        # Хранилище
        self.storage = StorageConfig(
            path=self.data_dir / os.getenv('HABIT_STATE_FILE', 'habit_state.json'),
            backup_dir=self.backup_dir,
            autosave_debounce_seconds=float(os.getenv('HABIT_AUTOSAVE_DEBOUNCE', 0))
        )

        # Отображение
        self.display = DisplayConfig(
            timezone=os.getenv('HABIT_TIMEZONE') or None,
            prefers_dark=_env_bool('HABIT_PREFERS_DARK'),
            heat_window_days=int(os.getenv('HABIT_HEAT_WINDOW', 7))
        )

        # Логирование
        self.log_level = LogLevel(os.getenv('HABIT_LOG_LEVEL', 'INFO'))
        self.log_to_file = _env_bool('HABIT_LOG_TO_FILE')
        self.log_format = os.getenv(
            'HABIT_LOG_FORMAT',
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
        )

    def _validate_config(self):
        """Валидация конфигурации"""
        errors = []

        if self.storage.autosave_debounce_seconds < 0:
            errors.append("HABIT_AUTOSAVE_DEBOUNCE не может быть отрицательным")

        if self.display.timezone and self.display.timezone not in pytz.all_timezones_set:
            errors.append(f"Неизвестная временная зона: {self.display.timezone}")

        if not 1 <= self.display.heat_window_days <= 366:
            errors.append("HABIT_HEAT_WINDOW должен быть от 1 до 366")

        if errors:
            raise ValueError("Ошибки конфигурации:\n" + "\n".join(f"• {error}" for error in errors))

    def ensure_directories(self):
        """Создание необходимых директорий"""
        directories = [self.data_dir, self.backup_dir]
        if self.log_to_file:
            directories.append(self.log_dir)

        for directory in directories:
            directory.mkdir(parents=True, exist_ok=True)

    def get_logging_config(self) -> Dict[str, Any]:
        """Получение конфигурации логирования"""
        handlers = ['console']
        if self.log_to_file:
            handlers.append('file')

        config = {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'default': {
                    'format': self.log_format,
                    'datefmt': '%Y-%m-%d %H:%M:%S'
                }
            },
            'handlers': {
                'console': {
                    'class': 'logging.StreamHandler',
                    'level': self.log_level.value,
                    'formatter': 'default',
                    'stream': sys.stdout
                }
            },
            'loggers': {
                'habit_lightly': {
                    'level': self.log_level.value,
                    'handlers': handlers,
                    'propagate': False
                }
            }
        }

        if self.log_to_file:
            config['handlers']['file'] = {
                'class': 'logging.handlers.RotatingFileHandler',
                'level': self.log_level.value,
                'formatter': 'default',
                'filename': str(self.log_dir / f"habit_{self.environment.value}.log"),
                'maxBytes': 10485760,  # 10MB
                'backupCount': 5,
                'encoding': 'utf-8'
            }

        return config

    def is_development(self) -> bool:
        return self.environment == Environment.DEVELOPMENT

    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация конфигурации в словарь"""
        return {
            'environment': self.environment.value,
            'state_path': str(self.storage.path),
            'autosave_debounce_seconds': self.storage.autosave_debounce_seconds,
            'timezone': self.display.timezone,
            'prefers_dark': self.display.prefers_dark,
            'log_level': self.log_level.value
        }

_config: Optional[AppConfig] = None

def get_config() -> AppConfig:
    """Получить глобальный экземпляр конфигурации"""
    global _config
    if _config is None:
        _config = AppConfig()
    return _config

def reset_config():
    """Сбросить конфигурацию (перечитать окружение при следующем get_config)"""
    global _config
    _config = None

__all__ = [
    'AppConfig',
    'Environment',
    'LogLevel',
    'StorageConfig',
    'DisplayConfig',
    'get_config',
    'reset_config'
]

# habit_lightly/database/manager.py

import copy
import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Optional, Dict, Any

from habit_lightly.core.models import DeserializationFailure

logger = logging.getLogger(__name__)


class StorageAdapter(ABC):
    """Хранилище сериализованного состояния"""

    @abstractmethod
    def load(self) -> Optional[Dict[str, Any]]:
        """Вернуть сохранённый блоб или None, если ничего не сохранено"""

    @abstractmethod
    def save(self, data: Dict[str, Any]) -> None:
        """Сохранить блоб"""


class MemoryStorage(StorageAdapter):
    """Хранилище в памяти (для тестов и встраивания)"""

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self._data = copy.deepcopy(data)
        self.save_count = 0

    def load(self) -> Optional[Dict[str, Any]]:
        return copy.deepcopy(self._data)

    def save(self, data: Dict[str, Any]) -> None:
        self._data = copy.deepcopy(data)
        self.save_count += 1


class JsonFileStorage(StorageAdapter):
    """Хранилище в JSON файле с атомарной записью"""

    def __init__(self, path: Path, backup_dir: Optional[Path] = None):
        self.path = Path(path)
        self.backup_dir = Path(backup_dir) if backup_dir else self.path.parent / "backups"

    def load(self) -> Optional[Dict[str, Any]]:
        if not self.path.exists():
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"❌ Ошибка парсинга JSON: {e}")
            self._move_corrupted()
            raise DeserializationFailure(f"Файл {self.path} повреждён: {e}")

    def save(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_file = self.path.with_suffix(".tmp")
        with open(temp_file, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        temp_file.replace(self.path)
        logger.debug(f"💾 Состояние сохранено в {self.path}")

    def _move_corrupted(self) -> Optional[Path]:
        """Перенос повреждённого файла в каталог бэкапов"""
        if not self.path.exists():
            return None
        self.backup_dir.mkdir(parents=True, exist_ok=True)
        backup_name = f"corrupted_backup_{datetime.now().strftime('%Y%m%d_%H%M%S_%f')}.json"
        backup_path = self.backup_dir / backup_name
        self.path.replace(backup_path)
        logger.warning(f"🔄 Повреждённый файл перемещён в {backup_path}")
        return backup_path

    def delete(self) -> None:
        if self.path.exists():
            self.path.unlink()

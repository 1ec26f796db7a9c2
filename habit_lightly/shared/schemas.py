from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Dict

from habit_lightly.core.models import HabitColor
from habit_lightly.utils.datetime_utils import is_valid_date_key

SCHEMA_VERSION = 1

# Схемы сохранённого состояния (JSON-блоб хранилища)

class HabitSchema(BaseModel):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    color: HabitColor = HabitColor.EMERALD
    created_at: str
    archived: bool = False

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('Имя привычки не может быть пустым')
        return v.strip()

class StateSchema(BaseModel):
    version: int = SCHEMA_VERSION
    user_id: str = Field(..., min_length=1)
    habits: List[HabitSchema] = []
    days: Dict[str, List[str]] = {}
    last_seen: Optional[str] = None

    @field_validator('days')
    @classmethod
    def validate_days(cls, v):
        for key in v:
            if not is_valid_date_key(key):
                raise ValueError(f'Неверный ключ даты: {key}')
        return v

    @field_validator('habits')
    @classmethod
    def validate_unique_ids(cls, v):
        ids = [h.id for h in v]
        if len(ids) != len(set(ids)):
            raise ValueError('Повторяющиеся id привычек')
        return v

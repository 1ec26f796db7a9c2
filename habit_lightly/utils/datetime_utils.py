# habit_lightly/utils/datetime_utils.py

import re
from datetime import date, datetime, timedelta
from typing import List, Optional

import pytz

from habit_lightly.core.models import InvalidArgument

DATE_KEY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
MAX_SHIFT_DAYS = 3660  # ~10 лет в обе стороны


def now_local(tz: Optional[str] = None) -> datetime:
    """Текущее время в заданной зоне (или в локальной зоне системы)"""
    if tz:
        try:
            return datetime.now(pytz.timezone(tz))
        except pytz.UnknownTimeZoneError:
            raise InvalidArgument(f"Неизвестная временная зона: {tz}")
    return datetime.now()


def to_date_key(value: date) -> str:
    return value.isoformat()


def parse_date_key(key: str) -> date:
    """Разбор ключа даты YYYY-MM-DD"""
    if not isinstance(key, str) or not DATE_KEY_RE.match(key):
        raise InvalidArgument(f"Неверный ключ даты: {key!r}")
    try:
        return date.fromisoformat(key)
    except ValueError:
        raise InvalidArgument(f"Неверный ключ даты: {key!r}")


def is_valid_date_key(key: str) -> bool:
    try:
        parse_date_key(key)
        return True
    except InvalidArgument:
        return False


def today_key(tz: Optional[str] = None) -> str:
    return to_date_key(now_local(tz).date())


def shift(key: str, delta_days: int) -> str:
    """Сдвиг ключа даты на delta_days дней (отрицательный сдвиг уходит в прошлое)"""
    if isinstance(delta_days, bool) or not isinstance(delta_days, int):
        raise InvalidArgument(f"Сдвиг должен быть целым числом: {delta_days!r}")
    if abs(delta_days) > MAX_SHIFT_DAYS:
        raise InvalidArgument(f"Сдвиг вне допустимого диапазона: {delta_days}")

    day = parse_date_key(key)
    try:
        return to_date_key(day + timedelta(days=delta_days))
    except OverflowError:
        raise InvalidArgument(f"Дата вне допустимого диапазона: {key} {delta_days:+d}")


def date_range(end_key: str, days: int) -> List[str]:
    """Ключи `days` последовательных дней, заканчивая end_key (старые первыми)"""
    if days < 1:
        raise InvalidArgument(f"Количество дней должно быть положительным: {days}")
    return [shift(end_key, -offset) for offset in range(days - 1, -1, -1)]


def week_start(key: str) -> str:
    """Понедельник недели, в которую попадает key"""
    return shift(key, -parse_date_key(key).weekday())

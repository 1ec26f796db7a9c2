# habit_lightly/core/messages.py

from typing import Sequence

LIGHT_MESSAGES = (
    "Shine like you're solar-powered ☀️",
    "Brightness isn’t just a theme — it's your energy.",
    "The path is clear, the light is yours — walk it boldly.",
)

DARK_MESSAGES = (
    "Even in the shadows, you radiate purpose.",
    "Night mode: activated. So is your ambition.",
    "Stars shine brightest when the world is darkest.",
)


def stable_hash(s: str) -> int:
    """Хэш строки в знаковое 32-битное число (h = h * 31 + c по UTF-16 кодам)"""
    data = s.encode("utf-16-le")
    h = 0
    for i in range(0, len(data), 2):
        code_unit = data[i] | (data[i + 1] << 8)
        h = (h * 31 + code_unit) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return h


def pick_message(seed: str, messages: Sequence[str]) -> str:
    if not messages:
        raise ValueError("Список сообщений пуст")
    return messages[abs(stable_hash(seed)) % len(messages)]


def daily_message(user_id: str, date_key: str, prefers_dark: bool = False) -> str:
    """Сообщение дня: одно и то же для пары (user_id, date_key)"""
    source = DARK_MESSAGES if prefers_dark else LIGHT_MESSAGES
    return pick_message(f"{user_id}::{date_key}", source)

MAX_HABIT_NAME_LENGTH = 100


def normalize_habit_name(name) -> str:
    """Обрезает пробелы; для нестрокового значения возвращает пустую строку"""
    if not isinstance(name, str):
        return ""
    return name.strip()[:MAX_HABIT_NAME_LENGTH].strip()

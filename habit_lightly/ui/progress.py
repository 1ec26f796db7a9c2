# habit_lightly/ui/progress.py

from typing import Sequence

from habit_lightly.core.statistics import HeatCell, TodayProgress

HEAT_LEVELS = "·░▒▓█"


def progress_bar(percent: int, length: int = 12):
    """Генерирует текстовый progress bar (emoji/блоки)"""
    percent = max(0, min(100, percent))
    done = int(length * percent // 100)
    todo = length - done
    return "🟩" * done + "⬜️" * todo + f" {percent}%"


def today_progress_bar(progress: TodayProgress, length: int = 12):
    return progress_bar(progress.percent, length) + f" ({progress.done}/{progress.total})"


def heat_strip(cells: Sequence[HeatCell]) -> str:
    """Один символ на день; насыщенность относительно самого активного дня"""
    peak = max((c.count for c in cells), default=0)
    if peak == 0:
        return HEAT_LEVELS[0] * len(cells)
    top = len(HEAT_LEVELS) - 1
    return "".join(
        HEAT_LEVELS[0] if c.count == 0 else HEAT_LEVELS[max(1, round(c.count / peak * top))]
        for c in cells
    )


def streak_emoji(streak: int):
    if streak >= 30:
        return "🏆"
    elif streak >= 7:
        return "🔥"
    elif streak >= 3:
        return "✨"
    else:
        return "🔹"

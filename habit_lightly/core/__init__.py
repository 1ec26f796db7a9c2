# habit_lightly/core/__init__.py

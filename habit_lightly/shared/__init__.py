# habit_lightly/shared/__init__.py

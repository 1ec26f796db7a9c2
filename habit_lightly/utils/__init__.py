# habit_lightly/utils/__init__.py

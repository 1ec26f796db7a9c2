# habit_lightly/database/__init__.py

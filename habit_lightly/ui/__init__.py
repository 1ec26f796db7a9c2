# habit_lightly/ui/__init__.py

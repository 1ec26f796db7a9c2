import logging
import logging.config
from logging.handlers import RotatingFileHandler
from pathlib import Path

def setup_logger(log_file: str = "logs/habit.log", max_bytes: int = 10_000_000, backup_count: int = 5):
    Path(log_file).parent.mkdir(exist_ok=True, parents=True)
    logger = logging.getLogger("habit_lightly")
    logger.setLevel(logging.INFO)
    handler = RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
    formatter = logging.Formatter('%(asctime)s [%(levelname)s] %(name)s: %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return logger

def configure_logging(config):
    """Применяет словарь из AppConfig.get_logging_config()"""
    if config.log_to_file:
        config.log_dir.mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(config.get_logging_config())
    return logging.getLogger("habit_lightly")

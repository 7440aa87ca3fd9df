from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from todolist.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def build_handlers(settings: Settings) -> list[logging.Handler]:
    settings.log_dir.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    file_handler = RotatingFileHandler(
        settings.log_path,
        maxBytes=settings.log_max_bytes,
        backupCount=settings.log_backup_count,
        encoding="utf-8",
    )
    console_handler = logging.StreamHandler()
    for handler in (file_handler, console_handler):
        handler.setFormatter(formatter)
    return [file_handler, console_handler]


def setup_logging(settings: Settings) -> Path:
    logging.basicConfig(level=settings.log_level.upper(), handlers=build_handlers(settings))
    return settings.log_path

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_DB_NAME = "todo_database.db"


def _resolve_project_root() -> Path:
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parents[1]


PROJECT_ROOT = _resolve_project_root()


def _find_env_file(name: str) -> Path | None:
    for base in (Path.cwd(), PROJECT_ROOT):
        candidate = base / name
        if candidate.exists():
            return candidate
    return None


def load_env() -> None:
    """Load ``.env`` and then ``.env.<APP_ENV>``, the latter taking precedence."""
    shared = _find_env_file(".env")
    if shared:
        load_dotenv(shared)
    specific = _find_env_file(f".env.{os.getenv('APP_ENV', 'development')}")
    if specific:
        load_dotenv(specific, override=True)


def _resolve_path(value: str, default: Path) -> Path:
    if not value:
        return default
    path = Path(value)
    return path if path.is_absolute() else PROJECT_ROOT / path


@dataclass(frozen=True)
class Settings:
    database_path: Path
    log_level: str = "INFO"
    log_dir: Path = PROJECT_ROOT / "logs"
    log_file: str = "todolist.log"
    log_max_bytes: int = 2_000_000
    log_backup_count: int = 3

    @property
    def log_path(self) -> Path:
        return self.log_dir / self.log_file


def load_settings() -> Settings:
    load_env()
    return Settings(
        database_path=_resolve_path(os.getenv("TODO_DB_PATH", "").strip(), PROJECT_ROOT / DEFAULT_DB_NAME),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_dir=_resolve_path(os.getenv("LOG_DIR", "").strip(), PROJECT_ROOT / "logs"),
        log_file=os.getenv("LOG_FILE", "todolist.log"),
        log_max_bytes=int(os.getenv("LOG_MAX_BYTES", "2000000")),
        log_backup_count=int(os.getenv("LOG_BACKUP_COUNT", "3")),
    )

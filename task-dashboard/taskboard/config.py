from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


APP_ROOT = Path(__file__).resolve().parents[1]
DATA_DIR = APP_ROOT / "data"


@dataclass(frozen=True)
class TaskboardConfig:
    """Runtime configuration for the task dashboard.

    Dataset:
    - TASKBOARD_DATASET: path or http(s) URL of the static task dataset
      (default: data/tasks.json next to the app)
    - TASKBOARD_FETCH_TIMEOUT_SECONDS: timeout for URL datasets (default: 10)

    Storage:
    - TASKBOARD_DATABASE_URL: key-value store DB URL
    - PLATFORM_DATABASE_URL: shared DB URL, used when the above is unset
    - If neither is set, defaults to local SQLite at data/taskboard.db
    - TASKBOARD_STORAGE_NAMESPACE: key namespace (default: default)

    View:
    - TASKBOARD_PAGE_SIZE: rows per page (default: 10)

    Logging:
    - TASKBOARD_LOG_LEVEL: console level name (default: INFO)
    - TASKBOARD_LOG_DIR: when set, also log to <dir>/taskboard.log
    """

    dataset_source: str
    fetch_timeout_seconds: int
    database_url: str
    storage_namespace: str
    page_size: int
    log_level: int
    log_dir: Optional[str]

    @classmethod
    def from_env(cls) -> "TaskboardConfig":
        db_url = _env_str("TASKBOARD_DATABASE_URL") or _env_str("PLATFORM_DATABASE_URL")
        if not db_url:
            DATA_DIR.mkdir(parents=True, exist_ok=True)
            db_url = f"sqlite:///{(DATA_DIR / 'taskboard.db').as_posix()}"

        dataset = _env_str("TASKBOARD_DATASET") or (DATA_DIR / "tasks.json").as_posix()

        return cls(
            dataset_source=dataset,
            fetch_timeout_seconds=max(1, _env_int("TASKBOARD_FETCH_TIMEOUT_SECONDS", 10)),
            database_url=db_url,
            storage_namespace=_env_str("TASKBOARD_STORAGE_NAMESPACE") or "default",
            page_size=max(1, _env_int("TASKBOARD_PAGE_SIZE", 10)),
            log_level=_env_level("TASKBOARD_LOG_LEVEL", logging.INFO),
            log_dir=_env_str("TASKBOARD_LOG_DIR"),
        )


def _env_str(name: str) -> Optional[str]:
    raw = os.environ.get(name)
    if raw is None:
        return None
    return raw.strip() or None


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return int(default)
    try:
        return int(str(raw).strip())
    except ValueError:
        return int(default)


def _env_level(name: str, default: int) -> int:
    raw = (_env_str(name) or "").upper()
    if not raw:
        return default
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else default


_config: Optional[TaskboardConfig] = None


def get_config() -> TaskboardConfig:
    """Get the dashboard configuration (cached)."""
    global _config
    if _config is None:
        _config = TaskboardConfig.from_env()
    return _config


def reset_config() -> None:
    global _config
    _config = None

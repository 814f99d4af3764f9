"""Persistence of user edits on top of the static dataset.

Two logical records live in the key-value store, each as one JSON blob:

- ``taskStatuses``: object mapping task id (as a string) to status
- ``userCreatedTasks``: array of full task objects, oldest first

Writes are read-modify-write with no locking; two sessions sharing a
namespace simply overwrite each other (last writer wins). Loads never fail:
a missing or malformed blob reads as empty. A save whose store read fails
raises PersistenceWriteError and leaves the stored blob untouched.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Protocol

from taskboard.errors import PersistenceReadError, PersistenceWriteError
from taskboard.models import Task, TaskId, normalize_status, normalize_task_id

logger = logging.getLogger(__name__)

STATUS_OVERRIDES_KEY = "taskStatuses"
USER_CREATED_TASKS_KEY = "userCreatedTasks"


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


def _decode(raw: Optional[str], expected: type, key: str) -> Any:
    if raw is None or raw == "":
        return expected()
    try:
        value = json.loads(raw)
    except ValueError as e:
        raise PersistenceReadError(f"{key}: invalid JSON ({e})") from e
    if not isinstance(value, expected):
        raise PersistenceReadError(
            f"{key}: expected {expected.__name__}, got {type(value).__name__}"
        )
    return value


class PersistenceAdapter:
    def __init__(self, store: KeyValueStore):
        self.store = store

    def _read(self, key: str, expected: type) -> Any:
        try:
            return _decode(self.store.get(key), expected, key)
        except PersistenceReadError as e:
            logger.warning("Ignoring unreadable persisted state: %s", e)
            return expected()

    def _read_for_update(self, key: str, expected: type) -> Any:
        """Like _read, but a store that cannot be read aborts the write
        instead of letting it overwrite the saved blob."""
        try:
            raw = self.store.get(key)
        except PersistenceReadError as e:
            raise PersistenceWriteError(f"{key}: not saved, current value unreadable ({e})") from e
        try:
            return _decode(raw, expected, key)
        except PersistenceReadError as e:
            logger.warning("Replacing unreadable persisted state: %s", e)
            return expected()

    # ---- status overrides ----

    def _raw_status_overrides(self) -> Dict[str, Any]:
        return self._read(STATUS_OVERRIDES_KEY, dict)

    def load_status_overrides(self) -> Dict[TaskId, str]:
        overrides: Dict[TaskId, str] = {}
        for raw_id, raw_status in self._raw_status_overrides().items():
            try:
                overrides[normalize_task_id(raw_id)] = normalize_status(raw_status)
            except ValueError:
                logger.warning("Skipping status override %r -> %r", raw_id, raw_status)
        return overrides

    def save_status_override(self, task_id: TaskId, status: str) -> None:
        overrides = self._read_for_update(STATUS_OVERRIDES_KEY, dict)
        overrides[str(task_id)] = status
        self.store.set(STATUS_OVERRIDES_KEY, json.dumps(overrides))

    # ---- user-created tasks ----

    def load_user_created_tasks(self) -> List[Task]:
        tasks: List[Task] = []
        for raw in self._read(USER_CREATED_TASKS_KEY, list):
            try:
                tasks.append(Task.from_dict(raw))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed user-created task: %s", e)
        return tasks

    def save_user_created_task(self, task: Task) -> None:
        saved = self._read_for_update(USER_CREATED_TASKS_KEY, list)
        saved.append(task.to_dict())
        self.store.set(USER_CREATED_TASKS_KEY, json.dumps(saved))

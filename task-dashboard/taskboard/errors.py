"""Exception types raised by the taskboard core.

Nothing here is fatal to the app: the dashboard catches these at its
boundary and turns them into notices or no-ops.
"""
from __future__ import annotations

from typing import Iterable, List


class TaskboardError(Exception):
    """Base class for all taskboard errors."""


class LoadFailure(TaskboardError):
    """The static dataset could not be fetched or parsed."""


class TaskValidationError(TaskboardError):
    """Task creation was missing required fields."""

    def __init__(self, missing_fields: Iterable[str], message: str = ""):
        self.missing_fields: List[str] = list(missing_fields)
        if not message:
            message = "Missing required fields: " + ", ".join(self.missing_fields)
        super().__init__(message)


class TaskNotFound(TaskboardError):
    def __init__(self, task_id):
        self.task_id = task_id
        super().__init__(f"Task {task_id!r} not found")


class DuplicateTaskError(TaskboardError):
    def __init__(self, task_id):
        self.task_id = task_id
        super().__init__(f"Task {task_id!r} already exists")


class PersistenceReadError(TaskboardError):
    """A persisted blob could not be decoded."""


class PersistenceWriteError(TaskboardError):
    """The key-value store rejected a write."""

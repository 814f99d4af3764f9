from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, Iterable, Iterator, List, Mapping, Optional

from taskboard.errors import DuplicateTaskError, TaskNotFound
from taskboard.models import Task, TaskId, normalize_status, normalize_task_id

logger = logging.getLogger(__name__)


class TaskStore:
    """The session's merged task collection, newest user-created tasks first.

    Ids are normalised on every lookup, so ``"12"`` and ``12`` address the
    same task.
    """

    def __init__(self) -> None:
        self._tasks: List[Task] = []
        self._by_id: Dict[TaskId, Task] = {}

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks))

    def all(self) -> List[Task]:
        return list(self._tasks)

    def load(
        self,
        static_tasks: Iterable[Task],
        overrides: Optional[Mapping[TaskId, str]] = None,
        user_tasks: Iterable[Task] = (),
    ) -> None:
        """Replace the collection: static tasks, then saved user-created
        tasks prepended (skipping ids already present), then status
        overrides applied.
        """
        self._tasks = []
        self._by_id = {}
        for task in static_tasks:
            # Copies, so overrides never leak into the caller's dataset.
            self._append(replace(task))

        merged = 0
        for task in user_tasks:
            if task.id in self._by_id:
                continue
            self._tasks.insert(0, replace(task))
            self._by_id[task.id] = self._tasks[0]
            merged += 1

        applied = 0
        for raw_id, status in (overrides or {}).items():
            task = self.find_by_id(raw_id)
            if task is not None:
                task.status = status
                applied += 1

        logger.debug(
            "Task store loaded total=%s user_created=%s overrides_applied=%s",
            len(self._tasks), merged, applied,
        )

    def _append(self, task: Task) -> None:
        if task.id in self._by_id:
            logger.warning("Duplicate task id %r in dataset; keeping the first", task.id)
            return
        self._tasks.append(task)
        self._by_id[task.id] = task

    def find_by_id(self, task_id) -> Optional[Task]:
        try:
            return self._by_id.get(normalize_task_id(task_id))
        except ValueError:
            return None

    def insert(self, task: Task) -> None:
        if task.id in self._by_id:
            raise DuplicateTaskError(task.id)
        self._tasks.insert(0, task)
        self._by_id[task.id] = task

    def update_status(self, task_id, new_status: str) -> Task:
        """Set the status in place; ``progress`` and ``completed_date`` are
        not touched."""
        status = normalize_status(new_status)
        task = self.find_by_id(task_id)
        if task is None:
            raise TaskNotFound(task_id)
        task.status = status
        return task

    def next_id(self) -> int:
        numeric = [t.id for t in self._tasks if isinstance(t.id, int)]
        return (max(numeric) if numeric else 0) + 1

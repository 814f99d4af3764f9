"""The command surface the Streamlit pages drive.

One ``TaskDashboard`` lives in ``st.session_state`` per browser session. It
owns the task store, the view state and the persistence adapter; pages call
its named operations and render what ``get_visible_page``,
``get_statistics`` and ``get_analytics`` return.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any, Callable, List, Mapping, Optional, Tuple, Union

from taskboard.config import TaskboardConfig, get_config
from taskboard.dataset import Dataset, load_dataset
from taskboard.errors import LoadFailure, PersistenceWriteError, TaskValidationError
from taskboard.export import export_filename, tasks_to_csv
from taskboard.kv_store import SqlKeyValueStore
from taskboard.models import (
    STATUS_PROGRESS,
    MemberRef,
    Task,
    TeamMember,
    normalize_priority,
    normalize_status,
    parse_date,
)
from taskboard.persistence import PersistenceAdapter
from taskboard import statistics
from taskboard.task_store import TaskStore
from taskboard.view_state import DEFAULT_PAGE_SIZE, ViewStateEngine, VisiblePage

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "assignee", "due_date")


@dataclass(frozen=True)
class Notice:
    """A user-facing toast: level is success, error or info."""

    level: str
    message: str


def _text(fields: Mapping[str, Any], name: str) -> str:
    value = fields.get(name)
    if value is None:
        return ""
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value).strip()


def _tags(value: Any) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [t.strip() for t in value.split(",") if t.strip()]
    return [str(t).strip() for t in value if str(t).strip()]


class TaskDashboard:
    def __init__(
        self,
        adapter: PersistenceAdapter,
        page_size: int = DEFAULT_PAGE_SIZE,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.adapter = adapter
        self.clock = clock
        self.store = TaskStore()
        self.view = ViewStateEngine(self.store, page_size=page_size, clock=clock)
        self.team_members: List[TeamMember] = []
        self.weekly_completions: Optional[List[int]] = None
        self.loaded = False
        self._notices: List[Notice] = []

    @classmethod
    def from_config(
        cls,
        config: Optional[TaskboardConfig] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> "TaskDashboard":
        config = config or get_config()
        kv = SqlKeyValueStore(config.database_url, namespace=config.storage_namespace)
        return cls(PersistenceAdapter(kv), page_size=config.page_size, clock=clock)

    # ---- notices ----

    def _notify(self, level: str, message: str) -> None:
        self._notices.append(Notice(level, message))

    def pop_notices(self) -> List[Notice]:
        notices, self._notices = self._notices, []
        return notices

    # ---- loading ----

    def load(self, source: Union[str, Path], timeout: float = 10) -> bool:
        """Load the dataset and overlay saved edits. On failure the store is
        left empty and an error notice is posted."""
        try:
            dataset = load_dataset(source, timeout=timeout)
        except LoadFailure as e:
            logger.error("Dataset load failed: %s", e)
            self.load_dataset(Dataset(), with_saved_state=False)
            self.loaded = False
            self._notify("error", "Failed to load tasks")
            return False
        self.load_dataset(dataset)
        self._notify("success", "Tasks loaded successfully")
        return True

    def load_dataset(self, dataset: Dataset, with_saved_state: bool = True) -> None:
        overrides = self.adapter.load_status_overrides() if with_saved_state else {}
        user_tasks = self.adapter.load_user_created_tasks() if with_saved_state else []
        self.store.load(dataset.tasks, overrides=overrides, user_tasks=user_tasks)
        self.team_members = list(dataset.team_members)
        self.weekly_completions = dataset.weekly_completions
        self.view.reset()
        self.loaded = True

    # ---- queries ----

    def get_visible_page(self) -> VisiblePage:
        return self.view.visible_page(self.clock())

    def get_statistics(self) -> statistics.BasicCounts:
        return statistics.basic_counts(self.store.all(), self.clock())

    def get_analytics(self) -> statistics.AnalyticsMetrics:
        return statistics.analytics(
            self.store.all(),
            self.team_members,
            self.clock(),
            weekly_series=self.weekly_completions,
        )

    def find_task(self, task_id) -> Optional[Task]:
        return self.store.find_by_id(task_id)

    def filtered_tasks(self) -> List[Task]:
        return self.view.matching_tasks(self.clock())

    def pending_badge(self) -> int:
        return self.get_statistics().pending

    # ---- view commands ----

    def set_search_term(self, term: Optional[str]) -> None:
        self.view.set_search_term(term)

    def set_filter(self, active_filter: str) -> None:
        self.view.set_filter(active_filter)

    def set_sort(self, column: Optional[str]) -> None:
        self.view.set_sort(column)

    def set_page(self, page: int) -> bool:
        return self.view.set_page(page)

    # ---- mutations ----

    def update_status(self, task_id, new_status: str) -> bool:
        """Change a task's status and save the override.

        Unknown ids are ignored (False). If the save fails the in-memory
        status is put back and an error notice is posted.
        """
        status = normalize_status(new_status)
        task = self.store.find_by_id(task_id)
        if task is None:
            logger.debug("Status update for unknown task %r ignored", task_id)
            return False
        previous = task.status
        self.store.update_status(task.id, status)
        try:
            self.adapter.save_status_override(task.id, status)
        except PersistenceWriteError as e:
            task.status = previous
            logger.error("Could not save status of task %r: %s", task.id, e)
            self._notify("error", "Could not save the status change")
            return False
        self.view.clamp_page()
        logger.info("Task %r status %s -> %s", task.id, previous, status)
        self._notify("success", f"Task status updated to {status}")
        return True

    def build_task(self, fields: Mapping[str, Any]) -> Task:
        """Validate form fields into a new Task (not yet stored)."""
        missing = [name for name in REQUIRED_FIELDS if not _text(fields, name)]
        if missing:
            raise TaskValidationError(missing)

        try:
            priority = normalize_priority(_text(fields, "priority") or "medium")
        except ValueError as e:
            raise TaskValidationError(["priority"], str(e)) from e
        try:
            status = normalize_status(_text(fields, "status") or "pending")
        except ValueError as e:
            raise TaskValidationError(["status"], str(e)) from e
        try:
            due = parse_date(fields["due_date"])
        except ValueError as e:
            raise TaskValidationError(["due_date"], f"Invalid due date: {e}") from e

        assignee = _text(fields, "assignee")
        return Task(
            id=self.store.next_id(),
            title=_text(fields, "title"),
            description=_text(fields, "description"),
            assigned_to=assignee,
            team_member=MemberRef.for_assignee(assignee),
            priority=priority,
            status=status,
            due_date=due,
            created_date=self.clock().date(),
            progress=STATUS_PROGRESS[status],
            tags=_tags(fields.get("tags")),
        )

    def create_task(self, fields: Mapping[str, Any]) -> Task:
        """Validate, persist and insert a new task at the front.

        Raises TaskValidationError or PersistenceWriteError with nothing
        changed in memory.
        """
        task = self.build_task(fields)
        self.adapter.save_user_created_task(task)
        self.store.insert(task)
        self.view.reset_page()
        logger.info("Created task %r %r assigned to %s", task.id, task.title, task.assigned_to)
        self._notify("success", "Task created successfully!")
        return task

    # ---- export ----

    def export_csv(self) -> Tuple[str, str]:
        """(filename, csv text) for the current search/filter/sort, unpaginated."""
        content = tasks_to_csv(self.filtered_tasks())
        self._notify("success", "Tasks exported successfully")
        return export_filename(self.clock().date()), content

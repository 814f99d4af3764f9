"""Search, filter, sort and pagination over the task store.

The visible page is always derived from scratch in this order:

1. search   - case-insensitive substring of title, description or assignee
2. filter   - all / a literal status / overdue
3. sort     - stable, optional, by priority, due date or status
4. paginate - fixed-size slices, 1-based pages

Search and filter changes go back to page 1; sort changes keep the page.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional

from taskboard.models import PRIORITY_RANK, Task
from taskboard.task_store import TaskStore

FILTERS = ("all", "pending", "in-progress", "completed", "overdue")
SORT_COLUMNS = ("priority", "dueDate", "status")
SORT_DIRECTIONS = ("asc", "desc")
DEFAULT_PAGE_SIZE = 10

_SORT_KEYS: Dict[str, Callable[[Task], object]] = {
    "priority": lambda t: PRIORITY_RANK.get(t.priority, 0),
    "dueDate": lambda t: t.due_date,
    "status": lambda t: t.status,
}


@dataclass
class ViewState:
    search_term: str = ""
    active_filter: str = "all"
    sort_column: Optional[str] = None
    sort_direction: str = "asc"
    current_page: int = 1


@dataclass(frozen=True)
class VisiblePage:
    tasks: List[Task] = field(default_factory=list)
    total_pages: int = 0
    current_page: int = 1
    match_count: int = 0


def matches_search(task: Task, term: str) -> bool:
    if not term:
        return True
    needle = term.lower()
    return (
        needle in task.title.lower()
        or needle in task.description.lower()
        or needle in task.assigned_to.lower()
    )


def matches_filter(task: Task, active_filter: str, now: datetime) -> bool:
    if active_filter == "all":
        return True
    if active_filter == "overdue":
        return task.is_overdue(now)
    return task.status == active_filter


def sort_tasks(tasks: Iterable[Task], column: Optional[str], direction: str = "asc") -> List[Task]:
    """Stable sort; equal keys keep their relative order in both directions."""
    tasks = list(tasks)
    if column is None:
        return tasks
    return sorted(tasks, key=_SORT_KEYS[column], reverse=(direction == "desc"))


def total_pages_for(match_count: int, page_size: int) -> int:
    return math.ceil(match_count / page_size) if match_count else 0


def page_links(current: int, total: int) -> List[Optional[int]]:
    """Page numbers for the pager: first, last and the neighbours of
    ``current``; ``None`` marks an ellipsis. Empty when there is one page."""
    if total <= 1:
        return []
    links: List[Optional[int]] = []
    for i in range(1, total + 1):
        if i in (1, total) or current - 1 <= i <= current + 1:
            links.append(i)
        elif i in (current - 2, current + 2):
            links.append(None)
    return links


def paginate(tasks: List[Task], page: int, page_size: int) -> List[Task]:
    if page < 1:
        return []
    start = (page - 1) * page_size
    return tasks[start:start + page_size]


class ViewStateEngine:
    """Owns the ViewState for one session and derives the visible page."""

    def __init__(
        self,
        store: TaskStore,
        page_size: int = DEFAULT_PAGE_SIZE,
        clock: Callable[[], datetime] = datetime.now,
    ):
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self.store = store
        self.page_size = page_size
        self.clock = clock
        self.state = ViewState()

    def reset(self) -> None:
        self.state = ViewState()

    # ---- mutations ----

    def set_search_term(self, term: Optional[str]) -> None:
        self.state.search_term = term or ""
        self.state.current_page = 1

    def set_filter(self, active_filter: str) -> None:
        if active_filter not in FILTERS:
            raise ValueError(f"unknown filter: {active_filter!r}")
        self.state.active_filter = active_filter
        self.state.current_page = 1

    def set_sort(self, column: Optional[str]) -> None:
        """Same column flips the direction; a new column starts ascending."""
        if column in (None, "none"):
            self.clear_sort()
            return
        if column not in SORT_COLUMNS:
            raise ValueError(f"unknown sort column: {column!r}")
        if self.state.sort_column == column:
            self.state.sort_direction = "desc" if self.state.sort_direction == "asc" else "asc"
        else:
            self.state.sort_column = column
            self.state.sort_direction = "asc"

    def clear_sort(self) -> None:
        self.state.sort_column = None
        self.state.sort_direction = "asc"

    def set_page(self, page: int) -> bool:
        """Move to ``page``; out-of-range requests are ignored (returns False)."""
        if page < 1 or page > self.total_pages():
            return False
        self.state.current_page = page
        return True

    def reset_page(self) -> None:
        self.state.current_page = 1

    def clamp_page(self) -> None:
        """Go back to page 1 if the collection shrank below the current page."""
        if self.state.current_page > max(1, self.total_pages()):
            self.state.current_page = 1

    # ---- derivation ----

    def matching_tasks(self, now: Optional[datetime] = None) -> List[Task]:
        """Searched, filtered and sorted tasks, before pagination."""
        now = now or self.clock()
        st = self.state
        matched = [
            t for t in self.store.all()
            if matches_search(t, st.search_term) and matches_filter(t, st.active_filter, now)
        ]
        return sort_tasks(matched, st.sort_column, st.sort_direction)

    def total_pages(self, now: Optional[datetime] = None) -> int:
        return total_pages_for(len(self.matching_tasks(now)), self.page_size)

    def visible_page(self, now: Optional[datetime] = None) -> VisiblePage:
        matched = self.matching_tasks(now)
        page = self.state.current_page
        return VisiblePage(
            tasks=paginate(matched, page, self.page_size),
            total_pages=total_pages_for(len(matched), self.page_size),
            current_page=page,
            match_count=len(matched),
        )

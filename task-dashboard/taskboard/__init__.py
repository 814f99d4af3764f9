"""Taskboard - task list and analytics dashboard core.

This package contains:
- Typed task / team member records and the static dataset loader
- The session task store and the search/filter/sort/pagination view state
- Status-override and user-created-task persistence over a key-value table
- Statistics, CSV export and plotly chart builders for the Streamlit pages
"""

from .dashboard import Notice, TaskDashboard
from .errors import (
    DuplicateTaskError,
    LoadFailure,
    PersistenceReadError,
    PersistenceWriteError,
    TaskboardError,
    TaskNotFound,
    TaskValidationError,
)
from .models import MemberRef, Task, TeamMember

__all__ = [
    "TaskDashboard",
    "Notice",
    "Task",
    "TeamMember",
    "MemberRef",
    "TaskboardError",
    "LoadFailure",
    "TaskValidationError",
    "TaskNotFound",
    "DuplicateTaskError",
    "PersistenceReadError",
    "PersistenceWriteError",
]

"""Typed records for tasks and team members.

Dataset and persisted records use camelCase keys (``assignedTo``,
``dueDate``...). Everything is coerced here, at the load boundary, so the
rest of the package can rely on real ``date`` objects and normalised
status/priority tokens.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Any, Dict, List, Mapping, Optional, Union

TaskId = Union[int, str]

STATUSES = ("pending", "in-progress", "completed")
PRIORITIES = ("low", "medium", "high")
PRIORITY_RANK: Dict[str, int] = {"high": 3, "medium": 2, "low": 1}
STATUS_PROGRESS: Dict[str, int] = {"completed": 100, "in-progress": 50, "pending": 0}

DEFAULT_MEMBER_ROLE = "Team Member"


def normalize_task_id(value: Any) -> TaskId:
    """Return an int for numeric ids (``7`` and ``"7"`` are the same task)."""
    if value is None or isinstance(value, bool):
        raise ValueError(f"invalid task id: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    text = str(value).strip()
    if not text:
        raise ValueError("empty task id")
    try:
        return int(text)
    except ValueError:
        return text


def _token(value: Any) -> str:
    return "-".join(str(value or "").strip().lower().replace("_", " ").split())


def normalize_status(value: Any) -> str:
    """``"In Progress"`` -> ``"in-progress"``; raises ValueError if unknown."""
    token = _token(value)
    if token not in STATUSES:
        raise ValueError(f"unknown status: {value!r}")
    return token


def normalize_priority(value: Any) -> str:
    token = _token(value)
    if token not in PRIORITIES:
        raise ValueError(f"unknown priority: {value!r}")
    return token


def parse_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value or "").strip()
    if not text:
        raise ValueError("empty date")
    # Accept plain dates as well as full ISO timestamps.
    return date.fromisoformat(text[:10])


def _optional_date(value: Any) -> Optional[date]:
    if value in (None, ""):
        return None
    return parse_date(value)


def _safe_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _clamp_progress(value: Any, status: str) -> int:
    if value is None or value == "":
        return STATUS_PROGRESS[status]
    try:
        num = float(value)
    except (TypeError, ValueError):
        return STATUS_PROGRESS[status]
    if math.isnan(num):
        return STATUS_PROGRESS[status]
    return max(0, min(100, int(round(num))))


def initials(name: str) -> str:
    return "".join(part[0] for part in name.split() if part)


@dataclass
class MemberRef:
    """The team member embedded on a task (display data only)."""

    name: str
    role: str = DEFAULT_MEMBER_ROLE
    department: str = ""
    avatar: str = ""

    @classmethod
    def from_dict(cls, raw: Optional[Mapping[str, Any]], fallback_name: str = "") -> "MemberRef":
        raw = raw or {}
        name = _safe_str(raw.get("name")).strip() or fallback_name
        return cls(
            name=name,
            role=_safe_str(raw.get("role")) or DEFAULT_MEMBER_ROLE,
            department=_safe_str(raw.get("department")),
            avatar=_safe_str(raw.get("avatar")) or initials(name),
        )

    @classmethod
    def for_assignee(cls, assignee: str) -> "MemberRef":
        return cls(name=assignee, avatar=initials(assignee))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "role": self.role,
            "department": self.department,
            "avatar": self.avatar,
        }


@dataclass
class Task:
    id: TaskId
    title: str
    description: str
    assigned_to: str
    team_member: MemberRef
    priority: str
    status: str
    due_date: date
    created_date: date
    completed_date: Optional[date] = None
    progress: int = 0
    tags: List[str] = field(default_factory=list)

    def is_overdue(self, now: datetime) -> bool:
        """Not completed and the due date (taken as midnight) is before ``now``."""
        if self.status == "completed":
            return False
        return datetime.combine(self.due_date, time.min) < now

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Task":
        """Build a Task from a dataset/persisted record.

        Raises ValueError (or KeyError/TypeError) for records missing an id,
        title, due or created date, or carrying an unknown status/priority.
        """
        if not isinstance(raw, Mapping):
            raise TypeError(f"task record must be an object, got {type(raw).__name__}")
        title = _safe_str(raw.get("title")).strip()
        if not title:
            raise ValueError("task record has no title")
        status = normalize_status(raw.get("status") or "pending")
        assigned_to = _safe_str(raw.get("assignedTo"))
        member = MemberRef.from_dict(raw.get("teamMember"), fallback_name=assigned_to)
        tags = raw.get("tags") or []
        if isinstance(tags, str):
            tags = [t.strip() for t in tags.split(",") if t.strip()]
        return cls(
            id=normalize_task_id(raw["id"]),
            title=title,
            description=_safe_str(raw.get("description")),
            assigned_to=assigned_to or member.name,
            team_member=member,
            priority=normalize_priority(raw.get("priority") or "medium"),
            status=status,
            due_date=parse_date(raw["dueDate"]),
            created_date=parse_date(raw["createdDate"]),
            completed_date=_optional_date(raw.get("completedDate")),
            progress=_clamp_progress(raw.get("progress"), status),
            tags=[str(t) for t in tags],
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "assignedTo": self.assigned_to,
            "teamMember": self.team_member.to_dict(),
            "priority": self.priority,
            "status": self.status,
            "dueDate": self.due_date.isoformat(),
            "createdDate": self.created_date.isoformat(),
            "progress": self.progress,
            "tags": list(self.tags),
        }
        if self.completed_date is not None:
            data["completedDate"] = self.completed_date.isoformat()
        return data


@dataclass(frozen=True)
class TeamMember:
    """Analytics-only team member record; never mutated after load."""

    name: str
    role: str = ""
    avatar: str = ""
    productivity: float = 0
    tasks_completed: int = 0
    tasks_assigned: int = 0

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "TeamMember":
        if not isinstance(raw, Mapping):
            raise TypeError(f"team member must be an object, got {type(raw).__name__}")
        name = _safe_str(raw.get("name")).strip()
        if not name:
            raise ValueError("team member has no name")
        return cls(
            name=name,
            role=_safe_str(raw.get("role")),
            avatar=_safe_str(raw.get("avatar")),
            productivity=float(raw.get("productivity") or 0),
            tasks_completed=int(raw.get("tasksCompleted") or 0),
            tasks_assigned=int(raw.get("tasksAssigned") or 0),
        )

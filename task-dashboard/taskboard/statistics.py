"""Read-only aggregates over the full task collection (never the filtered view)."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, time
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional, Sequence

from taskboard.models import Task, TeamMember

NO_PERFORMER = "N/A"
# Placeholder weekly series used when the dataset carries none.
FALLBACK_WEEKLY_COMPLETIONS = (2, 1, 0, 3, 1, 2, 1)


@dataclass(frozen=True)
class BasicCounts:
    total: int = 0
    completed: int = 0
    in_progress: int = 0
    pending: int = 0
    overdue: int = 0


@dataclass(frozen=True)
class Bottleneck:
    task: Task
    days_overdue: int


@dataclass(frozen=True)
class AnalyticsMetrics:
    avg_completion_time: float = 0.0
    on_time_rate: int = 0
    top_performer: str = NO_PERFORMER
    bottleneck_count: int = 0
    status_counts: Dict[str, int] = field(default_factory=dict)
    priority_counts: Dict[str, int] = field(default_factory=dict)
    weekly_completions: List[int] = field(default_factory=list)
    team_distribution: Dict[str, int] = field(default_factory=dict)
    top_performers: List[TeamMember] = field(default_factory=list)
    bottlenecks: List[Bottleneck] = field(default_factory=list)


def _round_half_up(value: float, digits: int = 0) -> Decimal:
    exp = Decimal(1).scaleb(-digits)
    return Decimal(repr(value)).quantize(exp, rounding=ROUND_HALF_UP)


def basic_counts(tasks: Sequence[Task], now: datetime) -> BasicCounts:
    return BasicCounts(
        total=len(tasks),
        completed=sum(1 for t in tasks if t.status == "completed"),
        in_progress=sum(1 for t in tasks if t.status == "in-progress"),
        pending=sum(1 for t in tasks if t.status == "pending"),
        overdue=sum(1 for t in tasks if t.is_overdue(now)),
    )


def _measurable_completed(tasks: Sequence[Task]) -> List[Task]:
    # Tasks marked completed through a status change carry no completed date.
    return [t for t in tasks if t.status == "completed" and t.completed_date is not None]


def avg_completion_time(tasks: Sequence[Task]) -> float:
    """Mean days from creation to completion, one decimal; 0 with none."""
    done = _measurable_completed(tasks)
    if not done:
        return 0.0
    total_days = sum((t.completed_date - t.created_date).days for t in done)
    return float(_round_half_up(total_days / len(done), 1))


def on_time_rate(tasks: Sequence[Task]) -> int:
    """Percent of completed tasks finished on or before their due date.

    A completed task with no completed date counts as late.
    """
    done = [t for t in tasks if t.status == "completed"]
    if not done:
        return 0
    on_time = sum(
        1 for t in done
        if t.completed_date is not None and t.completed_date <= t.due_date
    )
    return int(_round_half_up(on_time / len(done) * 100))


def top_performers(members: Sequence[TeamMember], limit: int = 5) -> List[TeamMember]:
    return sorted(members, key=lambda m: m.productivity, reverse=True)[:limit]


def top_performer(members: Sequence[TeamMember]) -> str:
    if not members:
        return NO_PERFORMER
    # max() keeps the first of equal maxima.
    return max(members, key=lambda m: m.productivity).name


def bottleneck_count(tasks: Sequence[Task], now: datetime) -> int:
    return sum(1 for t in tasks if t.is_overdue(now))


def bottlenecks(tasks: Sequence[Task], now: datetime, limit: int = 5) -> List[Bottleneck]:
    """Most overdue first, with whole days elapsed since the due date."""
    overdue = sorted((t for t in tasks if t.is_overdue(now)), key=lambda t: t.due_date)
    out = []
    for t in overdue[:limit]:
        elapsed = now - datetime.combine(t.due_date, time.min)
        out.append(Bottleneck(task=t, days_overdue=elapsed.days))
    return out


def status_counts(tasks: Sequence[Task], now: datetime) -> Dict[str, int]:
    counts = basic_counts(tasks, now)
    return {
        "pending": counts.pending,
        "in-progress": counts.in_progress,
        "completed": counts.completed,
        "overdue": counts.overdue,
    }


def priority_counts(tasks: Sequence[Task]) -> Dict[str, int]:
    counts = {"high": 0, "medium": 0, "low": 0}
    for t in tasks:
        if t.priority in counts:
            counts[t.priority] += 1
    return counts


def weekly_completion_series(dataset_series: Optional[Sequence[int]]) -> List[int]:
    """The dataset's own weekly series, or the fixed placeholder."""
    if dataset_series:
        return [int(v) for v in dataset_series]
    return list(FALLBACK_WEEKLY_COMPLETIONS)


def team_member_distribution(tasks: Sequence[Task]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for t in tasks:
        name = t.team_member.name
        counts[name] = counts.get(name, 0) + 1
    return counts


def analytics(
    tasks: Sequence[Task],
    members: Sequence[TeamMember],
    now: datetime,
    weekly_series: Optional[Sequence[int]] = None,
) -> AnalyticsMetrics:
    return AnalyticsMetrics(
        avg_completion_time=avg_completion_time(tasks),
        on_time_rate=on_time_rate(tasks),
        top_performer=top_performer(members),
        bottleneck_count=bottleneck_count(tasks, now),
        status_counts=status_counts(tasks, now),
        priority_counts=priority_counts(tasks),
        weekly_completions=weekly_completion_series(weekly_series),
        team_distribution=team_member_distribution(tasks),
        top_performers=top_performers(members),
        bottlenecks=bottlenecks(tasks, now),
    )

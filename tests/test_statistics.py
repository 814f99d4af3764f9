from datetime import date, datetime

from conftest import NOW, make_task
from taskboard import statistics
from taskboard.models import TeamMember


def done(task_id, created, completed, due):
    return make_task(
        task_id,
        status="completed",
        created_date=created,
        completed_date=completed,
        due_date=due,
        progress=100,
    )


def test_basic_counts(now):
    tasks = [
        make_task(1, status="completed"),
        make_task(2, status="in-progress"),
        make_task(3, due_date=date(2026, 10, 1)),
        make_task(4, status="completed", due_date=date(2026, 10, 1)),
    ]
    counts = statistics.basic_counts(tasks, now)
    assert counts == statistics.BasicCounts(total=4, completed=2, in_progress=1, pending=1, overdue=1)


def test_empty_collection_is_all_zero(now):
    assert statistics.basic_counts([], now) == statistics.BasicCounts()
    metrics = statistics.analytics([], [], now)
    assert metrics.avg_completion_time == 0
    assert metrics.on_time_rate == 0
    assert metrics.top_performer == "N/A"
    assert metrics.bottleneck_count == 0


def test_avg_completion_time_rounds_half_up():
    tasks = [
        done(1, date(2026, 10, 1), date(2026, 10, 2), date(2026, 10, 5)),
        done(2, date(2026, 10, 1), date(2026, 10, 3), date(2026, 10, 5)),
        done(3, date(2026, 10, 1), date(2026, 10, 3), date(2026, 10, 5)),
        done(4, date(2026, 10, 1), date(2026, 10, 3), date(2026, 10, 5)),
    ]
    # (1 + 2 + 2 + 2) / 4 = 1.75
    assert statistics.avg_completion_time(tasks) == 1.8


def test_completed_without_date_is_not_measured_for_duration():
    tasks = [
        done(1, date(2026, 10, 1), date(2026, 10, 5), date(2026, 10, 4)),
        make_task(2, status="completed"),
    ]
    assert statistics.avg_completion_time(tasks) == 4.0


def test_completed_without_date_counts_as_late():
    tasks = [
        done(1, date(2026, 10, 1), date(2026, 10, 3), date(2026, 10, 5)),
        make_task(2, status="completed"),
        make_task(3, status="pending"),
    ]
    assert statistics.on_time_rate(tasks) == 50


def test_on_time_rate_counts_due_day_as_on_time():
    tasks = [
        done(1, date(2026, 10, 1), date(2026, 10, 5), date(2026, 10, 5)),
        done(2, date(2026, 10, 1), date(2026, 10, 6), date(2026, 10, 5)),
        done(3, date(2026, 10, 1), date(2026, 10, 2), date(2026, 10, 5)),
    ]
    # 2/3 = 66.67%
    assert statistics.on_time_rate(tasks) == 67


def test_top_performer_first_of_ties_wins():
    members = [
        TeamMember(name="Ann", productivity=80),
        TeamMember(name="Ben", productivity=95),
        TeamMember(name="Cy", productivity=95),
    ]
    assert statistics.top_performer(members) == "Ben"
    assert [m.name for m in statistics.top_performers(members, limit=2)] == ["Ben", "Cy"]


def test_bottlenecks_most_overdue_first():
    now = datetime(2026, 10, 18, 12, 0)
    tasks = [
        make_task(1, due_date=date(2026, 10, 15)),
        make_task(2, due_date=date(2026, 10, 10)),
        make_task(3, due_date=date(2026, 10, 10), status="completed"),
        make_task(4, due_date=date(2026, 10, 30)),
    ]
    items = statistics.bottlenecks(tasks, now)
    assert [(b.task.id, b.days_overdue) for b in items] == [(2, 8), (1, 3)]
    assert statistics.bottleneck_count(tasks, now) == 2


def test_chart_series(now):
    tasks = [
        make_task(1, priority="high", assigned_to="Ann"),
        make_task(2, priority="low", assigned_to="Ben", status="completed"),
        make_task(3, priority="high", assigned_to="Ann", due_date=date(2026, 10, 1)),
    ]
    assert statistics.priority_counts(tasks) == {"high": 2, "medium": 0, "low": 1}
    assert statistics.status_counts(tasks, now) == {
        "pending": 2, "in-progress": 0, "completed": 1, "overdue": 1,
    }
    assert statistics.team_member_distribution(tasks) == {"Ann": 2, "Ben": 1}


def test_weekly_series_falls_back():
    assert statistics.weekly_completion_series(None) == [2, 1, 0, 3, 1, 2, 1]
    assert statistics.weekly_completion_series([4, 5]) == [4, 5]


def test_analytics_bundle():
    members = [TeamMember(name="Ann", productivity=70)]
    metrics = statistics.analytics([make_task(1)], members, NOW, weekly_series=[1, 2])
    assert metrics.top_performer == "Ann"
    assert metrics.weekly_completions == [1, 2]
    assert metrics.team_distribution == {"Alice Smith": 1}

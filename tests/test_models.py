from datetime import date, datetime

import pytest

from taskboard.models import (
    MemberRef,
    Task,
    TeamMember,
    normalize_priority,
    normalize_status,
    normalize_task_id,
    parse_date,
)


def raw_task(**overrides):
    raw = {
        "id": 7,
        "title": "Write docs",
        "description": "User guide",
        "assignedTo": "Dana Lee",
        "teamMember": {"name": "Dana Lee", "role": "Writer", "department": "Docs", "avatar": "DL"},
        "priority": "high",
        "status": "in-progress",
        "dueDate": "2026-10-20",
        "createdDate": "2026-10-01",
        "progress": 40,
        "tags": ["docs"],
    }
    raw.update(overrides)
    return raw


def test_task_ids_normalise_numeric_strings():
    assert normalize_task_id("12") == 12
    assert normalize_task_id(12.0) == 12
    assert normalize_task_id("abc") == "abc"
    with pytest.raises(ValueError):
        normalize_task_id(None)
    with pytest.raises(ValueError):
        normalize_task_id(True)


def test_status_and_priority_tokens():
    assert normalize_status("In Progress") == "in-progress"
    assert normalize_status("COMPLETED") == "completed"
    assert normalize_priority(" High ") == "high"
    with pytest.raises(ValueError):
        normalize_status("blocked")
    with pytest.raises(ValueError):
        normalize_priority("urgent")


def test_parse_date_accepts_timestamps_and_objects():
    assert parse_date("2026-10-20T15:00:00Z") == date(2026, 10, 20)
    assert parse_date(datetime(2026, 1, 2, 3, 4)) == date(2026, 1, 2)
    assert parse_date(date(2026, 1, 2)) == date(2026, 1, 2)
    with pytest.raises(ValueError):
        parse_date("")


def test_task_from_dict_reads_camel_case():
    task = Task.from_dict(raw_task())
    assert task.id == 7
    assert task.assigned_to == "Dana Lee"
    assert task.team_member.department == "Docs"
    assert task.due_date == date(2026, 10, 20)
    assert task.completed_date is None
    assert task.progress == 40


def test_task_from_dict_defaults_progress_from_status():
    raw = raw_task(status="completed")
    raw.pop("progress")
    assert Task.from_dict(raw).progress == 100
    assert Task.from_dict(raw_task(progress=250)).progress == 100


@pytest.mark.parametrize("missing", ["id", "title", "dueDate", "createdDate"])
def test_task_from_dict_requires_core_fields(missing):
    raw = raw_task()
    raw.pop(missing)
    with pytest.raises((KeyError, ValueError)):
        Task.from_dict(raw)


def test_task_to_dict_round_trips():
    raw = raw_task(status="completed", completedDate="2026-10-15")
    task = Task.from_dict(raw)
    data = task.to_dict()
    assert data["completedDate"] == "2026-10-15"
    assert Task.from_dict(data) == task
    assert "completedDate" not in Task.from_dict(raw_task()).to_dict()


def test_overdue_uses_midnight_of_due_date():
    task = Task.from_dict(raw_task(dueDate="2026-10-18", status="pending"))
    assert not task.is_overdue(datetime(2026, 10, 18, 0, 0))
    assert task.is_overdue(datetime(2026, 10, 18, 0, 1))
    task.status = "completed"
    assert not task.is_overdue(datetime(2027, 1, 1))


def test_member_ref_for_new_assignee():
    ref = MemberRef.for_assignee("Grace Hopper")
    assert ref.role == "Team Member"
    assert ref.avatar == "GH"
    assert ref.department == ""


def test_team_member_from_dict():
    member = TeamMember.from_dict({"name": "Dana", "productivity": 88, "tasksCompleted": 4, "tasksAssigned": 6})
    assert member.productivity == 88
    assert member.tasks_completed == 4
    assert member.tasks_assigned == 6
    with pytest.raises(ValueError):
        TeamMember.from_dict({"role": "nobody"})

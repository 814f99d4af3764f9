from datetime import date, datetime, timedelta

import pytest

from taskboard import kv_store
from taskboard.dashboard import TaskDashboard
from taskboard.dataset import Dataset
from taskboard.kv_store import MemoryKeyValueStore
from taskboard.models import MemberRef, Task, TeamMember
from taskboard.persistence import PersistenceAdapter

NOW = datetime(2026, 10, 18, 9, 30)


def make_task(task_id, **overrides):
    """A valid task; any field can be overridden by keyword."""
    assignee = overrides.pop("assigned_to", "Alice Smith")
    fields = dict(
        id=task_id,
        title=f"Task {task_id}",
        description=f"Description for task {task_id}",
        assigned_to=assignee,
        team_member=MemberRef(name=assignee, role="Engineer", department="Eng", avatar="AS"),
        priority="medium",
        status="pending",
        due_date=NOW.date() + timedelta(days=7),
        created_date=date(2026, 10, 1),
        completed_date=None,
        progress=0,
        tags=[],
    )
    fields.update(overrides)
    return Task(**fields)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def task_factory():
    return make_task


@pytest.fixture
def sqlite_url(tmp_path):
    url = f"sqlite:///{(tmp_path / 'kv.db').as_posix()}"
    yield url
    kv_store.dispose_engines()


@pytest.fixture
def memory_store():
    return MemoryKeyValueStore()


@pytest.fixture
def adapter(memory_store):
    return PersistenceAdapter(memory_store)


@pytest.fixture
def dataset25():
    """25 tasks: ids 1..25, every third completed, none overdue."""
    tasks = []
    for i in range(1, 26):
        status = "completed" if i % 3 == 0 else "pending"
        tasks.append(make_task(
            i,
            status=status,
            completed_date=date(2026, 10, 10) if status == "completed" else None,
            progress=100 if status == "completed" else 0,
        ))
    members = [
        TeamMember(name="Alice Smith", role="Engineer", productivity=90, tasks_completed=9, tasks_assigned=10),
        TeamMember(name="Bob Jones", role="Designer", productivity=75, tasks_completed=3, tasks_assigned=4),
    ]
    return Dataset(tasks=tasks, team_members=members, weekly_completions=[1, 2, 3, 4, 5, 6, 7])


@pytest.fixture
def dashboard(adapter, clock, dataset25):
    dash = TaskDashboard(adapter, clock=clock)
    dash.load_dataset(dataset25)
    return dash

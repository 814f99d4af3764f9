import pytest

from conftest import make_task
from taskboard.errors import DuplicateTaskError, TaskNotFound
from taskboard.task_store import TaskStore


def test_load_prepends_user_tasks_newest_first():
    store = TaskStore()
    store.load(
        [make_task(1), make_task(2)],
        user_tasks=[make_task(3), make_task(4)],
    )
    assert [t.id for t in store] == [4, 3, 1, 2]


def test_load_skips_user_tasks_with_known_ids():
    store = TaskStore()
    store.load([make_task(1)], user_tasks=[make_task(1, title="Shadow")])
    assert len(store) == 1
    assert store.find_by_id(1).title == "Task 1"


def test_overrides_apply_to_static_and_user_tasks():
    static = [make_task(1), make_task(2)]
    store = TaskStore()
    store.load(static, overrides={1: "completed", 9: "in-progress"}, user_tasks=[make_task(9)])
    assert store.find_by_id(1).status == "completed"
    assert store.find_by_id(9).status == "in-progress"
    assert static[0].status == "pending"


def test_duplicate_static_ids_keep_first():
    store = TaskStore()
    store.load([make_task(1, title="first"), make_task(1, title="second")])
    assert len(store) == 1
    assert store.find_by_id(1).title == "first"


def test_find_by_id_normalises():
    store = TaskStore()
    store.load([make_task(12)])
    assert store.find_by_id("12") is store.find_by_id(12)
    assert store.find_by_id(None) is None
    assert store.find_by_id(99) is None


def test_insert_and_next_id():
    store = TaskStore()
    store.load([make_task(5), make_task("ext-1")])
    assert store.next_id() == 6
    store.insert(make_task(6))
    assert store.all()[0].id == 6
    with pytest.raises(DuplicateTaskError):
        store.insert(make_task(6))


def test_next_id_on_empty_store():
    assert TaskStore().next_id() == 1


def test_update_status_leaves_progress_alone():
    store = TaskStore()
    store.load([make_task(1, progress=0)])
    task = store.update_status("1", "Completed")
    assert task.status == "completed"
    assert task.progress == 0
    assert task.completed_date is None
    with pytest.raises(TaskNotFound):
        store.update_status(42, "pending")
    with pytest.raises(ValueError):
        store.update_status(1, "archived")

# tests/test_task_api.py

from __future__ import annotations

import json
from datetime import date, timedelta

import pytest

from taskflow.cli.bootstrap import create_initial_state
from taskflow.core.state import AppState
from taskflow.storage.kv_store import MemoryKeyValueStore
from taskflow.tasks import task_api
from taskflow.tasks.errors import NotFoundError, ValidationError
from taskflow.tasks.persistence import TaskSnapshotStore
from taskflow.tasks.task_models import Priority, TaskStatus


def test_create_from_wire_fields(state: AppState) -> None:
    task = task_api.create_task(
        state,
        {"title": "Ship report", "description": "", "dueDate": "2026-03-11", "priority": "high", "categoryId": "2"},
    )
    assert task.due_date == date(2026, 3, 11)
    assert task.priority is Priority.HIGH
    assert task_api.current_tasks(state) == (task,)
    assert task_api.category_for(state, task).name == "Personal"


def test_create_with_blank_title_changes_nothing(state: AppState, kv: MemoryKeyValueStore) -> None:
    with pytest.raises(ValidationError):
        task_api.create_task(state, {"title": "   "})
    assert task_api.current_tasks(state) == ()
    assert kv.get(state.settings.storage_slot) is None


def test_create_with_bad_priority_is_a_validation_error(state: AppState) -> None:
    with pytest.raises(ValidationError):
        task_api.create_task(state, {"title": "x", "priority": "asap"})


def test_update_toggle_delete(state: AppState) -> None:
    task = task_api.create_task(state, {"title": "a"})

    updated = task_api.update_task(state, task.id, {"title": "b", "categoryId": "3"})
    assert updated.title == "b"

    toggled, notice = task_api.toggle_task(state, task.id)
    assert toggled.status is TaskStatus.COMPLETED
    assert notice == task_api.MSG_COMPLETED

    _, notice = task_api.toggle_task(state, task.id)
    assert notice == task_api.MSG_REOPENED

    assert task_api.delete_task(state, task.id) == task_api.MSG_DELETED
    assert task_api.delete_task(state, task.id) == task_api.MSG_DELETED
    assert task_api.current_tasks(state) == ()

    with pytest.raises(NotFoundError):
        task_api.toggle_task(state, task.id)
    with pytest.raises(NotFoundError):
        task_api.update_task(state, task.id, {"title": "c"})


def test_filters_and_stats(state: AppState) -> None:
    a = task_api.create_task(state, {"title": "Report", "categoryId": "1"})
    task_api.create_task(state, {"title": "Run", "categoryId": "3", "dueDate": date.today() - timedelta(days=2)})
    task_api.toggle_task(state, a.id)

    task_api.set_status_filter(state, "completed")
    assert [t.id for t in task_api.visible_tasks(state)] == [a.id]

    task_api.set_status_filter(state, "all")
    task_api.set_category_filter(state, "3")
    task_api.set_search_text(state, "RU")
    assert [t.title for t in task_api.visible_tasks(state)] == ["Run"]

    s = task_api.stats(state)
    assert (s.total, s.completed, s.pending, s.overdue) == (2, 1, 1, 1)


def test_unknown_category_filter_is_rejected(state: AppState) -> None:
    with pytest.raises(ValidationError):
        task_api.set_category_filter(state, "42")
    assert state.view.category == "all"


def test_categories_and_unknown_category_badge(state: AppState) -> None:
    names = [c.name for c in task_api.categories(state)]
    assert names == ["Work", "Personal", "Health", "Learning"]

    task = task_api.create_task(state, {"title": "x", "categoryId": "gone"})
    assert task_api.category_for(state, task) is None


def test_form_state_snapshot(state: AppState) -> None:
    f = task_api.form_state(state)
    assert (f.is_open, f.mode, f.draft, f.last_error) == (False, None, None, None)

    state.form.begin()
    with pytest.raises(ValidationError):
        state.form.commit()
    f = task_api.form_state(state)
    assert f.is_open
    assert f.last_error == "Task title is required!"


def test_state_persists_through_bootstrap(settings, kv: MemoryKeyValueStore) -> None:
    first = create_initial_state(settings=settings, kv=kv)
    task = task_api.create_task(first, {"title": "Persist me"})

    raw = json.loads(kv.get("taskflow-tasks") or "[]")
    assert [r["title"] for r in raw] == ["Persist me"]

    second = create_initial_state(settings=settings, kv=kv)
    assert task_api.current_tasks(second) == (task,)


def test_bootstrap_uses_sqlite_by_default(settings) -> None:
    state = create_initial_state(settings=settings)
    task_api.create_task(state, {"title": "on disk"})

    assert settings.store_path.exists()
    reloaded = create_initial_state(settings=settings)
    assert [t.title for t in task_api.current_tasks(reloaded)] == ["on disk"]


@pytest.mark.parametrize("raw_category", ["", "   ", None])
def test_blank_category_survives_restart(state: AppState, kv: MemoryKeyValueStore, raw_category) -> None:
    task = task_api.create_task(state, {"title": "a", "categoryId": raw_category})

    assert task.category_id == "1"
    assert TaskSnapshotStore(kv, slot=state.settings.storage_slot).load() == [task]

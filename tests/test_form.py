# tests/test_form.py

from __future__ import annotations

from datetime import date

import pytest

from taskflow.tasks.errors import NotFoundError, ValidationError
from taskflow.tasks.form import FormMode, FormSession
from taskflow.tasks.task_models import Draft, Priority, TaskStatus
from taskflow.tasks.task_store import TaskStore

from .fakes import RecordingRepo


def test_begin_create_uses_defaults(form: FormSession) -> None:
    assert not form.is_open
    draft = form.begin()

    assert form.is_open
    assert form.mode is FormMode.CREATE
    assert draft == Draft(title="", description="", due_date=None, priority=Priority.MEDIUM, category_id="1")


def test_begin_edit_prefills_from_task(form: FormSession, store: TaskStore) -> None:
    task = store.create(Draft(title="Gym", description="legs", due_date=date(2026, 3, 12), category_id="3"))

    draft = form.begin(task)

    assert form.mode is FormMode.EDIT
    assert form.editing_id == task.id
    assert (draft.title, draft.description, draft.due_date, draft.category_id) == (
        "Gym",
        "legs",
        date(2026, 3, 12),
        "3",
    )


def test_commit_create_closes_session(form: FormSession, store: TaskStore, repo: RecordingRepo) -> None:
    form.begin()
    form.set_field("title", "  Write tests ")
    form.set_field("dueDate", "2026-03-20")
    form.set_field("priority", "HIGH")
    form.set_field("category", "4")

    task = form.commit()

    assert not form.is_open
    assert form.draft is None
    assert task.title == "Write tests"
    assert task.due_date == date(2026, 3, 20)
    assert task.priority is Priority.HIGH
    assert task.category_id == "4"
    assert store.tasks() == (task,)
    assert len(repo.saves) == 1


def test_whitespace_title_keeps_session_open(form: FormSession, store: TaskStore, repo: RecordingRepo) -> None:
    form.begin()
    form.set_field("title", "   ")

    with pytest.raises(ValidationError, match="Task title is required!"):
        form.commit()

    assert form.is_open
    assert form.mode is FormMode.CREATE
    assert form.last_error == "Task title is required!"
    assert store.tasks() == ()
    assert repo.saves == []

    # user corrects and retries
    form.set_field("title", "Fixed")
    task = form.commit()
    assert task.title == "Fixed"
    assert form.last_error is None
    assert not form.is_open


def test_commit_edit_updates_task(form: FormSession, store: TaskStore) -> None:
    task = store.create(Draft(title="Old"))
    store.toggle_status(task.id)

    form.begin(store.get(task.id))
    form.set_field("title", "New")
    form.set_field("desc", "more")
    updated = form.commit()

    assert updated.id == task.id
    assert updated.title == "New"
    assert updated.description == "more"
    assert updated.status is TaskStatus.COMPLETED
    assert updated.created_at == task.created_at
    assert len(store) == 1


def test_commit_edit_of_deleted_task_closes_and_raises(form: FormSession, store: TaskStore) -> None:
    task = store.create(Draft(title="Doomed"))
    form.begin(task)
    store.delete(task.id)

    with pytest.raises(NotFoundError):
        form.commit()
    assert not form.is_open
    assert store.tasks() == ()


def test_cancel_discards_without_touching_store(form: FormSession, store: TaskStore, repo: RecordingRepo) -> None:
    form.begin()
    form.set_field("title", "never saved")
    form.cancel()

    assert not form.is_open
    assert store.tasks() == ()
    assert repo.saves == []


def test_set_field_rejects_unknown_fields_and_bad_values(form: FormSession) -> None:
    form.begin()
    with pytest.raises(ValidationError):
        form.set_field("status", "completed")
    with pytest.raises(ValidationError):
        form.set_field("priority", "urgent")
    with pytest.raises(ValidationError):
        form.set_field("due", "next tuesday")
    form.set_field("due", "")
    assert form.draft is not None and form.draft.due_date is None


def test_commit_or_set_without_open_session(form: FormSession) -> None:
    with pytest.raises(ValidationError):
        form.commit()
    with pytest.raises(ValidationError):
        form.set_field("title", "x")


def test_validate_returns_cleaned_copy() -> None:
    draft = Draft(title="  Trim me  ")
    valid = FormSession.validate(draft)
    assert valid.title == "Trim me"
    assert draft.title == "  Trim me  "
    with pytest.raises(ValidationError):
        FormSession.validate(Draft(title="\t\n"))


def test_set_field_rejects_dates_with_trailing_garbage(form: FormSession) -> None:
    form.begin()
    for bad in ("2026-03-09garbage", "2026-03-09 x"):
        with pytest.raises(ValidationError):
            form.set_field("due", bad)
    assert form.draft is not None and form.draft.due_date is None

    form.set_field("due", "2026-03-09T10:00:00Z")
    assert form.draft.due_date == date(2026, 3, 9)


def test_blank_category_falls_back_to_default(form: FormSession) -> None:
    form.begin()
    form.set_field("title", "x")
    form.set_field("category", "")
    assert form.draft is not None and form.draft.category_id == "1"
    form.set_field("category", None)
    assert form.draft.category_id == "1"
    assert form.commit().category_id == "1"


def test_validate_rejects_blank_category() -> None:
    with pytest.raises(ValidationError):
        FormSession.validate(Draft(title="x", category_id="  "))
    assert FormSession.validate(Draft(title="x", category_id=" 2 ")).category_id == "2"

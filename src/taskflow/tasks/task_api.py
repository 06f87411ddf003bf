# src/taskflow/tasks/task_api.py

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from typing import Any

from ..core.state import AppState
from .errors import ValidationError
from .form import FormMode
from .task_models import Category, Draft, Task, TaskStats
from .views import compute_stats

MSG_CREATED = "Task created successfully!"
MSG_UPDATED = "Task updated successfully!"
MSG_DELETED = "Task deleted successfully!"
MSG_COMPLETED = "Task completed!"
MSG_REOPENED = "Task reopened!"


@dataclass(frozen=True, slots=True)
class FormState:
    is_open: bool
    mode: FormMode | None
    draft: Draft | None
    last_error: str | None


def _draft_from_fields(fields: Mapping[str, Any]) -> Draft:
    try:
        return Draft.from_fields(fields)
    except ValueError as e:
        raise ValidationError(str(e)) from e


# ---- intents ----


def create_task(state: AppState, fields: Mapping[str, Any]) -> Task:
    """Validate raw fields and create a task (ValidationError leaves the collection unchanged)."""
    draft = state.form.validate(_draft_from_fields(fields))
    return state.task_store.create(draft)


def update_task(state: AppState, task_id: str, fields: Mapping[str, Any]) -> Task:
    draft = state.form.validate(_draft_from_fields(fields))
    return state.task_store.update(task_id, draft)


def delete_task(state: AppState, task_id: str) -> str:
    state.task_store.delete(task_id)
    return MSG_DELETED


def toggle_task(state: AppState, task_id: str) -> tuple[Task, str]:
    task = state.task_store.toggle_status(task_id)
    return task, MSG_COMPLETED if task.is_completed else MSG_REOPENED


def set_status_filter(state: AppState, value: str) -> None:
    state.view.set_status(value)


def set_category_filter(state: AppState, value: str) -> None:
    state.view.set_category(value, state.categories)


def set_search_text(state: AppState, value: str) -> None:
    state.view.set_search(value)


# ---- reads ----


def current_tasks(state: AppState) -> tuple[Task, ...]:
    return state.task_store.tasks()


def visible_tasks(state: AppState) -> list[Task]:
    return state.view.apply(state.task_store.tasks())


def stats(state: AppState, today: date | None = None) -> TaskStats:
    return compute_stats(state.task_store.tasks(), today=today)


def categories(state: AppState) -> tuple[Category, ...]:
    return state.categories.all()


def category_for(state: AppState, task: Task) -> Category | None:
    return state.categories.get(task.category_id)


def form_state(state: AppState) -> FormState:
    f = state.form
    return FormState(is_open=f.is_open, mode=f.mode, draft=f.draft, last_error=f.last_error)

# src/taskflow/tasks/views.py

"""
Derived views over the task collection.

Everything here is a pure function of its arguments except ViewFilters,
which only holds the current view parameters (it never touches tasks).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from .categories import CategoryRegistry
from .errors import ValidationError
from .task_models import Task, TaskStats, TaskStatus

ALL = "all"
STATUS_FILTERS: tuple[str, ...] = (ALL, TaskStatus.PENDING.value, TaskStatus.COMPLETED.value)

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def _today(today: date | None) -> date:
    return today if today is not None else date.today()


def _matches(task: Task, status_filter: str, category_filter: str, needle: str) -> bool:
    if status_filter != ALL and task.status.value != status_filter:
        return False
    if category_filter != ALL and task.category_id != category_filter:
        return False
    if needle and needle not in task.title.lower() and needle not in task.description.lower():
        return False
    return True


def visible_tasks(
    tasks: Iterable[Task],
    status_filter: str = ALL,
    category_filter: str = ALL,
    search_text: str = "",
) -> list[Task]:
    """Tasks passing all three filters, in stored (insertion) order."""
    needle = (search_text or "").lower()
    return [t for t in tasks if _matches(t, status_filter, category_filter, needle)]


def is_overdue(task: Task, today: date | None = None) -> bool:
    # Due today is not overdue; only strictly past dates count.
    if task.due_date is None or task.is_completed:
        return False
    return task.due_date < _today(today)


def compute_stats(tasks: Iterable[Task], today: date | None = None) -> TaskStats:
    day = _today(today)
    total = completed = pending = overdue = 0
    for t in tasks:
        total += 1
        if t.status is TaskStatus.COMPLETED:
            completed += 1
        else:
            pending += 1
        if is_overdue(t, day):
            overdue += 1
    return TaskStats(total=total, completed=completed, pending=pending, overdue=overdue)


def due_date_label(due_date: date | None, now: datetime | date | None = None) -> str | None:
    if due_date is None:
        return None
    if isinstance(now, datetime):
        today = now.date()
    else:
        today = _today(now)
    if due_date == today:
        return "Today"
    if due_date == today + timedelta(days=1):
        return "Tomorrow"
    return f"{_MONTHS[due_date.month - 1]} {due_date.day:02d}"


@dataclass(slots=True)
class ViewFilters:
    """Current view parameters (status, category, free-text search)."""

    status: str = ALL
    category: str = ALL
    search: str = ""

    def set_status(self, value: str) -> None:
        v = (value or "").strip().lower()
        if v not in STATUS_FILTERS:
            raise ValidationError(f"Unknown status filter: {value!r} (use {', '.join(STATUS_FILTERS)})")
        self.status = v

    def set_category(self, value: str, registry: CategoryRegistry) -> None:
        v = (value or "").strip()
        if v.lower() == ALL:
            self.category = ALL
            return
        if v not in registry:
            raise ValidationError(f"Unknown category: {value!r}")
        self.category = v

    def set_search(self, value: str) -> None:
        self.search = value or ""

    def has_active_filters(self) -> bool:
        return bool(self.search) or self.status != ALL or self.category != ALL

    def apply(self, tasks: Iterable[Task]) -> list[Task]:
        return visible_tasks(tasks, self.status, self.category, self.search)

    def reset(self) -> None:
        self.status = ALL
        self.category = ALL
        self.search = ""

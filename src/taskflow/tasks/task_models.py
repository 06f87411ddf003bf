# src/taskflow/tasks/task_models.py

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, date, datetime
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY_ID = "1"

# Keys of the persisted record, in the order they are written.
RECORD_FIELDS: tuple[str, ...] = (
    "id",
    "title",
    "description",
    "dueDate",
    "priority",
    "categoryId",
    "status",
    "createdAt",
    "updatedAt",
)


class TaskStatus(StrEnum):
    PENDING = "pending"
    COMPLETED = "completed"

    @classmethod
    def from_raw(cls, raw: Any) -> TaskStatus:
        if not raw:
            return cls.PENDING
        try:
            return cls(str(raw))
        except ValueError:
            return cls.PENDING

    def flipped(self) -> TaskStatus:
        return TaskStatus.PENDING if self is TaskStatus.COMPLETED else TaskStatus.COMPLETED


class Priority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def from_raw(cls, raw: Any) -> Priority:
        if not raw:
            return cls.MEDIUM
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return cls.MEDIUM


@dataclass(frozen=True, slots=True)
class Category:
    id: str
    name: str
    color: str


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    title: str
    description: str
    due_date: date | None
    priority: Priority
    category_id: str
    status: TaskStatus
    created_at: datetime
    updated_at: datetime

    @property
    def is_completed(self) -> bool:
        return self.status is TaskStatus.COMPLETED


@dataclass(slots=True)
class Draft:
    """
    Editable field set of a task before it is committed.

    Drafts are never persisted. Field values are kept as the user typed them;
    trimming happens on validation / commit.
    """

    title: str = ""
    description: str = ""
    due_date: date | None = None
    priority: Priority = Priority.MEDIUM
    category_id: str = DEFAULT_CATEGORY_ID

    @classmethod
    def from_task(cls, task: Task) -> Draft:
        return cls(
            title=task.title,
            description=task.description,
            due_date=task.due_date,
            priority=task.priority,
            category_id=task.category_id,
        )

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any]) -> Draft:
        """Build a draft from raw user fields (wire names or python names)."""
        draft = cls()
        for key, value in fields.items():
            name = FIELD_ALIASES.get(key, key)
            if name not in DRAFT_FIELDS:
                continue
            setattr(draft, name, coerce_field(name, value))
        return draft


@dataclass(frozen=True, slots=True)
class TaskStats:
    total: int = 0
    completed: int = 0
    pending: int = 0
    overdue: int = 0


DRAFT_FIELDS: tuple[str, ...] = ("title", "description", "due_date", "priority", "category_id")

FIELD_ALIASES: dict[str, str] = {
    "dueDate": "due_date",
    "due": "due_date",
    "categoryId": "category_id",
    "category": "category_id",
    "desc": "description",
}


# ---- field coercion ----


def parse_due_date(raw: Any) -> date | None:
    """
    Parse a calendar date.

    Accepts a date, a datetime (date part is kept) or an ISO string; empty
    values (older snapshots store "") map to None.
    Raises ValueError for non-empty strings that are not dates.
    """
    if raw is None:
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    s = str(raw).strip()
    if not s:
        return None
    try:
        return date.fromisoformat(s)
    except ValueError:
        # Full ISO datetime ("2026-03-09T10:00:00Z"); anything else raises.
        return parse_instant(s).date()


def coerce_field(name: str, value: Any) -> Any:
    if name == "due_date":
        return parse_due_date(value)
    if name == "priority":
        if isinstance(value, Priority):
            return value
        return Priority(str(value).strip().lower())
    if name == "category_id":
        cid = "" if value is None else str(value).strip()
        return cid or DEFAULT_CATEGORY_ID
    return "" if value is None else str(value)


# ---- timestamps ----


def utc_now() -> datetime:
    return datetime.now(UTC)


def format_instant(ts: datetime) -> str:
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts.astimezone(UTC).isoformat().replace("+00:00", "Z")


def parse_instant(raw: Any) -> datetime:
    s = str(raw).strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    ts = datetime.fromisoformat(s)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts


# ---- wire records ----


def task_to_record(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "title": task.title,
        "description": task.description,
        "dueDate": task.due_date.isoformat() if task.due_date else None,
        "priority": task.priority.value,
        "categoryId": task.category_id,
        "status": task.status.value,
        "createdAt": format_instant(task.created_at),
        "updatedAt": format_instant(task.updated_at),
    }


def task_from_record(raw: Mapping[str, Any]) -> Task:
    """
    Build a Task from a persisted record.

    Lenient on optional fields, strict on identity: raises ValueError when the
    record has no id or no title, or its timestamps are not parseable.
    """
    tid = raw.get("id")
    if tid is None or str(tid).strip() == "":
        raise ValueError("record has no id")

    title = str(raw.get("title") or "").strip()
    if not title:
        raise ValueError(f"record {tid} has an empty title")

    try:
        due = parse_due_date(raw.get("dueDate"))
    except ValueError:
        logger.debug("Ignoring unparseable dueDate=%r for task %s", raw.get("dueDate"), tid)
        due = None

    created_raw = raw.get("createdAt")
    updated_raw = raw.get("updatedAt") or created_raw
    if not created_raw:
        raise ValueError(f"record {tid} has no createdAt")
    created_at = parse_instant(created_raw)
    updated_at = max(parse_instant(updated_raw), created_at)

    return Task(
        id=str(tid),
        title=title,
        description=str(raw.get("description") or ""),
        due_date=due,
        priority=Priority.from_raw(raw.get("priority")),
        category_id=DEFAULT_CATEGORY_ID if raw.get("categoryId") is None else str(raw["categoryId"]),
        status=TaskStatus.from_raw(raw.get("status")),
        created_at=created_at,
        updated_at=updated_at,
    )

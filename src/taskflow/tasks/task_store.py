# src/taskflow/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime
from enum import StrEnum

from ..core.ports import Clock, TaskRepo
from .errors import NotFoundError, ValidationError
from .task_models import Draft, Task, TaskStatus, utc_now

logger = logging.getLogger(__name__)

TITLE_REQUIRED = "Task title is required!"


class ChangeKind(StrEnum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    TOGGLED = "toggled"


@dataclass(frozen=True, slots=True)
class TaskChange:
    kind: ChangeKind
    task_id: str


TaskListener = Callable[[TaskChange], None]


class TaskStore:
    """
    Authoritative in-memory task collection.

    - loads the collection once from `repo` on construction
    - every mutation writes one full snapshot back to `repo`
    - subscribers are notified after each successful mutation

    The collection is only mutated through the methods below; readers get
    immutable snapshots (tuples of frozen Task objects).
    """

    def __init__(
        self,
        repo: TaskRepo,
        *,
        clock: Clock = utc_now,
        id_factory: Callable[[datetime], str] | None = None,
    ) -> None:
        self._repo = repo
        self._clock = clock
        self._id_factory = id_factory
        self._listeners: list[TaskListener] = []
        self._last_id_ms = 0

        self._tasks: list[Task] = list(repo.load())
        logger.info("TaskStore ready total=%s", len(self._tasks))

    # ---- read side ----

    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def get(self, task_id: str) -> Task | None:
        idx = self._index_of(task_id)
        return None if idx is None else self._tasks[idx]

    def __len__(self) -> int:
        return len(self._tasks)

    # ---- observers ----

    def subscribe(self, listener: TaskListener) -> Callable[[], None]:
        """Register a change listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ---- mutations ----

    def create(self, draft: Draft) -> Task:
        title = self._require_title(draft)
        now = self._now()
        task = Task(
            id=self._new_id(now),
            title=title,
            description=(draft.description or "").strip(),
            due_date=draft.due_date,
            priority=draft.priority,
            category_id=draft.category_id,
            status=TaskStatus.PENDING,
            created_at=now,
            updated_at=now,
        )
        self._tasks.append(task)
        logger.debug("Task created id=%s title=%r", task.id, task.title)
        self._commit(ChangeKind.CREATED, task.id)
        return task

    def update(self, task_id: str, draft: Draft) -> Task:
        idx = self._require_index(task_id)
        title = self._require_title(draft)
        current = self._tasks[idx]
        task = replace(
            current,
            title=title,
            description=(draft.description or "").strip(),
            due_date=draft.due_date,
            priority=draft.priority,
            category_id=draft.category_id,
            updated_at=self._touch(current),
        )
        self._tasks[idx] = task
        logger.debug("Task updated id=%s", task.id)
        self._commit(ChangeKind.UPDATED, task.id)
        return task

    def delete(self, task_id: str) -> None:
        """Remove a task. Deleting an unknown id is a no-op (still one snapshot write)."""
        idx = self._index_of(task_id)
        if idx is None:
            logger.debug("Delete of unknown task id=%s ignored", task_id)
            self._persist()
            return
        del self._tasks[idx]
        logger.debug("Task deleted id=%s", task_id)
        self._commit(ChangeKind.DELETED, task_id)

    def toggle_status(self, task_id: str) -> Task:
        idx = self._require_index(task_id)
        current = self._tasks[idx]
        task = replace(current, status=current.status.flipped(), updated_at=self._touch(current))
        self._tasks[idx] = task
        logger.debug("Task toggled id=%s status=%s", task.id, task.status.value)
        self._commit(ChangeKind.TOGGLED, task.id)
        return task

    # ---- helpers ----

    def _now(self) -> datetime:
        return self._clock()

    def _touch(self, task: Task) -> datetime:
        # A clock that went backwards must not break updated_at >= created_at.
        return max(self._now(), task.created_at)

    @staticmethod
    def _require_title(draft: Draft) -> str:
        title = (draft.title or "").strip()
        if not title:
            raise ValidationError(TITLE_REQUIRED)
        return title

    def _index_of(self, task_id: str) -> int | None:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return None

    def _require_index(self, task_id: str) -> int:
        idx = self._index_of(task_id)
        if idx is None:
            raise NotFoundError(task_id)
        return idx

    def _new_id(self, now: datetime) -> str:
        existing = {t.id for t in self._tasks}
        if self._id_factory is not None:
            tid = self._id_factory(now)
            if tid in existing:
                raise ValueError(f"id factory produced a duplicate id: {tid}")
            return tid

        # Millisecond timestamp, bumped so ids stay strictly increasing in-process
        # and never collide with a loaded id.
        candidate = max(int(now.timestamp() * 1000), self._last_id_ms + 1)
        while str(candidate) in existing:
            candidate += 1
        self._last_id_ms = candidate
        return str(candidate)

    def _persist(self) -> None:
        try:
            self._repo.save(self.tasks())
        except Exception:
            # In-memory state stays authoritative for the rest of the session.
            logger.exception("Snapshot write failed total=%s", len(self._tasks))

    def _commit(self, kind: ChangeKind, task_id: str) -> None:
        self._persist()
        for listener in list(self._listeners):
            try:
                listener(TaskChange(kind=kind, task_id=task_id))
            except Exception:
                logger.exception("Task listener failed kind=%s id=%s", kind.value, task_id)

# src/taskflow/tasks/errors.py

from __future__ import annotations


class TaskFlowError(Exception):
    """Base class for recoverable task errors (never fatal to the process)."""


class ValidationError(TaskFlowError, ValueError):
    """A draft or view parameter is not acceptable (e.g. empty title)."""


class NotFoundError(TaskFlowError, LookupError):
    """Referenced task id is not in the collection (deleted or stale)."""

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id

# src/taskflow/tasks/form.py

from __future__ import annotations

import logging
from dataclasses import replace
from enum import StrEnum
from typing import Any

from .categories import CategoryRegistry
from .errors import NotFoundError, ValidationError
from .task_models import DRAFT_FIELDS, FIELD_ALIASES, Draft, Priority, Task, coerce_field
from .task_store import TITLE_REQUIRED, TaskStore

logger = logging.getLogger(__name__)


class FormMode(StrEnum):
    CREATE = "create"
    EDIT = "edit"


class FormSession:
    """
    Transient create/edit state, never persisted.

    State machine:
      closed --begin()--> open(create|edit)
      open --commit() ok / cancel()--> closed
      open --commit() invalid--> open (last_error set, user corrects and retries)
    """

    def __init__(self, store: TaskStore, categories: CategoryRegistry | None = None) -> None:
        self._store = store
        self._categories = categories or CategoryRegistry()
        self._mode: FormMode | None = None
        self._draft: Draft | None = None
        self._editing_id: str | None = None
        self.last_error: str | None = None

    @property
    def is_open(self) -> bool:
        return self._mode is not None

    @property
    def mode(self) -> FormMode | None:
        return self._mode

    @property
    def draft(self) -> Draft | None:
        return self._draft

    @property
    def editing_id(self) -> str | None:
        return self._editing_id

    def begin(self, initial: Task | None = None) -> Draft:
        if initial is None:
            self._mode = FormMode.CREATE
            self._draft = Draft(category_id=self._categories.default_id)
            self._editing_id = None
        else:
            self._mode = FormMode.EDIT
            self._draft = Draft.from_task(initial)
            self._editing_id = initial.id
        self.last_error = None
        logger.debug("Form opened mode=%s id=%s", self._mode.value, self._editing_id)
        return self._draft

    def set_field(self, name: str, value: Any) -> None:
        draft = self._require_open()
        key = FIELD_ALIASES.get(name, name)
        if key not in DRAFT_FIELDS:
            raise ValidationError(f"Unknown field: {name}")
        try:
            coerced = coerce_field(key, value)
        except ValueError as e:
            raise ValidationError(f"Invalid {key}: {value!r}") from e
        setattr(draft, key, coerced)

    @staticmethod
    def validate(draft: Draft) -> Draft:
        """Return a cleaned copy of the draft or raise ValidationError."""
        title = (draft.title or "").strip()
        if not title:
            raise ValidationError(TITLE_REQUIRED)
        if not isinstance(draft.priority, Priority):
            try:
                priority = Priority(str(draft.priority))
            except ValueError as e:
                raise ValidationError(f"Invalid priority: {draft.priority!r}") from e
        else:
            priority = draft.priority
        if not isinstance(draft.category_id, str) or not draft.category_id.strip():
            raise ValidationError(f"Invalid category: {draft.category_id!r}")
        return replace(draft, title=title, priority=priority, category_id=draft.category_id.strip())

    def commit(self) -> Task:
        draft = self._require_open()
        try:
            valid = self.validate(draft)
        except ValidationError as e:
            self.last_error = str(e)
            logger.debug("Form commit rejected: %s", e)
            raise

        try:
            if self._mode is FormMode.EDIT:
                task = self._store.update(self._editing_id or "", valid)
            else:
                task = self._store.create(valid)
        except NotFoundError:
            # The task was deleted while being edited; nothing left to save into.
            self._close()
            raise

        self._close()
        return task

    def cancel(self) -> None:
        if self.is_open:
            logger.debug("Form cancelled mode=%s", self._mode)
        self._close()

    def _close(self) -> None:
        self._mode = None
        self._draft = None
        self._editing_id = None
        self.last_error = None

    def _require_open(self) -> Draft:
        if self._draft is None:
            raise ValidationError("No task form is open.")
        return self._draft

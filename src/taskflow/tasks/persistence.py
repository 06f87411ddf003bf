# src/taskflow/tasks/persistence.py

from __future__ import annotations

import json
import logging
from collections.abc import Sequence

from ..core.ports import KeyValueArea
from .task_models import Task, task_from_record, task_to_record

logger = logging.getLogger(__name__)

DEFAULT_SLOT = "taskflow-tasks"


class TaskSnapshotStore:
    """
    Full-snapshot persistence of the task collection in a single named slot.

    Best-effort by contract:
    - load() never raises; a missing or malformed slot is an empty collection
    - save() never raises; a failed write is logged and the in-memory state stays authoritative
    """

    def __init__(self, kv: KeyValueArea, slot: str = DEFAULT_SLOT) -> None:
        self._kv = kv
        self._slot = slot

    @property
    def slot(self) -> str:
        return self._slot

    def load(self) -> list[Task]:
        try:
            raw = self._kv.get(self._slot)
        except Exception:
            logger.exception("Failed to read slot %s; starting with an empty collection.", self._slot)
            return []

        if raw is None or raw.strip() == "":
            return []

        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Slot %s does not hold valid JSON; ignoring it.", self._slot)
            return []

        if not isinstance(data, list):
            logger.warning("Slot %s holds %s, expected a list; ignoring it.", self._slot, type(data).__name__)
            return []

        tasks: list[Task] = []
        seen: set[str] = set()
        for item in data:
            if not isinstance(item, dict):
                logger.warning("Skipping non-object record in slot %s", self._slot)
                continue
            try:
                task = task_from_record(item)
            except (ValueError, TypeError) as e:
                logger.warning("Skipping bad task record: %s", e)
                continue
            if task.id in seen:
                logger.warning("Skipping duplicate task id=%s", task.id)
                continue
            seen.add(task.id)
            tasks.append(task)

        logger.info("Loaded %d tasks from slot %s", len(tasks), self._slot)
        return tasks

    def save(self, tasks: Sequence[Task]) -> None:
        try:
            payload = json.dumps([task_to_record(t) for t in tasks], ensure_ascii=False)
            self._kv.set(self._slot, payload)
        except Exception:
            logger.exception("Failed to save %d tasks to slot %s", len(tasks), self._slot)
            return
        logger.debug("Saved %d tasks to slot %s", len(tasks), self._slot)

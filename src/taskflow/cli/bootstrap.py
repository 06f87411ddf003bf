# src/taskflow/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the key-value area, snapshot persistence, task store and form session into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import Clock, KeyValueArea
from ..core.state import AppState
from ..storage.kv_store import SqliteKeyValueStore
from ..tasks.categories import CategoryRegistry
from ..tasks.form import FormSession
from ..tasks.persistence import TaskSnapshotStore
from ..tasks.task_models import utc_now
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.store_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(
    *,
    settings=None,
    kv: KeyValueArea | None = None,
    clock: Clock = utc_now,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and the key-value area) injectable makes the app easy to test.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if kv is None:
        _ensure_local_dirs(settings)
        kv = SqliteKeyValueStore(settings.store_path)

    slot = getattr(settings, "storage_slot", None) or "taskflow-tasks"
    store = TaskStore(TaskSnapshotStore(kv, slot=slot), clock=clock)
    categories = CategoryRegistry()

    state = AppState(
        settings=settings,
        task_store=store,
        categories=categories,
        form=FormSession(store, categories),
    )
    logger.debug("AppState created slot=%s tasks=%d", slot, len(store))
    return state

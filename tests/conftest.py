# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskflow.cli.bootstrap import create_initial_state
from taskflow.core.state import AppState
from taskflow.storage.kv_store import MemoryKeyValueStore
from taskflow.tasks.categories import CategoryRegistry
from taskflow.tasks.form import FormSession
from taskflow.tasks.task_store import TaskStore

from .fakes import FakeClock, RecordingRepo


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskflow-test",
        log_level="DEBUG",
        console_enabled=False,
        data_dir=tmp_path,
        store_path=tmp_path / "taskflow.sqlite3",
        log_dir=tmp_path,
        storage_slot="taskflow-tasks",
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def repo() -> RecordingRepo:
    return RecordingRepo()


@pytest.fixture()
def store(repo: RecordingRepo, clock: FakeClock) -> TaskStore:
    return TaskStore(repo, clock=clock)


@pytest.fixture()
def form(store: TaskStore) -> FormSession:
    return FormSession(store, CategoryRegistry())


@pytest.fixture()
def kv() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture()
def state(settings: SimpleNamespace, kv: MemoryKeyValueStore, clock: FakeClock) -> AppState:
    """
    AppState wired through the real composition root.

    NOTE: the key-value area is in-memory here; the SQLite backend has its own tests.
    """
    return create_initial_state(settings=settings, kv=kv, clock=clock)

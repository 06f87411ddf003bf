# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from taskflow.config import Settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "APP_NAME",
        "LOG_LEVEL",
        "CONSOLE_ENABLED",
        "DATA_DIR",
        "STORE_PATH",
        "LOG_DIR",
        "STORAGE_SLOT",
    ):
        monkeypatch.delenv(f"TASKFLOW_{name}", raising=False)

    s = Settings.from_env()

    assert s.app_name == "taskflow"
    assert s.log_level == "INFO"
    assert s.console_enabled is True
    assert s.data_dir == Path(".local/taskflow")
    assert s.store_path == Path(".local/taskflow/taskflow.sqlite3")
    assert s.log_dir == s.data_dir
    assert s.storage_slot == "taskflow-tasks"


def test_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TASKFLOW_LOG_LEVEL", "debug")
    monkeypatch.setenv("TASKFLOW_CONSOLE_ENABLED", "off")
    monkeypatch.setenv("TASKFLOW_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TASKFLOW_STORE_PATH", "")
    monkeypatch.setenv("TASKFLOW_STORAGE_SLOT", "my-tasks")

    s = Settings.from_env()

    assert s.log_level == "DEBUG"
    assert s.console_enabled is False
    assert s.store_path == tmp_path / "taskflow.sqlite3"
    assert s.storage_slot == "my-tasks"

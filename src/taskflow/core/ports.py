# src/taskflow/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task store depends on Protocols instead of concrete implementations.
This keeps the storage backend swappable and makes testing easier.
"""

from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Any, Protocol

Clock = Callable[[], datetime]
# Returns a timezone-aware "now"; injected so tests can pin time.


class KeyValueArea(Protocol):
    """
    Local durable key-value area (localStorage-like).

    Values are opaque strings; a missing key reads as None.
    """

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...


class TaskRepo(Protocol):
    """Snapshot persistence used by TaskStore: load once, save after every mutation."""

    def load(self) -> list[Any]: ...
    def save(self, tasks: Sequence[Any]) -> None: ...

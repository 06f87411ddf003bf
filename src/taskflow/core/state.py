# src/taskflow/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..tasks.categories import CategoryRegistry
from ..tasks.form import FormSession
from ..tasks.task_store import TaskStore
from ..tasks.views import ViewFilters


@dataclass
class AppState:
    """
    Explicitly owned application handle.

    Front-ends receive this object and route every mutation through
    `task_store` (directly or via the form session); nothing else holds tasks.
    """

    settings: Any
    task_store: TaskStore
    categories: CategoryRegistry
    form: FormSession
    view: ViewFilters = field(default_factory=ViewFilters)

# src/taskflow/tasks/categories.py

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .task_models import DEFAULT_CATEGORY_ID, Category

DEFAULT_CATEGORIES: tuple[Category, ...] = (
    Category(id=DEFAULT_CATEGORY_ID, name="Work", color="#6366f1"),
    Category(id="2", name="Personal", color="#06b6d4"),
    Category(id="3", name="Health", color="#10b981"),
    Category(id="4", name="Learning", color="#f59e0b"),
)


class CategoryRegistry:
    """
    Fixed, in-memory list of categories.

    Tasks reference categories by id without referential integrity:
    an unknown id resolves to None (the view simply shows no badge).
    """

    def __init__(self, categories: Iterable[Category] = DEFAULT_CATEGORIES) -> None:
        self._items: tuple[Category, ...] = tuple(categories)
        if not self._items:
            raise ValueError("at least one category is required")
        self._by_id = {c.id: c for c in self._items}

    def __iter__(self) -> Iterator[Category]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._by_id

    def all(self) -> tuple[Category, ...]:
        return self._items

    def get(self, category_id: str | None) -> Category | None:
        if category_id is None:
            return None
        return self._by_id.get(category_id)

    @property
    def default_id(self) -> str:
        return self._items[0].id

"""
Event categories.

A small, static lookup table used only for display (labels and colours).
The conflict engine never looks at categories; EventBook receives a table
so callers can inject their own.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

DEFAULT_COLOR = "bg-gray-500"


@dataclass(frozen=True)
class Category:
    value: str
    label: str
    color: str


class CategoryTable:
    """Read-only mapping of category value -> Category."""

    def __init__(self, categories: Iterable[Category]) -> None:
        self._by_value: dict[str, Category] = {c.value: c for c in categories}

    def __iter__(self) -> Iterator[Category]:
        return iter(self._by_value.values())

    def __len__(self) -> int:
        return len(self._by_value)

    def __contains__(self, value: object) -> bool:
        return value in self._by_value

    def get(self, value: str) -> Optional[Category]:
        return self._by_value.get(value)

    def color_for(self, value: str) -> str:
        cat = self._by_value.get(value)
        return cat.color if cat else DEFAULT_COLOR

    def values(self) -> list[str]:
        return list(self._by_value)


DEFAULT_CATEGORIES = CategoryTable(
    [
        Category("meeting", "Meeting", "bg-blue-500"),
        Category("work", "Work", "bg-purple-500"),
        Category("personal", "Personal", "bg-green-500"),
        Category("health", "Health", "bg-red-500"),
        Category("social", "Social", "bg-yellow-500"),
        Category("travel", "Travel", "bg-orange-500"),
        Category("other", "Other", DEFAULT_COLOR),
    ]
)

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from .domain import FilterCategory, normalize


MIN_QUERY_LENGTH = 3


@dataclass(frozen=True)
class Query:
    raw: str = ""
    normalized: str = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "normalized", normalize(self.raw))

    def is_active(self, min_length: int = MIN_QUERY_LENGTH) -> bool:
        return len(self.normalized) >= min_length


def as_query(query: Query | str) -> Query:
    if isinstance(query, Query):
        return query
    return Query(query)


class FilterState:
    def __init__(self) -> None:
        self._selected: dict[FilterCategory, dict[str, None]] = {
            category: {} for category in FilterCategory
        }

    def add(self, category: FilterCategory, value: str) -> bool:
        key = normalize(value)
        bucket = self._selected[category]
        if key in bucket:
            return False
        bucket[key] = None
        return True

    def remove(self, category: FilterCategory, value: str) -> bool:
        key = normalize(value)
        bucket = self._selected[category]
        if key not in bucket:
            return False
        del bucket[key]
        return True

    def clear(self) -> None:
        for bucket in self._selected.values():
            bucket.clear()

    def selected(self, category: FilterCategory) -> tuple[str, ...]:
        return tuple(self._selected[category])

    def contains(self, category: FilterCategory, value: str) -> bool:
        return normalize(value) in self._selected[category]

    def is_empty(self) -> bool:
        return not any(self._selected.values())

    def snapshot(self) -> Mapping[FilterCategory, tuple[str, ...]]:
        return {category: tuple(values) for category, values in self._selected.items()}

    def to_dict(self) -> dict[str, list[str]]:
        return {category.value: list(values) for category, values in self._selected.items()}

    def __repr__(self) -> str:
        return f"FilterState({self.to_dict()!r})"

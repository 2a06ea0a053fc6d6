from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from .domain import Recipe, normalize
from .errors import InvalidArgument


DEFAULT_SORT = "default"


def _by_name(recipe: Recipe) -> tuple[Any, ...]:
    return (normalize(recipe.name), recipe.id)


def _by_time(recipe: Recipe) -> int:
    return recipe.time


def _by_ingredient_count(recipe: Recipe) -> int:
    return len(recipe.ingredients)


SORT_KEYS: dict[str, tuple[Callable[[Recipe], Any], bool]] = {
    "A-Z": (_by_name, False),
    "Z-A": (_by_name, True),
    "time-asc": (_by_time, False),
    "time-desc": (_by_time, True),
    "ingredients-asc": (_by_ingredient_count, False),
    "ingredients-desc": (_by_ingredient_count, True),
}


def sort_choices() -> list[str]:
    return [DEFAULT_SORT, *SORT_KEYS]


def sort_recipes(recipes: Iterable[Recipe], sort_key: str = DEFAULT_SORT) -> list[Recipe]:
    items = list(recipes)
    if sort_key == DEFAULT_SORT:
        return items
    entry = SORT_KEYS.get(sort_key)
    if entry is None:
        raise InvalidArgument(f"Unknown sort key: {sort_key!r} (expected one of {', '.join(sort_choices())})")
    key, reverse = entry
    return sorted(items, key=key, reverse=reverse)

from __future__ import annotations

from collections.abc import Iterable

from .domain import FilterCategory, Recipe
from .errors import InvalidArgument
from .state import MIN_QUERY_LENGTH, FilterState, Query, as_query
from .store import IndexedRecipe


DEFAULT_SUGGESTION_LIMIT = 10


def suggest(
    recipes: Iterable[Recipe | IndexedRecipe],
    query: Query | str,
    filter_state: FilterState | None = None,
    limit: int = DEFAULT_SUGGESTION_LIMIT,
    min_query_length: int = MIN_QUERY_LENGTH,
) -> list[str]:
    if limit < 1:
        raise InvalidArgument(f"Suggestion limit must be >= 1, got {limit}")
    current = as_query(query)
    if not current.is_active(min_query_length):
        return []
    needle = current.normalized

    found: set[str] = set()
    for recipe in recipes:
        entry = IndexedRecipe.of(recipe)
        for text in (entry.name, entry.appliance, *entry.ingredients, *entry.utensils):
            if needle in text:
                found.add(text)
    if filter_state is not None:
        for category in FilterCategory:
            found.update(value for value in filter_state.selected(category) if needle in value)
    return sorted(found)[:limit]

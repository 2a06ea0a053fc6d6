from __future__ import annotations

from .domain import FilterCategory, Recipe
from .state import MIN_QUERY_LENGTH, FilterState, Query, as_query
from .store import IndexedRecipe


def matches(
    recipe: Recipe | IndexedRecipe,
    query: Query | str,
    filter_state: FilterState,
    min_query_length: int = MIN_QUERY_LENGTH,
) -> bool:
    entry = IndexedRecipe.of(recipe)
    return _text_match(entry, as_query(query), min_query_length) and _filter_match(entry, filter_state)


def _text_match(entry: IndexedRecipe, query: Query, min_query_length: int) -> bool:
    if not query.is_active(min_query_length):
        return True
    needle = query.normalized
    if needle in entry.name:
        return True
    if any(needle in name for name in entry.ingredients):
        return True
    return needle in entry.description


def _filter_match(entry: IndexedRecipe, filter_state: FilterState) -> bool:
    for value in filter_state.selected(FilterCategory.INGREDIENTS):
        if not any(value in name for name in entry.ingredients):
            return False
    for value in filter_state.selected(FilterCategory.APPLIANCES):
        if entry.appliance != value:
            return False
    for value in filter_state.selected(FilterCategory.UTENSILS):
        if not any(value in name for name in entry.utensils):
            return False
    return True

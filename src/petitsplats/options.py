from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
import logging
from typing import Any

from .domain import FilterCategory, Recipe
from .search import matches
from .state import MIN_QUERY_LENGTH, FilterState, Query, as_query
from .store import IndexedRecipe

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchResult:
    result_set: tuple[Recipe, ...]
    available_options: Mapping[FilterCategory, tuple[str, ...]]

    @property
    def count(self) -> int:
        return len(self.result_set)

    def options_for(self, category: FilterCategory) -> tuple[str, ...]:
        return self.available_options[category]

    def to_dict(self) -> dict[str, Any]:
        return {
            "resultSet": [recipe.to_dict() for recipe in self.result_set],
            "availableOptions": {
                category.value: list(self.available_options[category]) for category in FilterCategory
            },
        }


def derive_options(
    entries: Iterable[IndexedRecipe],
    filter_state: FilterState,
) -> dict[FilterCategory, tuple[str, ...]]:
    found: dict[FilterCategory, set[str]] = {category: set() for category in FilterCategory}
    for entry in entries:
        found[FilterCategory.INGREDIENTS].update(entry.ingredients)
        found[FilterCategory.APPLIANCES].add(entry.appliance)
        found[FilterCategory.UTENSILS].update(entry.utensils)

    options: dict[FilterCategory, tuple[str, ...]] = {}
    for category, values in found.items():
        values.difference_update(filter_state.selected(category))
        options[category] = tuple(sorted(value for value in values if value))
    return options


def recompute(
    recipes: Iterable[Recipe | IndexedRecipe],
    query: Query | str,
    filter_state: FilterState,
    min_query_length: int = MIN_QUERY_LENGTH,
) -> SearchResult:
    current = as_query(query)
    entries = [IndexedRecipe.of(recipe) for recipe in recipes]
    kept = [entry for entry in entries if matches(entry, current, filter_state, min_query_length)]
    options = derive_options(kept, filter_state)
    logger.debug(
        "Recomputed %d/%d recipes for query %r and filters %r",
        len(kept),
        len(entries),
        current.normalized,
        filter_state,
    )
    return SearchResult(
        result_set=tuple(entry.recipe for entry in kept),
        available_options=options,
    )


def format_count(count: int) -> str:
    noun = "recette" if count <= 1 else "recettes"
    return f"{count} {noun}"

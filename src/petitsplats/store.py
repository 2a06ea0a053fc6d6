from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
import logging

from .domain import Recipe, normalize
from .errors import RecipeDataError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndexedRecipe:
    recipe: Recipe
    name: str
    description: str
    ingredients: tuple[str, ...]
    appliance: str
    utensils: tuple[str, ...]

    @classmethod
    def build(cls, recipe: Recipe) -> IndexedRecipe:
        return cls(
            recipe=recipe,
            name=normalize(recipe.name),
            description=normalize(recipe.description),
            ingredients=tuple(normalize(ing.name) for ing in recipe.ingredients),
            appliance=normalize(recipe.appliance),
            utensils=tuple(normalize(ust) for ust in recipe.utensils),
        )

    @classmethod
    def of(cls, recipe: Recipe | IndexedRecipe) -> IndexedRecipe:
        if isinstance(recipe, cls):
            return recipe
        return cls.build(recipe)


class RecipeStore:
    def __init__(self, recipes: Iterable[Recipe]) -> None:
        entries: list[IndexedRecipe] = []
        seen: set[int] = set()
        for recipe in recipes:
            if recipe.id in seen:
                raise RecipeDataError(f"Duplicate recipe id: {recipe.id}")
            seen.add(recipe.id)
            entries.append(IndexedRecipe.build(recipe))
        self._entries = tuple(entries)
        self._by_id = {entry.recipe.id: entry.recipe for entry in self._entries}
        logger.debug("Loaded %d recipes into store", len(self._entries))

    def __iter__(self) -> Iterator[Recipe]:
        return (entry.recipe for entry in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, recipe_id: object) -> bool:
        return recipe_id in self._by_id

    def get(self, recipe_id: int) -> Recipe | None:
        return self._by_id.get(recipe_id)

    @property
    def recipes(self) -> tuple[Recipe, ...]:
        return tuple(entry.recipe for entry in self._entries)

    @property
    def indexed(self) -> tuple[IndexedRecipe, ...]:
        return self._entries

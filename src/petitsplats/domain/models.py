from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..errors import InvalidArgument


class FilterCategory(Enum):
    INGREDIENTS = "ingredients"
    APPLIANCES = "appliances"
    UTENSILS = "utensils"

    @classmethod
    def parse(cls, value: Any) -> FilterCategory:
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise InvalidArgument(f"Filter category must be a string, got {type(value).__name__}")
        key = value.strip().lower()
        key = CATEGORY_ALIASES.get(key, key)
        for member in cls:
            if member.value == key:
                return member
        raise InvalidArgument(f"Unknown filter category: {value!r}")


CATEGORY_ALIASES = {
    "ustensils": "utensils",
}


@dataclass(frozen=True)
class Ingredient:
    name: str
    quantity: float | None = None
    unit: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "quantity": self.quantity, "unit": self.unit}


@dataclass(frozen=True)
class Recipe:
    id: int
    name: str
    description: str
    time: int
    servings: int
    ingredients: tuple[Ingredient, ...]
    appliance: str
    utensils: tuple[str, ...]
    image: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "time": self.time,
            "servings": self.servings,
            "ingredients": [ing.to_dict() for ing in self.ingredients],
            "appliance": self.appliance,
            "utensils": list(self.utensils),
            "image": self.image,
        }

from .models import CATEGORY_ALIASES, FilterCategory, Ingredient, Recipe
from .text import normalize

__all__ = [
    "CATEGORY_ALIASES",
    "FilterCategory",
    "Ingredient",
    "Recipe",
    "normalize",
]

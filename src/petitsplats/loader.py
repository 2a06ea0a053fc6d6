from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from .domain import Ingredient, Recipe
from .errors import MissingFileError, RecipeDataError

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}
JSON_SUFFIXES = {".json"}


def load_recipes(path: str | Path) -> list[Recipe]:
    source = Path(path)
    if not source.exists():
        raise MissingFileError(f"Recipe data not found: {source}")
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as exc:
        raise MissingFileError(f"Failed to read recipe data: {source}") from exc

    records = _records(_parse(text, source), source)
    recipes = [parse_recipe(record, f"{source}[{idx}]") for idx, record in enumerate(records)]
    logger.info("Loaded %d recipes from %s", len(recipes), source)
    return recipes


def _parse(text: str, source: Path) -> Any:
    suffix = source.suffix.lower()
    if suffix in YAML_SUFFIXES:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise RecipeDataError(f"{source}: invalid YAML") from exc
    if suffix in JSON_SUFFIXES:
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise RecipeDataError(f"{source}: invalid JSON") from exc
    raise RecipeDataError(f"{source}: unsupported recipe data format {source.suffix!r}")


def _records(data: Any, source: Path) -> list[Any]:
    if isinstance(data, dict):
        data = data.get("recipes")
    if not isinstance(data, list):
        raise RecipeDataError(f"{source}: expected a list of recipes")
    return data


def parse_recipe(data: Any, source: str = "<recipe>") -> Recipe:
    if not isinstance(data, dict):
        raise RecipeDataError(f"{source}: recipe must be a mapping")
    missing = [key for key in ("id", "name", "appliance") if key not in data]
    if missing:
        raise RecipeDataError(f"{source}: missing required keys: {', '.join(missing)}")

    ingredients = data.get("ingredients", [])
    if not isinstance(ingredients, list):
        raise RecipeDataError(f"{source}: ingredients must be a list")
    utensils = data.get("ustensils", data.get("utensils", []))
    if not isinstance(utensils, list):
        raise RecipeDataError(f"{source}: utensils must be a list")

    image = data.get("image")
    return Recipe(
        id=_int(data["id"], "id", source),
        name=_text(data["name"], "name", source),
        description=_text(data.get("description", ""), "description", source),
        time=_count(data.get("time", 0), "time", source),
        servings=_count(data.get("servings", 0), "servings", source),
        ingredients=tuple(_ingredient(item, f"{source}.ingredients[{idx}]") for idx, item in enumerate(ingredients)),
        appliance=_text(data["appliance"], "appliance", source),
        utensils=tuple(_text(item, "utensil", source) for item in utensils),
        image=None if image is None else str(image),
    )


def _ingredient(data: Any, source: str) -> Ingredient:
    if isinstance(data, str):
        data = {"ingredient": data}
    if not isinstance(data, dict):
        raise RecipeDataError(f"{source}: ingredient must be a mapping or a string")
    name = _text(data.get("ingredient", data.get("name", "")), "ingredient", source)
    if not name.strip():
        raise RecipeDataError(f"{source}: ingredient name is empty")
    quantity = data.get("quantity")
    if quantity is not None and (isinstance(quantity, bool) or not isinstance(quantity, (int, float))):
        raise RecipeDataError(f"{source}: quantity must be a number")
    unit = data.get("unit")
    return Ingredient(
        name=name,
        quantity=None if quantity is None else float(quantity),
        unit=None if unit is None else str(unit),
    )


def _text(value: Any, field: str, source: str) -> str:
    if not isinstance(value, str):
        raise RecipeDataError(f"{source}: {field} must be a string")
    return value


def _int(value: Any, field: str, source: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise RecipeDataError(f"{source}: {field} must be an integer")
    return value


def _count(value: Any, field: str, source: str) -> int:
    number = _int(value, field, source)
    if number < 0:
        raise RecipeDataError(f"{source}: {field} must be >= 0")
    return number

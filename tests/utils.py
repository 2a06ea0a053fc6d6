from __future__ import annotations

from pathlib import Path

from petitsplats.domain import Ingredient, Recipe

ROOT = Path(__file__).resolve().parents[1]
DATASET = ROOT / "data" / "recipes.json"


def make_recipe(
    recipe_id: int,
    name: str,
    ingredients: list[str],
    appliance: str,
    utensils: list[str],
    description: str = "",
    time: int = 10,
    servings: int = 2,
) -> Recipe:
    return Recipe(
        id=recipe_id,
        name=name,
        description=description,
        time=time,
        servings=servings,
        ingredients=tuple(Ingredient(name=item) for item in ingredients),
        appliance=appliance,
        utensils=tuple(utensils),
    )


def sample_recipes() -> list[Recipe]:
    return [
        make_recipe(
            1,
            "Limonade de Coco",
            ["Lait de coco", "Jus de citron", "Crème de coco", "Sucre", "Glaçons"],
            "Blender",
            ["cuillère à Soupe", "verres", "presse citron"],
            description="Mettre les glaçons dans un blender, ajouter le lait de coco.",
            time=10,
            servings=1,
        ),
        make_recipe(
            2,
            "Poisson Cru à la Tahitienne",
            ["Thon Rouge (ou blanc)", "Concombre", "Tomate", "Carotte", "Citron Vert", "Lait de Coco"],
            "Saladier",
            ["presse citron"],
            description="Découper le thon en dés et le recouvrir de jus de citron vert.",
            time=60,
            servings=2,
        ),
        make_recipe(
            3,
            "Poulet Coco Réunionnais",
            ["Poulet", "Lait de coco", "Coulis de tomate", "Oignon", "Poivron rouge", "Huile d'olive"],
            "Cocotte",
            ["couteau"],
            description="Découper le poulet en morceaux et le faire dorer dans une cocotte.",
            time=80,
            servings=4,
        ),
        make_recipe(
            4,
            "Tarte au Thon",
            ["Pâte feuilletée", "Thon en miettes", "Tomate", "Crème fraîche", "Gruyère râpé"],
            "Four",
            ["moule à tarte", "râpe à fromage", "couteau"],
            description="Étaler la pâte feuilletée dans un moule, tartiner de moutarde.",
            time=45,
            servings=4,
        ),
        make_recipe(
            5,
            "Tarte aux Pommes",
            ["Pâte brisée", "Pomme", "Oeuf", "Crème fraîche", "Sucre en poudre"],
            "Four",
            ["moule à tarte", "saladier", "fourchette"],
            description="Mélanger les œufs et le sucre dans un saladier.",
            time=50,
            servings=6,
        ),
    ]


RECIPE_YAML = """\
recipes:
  - id: 1
    name: Limonade de Coco
    servings: 1
    time: 10
    description: Mettre les glaçons dans un blender.
    appliance: Blender
    ingredients:
      - ingredient: Lait de coco
        quantity: 400
        unit: ml
      - ingredient: Jus de citron
        quantity: 2
      - ingredient: Glaçons
    ustensils: [cuillère à Soupe, verres, presse citron]
  - id: 2
    name: Tarte au Citron
    servings: 6
    time: 50
    description: Battre les œufs avec le sucre.
    appliance: Four
    ingredients:
      - ingredient: Pâte brisée
        quantity: 200
        unit: grammes
      - ingredient: Sucre
        quantity: 150
        unit: grammes
      - ingredient: Citron
        quantity: 2
    ustensils: [rouleau à pâtisserie, moule à tarte]
  - id: 3
    name: Poulet Coco Réunionnais
    servings: 4
    time: 80
    description: Découper le poulet en morceaux.
    appliance: Cocotte
    ingredients:
      - ingredient: Poulet
      - ingredient: Lait de coco
        quantity: 400
        unit: ml
    ustensils: [couteau]
"""


def write_recipe_data(path: Path, content: str = RECIPE_YAML) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def write_global_config(home: Path, content: str) -> Path:
    cfg_dir = home / ".config" / "petitsplats"
    cfg_dir.mkdir(parents=True, exist_ok=True)
    path = cfg_dir / "config.toml"
    path.write_text(content, encoding="utf-8")
    return path

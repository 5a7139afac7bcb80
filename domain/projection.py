"""Turns a `Recipe` into what gets shown and what gets sent to the model."""

from domain.models import MAX_INGREDIENTS, Ingredient, Recipe


def ingredient_line(ingredient: Ingredient) -> str | None:
    name = ingredient.name.strip()
    if not name:
        return None
    measure = ingredient.measure.strip()
    return f"{measure} {name}" if measure else name


def ingredient_lines(recipe: Recipe) -> list[str]:
    lines = (ingredient_line(i) for i in recipe.ingredients[:MAX_INGREDIENTS])
    return [line for line in lines if line is not None]


def ingredients_text(recipe: Recipe) -> str:
    return ", ".join(ingredient_lines(recipe))

import re
from typing import Any, Self

import markdown2  # pyright: ignore[reportMissingTypeStubs]
from pydantic import BaseModel, ConfigDict


MAX_INGREDIENTS = 20


class Ingredient(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    measure: str = ""


def _text(meal: dict[str, Any], key: str) -> str:
    value = meal.get(key)
    return value if isinstance(value, str) else ""


class Recipe(BaseModel):
    """One recipe as returned by TheMealDB, with the ingredient slots normalized."""

    model_config = ConfigDict(frozen=True)

    name: str
    image_url: str = ""
    instructions: str = ""
    ingredients: tuple[Ingredient, ...] = ()
    id: str = ""
    category: str = ""
    area: str = ""
    source_url: str = ""
    youtube_url: str = ""
    tags: tuple[str, ...] = ()

    @classmethod
    def from_meal(cls, meal: dict[str, Any]) -> Self:
        """Build from a raw `meals[i]` object.

        The service flattens ingredients into `strIngredient1..20` and
        `strMeasure1..20`. Every slot is kept, blank or not, the projection
        decides what is shown.
        """
        name = _text(meal, "strMeal").strip()
        if not name:
            raise ValueError("Meal has no name.")

        ingredients = tuple(
            Ingredient(
                name=_text(meal, f"strIngredient{i}"),
                measure=_text(meal, f"strMeasure{i}"),
            )
            for i in range(1, MAX_INGREDIENTS + 1)
            if f"strIngredient{i}" in meal or f"strMeasure{i}" in meal
        )
        tags = tuple(t.strip() for t in _text(meal, "strTags").split(",") if t.strip())

        return cls(
            name=name,
            image_url=_text(meal, "strMealThumb"),
            instructions=_text(meal, "strInstructions"),
            ingredients=ingredients,
            id=_text(meal, "idMeal"),
            category=_text(meal, "strCategory"),
            area=_text(meal, "strArea"),
            source_url=_text(meal, "strSource"),
            youtube_url=_text(meal, "strYoutube"),
            tags=tags,
        )

    @property
    def instruction_lines(self) -> list[str]:
        return [
            line.strip()
            for line in re.split(r"\r?\n", self.instructions)
            if line.strip()
        ]

    def to_dict(self) -> dict[str, Any]:
        from domain.projection import ingredient_lines

        return {
            "id": self.id,
            "name": self.name,
            "image_url": self.image_url,
            "category": self.category,
            "area": self.area,
            "tags": list(self.tags),
            "ingredients": ingredient_lines(self),
            "instructions": self.instruction_lines,
            "source_url": self.source_url,
            "youtube_url": self.youtube_url,
        }


class Remix(BaseModel):
    model_config = ConfigDict(frozen=True)

    recipe_name: str
    theme: str
    text: str

    @property
    def html(self) -> str:
        # Completion text is untrusted, raw html in it is escaped.
        return markdown2.markdown(  # pyright: ignore[reportUnknownVariableType, reportUnknownMemberType]
            self.text, safe_mode="escape", extras=["fences", "tables"]
        )

from domain.models import Recipe
from domain.projection import ingredients_text


REMIX_PROMPT = (
    "Please remix this recipe with a {theme} theme. "
    "Make it short, fun, creative, and totally doable. "
    "Highlight any changed ingredients or cooking instructions:"
)


RECIPE_TEXT = """
Recipe: {name}
Ingredients: {ingredients}
Instructions: {instructions}
""".strip()


def recipe_text(recipe: Recipe) -> str:
    return RECIPE_TEXT.format(
        name=recipe.name,
        ingredients=ingredients_text(recipe),
        instructions=recipe.instructions.strip(),
    )


class RemixPrompt:
    def __init__(
        self,
        recipe: Recipe,
        theme: str,
        content: str | None = None,
    ) -> None:
        self.recipe = recipe
        self.theme = theme
        self.content = REMIX_PROMPT if content is None else content

    def __str__(self) -> str:
        return f"{self.content.format(theme=self.theme)}\n\n{recipe_text(self.recipe)}"

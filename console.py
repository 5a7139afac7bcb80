"""Interactive console over the same actions as the web page.

    python console.py
"""

import asyncio
import logging

from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel

from app.config import Config
from app.deps import favorites_store, recipe_source, remix_client
from domain import services
from domain.errors import RecipeRemixError
from domain.favorites import FavoritesStore
from domain.mealdb import MealDBClient
from domain.models import Recipe
from domain.remix import RemixClient
from domain.session import SessionState


HELP = """
[bold]r[/bold]            random recipe
[bold]s[/bold] <name>     find a recipe by name
[bold]m[/bold] <theme>    remix the current recipe
[bold]f[/bold]            save the current recipe
[bold]l[/bold]            list saved recipes
[bold]o[/bold] <name>     open a saved recipe
[bold]d[/bold] <name>     delete a saved recipe
[bold]q[/bold]            quit
""".strip()


def show_recipe(console: Console, recipe: Recipe) -> None:
    data = recipe.to_dict()
    ingredients = "\n".join(f"- {line}" for line in data["ingredients"])
    instructions = "\n\n".join(data["instructions"])
    body = f"### Ingredients\n\n{ingredients}\n\n### Instructions\n\n{instructions}"
    console.print(Panel(Markdown(body), title=recipe.name))
    if recipe.image_url:
        console.print(recipe.image_url, style="dim")


class RecipeConsole:
    def __init__(
        self,
        *,
        source: MealDBClient,
        remixer: RemixClient,
        favorites: FavoritesStore,
        console: Console | None = None,
    ) -> None:
        self.session = SessionState()
        self.source = source
        self.remixer = remixer
        self.favorites = favorites
        self.console = Console() if console is None else console

    async def handle(self, line: str) -> bool:
        """Run one command. False means quit."""
        cmd, _, arg = line.strip().partition(" ")
        arg = arg.strip()
        match cmd.lower():
            case "q" | "quit" | "exit":
                return False
            case "r":
                with self.console.status("Loading..."):
                    recipe = await services.load_random(
                        session=self.session, source=self.source
                    )
                show_recipe(self.console, recipe)
            case "s" | "o":
                with self.console.status("Loading..."):
                    recipe = await services.load_by_name(
                        arg, session=self.session, source=self.source
                    )
                show_recipe(self.console, recipe)
            case "m":
                with self.console.status("Cooking up your remix..."):
                    remix = await services.remix_current(
                        arg, session=self.session, remixer=self.remixer
                    )
                self.console.print(
                    Panel(Markdown(remix.text), title=f"Your {remix.theme} Remix")
                )
            case "f":
                result = services.save_current(
                    session=self.session, favorites=self.favorites
                )
                self.console.print(services.message_for(result))
            case "l":
                names = services.list_saved(favorites=self.favorites)
                if not names:
                    self.console.print("No saved recipes yet.")
                for name in names:
                    self.console.print(f"- {name}")
            case "d":
                result = services.delete_saved(arg, favorites=self.favorites)
                self.console.print(services.message_for(result))
            case _:
                self.console.print(HELP)
        return True

    async def run(self) -> None:
        self.console.print(HELP)
        while True:
            line = await asyncio.to_thread(self.console.input, "> ")
            try:
                if not await self.handle(line):
                    break
            except RecipeRemixError as e:
                self.console.print(services.message_for(e), style="red")
            except ValueError as e:
                self.console.print(str(e), style="red")


async def main() -> None:
    config = Config()
    logging.basicConfig(level=config.log_level)
    source = recipe_source(config)
    remixer = remix_client(config)
    try:
        await RecipeConsole(
            source=source,
            remixer=remixer,
            favorites=favorites_store(config),
        ).run()
    finally:
        await source.close()
        await remixer.close()


if __name__ == "__main__":
    asyncio.run(main())

import io

import pytest
from rich.console import Console

from console import RecipeConsole
from domain.errors import EmptySession, RecipeNotFound
from domain.favorites import FavoritesStore, MemoryStore
from tests.fakes import mealdb, remixer


@pytest.fixture
def console() -> RecipeConsole:
    return RecipeConsole(
        source=mealdb(),
        remixer=remixer(),
        favorites=FavoritesStore(MemoryStore()),
        console=Console(file=io.StringIO(), record=True, width=100),
    )


def output(rc: RecipeConsole) -> str:
    return rc.console.export_text()


@pytest.mark.asyncio
async def test_random_then_save(console: RecipeConsole) -> None:
    assert await console.handle("r")
    assert "Stew" in output(console)
    assert "2 lb Beef" in output(console)

    await console.handle("f")
    await console.handle("f")
    await console.handle("l")
    text = output(console)
    assert "Recipe saved." in text
    assert "This recipe is already saved." in text
    assert "- Stew" in text


@pytest.mark.asyncio
async def test_search_and_remix(console: RecipeConsole) -> None:
    await console.handle("s Curry")
    await console.handle("m Spicy")
    text = output(console)
    assert "2 tbsp Curry paste" in text
    assert "Your Spicy Remix" in text


@pytest.mark.asyncio
async def test_errors_propagate_to_run_loop(console: RecipeConsole) -> None:
    with pytest.raises(EmptySession):
        await console.handle("m Spicy")
    with pytest.raises(RecipeNotFound):
        await console.handle("s Unicorn Pie")


@pytest.mark.asyncio
async def test_delete_and_quit(console: RecipeConsole) -> None:
    console.favorites.add("Stew")
    await console.handle("d Stew")
    await console.handle("d Stew")
    text = output(console)
    assert "Recipe removed." in text
    assert "That recipe was not saved." in text
    assert not await console.handle("q")

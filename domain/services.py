"""What the user can do. One function per trigger on the page."""

import logging
from typing import Awaitable

from domain.errors import (
    EmptySession,
    NetworkError,
    RecipeNotFound,
    RemixError,
    Superseded,
)
from domain.favorites import FavoriteResult, FavoritesStore
from domain.mealdb import MealDBClient
from domain.models import Recipe, Remix
from domain.remix import RemixClient
from domain.session import SessionState


logger = logging.getLogger(__name__)


MESSAGES: dict[type[Exception] | FavoriteResult, str] = {
    NetworkError: "Sorry, couldn't load a recipe.",
    RecipeNotFound: "No recipe found with that name.",
    RemixError: (
        "Oops! Something went wrong while creating your remix. Please try again!"
    ),
    EmptySession: "Please load a recipe first!",
    Superseded: "A newer recipe is already on its way.",
    FavoriteResult.added: "Recipe saved.",
    FavoriteResult.already_exists: "This recipe is already saved.",
    FavoriteResult.deleted: "Recipe removed.",
    FavoriteResult.not_present: "That recipe was not saved.",
}


def message_for(outcome: Exception | FavoriteResult) -> str:
    if isinstance(outcome, FavoriteResult):
        return MESSAGES[outcome]
    for kind in type(outcome).__mro__:
        if kind in MESSAGES:
            return MESSAGES[kind]
    return str(outcome)


async def _load(
    session: SessionState,
    fetch: Awaitable[Recipe],
) -> Recipe:
    ticket = session.begin_load()
    recipe = await fetch
    if not session.set(recipe, ticket=ticket):
        logger.info("Dropping %s, a later load was issued.", recipe.name)
        raise Superseded(recipe.name)
    return recipe


async def load_random(*, session: SessionState, source: MealDBClient) -> Recipe:
    return await _load(session, source.random())


async def load_by_name(
    name: str,
    *,
    session: SessionState,
    source: MealDBClient,
) -> Recipe:
    if not name.strip():
        raise ValueError("Provide a recipe name.")
    return await _load(session, source.by_name(name))


async def remix_current(
    theme: str,
    *,
    session: SessionState,
    remixer: RemixClient,
) -> Remix:
    recipe = session.require()
    remix = await remixer.remix(recipe, theme)
    # Only keep it if the recipe it was made from is still the one shown.
    if session.get() is recipe:
        session.remix = remix
    return remix


def save_current(*, session: SessionState, favorites: FavoritesStore) -> FavoriteResult:
    return favorites.add(session.require().name)


def list_saved(*, favorites: FavoritesStore) -> list[str]:
    return favorites.list()


def delete_saved(name: str, *, favorites: FavoritesStore) -> FavoriteResult:
    return favorites.delete(name)

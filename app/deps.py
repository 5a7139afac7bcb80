"""Builds the domain collaborators from configuration."""

from app.config import Config
from domain.favorites import FavoritesStore, JsonFileStore
from domain.mealdb import MealDBClient, mealdb_client_factory
from domain.remix import RemixClient, openai_client_factory


def recipe_source(config: Config) -> MealDBClient:
    return MealDBClient(mealdb_client_factory(config.mealdb_url))


def remix_client(config: Config) -> RemixClient:
    token = config.api_key
    return RemixClient(
        token=token,
        model=config.remix_model,
        max_tokens=config.remix_max_tokens,
        temperature=config.remix_temperature,
        client=openai_client_factory(token, config.openai_url),
    )


def favorites_store(config: Config) -> FavoritesStore:
    return FavoritesStore(JsonFileStore(config.favorites_path))

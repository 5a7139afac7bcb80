import logging
from typing import Any

import httpx

from domain.errors import NetworkError, RecipeNotFound
from domain.models import Recipe


logger = logging.getLogger(__name__)


BASE_URL = "https://www.themealdb.com/api/json/v1/1/"


def mealdb_client_factory(base_url: str = BASE_URL) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=base_url)


class MealDBClient:
    """Random and by-name lookups against TheMealDB."""

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        self._client = mealdb_client_factory() if client is None else client

    async def _meals(
        self,
        path: str,
        params: dict[str, str] | None = None,
    ) -> list[Any]:
        try:
            resp = await self._client.get(path, params=params)
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Recipe lookup %s failed: %r", path, e)
            raise NetworkError(f"Could not reach the recipe service. {e}") from e

        if not isinstance(data, dict):
            raise NetworkError(f"Unexpected recipe service response. {data!r}")

        meals = data.get("meals")
        if meals is None:
            return []
        if not isinstance(meals, list):
            raise NetworkError(f"Unexpected recipe service response. {data!r}")
        return meals

    def _first(self, meals: list[Any]) -> Recipe:
        meal = meals[0]
        if not isinstance(meal, dict):
            raise NetworkError(f"Unexpected meal object. {meal!r}")
        try:
            return Recipe.from_meal(meal)
        except ValueError as e:
            raise NetworkError(f"Unexpected meal object. {e}") from e

    async def random(self) -> Recipe:
        meals = await self._meals("random.php")
        if not meals:
            raise NetworkError("The recipe service returned no random recipe.")
        recipe = self._first(meals)
        logger.info("Loaded random recipe %s", recipe.name)
        return recipe

    async def by_name(self, name: str) -> Recipe:
        if not name.strip():
            raise ValueError("Provide a recipe name.")
        meals = await self._meals("search.php", params={"s": name})
        if not meals:
            raise RecipeNotFound(name)
        recipe = self._first(meals)
        logger.info("Loaded recipe %s for %r", recipe.name, name)
        return recipe

    async def close(self) -> None:
        await self._client.aclose()

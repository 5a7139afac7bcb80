from typing import Any

import pytest
from starlette.testclient import TestClient

from app.app import app
from domain.favorites import FavoritesStore, MemoryStore
from domain.session import SessionState
from tests.fakes import (
    completion_handler,
    failing_handler,
    mealdb,
    mealdb_handler,
    remixer,
)


@pytest.fixture
def calls() -> list[dict[str, Any]]:
    return []


@pytest.fixture
def client(calls: list[dict[str, Any]]) -> TestClient:
    app.state.session = SessionState()
    app.state.source = mealdb()
    app.state.remixer = remixer(completion_handler(calls=calls))
    app.state.favorites = FavoritesStore(MemoryStore())
    return TestClient(app)


def test_homepage_loads_a_recipe(client: TestClient) -> None:
    resp = client.get("/")
    assert resp.status_code == 200
    assert "<h2>Stew</h2>" in resp.text
    assert "<li>2 lb Beef</li>" in resp.text
    assert "Cook.<br />Serve." in resp.text
    assert app.state.session.get().name == "Stew"


def test_homepage_when_recipe_service_is_down(client: TestClient) -> None:
    app.state.source = mealdb(failing_handler)
    resp = client.get("/")
    assert resp.status_code == 200
    assert "Sorry, couldn&#39;t load a recipe." in resp.text


def test_random(client: TestClient) -> None:
    resp = client.post("/recipes/random")
    assert resp.status_code == 200
    assert "<h2>Stew</h2>" in resp.text
    assert 'id="remix-display" hx-swap-oob="true"' in resp.text


def test_random_network_error(client: TestClient) -> None:
    app.state.source = mealdb(failing_handler)
    resp = client.post("/recipes/random")
    assert resp.status_code == 502
    assert "load a recipe" in resp.text


def test_search(client: TestClient) -> None:
    resp = client.post("/recipes/search", data={"name": "Curry"})
    assert resp.status_code == 200
    assert "<h2>Curry</h2>" in resp.text
    assert "<li>Chicken</li>" in resp.text
    assert "<li>2 tbsp Curry paste</li>" in resp.text


def test_search_not_found(client: TestClient) -> None:
    resp = client.post("/recipes/search", data={"name": "Unicorn Pie"})
    assert resp.status_code == 404
    assert "No recipe found with that name." in resp.text


def test_search_blank(client: TestClient) -> None:
    resp = client.post("/recipes/search", data={"name": "  "})
    assert resp.status_code == 400


def test_recipe_text_is_escaped(client: TestClient) -> None:
    meal = {
        "strMeal": "<b>Bold</b> Pie",
        "strInstructions": "<script>alert(1)</script>",
        "strIngredient1": "<i>Flour</i>",
        "strMeasure1": "1 cup",
    }
    app.state.source = mealdb(mealdb_handler(meals=[meal]))
    resp = client.post("/recipes/random")
    assert "<script>" not in resp.text
    assert "&lt;b&gt;Bold&lt;/b&gt; Pie" in resp.text
    assert "1 cup &lt;i&gt;Flour&lt;/i&gt;" in resp.text


def test_remix_without_recipe(client: TestClient, calls: list[dict[str, Any]]) -> None:
    resp = client.post("/remix", data={"theme": "Spicy"})
    assert resp.status_code == 409
    assert "Please load a recipe first!" in resp.text
    assert calls == []


def test_remix(client: TestClient, calls: list[dict[str, Any]]) -> None:
    client.post("/recipes/random")
    resp = client.post("/remix", data={"theme": "Spicy"})
    assert resp.status_code == 200
    assert "Your Spicy Remix:" in resp.text
    assert "<strong>chilli</strong>" in resp.text
    assert len(calls) == 1


def test_remix_failure(client: TestClient) -> None:
    app.state.remixer = remixer(failing_handler)
    client.post("/recipes/random")
    resp = client.post("/remix", data={"theme": "Spicy"})
    assert resp.status_code == 502
    assert "Something went wrong while creating your remix" in resp.text


def test_save_without_recipe(client: TestClient) -> None:
    resp = client.post("/favorites")
    assert resp.status_code == 409
    assert app.state.favorites.list() == []


def test_save_twice(client: TestClient) -> None:
    client.post("/recipes/random")
    resp = client.post("/favorites")
    assert "Recipe saved." in resp.text
    assert "Stew" in resp.text
    resp = client.post("/favorites")
    assert "This recipe is already saved." in resp.text
    assert app.state.favorites.list() == ["Stew"]


def test_list_and_load_favorite(client: TestClient) -> None:
    app.state.favorites.add("Curry")
    resp = client.get("/favorites")
    assert "Curry" in resp.text

    resp = client.post("/favorites/load", data={"name": "Curry"})
    assert resp.status_code == 200
    assert "<h2>Curry</h2>" in resp.text
    assert app.state.session.get().name == "Curry"


def test_delete_favorite(client: TestClient) -> None:
    app.state.favorites.add("Beef & Ale / Stew")
    resp = client.delete("/favorites/Beef%20%26%20Ale%20%2F%20Stew")
    assert resp.status_code == 200
    assert "Recipe removed." in resp.text
    assert app.state.favorites.list() == []

    resp = client.delete("/favorites/Soup")
    assert "That recipe was not saved." in resp.text

"""
End-to-end tests for the HTTP API.

The food backend client is replaced through FastAPI dependency overrides and
third-party lookups are patched, so these tests never leave the process.
"""

import os
from unittest.mock import Mock, patch

import pytest
from fastapi.testclient import TestClient

from api.main import app, get_backend_client
from navigator.backend_client import BackendError, FoodBackendClient
from navigator.models import Food, Nutrient, NutrientReport, PriceResult
from navigator.utils.cache import clear_cache


@pytest.fixture
def backend():
    """Mock food backend client injected into every endpoint."""
    mock_backend = Mock()
    app.dependency_overrides[get_backend_client] = lambda: mock_backend
    yield mock_backend
    app.dependency_overrides.clear()


@pytest.fixture
def client(backend):
    """Create a test client for the FastAPI app."""
    return TestClient(app)


class TestInfoEndpoints:
    """Tests for root and health endpoints."""

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Nutrient Navigator API"
        assert data["docs"] == "/docs"

    def test_health_backend_up(self, client, backend):
        backend.health_check.return_value = "Food API is running"

        data = client.get("/health").json()

        assert data["status"] == "ok"
        assert data["backend_ok"] is True
        assert data["uptime_seconds"] >= 0
        assert set(data["config"]) == {"usda_api_key", "unsplash_access_key"}

    def test_health_backend_down_still_ok(self, client, backend):
        backend.health_check.side_effect = BackendError("Could not connect")

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["backend_ok"] is False


class TestMatchEndpoints:
    """Tests for catalog and matching endpoints."""

    def test_stock_recipes(self, client):
        data = client.get("/recipes/stock").json()

        assert [r["title"] for r in data][:2] == ["Egg Fried Rice", "Pasta Primavera"]
        assert data[0]["ingredients"] == ["Eggs", "Rice", "Soy Sauce", "Green Onion"]

    def test_match(self, client):
        response = client.post("/recipes/match", json={"ingredients": ["eggs", "tomato", "garlic"]})

        assert response.status_code == 200
        data = response.json()
        assert [r["title"] for r in data] == ["Pasta Primavera", "Egg Fried Rice", "Burger Bowls"]
        assert data[0]["match_percent"] == 50
        assert data[0]["missing"] == ["pasta", "olive oil"]
        assert data[0]["can_cook_now"] is False

    def test_match_empty(self, client):
        response = client.post("/recipes/match", json={"ingredients": []})

        assert response.status_code == 200
        assert response.json() == []

    def test_match_rejects_bad_body(self, client):
        response = client.post("/recipes/match", json={"ingredients": "eggs"})
        assert response.status_code == 422

    def test_household_matches(self, client, backend):
        backend.get_inventory.return_value = [
            {"id": 1, "name": "Eggs", "quantity": "12", "category": "Dairy", "added_by": "Sam"},
            {"id": 2, "name": "Rice", "quantity": "1 kg", "category": "Pantry", "added_by": "Sam"},
        ]
        backend.get_needed_items.return_value = []

        response = client.get("/households/5/matches")

        assert response.status_code == 200
        data = response.json()
        assert data["ingredients"] == ["Eggs", "Rice"]
        assert data["results"][0]["title"] == "Egg Fried Rice"
        assert data["results"][0]["match_percent"] == 50

    def test_household_matches_backend_down(self, client, backend):
        backend.get_inventory.side_effect = BackendError("Could not connect")

        response = client.get("/households/5/matches")

        assert response.status_code == 502

    def test_household_matches_numeric_quantity(self, client, backend):
        backend.get_inventory.return_value = [{"id": 1, "name": "Eggs", "quantity": 12}]
        backend.get_needed_items.return_value = []

        response = client.get("/households/5/matches")

        assert response.status_code == 200
        assert response.json()["ingredients"] == ["Eggs"]

    def test_household_matches_unreadable_row(self, client, backend):
        backend.get_inventory.return_value = [{"id": 1, "name": "Milk", "expires_in": "soon"}]
        backend.get_needed_items.return_value = []

        response = client.get("/households/5/matches")

        assert response.status_code == 502


class TestRecipeEndpoints:
    """Tests for browsing and favorites."""

    def test_list_recipes_from_backend(self, client, backend):
        backend.get_all_foods.return_value = [
            Food(id=1, name="Overnight Oats", main_nutrition="Fiber", tags=["breakfast"]),
            Food(id=2, name="Beef Stew", main_nutrition="Protein", tags=["dinner"]),
        ]

        data = client.get("/recipes", params={"category": "Breakfast"}).json()

        assert data["used_fallback"] is False
        assert [r["title"] for r in data["results"]] == ["Overnight Oats"]
        assert data["results"][0]["prep_time"] == "25 min"

    def test_list_recipes_fallback(self, client, backend):
        backend.get_all_foods.side_effect = BackendError("Could not connect")

        data = client.get("/recipes", params={"q": "salmon"}).json()

        assert data["used_fallback"] is True
        assert [r["id"] for r in data["results"]] == [1]

    def test_list_recipes_malformed_backend_food(self, client):
        response = Mock()
        response.raise_for_status.return_value = None
        response.json.return_value = [{"id": 1, "name": None}]
        session = Mock()
        session.request.return_value = response
        app.dependency_overrides[get_backend_client] = lambda: FoodBackendClient(
            base_url="http://backend.test", session=session
        )

        response = client.get("/recipes")

        assert response.status_code == 200
        assert response.json()["used_fallback"] is True

    def test_list_recipes_favorites_only(self, client, backend):
        backend.get_all_foods.side_effect = BackendError("Could not connect")
        backend.get_favorites.return_value = [2, 5]

        data = client.get("/recipes", params={"user_id": "u1"}).json()

        backend.get_favorites.assert_called_once_with("u1")
        assert [r["id"] for r in data["results"]] == [2, 5]

    def test_list_recipes_invalid_category(self, client):
        response = client.get("/recipes", params={"category": "Brunch"})

        assert response.status_code == 400
        assert "Invalid category" in response.json()["detail"]

    def test_list_recipes_favorites_backend_down(self, client, backend):
        backend.get_favorites.side_effect = BackendError("Could not connect")

        response = client.get("/recipes", params={"user_id": "u1"})

        assert response.status_code == 502

    def test_toggle_favorite(self, client, backend):
        backend.get_favorites.return_value = [1]

        response = client.post("/users/u1/favorites/4/toggle")

        assert response.status_code == 200
        assert response.json() == {"user_id": "u1", "recipe_id": 4, "is_favorite": True, "favorites": [1, 4]}
        backend.add_favorite.assert_called_once_with("u1", 4)

    def test_toggle_favorite_backend_down(self, client, backend):
        backend.get_favorites.side_effect = BackendError("HTTP error! status: 500", status_code=500)

        response = client.post("/users/u1/favorites/4/toggle")

        assert response.status_code == 502


class TestNutrientEndpoint:
    """Tests for GET /nutrients/search."""

    @patch.dict(os.environ, {}, clear=True)
    def test_not_configured(self, client):
        response = client.get("/nutrients/search", params={"q": "salmon"})
        assert response.status_code == 503

    @patch.dict(os.environ, {"USDA_API_KEY": "test-key"})
    @patch("api.main.lookup_nutrients")
    def test_report(self, mock_lookup, client):
        mock_lookup.return_value = NutrientReport(
            query="salmon",
            food_name="Fish, salmon, raw",
            fdc_id=1,
            calories=208,
            nutrients=[Nutrient(key="protein", name="Protein", value=20.4, unit="G")],
        )

        response = client.get("/nutrients/search", params={"q": "salmon"})

        assert response.status_code == 200
        data = response.json()
        assert data["calories"] == 208
        assert data["nutrients"][0]["key"] == "protein"

    @patch.dict(os.environ, {"USDA_API_KEY": "test-key"})
    @patch("api.main.lookup_nutrients", return_value=None)
    def test_no_match(self, mock_lookup, client):
        response = client.get("/nutrients/search", params={"q": "unobtainium"})
        assert response.status_code == 404

    @patch.dict(os.environ, {"USDA_API_KEY": "test-key"})
    @patch("api.main.lookup_nutrients", side_effect=RuntimeError("USDA API request failed"))
    def test_upstream_failure(self, mock_lookup, client):
        response = client.get("/nutrients/search", params={"q": "salmon"})
        assert response.status_code == 502

    @patch.dict(os.environ, {"USDA_API_KEY": "test-key"})
    @patch("navigator.connectors.usda_connector.requests.post")
    def test_upstream_list_body(self, mock_post, client):
        upstream = Mock()
        upstream.raise_for_status.return_value = None
        upstream.json.return_value = [{"description": "Salmon"}]
        mock_post.return_value = upstream

        response = client.get("/nutrients/search", params={"q": "salmon"})

        assert response.status_code == 502

    def test_query_required(self, client):
        assert client.get("/nutrients/search").status_code == 422


class TestImageAndPriceEndpoints:
    """Tests for image and price lookups."""

    @patch.dict(os.environ, {}, clear=True)
    def test_recipe_image_fallback(self, client):
        clear_cache()

        response = client.get("/images/recipe", params={"name": "Pasta Primavera", "fallback_index": 1})

        assert response.status_code == 200
        assert response.json() == {
            "name": "Pasta Primavera",
            "url": "https://images.unsplash.com/photo-1467003909586?w=400&h=300&fit=crop",
        }
        clear_cache()

    def test_prices_from_backend(self, client, backend):
        backend.search_prices.return_value = [
            PriceResult(store="Metro", price=3.29, unit="kg"),
            PriceResult(store="Farmboy", price=2.99, unit="kg"),
        ]

        data = client.get("/prices/search", params={"q": "tomatoes"}).json()

        assert data["query"] == "tomatoes"
        assert [r["store"] for r in data["results"]] == ["Farmboy", "Metro"]

    def test_prices_fallback(self, client, backend):
        backend.search_prices.side_effect = BackendError("Could not connect")

        data = client.get("/prices/search", params={"q": "olive oil"}).json()

        assert [r["price"] for r in data["results"]] == [6.99, 12.99, 14.99]

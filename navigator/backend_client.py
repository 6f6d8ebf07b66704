"""
Food Backend API Client Module.

This module is the single place where the application talks to the external
food backend (foods, favorites, households, prices). The backend itself is a
separate service; this client only wraps its REST endpoints.

Key principles:
- One requests.Session per client with a per-request timeout
- Every failure (connection error, timeout, non-2xx status, bad JSON, rows that
  do not fit the model) is logged and raised as BackendError so callers can decide on a fallback
- Responses are parsed into navigator.models types where a schema exists

# NOTE: When adding new endpoints, follow this pattern:
    - Add a method taking the parameters the endpoint needs
    - Call self._request(method, path, ...) which handles errors uniformly
    - Parse the JSON into a model or return plain dicts for schemaless rows
"""

import logging
import os
from typing import Any, Dict, List, Optional, Type, Union

import requests
from pydantic import BaseModel, ValidationError

from navigator.models import Food, PriceResult

logger = logging.getLogger(__name__)

DEFAULT_BACKEND_URL = "http://localhost:8080"
DEFAULT_TIMEOUT_SECONDS = 10.0


class BackendError(RuntimeError):
    """
    Raised when the food backend cannot be reached or answers with an error.

    Attributes:
        status_code: HTTP status returned by the backend, None for network errors
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def get_backend_url() -> str:
    """
    Get the food backend base URL from the environment.

    Returns:
        API_BASE_URL with any trailing slash removed, defaulting to
        http://localhost:8080 for local development.
    """
    url = os.getenv("API_BASE_URL", DEFAULT_BACKEND_URL)
    return url.rstrip("/")


def get_backend_timeout() -> float:
    """Request timeout in seconds from BACKEND_TIMEOUT_SECONDS (default: 10)."""
    raw = os.getenv("BACKEND_TIMEOUT_SECONDS")
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        return float(raw)
    except ValueError:
        logger.warning("Invalid BACKEND_TIMEOUT_SECONDS=%r, using %s", raw, DEFAULT_TIMEOUT_SECONDS)
        return DEFAULT_TIMEOUT_SECONDS


class FoodBackendClient:
    """
    HTTP client for the external food backend.

    Example:
        >>> client = FoodBackendClient("http://localhost:8080")
        >>> foods = client.search_foods("salmon")
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Args:
            base_url: Backend base URL (defaults to API_BASE_URL env var)
            timeout: Per-request timeout in seconds (defaults to BACKEND_TIMEOUT_SECONDS env var)
            session: requests.Session to use (a new one is created if omitted)
        """
        self.base_url = (base_url or get_backend_url()).rstrip("/")
        self.timeout = timeout if timeout is not None else get_backend_timeout()
        self.session = session or requests.Session()

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response
        except requests.exceptions.Timeout as e:
            logger.error("Backend request timed out: %s %s", method, url)
            raise BackendError(f"Request to {url} timed out after {self.timeout}s") from e
        except requests.exceptions.ConnectionError as e:
            logger.error("Could not connect to backend: %s %s", method, url)
            raise BackendError(f"Could not connect to backend at {self.base_url}") from e
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            logger.error("Backend returned HTTP %s for %s %s", status_code, method, url)
            raise BackendError(f"HTTP error! status: {status_code}", status_code=status_code) from e
        except requests.exceptions.RequestException as e:
            logger.error("Backend request failed: %s %s: %s", method, url, e)
            raise BackendError(f"Request to {url} failed: {e}") from e

    def _json(self, method: str, path: str, **kwargs: Any) -> Any:
        response = self._request(method, path, **kwargs)
        try:
            return response.json()
        except ValueError as e:
            logger.error("Backend returned invalid JSON for %s %s", method, path)
            raise BackendError(f"Invalid JSON in response from {path}") from e

    def _parse(self, model: Type[BaseModel], data: Any, path: str) -> Any:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.error("Backend returned an invalid %s from %s: %s", model.__name__, path, e)
            raise BackendError(f"Invalid {model.__name__} in response from {path}") from e

    def _parse_list(self, model: Type[BaseModel], data: Any, path: str) -> List[Any]:
        if data is None:
            return []
        if not isinstance(data, list):
            logger.error("Backend returned %s instead of a list from %s", type(data).__name__, path)
            raise BackendError(f"Expected a list in response from {path}")
        return [self._parse(model, item, path) for item in data]

    # ------------------------------------------------------------------
    # Foods
    # ------------------------------------------------------------------

    def get_all_foods(self) -> List[Food]:
        """Fetch every food record (GET /api/foods)."""
        data = self._json("GET", "/api/foods")
        return self._parse_list(Food, data, "/api/foods")

    def get_food(self, food_id: int) -> Food:
        """Fetch a single food by id (GET /api/foods/{id})."""
        path = f"/api/foods/{food_id}"
        return self._parse(Food, self._json("GET", path), path)

    def search_foods(self, name: str) -> List[Food]:
        """Search foods by name (GET /api/foods/search?name=...)."""
        data = self._json("GET", "/api/foods/search", params={"name": name})
        return self._parse_list(Food, data, "/api/foods/search")

    def health_check(self) -> str:
        """Backend health text (GET /api/foods/health)."""
        return self._request("GET", "/api/foods/health").text

    # ------------------------------------------------------------------
    # Users and favorites
    # ------------------------------------------------------------------

    def create_user_profile(
        self,
        user_id: str,
        email: str,
        username: Optional[str] = None,
        first_name: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Create or update a user profile after sign-up (POST /api/users/profile).

        The backend also creates the user's household.

        Returns:
            Dictionary with "success" and "household_id"
        """
        payload = {
            "id": user_id,
            "email": email,
            "username": username,
            "first_name": first_name,
        }
        return self._json("POST", "/api/users/profile", json=payload)

    def get_favorites(self, user_id: str) -> List[int]:
        """Favorite recipe ids of a user (GET /api/users/{id}/favorites)."""
        data = self._json("GET", f"/api/users/{user_id}/favorites")
        return [int(recipe_id) for recipe_id in data or []]

    def add_favorite(self, user_id: str, recipe_id: int) -> None:
        """Mark a recipe as favorite; adding an existing favorite is a no-op on the backend."""
        self._request("POST", f"/api/users/{user_id}/favorites/{recipe_id}")

    def remove_favorite(self, user_id: str, recipe_id: int) -> None:
        """Remove a recipe from the user's favorites."""
        self._request("DELETE", f"/api/users/{user_id}/favorites/{recipe_id}")

    # ------------------------------------------------------------------
    # Households
    # ------------------------------------------------------------------

    def get_household(self, user_id: str) -> Dict[str, Any]:
        """Household the user belongs to, as {"id": ..., "name": ...}."""
        return self._json("GET", f"/api/users/{user_id}/household")

    def get_inventory(self, household_id: Union[int, str]) -> List[Dict[str, Any]]:
        """Inventory rows of a household, newest first."""
        return self._json("GET", f"/api/users/household/{household_id}/inventory") or []

    def add_inventory_item(
        self,
        household_id: Union[int, str],
        name: str,
        quantity: str,
        category: str,
        added_by: Optional[str] = None,
    ) -> None:
        """Add an item to the household inventory."""
        payload = {"name": name, "quantity": quantity, "category": category}
        if added_by:
            payload["added_by"] = added_by
        self._request("POST", f"/api/users/household/{household_id}/inventory", json=payload)

    def delete_inventory_item(self, item_id: Union[int, str]) -> None:
        """Delete an inventory item by id."""
        self._request("DELETE", f"/api/users/household/inventory/{item_id}")

    def get_needed_items(self, household_id: Union[int, str]) -> List[Dict[str, Any]]:
        """Shopping list rows of a household, newest first."""
        return self._json("GET", f"/api/users/household/{household_id}/needed") or []

    def add_needed_item(
        self,
        household_id: Union[int, str],
        name: str,
        added_by: Optional[str] = None,
    ) -> None:
        """Add a name to the household shopping list."""
        payload = {"name": name}
        if added_by:
            payload["added_by"] = added_by
        self._request("POST", f"/api/users/household/{household_id}/needed", json=payload)

    def delete_needed_item(self, item_id: Union[int, str]) -> None:
        """Delete a shopping list row by id."""
        self._request("DELETE", f"/api/users/household/needed/{item_id}")

    # ------------------------------------------------------------------
    # Prices
    # ------------------------------------------------------------------

    def search_prices(self, query: str) -> List[PriceResult]:
        """Store prices for a grocery item (GET /api/prices/search?query=...)."""
        data = self._json("GET", "/api/prices/search", params={"query": query})
        return self._parse_list(PriceResult, data, "/api/prices/search")

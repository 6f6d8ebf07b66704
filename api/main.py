"""
FastAPI application for the Nutrient Navigator API.

This module defines the REST API endpoints:
- GET /recipes/stock: The stock recipe catalog
- POST /recipes/match: Rank recipes by the ingredients you already have
- GET /households/{household_id}/matches: Rank recipes by a household inventory
- GET /recipes: Browse the recipe collection (search, category, favorites)
- POST /users/{user_id}/favorites/{recipe_id}/toggle: Toggle a favorite recipe
- GET /nutrients/search: Nutrient breakdown from USDA FoodData Central
- GET /images/recipe: Recipe photo from Unsplash (cached)
- GET /prices/search: Store prices for a grocery item

Households, favorites and foods are stored by the external food backend
(API_BASE_URL); this service only reads and updates them through
navigator.backend_client.

Run the API with:
    uvicorn api.main:app --reload

Access API documentation at:
    http://localhost:8000/docs (Swagger UI)
    http://localhost:8000/redoc (ReDoc)
"""

# Import config early to load .env file before any other code accesses environment variables
import api.config  # noqa: F401

import logging
import time
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, status

from api.config import UsdaConfig, configure_logging, get_config_status
from api.schemas import (
    FavoriteToggleResponse,
    HouseholdMatchResponse,
    ImageResponse,
    MatchRequest,
    PriceSearchResponse,
    RecipeListResponse,
)
from navigator.backend_client import BackendError, FoodBackendClient
from navigator.catalog import STOCK_RECIPES
from navigator.household import household_from_backend
from navigator.images import get_cached_recipe_image
from navigator.matcher import match_recipes
from navigator.models import MatchResult, NutrientReport, Recipe
from navigator.nutrients import lookup_nutrients
from navigator.prices import search_prices
from navigator.recipes import RECIPE_CATEGORIES, filter_recipes, load_recipe_cards, toggle_backend_favorite

configure_logging()
logger = logging.getLogger(__name__)

APP_NAME = "Nutrient Navigator API"
APP_VERSION = "1.0.0"
APP_DESCRIPTION = "Recipe matching, nutrient lookups, recipe images and grocery prices for households"

# Track app start time for uptime calculation
_APP_START_TIME = time.time()

app = FastAPI(
    title=APP_NAME,
    description=APP_DESCRIPTION,
    version=APP_VERSION,
    tags_metadata=[
        {
            "name": "recipes",
            "description": "Recipe catalog, ingredient matching, browsing and favorites.",
        },
        {
            "name": "households",
            "description": "Recipe matches computed from a household inventory stored by the food backend.",
        },
        {
            "name": "nutrients",
            "description": "Nutrient breakdowns from USDA FoodData Central (per 100 g).",
        },
        {
            "name": "images",
            "description": "Recipe photos from Unsplash with placeholder fallback.",
        },
        {
            "name": "prices",
            "description": "Store prices for grocery items.",
        },
        {
            "name": "health",
            "description": "Health check and monitoring endpoints.",
        },
    ],
)


def get_backend_client() -> FoodBackendClient:
    """Backend client configured from API_BASE_URL and BACKEND_TIMEOUT_SECONDS."""
    return FoodBackendClient()


def _bad_gateway(e: BackendError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=f"Food backend request failed: {str(e)}",
    )


@app.get(
    "/recipes/stock",
    response_model=List[Recipe],
    tags=["recipes"],
    summary="List the stock recipe catalog",
)
def stock_recipes() -> List[Recipe]:
    """Return the built-in catalog used by the ingredient matcher, in catalog order."""
    return list(STOCK_RECIPES)


@app.post(
    "/recipes/match",
    response_model=List[MatchResult],
    tags=["recipes"],
    summary="Match owned ingredients against the recipe catalog",
    description="Scores every stock recipe by the share of its ingredients that are owned. Recipes with "
                "no overlap are left out; the rest are sorted by match_percent, highest first.",
)
def match(body: MatchRequest) -> List[MatchResult]:
    """
    Rank stock recipes by owned ingredients.

    Args:
        body: MatchRequest with the ingredient names on hand

    Returns:
        List of MatchResult, highest match_percent first. An empty ingredient
        list returns an empty list.

    Example:
        ```bash
        POST /recipes/match {"ingredients": ["eggs", "tomato", "garlic"]}
        ```
    """
    results = match_recipes(body.ingredients)
    logger.info("Matched %d ingredients: %d recipes", len(body.ingredients), len(results))
    return results


@app.get(
    "/households/{household_id}/matches",
    response_model=HouseholdMatchResponse,
    tags=["households"],
    summary="Match a household inventory against the recipe catalog",
)
def household_matches(
    household_id: int,
    client: FoodBackendClient = Depends(get_backend_client),
) -> HouseholdMatchResponse:
    """
    Load a household from the food backend and rank recipes by its inventory.

    Raises:
        HTTPException 502: If the food backend request fails
    """
    try:
        household = household_from_backend(client, household_id)
    except BackendError as e:
        raise _bad_gateway(e) from e

    ingredients = household.ingredient_names()
    return HouseholdMatchResponse(
        household_id=household_id,
        ingredients=ingredients,
        results=match_recipes(ingredients),
    )


@app.get(
    "/recipes",
    response_model=RecipeListResponse,
    tags=["recipes"],
    summary="Browse the recipe collection",
    description="Recipe cards built from the food backend's food list, or the built-in collection when the "
                "backend is unavailable. Filter by search text, category and (with user_id) favorites.",
)
def list_recipes(
    q: str = Query("", description="Search text matched against titles and nutrients"),
    category: str = Query("All", description="One of: All, Breakfast, Lunch, Dinner, Snack"),
    user_id: Optional[str] = Query(None, description="Only return this user's favorite recipes"),
    client: FoodBackendClient = Depends(get_backend_client),
) -> RecipeListResponse:
    """
    Browse recipe cards.

    Raises:
        HTTPException 400: If category is not one of RECIPE_CATEGORIES
        HTTPException 502: If user_id is given and the favorites cannot be loaded
    """
    if category not in RECIPE_CATEGORIES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid category: '{category}'. Valid options: {', '.join(RECIPE_CATEGORIES)}",
        )

    favorites = None
    if user_id:
        try:
            favorites = client.get_favorites(user_id)
        except BackendError as e:
            raise _bad_gateway(e) from e

    cards, used_fallback = load_recipe_cards(client)
    results = filter_recipes(cards, query=q, category=category, favorites=favorites)
    return RecipeListResponse(results=results, used_fallback=used_fallback)


@app.post(
    "/users/{user_id}/favorites/{recipe_id}/toggle",
    response_model=FavoriteToggleResponse,
    tags=["recipes"],
    summary="Toggle a favorite recipe",
)
def toggle_favorite_endpoint(
    user_id: str,
    recipe_id: int,
    client: FoodBackendClient = Depends(get_backend_client),
) -> FavoriteToggleResponse:
    """
    Add the recipe to the user's favorites, or remove it if already there.

    Raises:
        HTTPException 502: If the food backend request fails
    """
    try:
        favorites = toggle_backend_favorite(client, user_id, recipe_id)
    except BackendError as e:
        raise _bad_gateway(e) from e

    return FavoriteToggleResponse(
        user_id=user_id,
        recipe_id=recipe_id,
        is_favorite=recipe_id in favorites,
        favorites=favorites,
    )


@app.get(
    "/nutrients/search",
    response_model=NutrientReport,
    tags=["nutrients"],
    summary="Nutrient breakdown of a food",
)
def nutrients_search(
    q: str = Query(..., min_length=1, description="Food name (e.g., 'salmon')"),
) -> NutrientReport:
    """
    Look up the best FoodData Central match for a food name.

    Raises:
        HTTPException 503: If USDA_API_KEY is not configured
        HTTPException 404: If no food matches the query
        HTTPException 502: If the USDA request fails
    """
    if not UsdaConfig.get_api_key():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Nutrient search is not configured. Set USDA_API_KEY.",
        )

    try:
        report = lookup_nutrients(q)
    except RuntimeError as e:
        logger.error("Nutrient lookup failed for %r", q, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Error fetching nutrient data: {str(e)}",
        ) from e

    if report is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No food found with that name. Please try a different search.",
        )
    return report


@app.get(
    "/images/recipe",
    response_model=ImageResponse,
    tags=["images"],
    summary="Photo URL for a recipe",
)
def recipe_image(
    name: str = Query(..., min_length=1, description="Recipe name"),
    fallback_index: int = Query(0, ge=0, description="Placeholder photo index used when no photo is found"),
) -> ImageResponse:
    """Return a cached Unsplash photo URL, or a placeholder when none can be found."""
    return ImageResponse(name=name, url=get_cached_recipe_image(name, fallback_index))


@app.get(
    "/prices/search",
    response_model=PriceSearchResponse,
    tags=["prices"],
    summary="Store prices for a grocery item",
)
def prices_search(
    q: str = Query(..., min_length=1, description="Item name (e.g., 'tomatoes')"),
    client: FoodBackendClient = Depends(get_backend_client),
) -> PriceSearchResponse:
    """Prices from the food backend, or sample prices when it has none. Lowest price first."""
    return PriceSearchResponse(query=q, results=search_prices(q, client=client))


@app.get("/health", tags=["health"])
def health(client: FoodBackendClient = Depends(get_backend_client)):
    """
    Health check endpoint for monitoring and status checks.

    Returns:
        Dictionary with status, API metadata, uptime, whether the food backend
        answers and which optional integrations are configured.
        Always returns 200 OK if the endpoint is reachable.
    """
    uptime_seconds = int(time.time() - _APP_START_TIME)

    try:
        client.health_check()
        backend_ok = True
    except BackendError as e:
        logger.warning("Food backend health check failed: %s", e)
        backend_ok = False

    return {
        "status": "ok",
        "name": APP_NAME,
        "version": APP_VERSION,
        "description": APP_DESCRIPTION,
        "uptime_seconds": uptime_seconds,
        "backend_ok": backend_ok,
        "config": get_config_status(),
    }


@app.get("/")
def root():
    """
    Root endpoint providing API information.

    Returns:
        Dictionary with API name and version
    """
    return {
        "name": APP_NAME,
        "version": APP_VERSION,
        "description": APP_DESCRIPTION,
        "docs": "/docs",
    }

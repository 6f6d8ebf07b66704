"""
Pydantic schemas for FastAPI request and response models.

This module defines the request bodies and response envelopes of the HTTP API.
Domain objects (Recipe, MatchResult, RecipeCard, NutrientReport, PriceResult)
are defined in navigator.models and reused here as nested fields.

The schemas include:
- MatchRequest: Owned ingredients to match against the catalog
- HouseholdMatchResponse: Matches computed from a household inventory
- RecipeListResponse: Browseable recipe cards plus whether fallback data was used
- FavoriteToggleResponse: Favorites after a toggle
- ImageResponse: Resolved recipe image URL
- PriceSearchResponse: Store prices for a query
"""

from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field

from navigator.models import MatchResult, PriceResult, RecipeCard


class MatchRequest(BaseModel):
    """Request model for matching owned ingredients against the recipe catalog."""
    ingredients: List[str] = Field(
        default_factory=list,
        description="Ingredient names on hand (any case, duplicates allowed)",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "ingredients": ["eggs", "tomato", "garlic"],
            }
        }
    )


class HouseholdMatchResponse(BaseModel):
    """Response model for recipe matches of a household inventory."""
    household_id: Union[int, str]
    ingredients: List[str] = Field(..., description="Inventory names used as owned ingredients")
    results: List[MatchResult] = Field(..., description="Ranked matches, highest match_percent first")


class RecipeListResponse(BaseModel):
    """
    Response model for the recipe collection.

    used_fallback is True when the backend could not be reached and the mock
    collection was served instead.
    """
    results: List[RecipeCard]
    used_fallback: bool = False


class FavoriteToggleResponse(BaseModel):
    """Response model for toggling a favorite recipe."""
    user_id: str
    recipe_id: int
    is_favorite: bool = Field(..., description="Whether the recipe is a favorite after the toggle")
    favorites: List[int]


class ImageResponse(BaseModel):
    """Response model for a recipe image lookup."""
    name: str
    url: str


class PriceSearchResponse(BaseModel):
    """Response model for a price search, results sorted lowest price first."""
    query: str
    results: List[PriceResult]

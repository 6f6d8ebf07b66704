"""
Recipe, food, nutrient and price models for the navigator system.

This module defines the canonical schemas shared by the matcher, the catalogs,
the third-party connectors and the HTTP API.

# NOTE: Recipe is the immutable catalog entry used by the ingredient matcher.
    MatchResult carries every Recipe field plus the derived match fields, so a
    result can be rendered exactly like the recipe it was computed from.

Field naming:
- Python attributes and JSON responses use snake_case (match_percent, can_cook_now)
- Food accepts the backend's camelCase "mainNutrition" on input
"""

from typing import List, Optional, Tuple, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Recipe(BaseModel):
    """
    Catalog recipe used for ingredient matching.

    Catalog entries are frozen: the matcher never mutates them and results are
    recomputed from the catalog on every call.
    """
    id: Union[str, int] = Field(..., description="Unique recipe identifier, stable across runs")
    title: str = Field(..., description="Display name")
    ingredients: Tuple[str, ...] = Field(..., description="Required ingredient names in catalog order")
    meal: str = Field(..., description="Meal slot label (e.g., 'Lunch/Dinner')")
    link: str = Field(..., description="External URL with the full recipe instructions")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "1",
                "title": "Egg Fried Rice",
                "ingredients": ["Eggs", "Rice", "Soy Sauce", "Green Onion"],
                "meal": "Lunch/Dinner",
                "link": "https://www.allrecipes.com/recipe/23298/egg-fried-rice/",
            }
        },
    )


class MatchResult(Recipe):
    """Recipe annotated with how well it matches a set of owned ingredients."""
    match_percent: int = Field(..., ge=0, le=100, description="Percentage of required ingredients owned")
    missing: List[str] = Field(default_factory=list, description="Lower-cased required ingredients not owned, catalog order")
    can_cook_now: bool = Field(..., description="True when no ingredient is missing")


class Food(BaseModel):
    """
    Food record served by the external food backend.

    Mirrors the backend's foods table: list columns arrive already split into
    JSON arrays.
    """
    id: Optional[int] = Field(None, description="Backend identifier")
    name: str = Field(..., description="Food or dish name")
    main_nutrition: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("main_nutrition", "mainNutrition"),
        description="Headline nutrient",
    )
    ingredients: List[str] = Field(default_factory=list)
    recipes: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")


class RecipeCard(BaseModel):
    """Browseable recipe summary shown in the recipe collection and favorites."""
    id: int
    title: str
    description: str
    image: str
    prep_time: str = Field(..., description="Human readable preparation time (e.g., '25 min')")
    servings: int = Field(..., ge=1)
    calories: int = Field(..., ge=0)
    nutrients: List[str] = Field(default_factory=list)
    category: str = Field(..., description="Breakfast, Lunch, Dinner or Snack")
    url: str


class Nutrient(BaseModel):
    """Single nutrient amount per 100 g of a food."""
    key: str
    name: str
    value: float = 0.0
    unit: Optional[str] = None
    description: Optional[str] = None


class NutrientReport(BaseModel):
    """Nutrient breakdown for the best FoodData Central match of a query."""
    query: str
    food_name: str
    fdc_id: Optional[int] = None
    calories: float = 0.0
    nutrients: List[Nutrient] = Field(default_factory=list)


class PriceResult(BaseModel):
    """Price offer for a grocery item at one store."""
    store: str
    price: float = Field(..., ge=0)
    unit: str
    distance: Optional[str] = None
    savings: Optional[float] = None
    logo: Optional[str] = None
    product_url: Optional[str] = Field(None, validation_alias=AliasChoices("product_url", "productUrl"))

    model_config = ConfigDict(extra="ignore")

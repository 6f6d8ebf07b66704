"""
Ingredient-to-recipe matching.

This module scores a recipe catalog against the ingredients a household already
owns and ranks the recipes by overlap.

Matching rules:
- Ingredient names are normalized with normalize_ingredient() on both sides
  (lower-case only: no trimming, plural folding or synonyms)
- Owned ingredients are a membership set; duplicates have no effect
- Required ingredients are iterated directly, so a repeated requirement counts
  once per occurrence
- Recipes with a 0% match are dropped; everything above 0% is kept
- Results are sorted by match percent, highest first, with a stable sort so
  equal scores keep catalog order
"""

import logging
from typing import AbstractSet, List, Optional, Sequence

from navigator.catalog import STOCK_RECIPES
from navigator.models import MatchResult, Recipe

logger = logging.getLogger(__name__)


def normalize_ingredient(name: str) -> str:
    """
    Normalize an ingredient name for comparison.

    The only normalization applied is case folding to lower case. Whitespace,
    plurals and synonyms are left alone, so "Tomato" and
    "tomatoes" remain different ingredients.

    Args:
        name: Free-text ingredient name

    Returns:
        Lower-cased ingredient name

    Examples:
        >>> normalize_ingredient("Soy Sauce")
        'soy sauce'
    """
    return name.lower()


def calculate_match_percent(matched: int, required: int) -> int:
    """
    Integer percentage of required ingredients that are owned.

    Rounds half away from zero (12.5 -> 13, 33.3 -> 33, 66.7 -> 67). The
    computation uses integer arithmetic so halves are never lost to float error.

    Args:
        matched: Number of required ingredients that are owned
        required: Total number of required ingredients

    Returns:
        Percentage between 0 and 100. A recipe with no required ingredients
        scores 0.
    """
    if required <= 0:
        return 0
    return (200 * matched + required) // (2 * required)


def score_recipe(recipe: Recipe, owned: AbstractSet[str]) -> MatchResult:
    """
    Score a single recipe against a set of normalized owned ingredients.

    Args:
        recipe: Catalog recipe
        owned: Set of normalized owned ingredient names

    Returns:
        MatchResult with match_percent, missing and can_cook_now filled in
    """
    required = [normalize_ingredient(i) for i in recipe.ingredients]
    matched = [i for i in required if i in owned]
    missing = [i for i in required if i not in owned]

    if not required:
        logger.warning("Recipe %r has no required ingredients; scoring it as 0%%", recipe.id)

    return MatchResult(
        **recipe.model_dump(),
        match_percent=calculate_match_percent(len(matched), len(required)),
        missing=missing,
        can_cook_now=bool(required) and not missing,
    )


def match_recipes(
    owned_ingredients: Sequence[str],
    catalog: Optional[Sequence[Recipe]] = None,
) -> List[MatchResult]:
    """
    Rank catalog recipes by how many of their ingredients are already owned.

    Args:
        owned_ingredients: Ingredient names the caller has on hand (any case,
            duplicates allowed, may be empty)
        catalog: Recipes to score (defaults to STOCK_RECIPES)

    Returns:
        MatchResult list, highest match_percent first. Recipes with no overlap
        are excluded, so an empty owned list or an empty catalog yields [].

    Examples:
        >>> results = match_recipes(["eggs"])
        >>> results[0].title, results[0].match_percent
        ('Egg Fried Rice', 25)
    """
    if catalog is None:
        catalog = STOCK_RECIPES

    owned = {normalize_ingredient(i) for i in owned_ingredients}

    scored = [score_recipe(recipe, owned) for recipe in catalog]
    results = [r for r in scored if r.match_percent > 0]

    # sorted() is stable: equal scores keep catalog order
    results = sorted(results, key=lambda r: r.match_percent, reverse=True)

    logger.debug(
        "Matched %d owned ingredients against %d recipes: %d candidates",
        len(owned), len(catalog), len(results),
    )
    return results

"""
Recipe collection browsing and favorites.

Filtering rules for the recipe collection and the favorites page:
- Search text matches a card when it is a case-insensitive substring of the
  title or of any nutrient label; empty search text matches every card
- Category "All" matches every card, any other value must equal the card category
- When a favorites list is given only those recipe ids are kept
- Input order is preserved
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from navigator.backend_client import BackendError, FoodBackendClient
from navigator.catalog import MOCK_RECIPE_CARDS, food_to_recipe_card
from navigator.models import RecipeCard

logger = logging.getLogger(__name__)

RECIPE_CATEGORIES = ["All", "Breakfast", "Lunch", "Dinner", "Snack"]


def _matches_search(card: RecipeCard, query: str) -> bool:
    query_lower = query.lower()
    if query_lower in card.title.lower():
        return True
    return any(query_lower in nutrient.lower() for nutrient in card.nutrients)


def filter_recipes(
    cards: Iterable[RecipeCard],
    query: str = "",
    category: str = "All",
    favorites: Optional[Sequence[int]] = None,
) -> List[RecipeCard]:
    """
    Filter recipe cards by search text, category and favorites.

    Args:
        cards: Recipe cards to filter
        query: Search text matched against titles and nutrient labels
        category: One of RECIPE_CATEGORIES
        favorites: Favorite recipe ids; None disables the favorites filter

    Returns:
        Cards passing every filter, in input order
    """
    favorite_ids = set(favorites) if favorites is not None else None

    result = []
    for card in cards:
        if favorite_ids is not None and card.id not in favorite_ids:
            continue
        if category != "All" and card.category != category:
            continue
        if not _matches_search(card, query or ""):
            continue
        result.append(card)
    return result


def toggle_favorite(favorites: Sequence[int], recipe_id: int) -> List[int]:
    """
    Add or remove a recipe id from a favorites list.

    Args:
        favorites: Current favorite recipe ids
        recipe_id: Recipe to toggle

    Returns:
        New list without recipe_id if it was a favorite, otherwise with
        recipe_id appended. The input is not mutated.
    """
    if recipe_id in favorites:
        return [fav for fav in favorites if fav != recipe_id]
    return [*favorites, recipe_id]


def load_recipe_cards(client: FoodBackendClient) -> Tuple[List[RecipeCard], bool]:
    """
    Load the recipe collection from the food backend.

    Args:
        client: Backend client used to fetch the food list

    Returns:
        Tuple of (cards, used_fallback). When the backend fails the mock
        collection is returned and used_fallback is True.
    """
    try:
        foods = client.get_all_foods()
    except BackendError as e:
        logger.warning("Failed to load recipes from the backend, using mock recipes instead: %s", e)
        return list(MOCK_RECIPE_CARDS), True

    cards = [food_to_recipe_card(food, index) for index, food in enumerate(foods)]
    logger.info("Loaded %d recipe cards from the backend", len(cards))
    return cards, False


def toggle_backend_favorite(client: FoodBackendClient, user_id: str, recipe_id: int) -> List[int]:
    """
    Toggle a favorite on the backend.

    Reads the user's current favorites, adds or removes recipe_id accordingly
    and returns the resulting list.

    Raises:
        BackendError: If any backend call fails
    """
    favorites = client.get_favorites(user_id)
    if recipe_id in favorites:
        client.remove_favorite(user_id, recipe_id)
    else:
        client.add_favorite(user_id, recipe_id)

    updated = toggle_favorite(favorites, recipe_id)
    logger.info("Toggled favorite %s for user %s (%d favorites)", recipe_id, user_id, len(updated))
    return updated

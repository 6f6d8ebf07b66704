"""
Recipe catalogs.

This module holds the two recipe collections the application works with:

- STOCK_RECIPES: the fixed "cook with what you have" catalog scored by the
  ingredient matcher (navigator.matcher)
- MOCK_RECIPE_CARDS: the browseable recipe collection shown when the food
  backend cannot be reached

Both collections are immutable tuples. A replacement matching catalog can be
loaded from a JSON file with load_catalog(); the matcher accepts any sequence
of Recipe objects.

# NOTE: Backend foods carry no prep time, servings or calories. food_to_recipe_card()
    fills those with fixed defaults and derives the category from the tags.
"""

import json
import logging
from pathlib import Path
from typing import Iterable, List, Tuple, Union

from pydantic import ValidationError

from navigator.models import Food, Recipe, RecipeCard

logger = logging.getLogger(__name__)

# Placeholder Unsplash photo ids are consecutive from this base
PLACEHOLDER_PHOTO_BASE = 1467003909585

DEFAULT_PREP_TIME = "25 min"
DEFAULT_SERVINGS = 2
DEFAULT_CALORIES = 400
DEFAULT_DESCRIPTION = "Delicious and nutritious meal"
DEFAULT_CATEGORY = "Dinner"

# Tag -> category, checked in this order
CATEGORY_TAGS = (
    ("breakfast", "Breakfast"),
    ("lunch", "Lunch"),
    ("dinner", "Dinner"),
    ("snack", "Snack"),
)


def placeholder_image_url(index: int) -> str:
    """Deterministic placeholder photo URL for the recipe at the given list position."""
    return f"https://images.unsplash.com/photo-{PLACEHOLDER_PHOTO_BASE + index}?w=400&h=300&fit=crop"


STOCK_RECIPES: Tuple[Recipe, ...] = (
    Recipe(
        id="1",
        title="Egg Fried Rice",
        ingredients=("Eggs", "Rice", "Soy Sauce", "Green Onion"),
        meal="Lunch/Dinner",
        link="https://www.allrecipes.com/recipe/23298/egg-fried-rice/",
    ),
    Recipe(
        id="2",
        title="Pasta Primavera",
        ingredients=("Pasta", "Tomato", "Garlic", "Olive Oil"),
        meal="Lunch/Dinner",
        link="https://www.allrecipes.com/recipe/282286/easy-veggie-pasta-primavera/",
    ),
    Recipe(
        id="3",
        title="Chicken Stir Fry",
        ingredients=("Chicken", "Bell Pepper", "Onion", "Soy Sauce"),
        meal="Lunch/Dinner",
        link="https://www.momontimeout.com/easy-chicken-stir-fry-recipe/",
    ),
    Recipe(
        id="4",
        title="Burger Bowls",
        ingredients=(
            "Beef", "Burger Seasoning", "Lettuce", "Tomato", "Pickle", "Fries", "Butter",
            "Ranch", "Mayonnaise", "Ketchup", "Horseradish", "Paprika", "Garlic",
        ),
        meal="Lunch/Dinner",
        link="https://pinchofyum.com/burger-bowls-with-house-sauce-and-ranch-fries",
    ),
    Recipe(
        id="5",
        title="Mackerel and Leek Hash",
        ingredients=("Potato", "Olive Oil", "Leek", "Mackerel", "Egg", "Horseradish"),
        meal="Lunch/Dinner",
        link="https://www.bbcgoodfood.com/recipes/smoked-mackerel-leek-hash-horseradish",
    ),
)


MOCK_RECIPE_CARDS: Tuple[RecipeCard, ...] = (
    RecipeCard(
        id=1,
        title="Grilled Salmon with Quinoa",
        description="Omega-3 rich salmon paired with protein-packed quinoa and seasonal vegetables.",
        image="https://images.unsplash.com/photo-1467003909585-2f8a72700288?w=400&h=300&fit=crop",
        prep_time="25 min",
        servings=2,
        calories=450,
        nutrients=["Protein", "Omega-3", "Iron"],
        category="Dinner",
        url="https://mollyshomeguide.com/delicious-grilled-salmon-with-quinoa-and-steamed-veggies-47026/",
    ),
    RecipeCard(
        id=2,
        title="Spinach & Berry Smoothie Bowl",
        description="Antioxidant-packed breakfast bowl with fresh berries and iron-rich spinach.",
        image="https://images.unsplash.com/photo-1590301157890-4810ed352733?w=400&h=300&fit=crop",
        prep_time="10 min",
        servings=1,
        calories=320,
        nutrients=["Vitamin C", "Iron", "Fiber"],
        category="Breakfast",
        url="https://cookingwithcallie.com/berry-smoothie-bowl-a-delicious-nutritious-start-to-your-day/",
    ),
    RecipeCard(
        id=3,
        title="Mediterranean Chickpea Salad",
        description="Fiber-rich chickpeas with fresh vegetables and olive oil dressing.",
        image="https://images.unsplash.com/photo-1512621776951-a57141f2eefd?w=400&h=300&fit=crop",
        prep_time="15 min",
        servings=4,
        calories=280,
        nutrients=["Fiber", "Protein", "Vitamin A"],
        category="Lunch",
        url="https://www.delish.com/cooking/recipe-ideas/a19885314/mediterranean-chickpea-salad-recipe/",
    ),
    RecipeCard(
        id=4,
        title="Avocado Toast with Eggs",
        description="Creamy avocado on whole grain toast topped with perfectly poached eggs.",
        image="https://images.unsplash.com/photo-1525351484163-7529414344d8?w=400&h=300&fit=crop",
        prep_time="12 min",
        servings=1,
        calories=380,
        nutrients=["Healthy Fats", "Protein", "Vitamin E"],
        category="Breakfast",
        url="https://www.allrecipes.com/recipe/265304/avocado-toast-with-egg/",
    ),
    RecipeCard(
        id=5,
        title="Thai Coconut Curry",
        description="Aromatic curry with vegetables and tofu in creamy coconut milk.",
        image="https://images.unsplash.com/photo-1455619452474-d2be8b1e70cd?w=400&h=300&fit=crop",
        prep_time="35 min",
        servings=4,
        calories=420,
        nutrients=["Vitamin B6", "Potassium", "Fiber"],
        category="Dinner",
        url="https://www.lecremedelacrumb.com/thai-chicken-curry-with-coconut-milk/",
    ),
    RecipeCard(
        id=6,
        title="Greek Yogurt Parfait",
        description="Protein-rich Greek yogurt layered with granola and fresh fruits.",
        image="https://images.unsplash.com/photo-1488477181946-6428a0291777?w=400&h=300&fit=crop",
        prep_time="5 min",
        servings=1,
        calories=290,
        nutrients=["Calcium", "Protein", "Probiotics"],
        category="Snack",
        url="https://foolproofliving.com/layered-yogurt-parfait/",
    ),
    RecipeCard(
        id=7,
        title="Lemon Herb Grilled Chicken",
        description="Tender chicken breast marinated in fresh herbs and citrus.",
        image="https://images.unsplash.com/photo-1532550907401-a500c9a57435?w=400&h=300&fit=crop",
        prep_time="30 min",
        servings=4,
        calories=350,
        nutrients=["Protein", "Vitamin B12", "Zinc"],
        category="Dinner",
        url="https://www.feastingathome.com/grilled-lemon-herb-chicken/",
    ),
    RecipeCard(
        id=8,
        title="Kale Caesar Salad",
        description="Nutrient-dense kale with homemade Caesar dressing and parmesan.",
        image="https://images.unsplash.com/photo-1546793665-c74683f339c1?w=400&h=300&fit=crop",
        prep_time="15 min",
        servings=2,
        calories=260,
        nutrients=["Vitamin K", "Vitamin A", "Calcium"],
        category="Lunch",
        url="https://www.loveandlemons.com/kale-caesar-salad/",
    ),
    RecipeCard(
        id=9,
        title="Banana Oat Pancakes",
        description="Fluffy whole grain pancakes naturally sweetened with ripe bananas.",
        image="https://images.unsplash.com/photo-1567620905732-2d1ec7ab7445?w=400&h=300&fit=crop",
        prep_time="20 min",
        servings=2,
        calories=340,
        nutrients=["Fiber", "Potassium", "Magnesium"],
        category="Breakfast",
        url="https://www.ambitiouskitchen.com/banana-oatmeal-pancakes/",
    ),
    RecipeCard(
        id=10,
        title="Roasted Vegetable Buddha Bowl",
        description="Colorful roasted vegetables over brown rice with tahini drizzle.",
        image="https://images.unsplash.com/photo-1540914124281-342587941389?w=400&h=300&fit=crop",
        prep_time="40 min",
        servings=2,
        calories=480,
        nutrients=["Fiber", "Iron", "Vitamin C"],
        category="Lunch",
        url="https://momycooks.com/the-ultimate-roasted-vegetable-buddha-bowl-recipe-healthy-delicious/",
    ),
    RecipeCard(
        id=11,
        title="Almond Butter Energy Bites",
        description="No-bake protein balls perfect for post-workout snacking.",
        image="https://images.unsplash.com/photo-1604329760661-e71dc83f8f26?w=400&h=300&fit=crop",
        prep_time="15 min",
        servings=12,
        calories=120,
        nutrients=["Protein", "Healthy Fats", "Magnesium"],
        category="Snack",
        url="https://showmetheyummy.com/almond-butter-energy-bites-recipe/",
    ),
    RecipeCard(
        id=12,
        title="Shrimp Stir-Fry",
        description="Quick and nutritious stir-fry with shrimp and crisp vegetables.",
        image="https://images.unsplash.com/photo-1603133872878-684f208fb84b?w=400&h=300&fit=crop",
        prep_time="20 min",
        servings=3,
        calories=320,
        nutrients=["Protein", "Selenium", "Vitamin D"],
        category="Dinner",
        url="https://www.delish.com/cooking/recipe-ideas/a25636180/shrimp-stir-fry-recipe/",
    ),
)


def load_catalog(path: Union[str, Path]) -> Tuple[Recipe, ...]:
    """
    Load a matching catalog from a JSON file.

    The file must contain a JSON array of objects with the Recipe fields
    (id, title, ingredients, meal, link).

    Args:
        path: Path to the JSON catalog file

    Returns:
        Immutable tuple of Recipe objects in file order

    Raises:
        ValueError: If the file is not valid JSON, is not an array, or an entry
            does not match the Recipe schema
        OSError: If the file cannot be read
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Catalog file {path} is not valid JSON: {e}") from e

    if not isinstance(raw, list):
        raise ValueError(f"Catalog file {path} must contain a JSON array of recipes")

    recipes: List[Recipe] = []
    for position, entry in enumerate(raw):
        try:
            recipe = Recipe.model_validate(entry)
        except ValidationError as e:
            raise ValueError(f"Invalid recipe at position {position} in {path}: {e}") from e
        if not recipe.ingredients:
            logger.warning("Catalog recipe %r (%s) has no ingredients; it can never match", recipe.id, recipe.title)
        recipes.append(recipe)

    logger.info("Loaded %d recipes from %s", len(recipes), path)
    return tuple(recipes)


def derive_category(tags: Iterable[str]) -> str:
    """
    Pick a recipe card category from backend food tags.

    Args:
        tags: Food tags (e.g., ["high-protein", "lunch"])

    Returns:
        "Breakfast", "Lunch", "Dinner" or "Snack", checked in that order;
        "Dinner" when no meal tag is present
    """
    tag_set = set(tags or [])
    for tag, category in CATEGORY_TAGS:
        if tag in tag_set:
            return category
    return DEFAULT_CATEGORY


def food_to_recipe_card(food: Food, index: int) -> RecipeCard:
    """
    Convert a backend Food record into a browseable RecipeCard.

    Args:
        food: Food record from the backend
        index: Position of the food in the backend list (selects the placeholder image,
            and stands in for the id when the backend sent none)

    Returns:
        RecipeCard linking to the in-app recipe page
    """
    recipe_id = food.id if food.id is not None else index
    nutrients = [n for n in [food.main_nutrition, *food.tags] if n]

    return RecipeCard(
        id=recipe_id,
        title=food.name,
        description=". ".join(food.recommendations) or DEFAULT_DESCRIPTION,
        image=placeholder_image_url(index),
        prep_time=DEFAULT_PREP_TIME,
        servings=DEFAULT_SERVINGS,
        calories=DEFAULT_CALORIES,
        nutrients=nutrients,
        category=derive_category(food.tags),
        url=f"/recipe/{recipe_id}",
    )

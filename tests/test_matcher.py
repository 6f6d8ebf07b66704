"""
Tests for ingredient-to-recipe matching.

These tests verify that:
- Recipes are scored by the share of required ingredients that are owned
- Recipes without any overlap are left out
- Results are ordered by match percent with ties kept in catalog order
- Matching is case-insensitive and nothing else is normalized
"""

import pytest

from navigator.catalog import STOCK_RECIPES
from navigator.matcher import calculate_match_percent, match_recipes, normalize_ingredient, score_recipe
from navigator.models import Recipe


EGG_FRIED_RICE = STOCK_RECIPES[0]
PASTA_PRIMAVERA = STOCK_RECIPES[1]


@pytest.fixture
def two_recipe_catalog():
    """Catalog with Egg Fried Rice followed by Pasta Primavera."""
    return [EGG_FRIED_RICE, PASTA_PRIMAVERA]


def make_recipe(recipe_id, ingredients):
    return Recipe(
        id=recipe_id,
        title=f"Recipe {recipe_id}",
        ingredients=tuple(ingredients),
        meal="Dinner",
        link=f"https://example.com/recipes/{recipe_id}",
    )


class TestMatchScenarios:
    """Reference scenarios on the two-recipe catalog."""

    def test_no_owned_ingredients_returns_empty(self, two_recipe_catalog):
        assert match_recipes([], two_recipe_catalog) == []

    def test_single_ingredient_partial_match(self, two_recipe_catalog):
        """Owning only eggs gives Egg Fried Rice at 25%."""
        results = match_recipes(["eggs"], two_recipe_catalog)

        assert [r.title for r in results] == ["Egg Fried Rice"]
        assert results[0].match_percent == 25
        assert results[0].missing == ["rice", "soy sauce", "green onion"]
        assert results[0].can_cook_now is False

    def test_all_ingredients_owned(self, two_recipe_catalog):
        """Owning every ingredient gives a 100% match that can be cooked now."""
        results = match_recipes(["Eggs", "Rice", "Soy Sauce", "Green Onion"], two_recipe_catalog)

        assert len(results) == 1
        assert results[0].id == EGG_FRIED_RICE.id
        assert results[0].match_percent == 100
        assert results[0].missing == []
        assert results[0].can_cook_now is True

    def test_equal_scores_keep_catalog_order(self, two_recipe_catalog):
        results = match_recipes(["eggs", "tomato"], two_recipe_catalog)

        assert [r.title for r in results] == ["Egg Fried Rice", "Pasta Primavera"]
        assert [r.match_percent for r in results] == [25, 25]

    def test_higher_score_ranks_first(self, two_recipe_catalog):
        results = match_recipes(["eggs", "tomato", "garlic"], two_recipe_catalog)

        assert [r.title for r in results] == ["Pasta Primavera", "Egg Fried Rice"]
        assert [r.match_percent for r in results] == [50, 25]
        assert results[0].missing == ["pasta", "olive oil"]


class TestMatchProperties:
    """General properties of match_recipes on the stock catalog."""

    @pytest.mark.parametrize("owned", [
        ["eggs"],
        ["Tomato", "Garlic"],
        ["olive oil", "potato", "leek", "chicken", "onion"],
        ["Beef", "Lettuce", "Tomato", "Pickle", "Fries", "Butter", "Ranch"],
    ])
    def test_matched_plus_missing_equals_required(self, owned):
        owned_set = {normalize_ingredient(i) for i in owned}
        catalog = {recipe.id: recipe for recipe in STOCK_RECIPES}

        for result in match_recipes(owned):
            required = [normalize_ingredient(i) for i in catalog[result.id].ingredients]
            matched = [i for i in required if i in owned_set]
            assert len(matched) + len(result.missing) == len(required)

    def test_can_cook_now_iff_complete(self):
        results = match_recipes(["Pasta", "Tomato", "Garlic", "Olive Oil", "Eggs"])

        for result in results:
            assert result.can_cook_now == (result.missing == [])
            assert result.can_cook_now == (result.match_percent == 100)

    def test_zero_percent_recipes_never_returned(self):
        results = match_recipes(["saffron", "tomato"])

        assert all(r.match_percent > 0 for r in results)
        assert {r.title for r in results} == {"Pasta Primavera", "Burger Bowls"}

    def test_results_sorted_descending(self):
        results = match_recipes(["Tomato", "Garlic"])

        percents = [r.match_percent for r in results]
        assert percents == sorted(percents, reverse=True)
        assert [(r.title, r.match_percent) for r in results] == [
            ("Pasta Primavera", 50),
            ("Burger Bowls", 15),
        ]

    def test_identical_inputs_give_identical_output(self):
        owned = ["eggs", "rice", "tomato"]
        assert match_recipes(owned) == match_recipes(owned)

    def test_case_insensitive(self):
        upper = match_recipes(["EGGS"])
        lower = match_recipes(["eggs"])

        assert upper == lower
        assert upper[0].title == "Egg Fried Rice"

    def test_duplicate_owned_ingredients_have_no_effect(self):
        assert match_recipes(["eggs", "Eggs", "EGGS"]) == match_recipes(["eggs"])

    def test_no_plural_folding(self):
        """Egg and Eggs are different ingredients."""
        results = match_recipes(["egg"])

        assert [r.title for r in results] == ["Mackerel and Leek Hash"]

    def test_results_carry_recipe_fields(self):
        result = match_recipes(["eggs"])[0]

        assert result.link == EGG_FRIED_RICE.link
        assert result.meal == EGG_FRIED_RICE.meal
        assert result.ingredients == EGG_FRIED_RICE.ingredients

    def test_empty_catalog(self):
        assert match_recipes(["eggs"], []) == []

    def test_catalog_is_not_mutated(self):
        before = [recipe.model_dump() for recipe in STOCK_RECIPES]
        match_recipes(["eggs", "tomato", "garlic"])
        assert [recipe.model_dump() for recipe in STOCK_RECIPES] == before


class TestScoring:
    """Tests for percent rounding and single-recipe scoring."""

    @pytest.mark.parametrize("matched,required,expected", [
        (1, 8, 13),
        (1, 3, 33),
        (2, 3, 67),
        (2, 13, 15),
        (0, 4, 0),
        (4, 4, 100),
        (0, 0, 0),
    ])
    def test_calculate_match_percent(self, matched, required, expected):
        assert calculate_match_percent(matched, required) == expected

    def test_recipe_without_ingredients_scores_zero(self):
        result = score_recipe(make_recipe("empty", []), {"eggs"})

        assert result.match_percent == 0
        assert result.missing == []
        assert result.can_cook_now is False

    def test_recipe_without_ingredients_is_not_returned(self):
        catalog = [make_recipe("empty", []), make_recipe("omelette", ["Eggs"])]

        results = match_recipes(["eggs"], catalog)

        assert [r.id for r in results] == ["omelette"]

    def test_repeated_requirement_counts_per_occurrence(self):
        catalog = [make_recipe("seasoning", ["Salt", "Salt", "Pepper"])]

        results = match_recipes(["pepper"], catalog)

        assert results[0].match_percent == 33
        assert results[0].missing == ["salt", "salt"]

    def test_whitespace_is_not_trimmed(self):
        assert normalize_ingredient(" Eggs ") == " eggs "
        assert match_recipes([" eggs "], [EGG_FRIED_RICE]) == []

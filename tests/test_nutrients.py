"""
Tests for nutrient extraction from FoodData Central records.
"""

from unittest.mock import Mock

import pytest

from navigator.nutrients import (
    NUTRIENT_DESCRIPTIONS,
    build_nutrient_report,
    describe_nutrient,
    extract_calories,
    extract_nutrients,
    lookup_nutrients,
)


@pytest.fixture
def salmon_food():
    """Trimmed FoodData Central search hit."""
    return {
        "fdcId": 175167,
        "description": "Fish, salmon, Atlantic, farmed, raw",
        "foodNutrients": [
            {"nutrientName": "Protein", "unitName": "G", "value": 20.4},
            {"nutrientName": "Total lipid (fat)", "unitName": "G", "value": 13.4},
            {"nutrientName": "Energy", "unitName": "KCAL", "value": 208},
            {"nutrientName": "Energy", "unitName": "kJ", "value": 871},
            {"nutrientName": "Vitamin D (D2 + D3), International Units", "unitName": "IU", "value": 441},
            {"nutrientName": "Sodium, Na", "unitName": "MG", "value": 59},
            {"nutrientName": "Selenium, Se", "unitName": "UG"},
        ],
    }


class TestExtractCalories:
    """Tests for picking the kcal energy value."""

    def test_energy_in_kcal(self, salmon_food):
        assert extract_calories(salmon_food["foodNutrients"]) == 208

    def test_calories_name_is_accepted(self):
        nutrients = [{"nutrientName": "Calories", "unitName": "kcal", "value": 95}]
        assert extract_calories(nutrients) == 95

    def test_kilojoules_are_ignored(self):
        nutrients = [{"nutrientName": "Energy", "unitName": "kJ", "value": 871}]
        assert extract_calories(nutrients) == 0

    def test_missing_value_is_zero(self):
        nutrients = [{"nutrientName": "Energy", "unitName": "KCAL"}]
        assert extract_calories(nutrients) == 0

    def test_empty_list(self):
        assert extract_calories([]) == 0


class TestExtractNutrients:
    """Tests for turning foodNutrients into Nutrient rows."""

    def test_kcal_energy_is_excluded(self, salmon_food):
        nutrients = extract_nutrients(salmon_food["foodNutrients"])

        assert len(nutrients) == 6
        assert [n.unit for n in nutrients if n.name == "Energy"] == ["kJ"]

    def test_key_and_name(self, salmon_food):
        nutrients = extract_nutrients(salmon_food["foodNutrients"])
        vitamin_d = next(n for n in nutrients if n.name.startswith("Vitamin D"))

        assert vitamin_d.key == "vitamin_d_(d2_+_d3),_international_units"
        assert vitamin_d.name == "Vitamin D (D2 + D3)"
        assert vitamin_d.value == 441
        assert vitamin_d.unit == "IU"
        assert vitamin_d.description == NUTRIENT_DESCRIPTIONS["vitamin d"]

    def test_missing_value_defaults_to_zero(self, salmon_food):
        nutrients = extract_nutrients(salmon_food["foodNutrients"])
        selenium = next(n for n in nutrients if n.name == "Selenium")

        assert selenium.value == 0
        assert selenium.description is None

    def test_first_keyword_wins(self):
        """'Fatty acids, total saturated' mentions fat before anything else in the table."""
        assert describe_nutrient("Fatty acids, total saturated") == NUTRIENT_DESCRIPTIONS["fat"]
        assert describe_nutrient("Sugars, total including NLEA") == NUTRIENT_DESCRIPTIONS["sugar"]
        assert describe_nutrient("Carbohydrate, by difference") == NUTRIENT_DESCRIPTIONS["carbohydrate"]

    def test_description_table_order(self):
        keys = list(NUTRIENT_DESCRIPTIONS)
        assert keys[:3] == ["protein", "fat", "carbohydrate"]
        assert keys[-1] == "sugar"
        assert len(keys) == 21


class TestNutrientReport:
    """Tests for building reports and looking them up."""

    def test_build_report(self, salmon_food):
        report = build_nutrient_report("salmon", salmon_food)

        assert report.query == "salmon"
        assert report.food_name == "Fish, salmon, Atlantic, farmed, raw"
        assert report.fdc_id == 175167
        assert report.calories == 208
        assert report.nutrients[0].key == "protein"

    def test_lookup_uses_connector(self, salmon_food):
        connector = Mock()
        connector.search_first.return_value = salmon_food

        report = lookup_nutrients("salmon", connector=connector)

        connector.search_first.assert_called_once_with("salmon")
        assert report.calories == 208

    def test_lookup_no_match_returns_none(self):
        connector = Mock()
        connector.search_first.return_value = None

        assert lookup_nutrients("unobtainium", connector=connector) is None

    def test_lookup_propagates_connector_errors(self):
        connector = Mock()
        connector.search_first.side_effect = RuntimeError("USDA API request failed")

        with pytest.raises(RuntimeError):
            lookup_nutrients("salmon", connector=connector)

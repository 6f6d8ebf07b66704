"""
Nutrient lookup backed by USDA FoodData Central.

Turns the foodNutrients list of a FoodData Central search hit into a
NutrientReport: the kcal energy value is reported separately as calories and
every other nutrient is listed with a short plain-language description when
its name contains a known keyword. Values are per 100 g.
"""

import logging
import re
from typing import Any, Dict, Iterable, List, Optional

from navigator.connectors.usda_connector import UsdaConnector
from navigator.models import Nutrient, NutrientReport

logger = logging.getLogger(__name__)

# Keyword -> description. Order matters: the first keyword contained in a
# nutrient name wins.
NUTRIENT_DESCRIPTIONS: Dict[str, str] = {
    "protein": "Essential for building and repairing muscles, skin, and tissues.",
    "fat": "Provides energy, supports cell growth, and helps absorb vitamins.",
    "carbohydrate": "Primary energy source for the body and brain.",
    "fiber": "Improves digestion, helps control blood sugar, and supports gut health.",
    "calcium": "Critical for strong bones, teeth, and muscle contraction.",
    "iron": "Helps transport oxygen in the blood and prevents fatigue.",
    "potassium": "Supports heart function, muscles, and fluid balance.",
    "sodium": "Regulates fluid balance and nerve function (limit intake).",
    "magnesium": "Supports muscle and nerve function and energy production.",
    "zinc": "Supports immune system and wound healing.",
    "vitamin a": "Supports vision, immune function, and reproduction.",
    "vitamin c": "Boosts immune function and supports skin and wound healing.",
    "vitamin d": "Helps absorb calcium and supports immune health.",
    "vitamin e": "Acts as an antioxidant and protects cells from damage.",
    "vitamin k": "Essential for blood clotting and bone health.",
    "thiamin": "Supports energy metabolism and nerve function.",
    "riboflavin": "Important for energy production and cellular function.",
    "niacin": "Supports metabolism and nervous system health.",
    "folate": "Essential for DNA synthesis and cell growth.",
    "cholesterol": "A fat needed for hormone production, but limit intake.",
    "sugar": "Simple carbohydrates that provide quick energy.",
}

_WHITESPACE_RE = re.compile(r"\s+")


def _name_and_unit(entry: Dict[str, Any]):
    name = (entry.get("nutrientName") or "").lower()
    unit = (entry.get("unitName") or "").lower()
    return name, unit


def describe_nutrient(name: str) -> Optional[str]:
    """Description for the first keyword contained in the lower-cased name."""
    name_lower = name.lower()
    for keyword, description in NUTRIENT_DESCRIPTIONS.items():
        if keyword in name_lower:
            return description
    return None


def extract_calories(food_nutrients: Iterable[Dict[str, Any]]) -> float:
    """
    Calories (kcal) of a FoodData Central food.

    Args:
        food_nutrients: The food's foodNutrients list

    Returns:
        Value of the first nutrient named like "energy" or "calories" measured
        in kcal; 0 when there is none or it has no value.
    """
    for entry in food_nutrients:
        name, unit = _name_and_unit(entry)
        if ("energy" in name or "calories" in name) and unit == "kcal":
            value = entry.get("value")
            return float(value) if value is not None else 0.0
    return 0.0


def extract_nutrients(food_nutrients: Iterable[Dict[str, Any]]) -> List[Nutrient]:
    """
    Every nutrient except kcal energy, in source order.

    Args:
        food_nutrients: The food's foodNutrients list

    Returns:
        Nutrient list. key is the lower-cased name with whitespace runs
        replaced by "_"; name is the text before the first comma.
    """
    nutrients = []
    for entry in food_nutrients:
        name_lower, unit = _name_and_unit(entry)
        if "energy" in name_lower and unit == "kcal":
            continue

        raw_name = entry.get("nutrientName") or ""
        value = entry.get("value")
        nutrients.append(
            Nutrient(
                key=_WHITESPACE_RE.sub("_", name_lower),
                name=raw_name.split(",")[0],
                value=float(value) if value is not None else 0.0,
                unit=entry.get("unitName"),
                description=describe_nutrient(name_lower),
            )
        )
    return nutrients


def build_nutrient_report(query: str, food: Dict[str, Any]) -> NutrientReport:
    """Build the report for one FoodData Central food record."""
    food_nutrients = food.get("foodNutrients") or []
    return NutrientReport(
        query=query,
        food_name=food.get("description") or query,
        fdc_id=food.get("fdcId"),
        calories=extract_calories(food_nutrients),
        nutrients=extract_nutrients(food_nutrients),
    )


def lookup_nutrients(query: str, connector: Optional[UsdaConnector] = None) -> Optional[NutrientReport]:
    """
    Search FoodData Central and report the nutrients of the best match.

    Args:
        query: Food name
        connector: USDA connector (a new one reading USDA_API_KEY is created if omitted)

    Returns:
        NutrientReport, or None when no food matches

    Raises:
        RuntimeError: If the USDA key is missing or the request fails
    """
    connector = connector or UsdaConnector()
    food = connector.search_first(query)
    if food is None:
        logger.info("No FoodData Central match for %r", query)
        return None

    report = build_nutrient_report(query, food)
    logger.info("Nutrient lookup for %r: %s (%d nutrients)", query, report.food_name, len(report.nutrients))
    return report

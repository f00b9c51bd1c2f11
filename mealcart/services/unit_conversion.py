"""
Unit Conversion Service for MealCart shopping lists.

Handles weight, volume and length conversions. Count units (piece, dozen, can...)
are never converted, and there is no mass <-> volume path.
"""

import logging
import math
import re
from decimal import Decimal, ROUND_HALF_UP
from types import MappingProxyType
from typing import Literal, Optional, TypedDict

logger = logging.getLogger("mealcart.units")

# --- Types ---

UnitCategory = Literal["weight", "volume", "length", "count"]


class ConversionSuggestion(TypedDict):
    unit: str
    value: float
    display_value: str


class UnitCategoryInfo(TypedDict):
    name: str
    icon: str
    units: list[str]


# --- Data Tables ---

# Normalized unit -> factor to base
# Base units: g (weight), ml (volume), cm (length)
UNIT_CONVERSIONS = MappingProxyType({
    "weight": MappingProxyType({
        "g": 1.0,
        "gram": 1.0,
        "grams": 1.0,
        "kg": 1000.0,
        "kilogram": 1000.0,
        "kilograms": 1000.0,
        "lb": 453.592,
        "lbs": 453.592,
        "pound": 453.592,
        "pounds": 453.592,
        "oz": 28.3495,
        "ounce": 28.3495,
        "ounces": 28.3495,
    }),
    "volume": MappingProxyType({
        "ml": 1.0,
        "milliliter": 1.0,
        "milliliters": 1.0,
        "l": 1000.0,
        "liter": 1000.0,
        "liters": 1000.0,
        "cup": 236.588,
        "cups": 236.588,
        "tbsp": 14.7868,
        "tablespoon": 14.7868,
        "tablespoons": 14.7868,
        "tsp": 4.92892,
        "teaspoon": 4.92892,
        "teaspoons": 4.92892,
        "fl_oz": 29.5735,
        "fluid_ounce": 29.5735,
        "fluid_ounces": 29.5735,
        "pint": 473.176,
        "pints": 473.176,
        "quart": 946.353,
        "quarts": 946.353,
        "gallon": 3785.41,
        "gallons": 3785.41,
    }),
    "length": MappingProxyType({
        "cm": 1.0,
        "centimeter": 1.0,
        "centimeters": 1.0,
        "m": 100.0,
        "meter": 100.0,
        "meters": 100.0,
        "in": 2.54,
        "inch": 2.54,
        "inches": 2.54,
        "ft": 30.48,
        "foot": 30.48,
        "feet": 30.48,
    }),
})

# UI grouping; `units` is also the ordered list used for quick-convert suggestions
UNIT_CATEGORIES: "MappingProxyType[str, UnitCategoryInfo]" = MappingProxyType({
    "weight": {"name": "Weight", "icon": "⚖️", "units": ["g", "kg", "lb", "oz"]},
    "volume": {"name": "Volume", "icon": "🥤", "units": ["ml", "l", "cup", "tbsp", "tsp", "fl oz"]},
    "length": {"name": "Length", "icon": "📏", "units": ["cm", "m", "in", "ft"]},
    "count": {
        "name": "Count",
        "icon": "🔢",
        "units": ["piece", "pieces", "each", "dozen", "bunch", "bag", "box", "can", "jar", "bottle"],
    },
})

# Item-name keywords -> units, checked independently (a name can hit several)
_WEIGHT_ITEM_KEYWORDS = ("meat", "chicken", "beef", "pork", "fish", "cheese", "butter", "flour", "sugar")
_VOLUME_ITEM_KEYWORDS = ("milk", "juice", "oil", "vinegar", "sauce", "broth")
_COUNT_ITEM_KEYWORDS = ("egg", "apple", "banana", "onion", "potato", "tomato")

DEFAULT_ITEM_UNITS = ("piece", "cup", "lb")

MAX_SUGGESTIONS = 3

_NON_ALNUM = re.compile(r"[^a-z0-9]")

# --- Core Functions ---

def normalize_unit(unit) -> str:
    """Normalize a unit string to its lookup key ("FL-OZ" -> "fl_oz")."""
    if not unit or not isinstance(unit, str):
        return ""
    return _NON_ALNUM.sub("_", unit.lower().strip())


def get_unit_category(unit) -> UnitCategory:
    """
    Resolve which table a unit belongs to.
    Anything not found in weight/volume/length is a count unit.
    """
    key = normalize_unit(unit)
    for category, factors in UNIT_CONVERSIONS.items():
        if key in factors:
            return category  # type: ignore[return-value]
    return "count"


def _round3(value: float) -> float:
    # Half-up at the third decimal; inf/nan (or overflow when scaling) pass through
    scaled = value * 1000 + 0.5
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled) / 1000


def _fixed(value: float, places: int) -> str:
    # Half-up on the exact binary value: 0.125 -> "0.13", 1.005 -> "1.00"
    return str(Decimal(value).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP))


def convert_unit(value, from_unit, to_unit) -> Optional[float]:
    """
    Convert quantity between units of the same category.

    Returns None when there is nothing to convert (no value, a zero value or a
    missing unit), when the units are incompatible, or when the result is not
    a finite number (NaN input, overflow).
    """
    if not value or not from_unit or not to_unit:
        return None

    norm_from = normalize_unit(from_unit)
    norm_to = normalize_unit(to_unit)

    if norm_from == norm_to:
        return value

    cat_from = get_unit_category(from_unit)
    cat_to = get_unit_category(to_unit)

    if cat_from != cat_to or cat_from == "count":
        logger.debug("No conversion path %s (%s) -> %s (%s)", from_unit, cat_from, to_unit, cat_to)
        return None

    factors = UNIT_CONVERSIONS[cat_from]
    base_qty = value * factors[norm_from]
    result = _round3(base_qty / factors[norm_to])
    if not math.isfinite(result):
        logger.debug("Conversion of %r %s -> %s is not finite", value, from_unit, to_unit)
        return None
    return result


def format_converted_value(value: float) -> str:
    """Format a converted value for quick-convert buttons."""
    if not math.isfinite(value):
        return str(value)
    if value >= 1000:
        return str(int(math.floor(value + 0.5)))
    if value >= 1:
        return _fixed(value, 1)
    return _fixed(value, 2)


def get_conversion_suggestions(unit, value) -> list[ConversionSuggestion]:
    """
    Offer up to three "also equals" conversions in the category's common units.
    Table order is kept; the source unit itself never appears.
    """
    category = get_unit_category(unit)
    if category == "count":
        return []

    suggestions: list[ConversionSuggestion] = []
    for common_unit in UNIT_CATEGORIES[category]["units"]:
        converted = convert_unit(value, unit, common_unit)
        if converted is None or converted == value:
            continue
        suggestions.append({
            "unit": common_unit,
            "value": converted,
            "display_value": format_converted_value(converted),
        })

    return suggestions[:MAX_SUGGESTIONS]


def can_convert_units(unit1, unit2) -> bool:
    category1 = get_unit_category(unit1)
    return category1 == get_unit_category(unit2) and category1 != "count"


def get_units_for_category(category: str) -> list[str]:
    info = UNIT_CATEGORIES.get(category)
    if info is None:
        return []
    return list(info["units"])


def get_unit_categories() -> dict[str, UnitCategoryInfo]:
    """Return a copy of the category metadata table."""
    return {
        key: {"name": info["name"], "icon": info["icon"], "units": list(info["units"])}
        for key, info in UNIT_CATEGORIES.items()
    }


def suggest_units_for_item(item_name) -> list[str]:
    """
    Guess sensible units from an item's name.
    Falls back to ("piece", "cup", "lb") when nothing matches.
    """
    if not item_name or not isinstance(item_name, str):
        return list(DEFAULT_ITEM_UNITS)

    name = item_name.lower()
    suggestions: list[str] = []

    if any(k in name for k in _WEIGHT_ITEM_KEYWORDS):
        suggestions.extend(["lb", "kg", "oz"])
    if any(k in name for k in _VOLUME_ITEM_KEYWORDS):
        suggestions.extend(["cup", "ml", "fl oz"])
    if any(k in name for k in _COUNT_ITEM_KEYWORDS):
        suggestions.extend(["piece", "dozen", "bunch"])

    if not suggestions:
        return list(DEFAULT_ITEM_UNITS)

    return suggestions[:MAX_SUGGESTIONS]

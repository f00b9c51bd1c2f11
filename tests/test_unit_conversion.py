"""
Tests for the unit conversion service.
"""

import math

import pytest
from mealcart.services.unit_conversion import (
    UNIT_CONVERSIONS,
    can_convert_units,
    convert_unit,
    format_converted_value,
    get_conversion_suggestions,
    get_unit_categories,
    get_unit_category,
    get_units_for_category,
    normalize_unit,
    suggest_units_for_item,
)

def _factor(unit):
    return UNIT_CONVERSIONS[get_unit_category(unit)][normalize_unit(unit)]

def test_normalize_unit():
    assert normalize_unit(" FL-OZ ") == "fl_oz"
    assert normalize_unit("fl oz") == "fl_oz"
    assert normalize_unit("fl_oz") == "fl_oz"
    assert normalize_unit("") == ""
    assert normalize_unit(None) == ""
    assert normalize_unit(12) == ""

@pytest.mark.parametrize("unit,expected", [
    ("g", "weight"),
    ("Pounds", "weight"),
    ("LBS", "weight"),
    ("cup", "volume"),
    ("fl oz", "volume"),
    ("fluid ounce", "volume"),
    ("in", "length"),
    ("feet", "length"),
    ("dozen", "count"),
    ("can", "count"),
    ("", "count"),
    (None, "count"),
])
def test_get_unit_category(unit, expected):
    assert get_unit_category(unit) == expected

def test_convert_mass_simple():
    # 2 lb = 907.184 g -> 0.907 kg
    assert convert_unit(2, "lb", "kg") == 0.907
    assert convert_unit(1, "kg", "g") == 1000

def test_convert_volume_simple():
    # 3 tsp ~ 1 tbsp
    assert convert_unit(3, "tsp", "tbsp") == 1.0
    assert convert_unit(2, "FL OZ", "ml") == 59.147

def test_convert_length():
    assert convert_unit(12, "in", "ft") == 1.0
    assert convert_unit(1, "m", "cm") == 100

def test_convert_rounds_to_three_decimals():
    result = convert_unit(1, "oz", "lb")
    # 28.3495 / 453.592 = 0.0625001...
    assert result == 0.063

def test_convert_identity_keeps_value_even_for_unknown_units():
    assert convert_unit(2.5, "lb", "lb") == 2.5
    assert convert_unit(5, "handful", "Handful") == 5
    assert convert_unit(3, "fl oz", "FL-OZ") == 3

def test_convert_cross_category_is_rejected():
    assert convert_unit(1, "cup", "lb") is None
    assert convert_unit(1, "in", "ml") is None

def test_convert_count_units_are_rejected():
    assert convert_unit(12, "piece", "dozen") is None
    assert convert_unit(1, "lb", "can") is None

def test_convert_zero_value_means_no_value():
    assert convert_unit(0, "lb", "kg") is None
    assert convert_unit(None, "lb", "kg") is None

def test_convert_missing_units():
    assert convert_unit(1, "", "kg") is None
    assert convert_unit(1, "lb", None) is None

@pytest.mark.parametrize("value,a,b", [
    (2, "lb", "kg"),
    (3.5, "cup", "ml"),
    (10, "ft", "m"),
    (250, "g", "oz"),
])
def test_round_trip_within_rounding(value, a, b):
    there = convert_unit(value, a, b)
    back = convert_unit(there, b, a)
    # Each leg rounds to 3 decimals; the first leg's error is scaled by the way back
    tolerance = 0.0005 * _factor(b) / _factor(a) + 0.0005 + 1e-9
    assert abs(back - value) <= tolerance

def test_convert_huge_value_overflow_is_no_result():
    # 1e306 kg is finite, in grams it is not
    assert convert_unit(1e306, "kg", "g") is None
    assert convert_unit(1e305, "kg", "g") == pytest.approx(1e308)
    assert convert_unit(1e306, "g", "kg") == pytest.approx(1e303)

def test_convert_nan_is_no_result():
    assert convert_unit(math.nan, "lb", "kg") is None
    assert convert_unit(math.inf, "lb", "kg") is None

def test_suggestions_skip_non_finite_values():
    assert get_conversion_suggestions("lb", 1e306) == []
    assert get_conversion_suggestions("lb", math.nan) == []

def test_suggestions_for_pounds():
    suggestions = get_conversion_suggestions("lb", 2)
    assert [s["unit"] for s in suggestions] == ["g", "kg", "oz"]
    assert suggestions[0]["value"] == 907.184
    assert suggestions[0]["display_value"] == "907.2"
    assert suggestions[1]["display_value"] == "0.91"
    assert suggestions[2]["value"] == pytest.approx(32.0)

def test_suggestions_keep_table_order_and_cap():
    suggestions = get_conversion_suggestions("cup", 1)
    assert [s["unit"] for s in suggestions] == ["ml", "l", "tbsp"]

def test_suggestions_large_values_are_whole_numbers():
    suggestions = get_conversion_suggestions("kg", 1)
    assert suggestions[0]["unit"] == "g"
    assert suggestions[0]["display_value"] == "1000"
    assert len(suggestions) == 3

def test_suggestions_for_count_units_are_empty():
    assert get_conversion_suggestions("piece", 3) == []
    assert get_conversion_suggestions("", 3) == []

def test_suggestions_for_zero_value_are_empty():
    assert get_conversion_suggestions("lb", 0) == []

def test_format_converted_value():
    assert format_converted_value(1234.56) == "1235"
    assert format_converted_value(1000) == "1000"
    assert format_converted_value(12.34) == "12.3"
    assert format_converted_value(1) == "1.0"
    assert format_converted_value(0.5) == "0.50"

def test_can_convert_units():
    assert can_convert_units("cup", "ml") is True
    assert can_convert_units("kg", "Pounds") is True
    assert can_convert_units("cup", "g") is False
    assert can_convert_units("piece", "piece") is False

def test_units_for_category():
    assert get_units_for_category("weight") == ["g", "kg", "lb", "oz"]
    assert "fl oz" in get_units_for_category("volume")
    assert get_units_for_category("bogus") == []

def test_unit_categories_table_is_a_copy():
    table = get_unit_categories()
    assert set(table) == {"weight", "volume", "length", "count"}
    assert table["length"]["name"] == "Length"

    table["weight"]["units"].append("stone")
    assert "stone" not in get_unit_categories()["weight"]["units"]
    assert "stone" not in get_units_for_category("weight")

@pytest.mark.parametrize("name,expected", [
    ("Chicken thighs", ["lb", "kg", "oz"]),
    ("olive oil", ["cup", "ml", "fl oz"]),
    ("eggs", ["piece", "dozen", "bunch"]),
    # weight + volume both match; truncated to three
    ("chicken broth", ["lb", "kg", "oz"]),
    ("paper towels", ["piece", "cup", "lb"]),
    ("", ["piece", "cup", "lb"]),
    (None, ["piece", "cup", "lb"]),
])
def test_suggest_units_for_item(name, expected):
    assert suggest_units_for_item(name) == expected

def test_format_rounds_ties_up():
    # 0.125 and 2.25 are exact in binary; ties go up like the web widget
    assert format_converted_value(0.125) == "0.13"
    assert format_converted_value(2.25) == "2.3"
    # 0.015 is stored just below the tie
    assert format_converted_value(0.015) == "0.01"

def test_format_non_finite():
    assert format_converted_value(math.inf) == "inf"
    assert format_converted_value(math.nan) == "nan"

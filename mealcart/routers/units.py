"""
Router for unit conversion utilities.
"""

from fastapi import APIRouter, HTTPException, Query
from ..schemas import (
    ConversionSuggestionOut,
    ItemNameRequest,
    UnitCategoryInfoOut,
    UnitCompatibilityResponse,
    UnitConvertRequest,
    UnitConvertResponse,
)
from ..services.unit_conversion import (
    can_convert_units,
    convert_unit,
    get_conversion_suggestions,
    get_unit_categories,
    get_unit_category,
    get_units_for_category,
    suggest_units_for_item,
)
from ..services.ai_categorization import ai_categorizer, UnitSuggestion

router = APIRouter()

@router.post("/convert", response_model=UnitConvertResponse)
def convert_units(req: UnitConvertRequest):
    """
    Convert a quantity from one unit to another.

    Incompatible units are not an error: `converted` comes back null.
    """
    converted = convert_unit(req.value, req.from_unit, req.to_unit)

    return UnitConvertResponse(
        value=req.value,
        from_unit=req.from_unit,
        to_unit=req.to_unit,
        category=get_unit_category(req.from_unit),
        converted=converted,
        convertible=can_convert_units(req.from_unit, req.to_unit),
    )

@router.get("/suggestions", response_model=list[ConversionSuggestionOut])
def conversion_suggestions(unit: str = Query(...), value: float = Query(..., allow_inf_nan=False)):
    """Quick-convert buttons for the unit widget (at most three)."""
    return get_conversion_suggestions(unit, value)

@router.get("/categories", response_model=dict[str, UnitCategoryInfoOut])
def list_unit_categories():
    return get_unit_categories()

@router.get("/categories/{category}", response_model=list[str])
def units_for_category(category: str):
    units = get_units_for_category(category)
    if not units:
        raise HTTPException(status_code=404, detail=f"Unknown unit category '{category}'")
    return units

@router.get("/compatible", response_model=UnitCompatibilityResponse)
def units_compatible(unit1: str = Query(""), unit2: str = Query("")):
    return UnitCompatibilityResponse(
        compatible=can_convert_units(unit1, unit2),
        category1=get_unit_category(unit1),
        category2=get_unit_category(unit2),
    )

@router.get("/for-item", response_model=list[str])
def units_for_item(name: str = Query("")):
    return suggest_units_for_item(name)

@router.post("/ai", response_model=UnitSuggestion)
async def ai_units_for_item(payload: ItemNameRequest):
    """Model-suggested units, falling back to keyword guesses."""
    return await ai_categorizer.suggest_units(payload.name)

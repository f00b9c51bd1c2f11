"""Pydantic schemas for the MealCart API.

Request/response models for:
- Unit conversion
- Category detection
- Shopping list duplicate detection / merging
"""

from typing import Optional, Literal, Union

from pydantic import BaseModel, Field


UnitCategoryName = Literal["weight", "volume", "length", "count"]


# --- Units ---

class UnitConvertRequest(BaseModel):
    value: Optional[float] = Field(None, allow_inf_nan=False)
    from_unit: str = ""
    to_unit: str = ""


class UnitConvertResponse(BaseModel):
    value: Optional[float]
    from_unit: str
    to_unit: str
    category: UnitCategoryName
    converted: Optional[float] = None  # None: nothing to convert or incompatible units
    convertible: bool


class ConversionSuggestionOut(BaseModel):
    unit: str
    value: float
    display_value: str


class UnitCategoryInfoOut(BaseModel):
    name: str
    icon: str
    units: list[str]


class UnitCompatibilityResponse(BaseModel):
    compatible: bool
    category1: UnitCategoryName
    category2: UnitCategoryName


# --- Categories ---

class ItemNameRequest(BaseModel):
    name: str = ""


class CategoryBatchRequest(BaseModel):
    items: list[str] = Field(default_factory=list, max_length=500)


class CategoryGuessOut(BaseModel):
    category: str
    confidence: float = Field(..., ge=0, le=1)


class CategoryDetectionOut(BaseModel):
    item: str
    category: str
    confidence: float = Field(..., ge=0, le=1)


# --- Shopping list ---

class ShoppingItem(BaseModel):
    id: Optional[Union[int, str]] = None
    name: str
    quantity: Optional[Union[float, str]] = None
    unit: Optional[str] = None
    category: Optional[str] = None
    checked: bool = False
    notes: Optional[str] = None


class DuplicateCheckRequest(BaseModel):
    name: str
    items: list[ShoppingItem] = []
    threshold: Optional[float] = Field(None, ge=0, le=1)  # None -> settings.duplicate_threshold


class DuplicateMatchOut(BaseModel):
    item: ShoppingItem
    similarity: float
    normalized_name: str


class DuplicateGroupsRequest(BaseModel):
    items: list[ShoppingItem] = []
    threshold: float = Field(0.8, ge=0, le=1)


class MergeRequest(BaseModel):
    name: str
    quantity: Optional[Union[float, str]] = None
    unit: Optional[str] = None
    existing: ShoppingItem


class MergeSuggestionOut(BaseModel):
    id: Optional[Union[int, str]] = None
    name: str
    quantity: Optional[str] = None
    unit: Optional[str] = None
    category: Optional[str] = None
    notes: Optional[str] = None

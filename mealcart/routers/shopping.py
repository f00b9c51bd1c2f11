"""
Router for shopping list helpers: duplicate warnings and merge proposals.
"""

from fastapi import APIRouter

from ..schemas import (
    DuplicateCheckRequest,
    DuplicateGroupsRequest,
    DuplicateMatchOut,
    ItemNameRequest,
    MergeRequest,
    MergeSuggestionOut,
    ShoppingItem,
)
from ..services.ai_categorization import ai_categorizer, ItemSuggestion
from ..services.duplicate_detection import find_duplicate_groups, find_duplicates, suggest_merge
from ..settings import settings

router = APIRouter()

@router.post("/duplicates", response_model=list[DuplicateMatchOut])
def check_duplicates(payload: DuplicateCheckRequest):
    """
    Existing items that look like `name`, most similar first.
    An empty list means "just add it".
    """
    threshold = payload.threshold if payload.threshold is not None else settings.duplicate_threshold
    return find_duplicates(payload.name, payload.items, threshold)

@router.post("/duplicate-groups", response_model=list[list[ShoppingItem]])
def duplicate_groups(payload: DuplicateGroupsRequest):
    return find_duplicate_groups(payload.items, payload.threshold)

@router.post("/merge", response_model=MergeSuggestionOut)
def merge_preview(payload: MergeRequest):
    return suggest_merge(payload.name, payload.quantity, payload.unit, payload.existing)

@router.post("/suggest", response_model=ItemSuggestion)
async def suggest_item(payload: ItemNameRequest):
    """Category and units for a new entry, as the user types it."""
    return await ai_categorizer.suggest_item(payload.name)

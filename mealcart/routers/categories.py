"""
Router for grocery store category detection.
"""

import logging

from fastapi import APIRouter

from ..schemas import (
    CategoryBatchRequest,
    CategoryDetectionOut,
    CategoryGuessOut,
    ItemNameRequest,
)
from ..core.text import cache_key_fragment
from ..infra.redis_cache import cache_key, get_json, set_json
from ..services.ai_categorization import ai_categorizer, CategorySuggestion
from ..services.category_detection import (
    batch_detect_categories,
    detect_category,
    get_category_confidence,
    suggest_categories,
)
from ..settings import settings

logger = logging.getLogger("mealcart.categories")

router = APIRouter()

@router.post("/detect", response_model=CategoryDetectionOut)
def detect(payload: ItemNameRequest):
    category = detect_category(payload.name)
    return CategoryDetectionOut(
        item=payload.name,
        category=category,
        confidence=get_category_confidence(payload.name, category),
    )

@router.post("/suggest", response_model=list[CategoryGuessOut])
def suggest(payload: ItemNameRequest):
    """Up to three ranked categories for the category picker."""
    return suggest_categories(payload.name)

@router.post("/batch", response_model=list[CategoryDetectionOut])
def detect_batch(payload: CategoryBatchRequest):
    return batch_detect_categories(payload.items)

@router.post("/ai", response_model=CategorySuggestion)
async def ai_category(payload: ItemNameRequest):
    """Model-suggested category (Cached). Keyword detection is the fallback."""
    key = cache_key("category", "ai", cache_key_fragment(payload.name))

    # Cache miss or Redis trouble both just mean "ask again"
    try:
        cached = await get_json(key)
        if cached:
            return CategorySuggestion(**{**cached, "item": payload.name})
    except Exception as e:
        logger.warning("Category cache read failed: %s", e)

    result = await ai_categorizer.suggest_category(payload.name)

    # Only model answers are worth keeping; heuristics are recomputed for free
    if result.source == "ai":
        try:
            await set_json(key, result.model_dump(), settings.category_cache_ttl_sec)
        except Exception as e:
            logger.warning("Category cache write failed: %s", e)

    return result

@router.post("/ai/batch", response_model=list[CategorySuggestion])
async def ai_category_batch(payload: CategoryBatchRequest):
    return await ai_categorizer.suggest_categories_batch(payload.items)

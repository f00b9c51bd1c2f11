import asyncio
import logging
from typing import List, Optional
from pydantic import BaseModel

from ..core.ai_client import ai_client
from ..core.text import clean_md
from ..settings import settings
from .category_detection import ALL_CATEGORIES, OTHER, detect_category, get_category_confidence
from .unit_conversion import suggest_units_for_item

logger = logging.getLogger("mealcart.ai")

CATEGORY_SYSTEM_PROMPT = """
You are a helpful assistant that categorizes grocery shopping items.

Given a shopping item name, suggest the most appropriate category from this list:
- Produce (fruits, vegetables, herbs)
- Meat & Seafood (meat, poultry, fish, seafood)
- Dairy & Eggs (milk, cheese, eggs, yogurt, butter)
- Pantry & Dry Goods (grains, pasta, rice, flour, sugar, spices, oils)
- Canned & Jarred (canned goods, jarred items, preserves)
- Frozen (frozen foods, ice cream, frozen vegetables)
- Bakery (bread, pastries, baked goods)
- Beverages (drinks, juices, sodas, coffee, tea)
- Other (items that don't fit other categories)

Respond with ONLY the category name, nothing else. Be precise and consistent.

Examples:
- "apples" -> Produce
- "chicken breast" -> Meat & Seafood
- "milk" -> Dairy & Eggs
- "rice" -> Pantry & Dry Goods
- "canned tomatoes" -> Canned & Jarred
- "frozen peas" -> Frozen
- "bread" -> Bakery
- "orange juice" -> Beverages
- "paper towels" -> Other
"""

UNIT_SYSTEM_PROMPT = """
You are a helpful assistant that suggests appropriate units for grocery shopping items.

Given a shopping item name, suggest 2-3 appropriate units from this list:
- Weight: g, kg, lb, oz
- Volume: ml, l, cup, tbsp, tsp, fl oz
- Count: piece, pieces, dozen, bunch, bag, box, can, jar, bottle

Respond with ONLY the unit names separated by commas, nothing else.

Examples:
- "apples" -> piece, dozen, bag
- "milk" -> cup, ml, l
- "chicken breast" -> lb, kg, piece
- "rice" -> cup, kg, lb
- "olive oil" -> cup, ml, fl oz
"""

# Free-text reply keywords -> category, checked in order
_LABEL_RULES = (
    (("produce", "fruit", "vegetable"), "Produce"),
    (("meat", "seafood", "chicken", "beef"), "Meat & Seafood"),
    (("dairy", "milk", "cheese", "egg"), "Dairy & Eggs"),
    (("pantry", "grain", "rice", "pasta"), "Pantry & Dry Goods"),
    (("canned", "jarred"), "Canned & Jarred"),
    (("frozen",), "Frozen"),
    (("bakery", "bread"), "Bakery"),
    (("beverage", "drink", "juice"), "Beverages"),
)

VALID_UNITS = (
    "g", "kg", "lb", "oz",
    "ml", "l", "cup", "tbsp", "tsp", "fl oz",
    "piece", "pieces", "dozen", "bunch", "bag", "box", "can", "jar", "bottle",
)


class CategorySuggestion(BaseModel):
    item: str
    category: str
    confidence: float
    source: str = "ai"  # ai or heuristic


class UnitSuggestion(BaseModel):
    item: str
    units: List[str]
    source: str = "ai"  # ai or heuristic


class ItemSuggestion(BaseModel):
    item: str
    category: str
    confidence: float
    units: List[str]
    source: str = "ai"  # ai when either half came from the model


def match_category_label(text: Optional[str]) -> str:
    """Map a model reply ("**Produce**", "fruit", ...) onto a known category."""
    label = clean_md(text or "").strip().strip(".")
    if label in ALL_CATEGORIES:
        return label

    lowered = label.lower()
    for needles, category in _LABEL_RULES:
        if any(n in lowered for n in needles):
            return category
    return OTHER


def parse_unit_list(text: Optional[str]) -> List[str]:
    """Keep only known units from a comma separated model reply."""
    parts = [p.strip() for p in clean_md(text or "").split(",")]
    return [p for p in parts if p in VALID_UNITS]


class AICategorizer:
    def __init__(self):
        self.mode = settings.ai_mode

    def _heuristic_category(self, item_name: str) -> CategorySuggestion:
        category = detect_category(item_name)
        return CategorySuggestion(
            item=item_name,
            category=category,
            confidence=get_category_confidence(item_name, category),
            source="heuristic",
        )

    async def suggest_category(self, item_name: str) -> CategorySuggestion:
        """Ask the model for a category; keyword detection covers every failure."""
        if not item_name or not item_name.strip():
            return CategorySuggestion(item=item_name or "", category=OTHER, confidence=0.1, source="heuristic")

        if self.mode == "mock":
            return self._heuristic_category(item_name)

        reply = await ai_client.generate_text(
            prompt=f"Item: {item_name.strip()}",
            system_instruction=CATEGORY_SYSTEM_PROMPT,
        )
        if not reply:
            logger.info("No AI category for %r, using keyword detection", item_name)
            return self._heuristic_category(item_name)

        category = match_category_label(reply)
        return CategorySuggestion(
            item=item_name,
            category=category,
            confidence=get_category_confidence(item_name, category),
            source="ai",
        )

    async def suggest_categories_batch(self, item_names: List[str]) -> List[CategorySuggestion]:
        """Categorize many names, a few at a time so the model isn't flooded."""
        results: List[CategorySuggestion] = []
        batch_size = max(1, settings.ai_batch_size)

        for start in range(0, len(item_names), batch_size):
            batch = item_names[start:start + batch_size]
            results.extend(await asyncio.gather(*(self.suggest_category(n) for n in batch)))

            more = start + batch_size < len(item_names)
            if more and self.mode != "mock":
                await asyncio.sleep(settings.ai_batch_delay_sec)

        return results

    async def suggest_units(self, item_name: str) -> UnitSuggestion:
        if not item_name or not item_name.strip():
            return UnitSuggestion(item=item_name or "", units=suggest_units_for_item(item_name), source="heuristic")

        if self.mode != "mock":
            reply = await ai_client.generate_text(
                prompt=f"Item: {item_name.strip()}",
                system_instruction=UNIT_SYSTEM_PROMPT,
            )
            units = parse_unit_list(reply)
            if units:
                return UnitSuggestion(item=item_name, units=units, source="ai")

        return UnitSuggestion(item=item_name, units=suggest_units_for_item(item_name), source="heuristic")

    async def suggest_item(self, item_name: str) -> ItemSuggestion:
        category, units = await asyncio.gather(
            self.suggest_category(item_name),
            self.suggest_units(item_name),
        )
        source = "ai" if "ai" in (category.source, units.source) else "heuristic"
        return ItemSuggestion(
            item=category.item,
            category=category.category,
            confidence=category.confidence,
            units=units.units,
            source=source,
        )


ai_categorizer = AICategorizer()

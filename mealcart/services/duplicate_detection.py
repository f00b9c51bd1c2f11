"""
Duplicate detection and merge suggestions for shopping list items.

Similarity between two names (after `normalize_item_name`):
    1.0  identical
    0.8  one contains the other
    else 1 - levenshtein / max_len, raised to 0.7 * shared-word ratio when
         the names have whole words in common.
"""

import logging
import re
from typing import Any, Optional, TypedDict

from ..core.text import normalize_item_name

logger = logging.getLogger("mealcart.duplicates")

DEFAULT_THRESHOLD = 0.7
LIKELY_SAME_THRESHOLD = 0.8

CONTAINMENT_SCORE = 0.8
WORD_OVERLAP_WEIGHT = 0.7

_LEADING_NUMBER = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class DuplicateMatch(TypedDict):
    item: Any
    similarity: float
    normalized_name: str


class MergeSuggestion(TypedDict):
    id: Any
    name: str
    quantity: Optional[str]
    unit: Optional[str]
    category: Optional[str]
    notes: Optional[str]


def _field(item, name: str, default=None):
    """Read a field from a dict-like item or a model instance."""
    if isinstance(item, dict):
        return item.get(name, default)
    return getattr(item, name, default)


def levenshtein_distance(a: str, b: str) -> int:
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            if ca == cb:
                current.append(previous[j - 1])
            else:
                current.append(min(previous[j - 1], current[j - 1], previous[j]) + 1)
        previous = current
    return previous[-1]


def calculate_similarity(name1, name2) -> float:
    norm1 = normalize_item_name(name1)
    norm2 = normalize_item_name(name2)

    if not norm1 or not norm2:
        return 0.0

    if norm1 == norm2:
        return 1.0

    if norm1 in norm2 or norm2 in norm1:
        return CONTAINMENT_SCORE

    distance = levenshtein_distance(norm1, norm2)
    similarity = 1 - distance / max(len(norm1), len(norm2))

    words1 = norm1.split(" ")
    words2 = norm2.split(" ")
    common = [w for w in words1 if w in words2]
    if common:
        word_similarity = len(common) / max(len(words1), len(words2))
        return max(similarity, word_similarity * WORD_OVERLAP_WEIGHT)

    return similarity


def find_duplicates(new_item_name, existing_items, threshold: float = DEFAULT_THRESHOLD) -> list[DuplicateMatch]:
    """
    Find existing items that look like `new_item_name`.

    Returns matches at or above `threshold`, most similar first. Items may be
    dicts or objects; only their `name` is read.
    """
    if not new_item_name or not existing_items:
        return []

    duplicates: list[DuplicateMatch] = []
    for item in existing_items:
        name = _field(item, "name")
        similarity = calculate_similarity(new_item_name, name)
        if similarity >= threshold:
            duplicates.append({
                "item": item,
                "similarity": similarity,
                "normalized_name": normalize_item_name(name),
            })

    duplicates.sort(key=lambda d: d["similarity"], reverse=True)
    if duplicates:
        logger.debug("%d possible duplicate(s) for %r", len(duplicates), new_item_name)
    return duplicates


def are_likely_same(name1, name2) -> bool:
    return calculate_similarity(name1, name2) >= LIKELY_SAME_THRESHOLD


def find_duplicate_groups(items, threshold: float = LIKELY_SAME_THRESHOLD) -> list[list[Any]]:
    """
    Greedily group items that look alike, in list order.
    Each unclaimed item seeds a group; only groups of two or more are returned.
    """
    groups: list[list[Any]] = []
    processed: set[int] = set()

    for i, seed in enumerate(items):
        if i in processed:
            continue
        group = [seed]
        processed.add(i)
        seed_name = _field(seed, "name")

        for j in range(i + 1, len(items)):
            if j in processed:
                continue
            if calculate_similarity(seed_name, _field(items[j], "name")) >= threshold:
                group.append(items[j])
                processed.add(j)

        if len(group) > 1:
            groups.append(group)

    return groups


def _parse_quantity(value) -> float:
    # Leading number only ("2 bags" -> 2); anything unparseable counts as 0
    if isinstance(value, (int, float)):
        return float(value)
    match = _LEADING_NUMBER.match(str(value))
    return float(match.group(0)) if match else 0.0


def _format_quantity(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return str(value)


def _quantity_text(value) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return _format_quantity(float(value))
    return str(value)


def suggest_merge(new_item_name, new_item_quantity, new_item_unit, existing_item) -> MergeSuggestion:
    """
    Propose how to fold a new entry into an existing one.

    Same units add up; different units are kept side by side as text
    ("1 lb + 8 oz"). The existing item's id, category and notes are kept.
    """
    existing_name = _field(existing_item, "name") or ""
    existing_qty = _field(existing_item, "quantity")
    existing_unit = _field(existing_item, "unit")

    suggested_name = existing_name
    if len(normalize_item_name(new_item_name)) > len(normalize_item_name(existing_name)):
        suggested_name = new_item_name

    suggested_qty = existing_qty
    suggested_unit = existing_unit

    if new_item_quantity and existing_qty:
        if new_item_unit == existing_unit:
            total = _parse_quantity(new_item_quantity) + _parse_quantity(existing_qty)
            suggested_qty = _format_quantity(total)
            suggested_unit = new_item_unit
        else:
            suggested_qty = (
                f"{_quantity_text(existing_qty)} {existing_unit or ''} + "
                f"{_quantity_text(new_item_quantity)} {new_item_unit or ''}"
            ).strip()
            suggested_unit = None
    elif new_item_quantity:
        suggested_qty = new_item_quantity
        suggested_unit = new_item_unit

    return {
        "id": _field(existing_item, "id"),
        "name": suggested_name,
        "quantity": _quantity_text(suggested_qty),
        "unit": suggested_unit,
        "category": _field(existing_item, "category"),
        "notes": _field(existing_item, "notes"),
    }

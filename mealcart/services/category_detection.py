"""
Keyword-based store category detection for shopping list items.

Categories are scanned in declaration order and the first one with any keyword
contained in the item name wins. This is first-match, not best-match:
"organic whole milk" is Dairy & Eggs because "milk" is hit before the
"organic" fallback is consulted. Generic qualifiers like "fresh" and
"organic" live only in the fallbacks so they never shadow a real keyword.
"""

from types import MappingProxyType
from typing import TypedDict

OTHER = "Other"

CATEGORY_KEYWORDS = MappingProxyType({
    "Produce": (
        "apple", "banana", "orange", "lemon", "lime", "grape", "strawberry", "blueberry", "raspberry",
        "lettuce", "spinach", "kale", "arugula", "cabbage", "broccoli", "cauliflower", "carrot",
        "potato", "onion", "garlic", "tomato", "cucumber", "pepper", "bell pepper", "jalapeño",
        "avocado", "mushroom", "herbs", "basil", "parsley", "cilantro", "mint", "thyme", "rosemary",
        "celery", "radish", "beet", "corn", "peas", "beans", "squash", "zucchini", "eggplant",
        "fruit", "vegetable",
    ),
    "Meat & Seafood": (
        "chicken", "beef", "pork", "lamb", "turkey", "duck", "ham", "bacon", "sausage",
        "fish", "salmon", "tuna", "cod", "halibut", "shrimp", "crab", "lobster", "scallops",
        "ground beef", "ground turkey", "steak", "chops", "ribs", "wings", "breast", "thigh",
        "meat", "seafood", "protein", "fresh fish", "frozen fish",
    ),
    "Dairy & Eggs": (
        "milk", "cheese", "eggs", "yogurt", "butter", "cream", "sour cream", "cottage cheese",
        "mozzarella", "cheddar", "parmesan", "feta", "goat cheese", "cream cheese", "ricotta",
        "heavy cream", "half and half", "buttermilk", "dairy", "organic milk", "almond milk",
        "oat milk", "soy milk", "coconut milk",
    ),
    "Pantry & Dry Goods": (
        "rice", "pasta", "noodles", "bread", "flour", "sugar", "salt", "pepper", "spices",
        "olive oil", "vegetable oil", "coconut oil", "vinegar", "balsamic", "soy sauce",
        "cereal", "oats", "quinoa", "barley", "lentils", "beans", "chickpeas", "nuts",
        "almonds", "walnuts", "peanuts", "cashews", "seeds", "sunflower seeds", "chia seeds",
        "crackers", "chips", "snacks", "granola", "honey", "maple syrup", "jam", "jelly",
    ),
    "Canned & Jarred": (
        "canned", "jarred", "tomato sauce", "pasta sauce", "soup", "broth", "stock",
        "canned beans", "canned corn", "canned tomatoes", "pickles", "olives", "salsa",
        "pesto", "tahini", "peanut butter", "almond butter", "preserves", "marinara",
    ),
    "Frozen": (
        "frozen", "ice cream", "frozen vegetables", "frozen fruit", "frozen berries",
        "frozen pizza", "frozen meals", "frozen chicken", "frozen fish", "frozen shrimp",
        "frozen yogurt", "sorbet", "frozen waffles", "frozen french fries",
    ),
    "Bakery": (
        "bread", "bagels", "croissants", "muffins", "donuts", "pastries", "cake", "cookies",
        "pie", "tart", "rolls", "buns", "loaf", "fresh bread", "artisan bread",
    ),
    "Beverages": (
        "water", "juice", "soda", "coffee", "tea", "beer", "wine", "sparkling water",
        "sports drink", "energy drink", "coconut water", "kombucha", "smoothie",
    ),
})

ALL_CATEGORIES = (*CATEGORY_KEYWORDS.keys(), OTHER)

# Consulted only when no keyword list matched
_FALLBACK_PATTERNS = (
    (("fresh", "organic"), "Produce"),
    (("frozen",), "Frozen"),
    (("canned", "jarred"), "Canned & Jarred"),
    (("bread", "bakery"), "Bakery"),
    (("drink", "beverage"), "Beverages"),
)

LOW_CONFIDENCE = 0.1
MAX_MATCH_CONFIDENCE = 0.9
MATCH_BOOST = 0.3
MAX_SUGGESTIONS = 3


class CategoryGuess(TypedDict):
    category: str
    confidence: float


class CategoryDetection(TypedDict):
    item: str
    category: str
    confidence: float


def _normalize_name(item_name: str) -> str:
    return item_name.lower().strip()


def detect_category(item_name) -> str:
    """Return the store category for an item name, or "Other"."""
    if not item_name or not isinstance(item_name, str):
        return OTHER

    name = _normalize_name(item_name)

    for category, keywords in CATEGORY_KEYWORDS.items():
        for keyword in keywords:
            if keyword in name:
                return category

    for needles, category in _FALLBACK_PATTERNS:
        if any(n in name for n in needles):
            return category

    return OTHER


def get_category_confidence(item_name, category) -> float:
    """
    Heuristic score in [0, 1] for how well `item_name` fits `category`.

    Based on the share of the category's keywords found in the name, boosted
    by 0.3 and capped at 0.9. An exact name == category hit scores 1.0.
    """
    if not item_name or not isinstance(item_name, str):
        return LOW_CONFIDENCE
    if not category or not isinstance(category, str) or category == OTHER:
        return LOW_CONFIDENCE

    name = _normalize_name(item_name)
    if name == category.lower():
        return 1.0

    keywords = CATEGORY_KEYWORDS.get(category, ())
    matches = sum(1 for keyword in keywords if keyword in name)
    if not matches:
        return LOW_CONFIDENCE

    base_confidence = matches / len(keywords)
    return min(MAX_MATCH_CONFIDENCE, base_confidence + MATCH_BOOST)


def suggest_categories(item_name) -> list[CategoryGuess]:
    """Rank up to three candidate categories, padding with Other when unsure."""
    suggestions: list[CategoryGuess] = []
    for category in CATEGORY_KEYWORDS:
        confidence = get_category_confidence(item_name, category)
        if confidence > LOW_CONFIDENCE:
            suggestions.append({"category": category, "confidence": confidence})

    suggestions.sort(key=lambda s: s["confidence"], reverse=True)

    if not suggestions or suggestions[0]["confidence"] < 0.5:
        suggestions.append({"category": OTHER, "confidence": LOW_CONFIDENCE})

    return suggestions[:MAX_SUGGESTIONS]


def batch_detect_categories(items) -> list[CategoryDetection]:
    results: list[CategoryDetection] = []
    for item in items:
        category = detect_category(item)
        results.append({
            "item": item,
            "category": category,
            "confidence": get_category_confidence(item, category),
        })
    return results

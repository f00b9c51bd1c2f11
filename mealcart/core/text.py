import re

# Qualifiers that don't change what the shopper actually buys
ITEM_QUALIFIERS = ("fresh", "organic", "free-range", "cage-free", "grass-fed", "wild-caught")

_QUALIFIER_ALT = "|".join(re.escape(q) for q in ITEM_QUALIFIERS)
_LEADING_QUALIFIER = re.compile(rf"^(?:{_QUALIFIER_ALT})\s+", re.IGNORECASE)
_TRAILING_QUALIFIER = re.compile(rf"\s+(?:{_QUALIFIER_ALT})$", re.IGNORECASE)

# "2 lb", "500g", "1 cup" ... anywhere in the name
_QUANTITY_TOKEN = re.compile(
    r"\b\d+\s*(?:lb|lbs|kg|g|oz|ml|l|cup|cups|tbsp|tsp|pound|pounds|kilogram|gram|ounce"
    r"|liter|milliliter|tablespoon|teaspoon)\b"
)


def clean_md(text: str) -> str:
    """
    Sanitize markdown artifacts from text.
    Removes:
    - Leading headers (#, ##)
    - Bold markers (**, __)
    - Leading bullets (-, *)
    """
    if not text:
        return ""

    # Remove bolding (**text** -> text)
    text = re.sub(r"(\*\*|__)(.*?)\1", r"\2", text)

    # Remove leading headers (# Title -> Title)
    text = re.sub(r"^\s*#+\s+", "", text)

    # Remove leading bullets (- Item -> Item)
    text = re.sub(r"^\s*[-*]\s+", "", text)

    return text.strip()


def collapse_whitespace(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def normalize_item_name(name) -> str:
    """
    Normalize a shopping item name for comparison.

    Rules:
    - Lowercase, trim
    - Drop one leading and one trailing qualifier (fresh, organic, ...)
    - Drop embedded quantities ("2 lb", "500g")
    - Whitespace collapse
    """
    if not name or not isinstance(name, str):
        return ""

    s = name.lower().strip()
    s = _LEADING_QUALIFIER.sub("", s, count=1)
    s = _TRAILING_QUALIFIER.sub("", s, count=1)
    s = _QUANTITY_TOKEN.sub("", s)
    return collapse_whitespace(s)


def cache_key_fragment(name: str) -> str:
    """Lowercase, whitespace-collapsed form of a name for use inside cache keys."""
    return collapse_whitespace((name or "").lower())

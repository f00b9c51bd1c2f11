from mealcart.core.text import cache_key_fragment, clean_md, normalize_item_name

def test_clean_md_headers():
    assert clean_md("# Produce") == "Produce"
    assert clean_md("## Frozen") == "Frozen"
    assert clean_md("#   Spaced Title  ") == "Spaced Title"

def test_clean_md_bold():
    assert clean_md("**Bakery**") == "Bakery"
    assert clean_md("Text with **bold** word") == "Text with bold word"
    assert clean_md("__Dairy & Eggs__") == "Dairy & Eggs"
    # Unclosed markers are left alone
    assert clean_md("**Open") == "**Open"

def test_clean_md_bullets():
    assert clean_md("- Beverages") == "Beverages"
    assert clean_md("* Beverages") == "Beverages"
    assert clean_md("  -  Indented") == "Indented"

def test_clean_md_mixed():
    assert clean_md("# **Produce**") == "Produce"
    assert clean_md("- **lb, kg**") == "lb, kg"

def test_clean_md_preservation():
    # Internal hyphens and mid-text bullets stay
    assert clean_md("cage-free eggs") == "cage-free eggs"
    assert clean_md("Title: - subtitle") == "Title: - subtitle"
    assert clean_md("") == ""

def test_normalize_item_name_qualifiers():
    assert normalize_item_name("Organic Bananas") == "bananas"
    assert normalize_item_name("Fresh Basil Fresh") == "basil"
    assert normalize_item_name("Cage-Free Eggs") == "eggs"
    assert normalize_item_name("wild-caught salmon") == "salmon"
    # Only one leading qualifier is dropped
    assert normalize_item_name("fresh organic kale") == "organic kale"

def test_normalize_item_name_quantities():
    assert normalize_item_name("2 lb Ground Beef") == "ground beef"
    assert normalize_item_name("500g flour") == "flour"
    assert normalize_item_name("sugar 1 cup") == "sugar"
    # Counts without a unit are part of the name
    assert normalize_item_name("Paper Towels 12 pack") == "paper towels 12 pack"

def test_normalize_item_name_whitespace_and_invalid():
    assert normalize_item_name("  Whole   Milk  ") == "whole milk"
    assert normalize_item_name("") == ""
    assert normalize_item_name(None) == ""
    assert normalize_item_name(5) == ""

def test_cache_key_fragment():
    assert cache_key_fragment("  Green   Apple ") == "green apple"
    assert cache_key_fragment(None) == ""

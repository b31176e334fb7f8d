"""
Category Classifier
Maps a free-text transaction description to a spending category by
keyword substring matching.
"""

from typing import Optional

from .financial_rules import Category


# Checked top to bottom; the first category with a matching keyword wins,
# so "grocery shop" is Food & Dining rather than Shopping.
CATEGORY_KEYWORDS: tuple[tuple[Category, tuple[str, ...]], ...] = (
    (Category.FOOD_AND_DINING, (
        'restaurant', 'food', 'grocery', 'cafe', 'coffee', 'dining',
        'starbucks', 'mcdonald', 'pizza', 'sushi',
    )),
    (Category.TRANSPORTATION, (
        'gas', 'uber', 'lyft', 'transit', 'parking', 'taxi', 'fuel',
        'shell', 'chevron',
    )),
    (Category.ENTERTAINMENT, (
        'movie', 'netflix', 'spotify', 'game', 'entertainment', 'hulu',
        'disney', 'xbox', 'playstation',
    )),
    (Category.BILLS_AND_UTILITIES, (
        'electric', 'water', 'internet', 'phone', 'utility', 'rent',
        'mortgage', 'insurance', 'verizon', 'att',
    )),
    (Category.SHOPPING, (
        'amazon', 'shop', 'mall', 'target', 'walmart', 'ebay', 'clothing',
        'shoes',
    )),
    (Category.HEALTHCARE, (
        'doctor', 'hospital', 'pharmacy', 'medical', 'health', 'cvs',
        'walgreens', 'dentist',
    )),
)


def classify(description: Optional[str]) -> Category:
    """
    Classify a transaction description.

    Args:
        description: Free-text description (case-insensitive)

    Returns:
        The first matching Category, or Category.OTHER
    """
    if not description:
        return Category.OTHER

    desc_lower = description.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in desc_lower for keyword in keywords):
            return category

    return Category.OTHER

"""
Extractors Module - Canonical transaction types and categorization.

The format extractors live in ``extractors.tabular_extractor`` and
``extractors.regex_extractor``; they depend on ``validators`` and are
imported from there directly.
"""

from .financial_rules import (
    Category,
    Polarity,
    Transaction,
    format_amount_display,
    parse_amount,
    resolve_polarity
)

from .categorizer import (
    CATEGORY_KEYWORDS,
    classify
)

__all__ = [
    'Category',
    'Polarity',
    'Transaction',
    'format_amount_display',
    'parse_amount',
    'resolve_polarity',
    'CATEGORY_KEYWORDS',
    'classify',
]

"""
Financial Rules Module
Defines the canonical transaction record, credit/debit polarity rules
and amount parsing shared by every extractor.
"""

import logging
import math
import re
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Optional

logger = logging.getLogger(__name__)


class Polarity(Enum):
    """Whether a transaction increases (credit) or decreases (debit) balance."""
    CREDIT = "credit"
    DEBIT = "debit"


class Category(Enum):
    """Closed set of spending categories, in classifier priority order."""
    FOOD_AND_DINING = "Food & Dining"
    TRANSPORTATION = "Transportation"
    ENTERTAINMENT = "Entertainment"
    BILLS_AND_UTILITIES = "Bills & Utilities"
    SHOPPING = "Shopping"
    HEALTHCARE = "Healthcare"
    OTHER = "Other"


# Words accepted in an explicit type column
CREDIT_WORDS = {"credit", "cr", "deposit", "income"}
DEBIT_WORDS = {"debit", "dr", "withdrawal", "payment", "expense"}

_AMOUNT_NOISE = re.compile(r'[\s$,]')


@dataclass(frozen=True)
class Transaction:
    """Represents a single canonical financial transaction."""

    date: date
    description: str
    amount: float
    polarity: Polarity
    category: Category

    def __post_init__(self):
        if self.amount < 0:
            raise ValueError(f"Transaction amount must be non-negative, got {self.amount}")

    @property
    def is_credit(self) -> bool:
        return self.polarity is Polarity.CREDIT

    def to_dict(self) -> dict:
        """Convert transaction to dictionary."""
        return {
            "date": self.date.isoformat(),
            "description": self.description,
            "amount": self.amount,
            "type": self.polarity.value,
            "category": self.category.value
        }

    def __repr__(self) -> str:
        return (
            f"Transaction(date={self.date}, desc={self.description[:30]}, "
            f"amount={format_amount_display(self.amount, self.polarity)}, "
            f"category={self.category.value})"
        )


def parse_amount(value: Any) -> Optional[float]:
    """
    Parse a raw amount cell into a signed float.

    Accepts numbers and strings such as "1,234.56", "-$4.50", "$-4.50"
    and accounting negatives like "(12.00)".

    Returns:
        Signed finite float, or None when the value is missing or not numeric
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        amount = float(value)
        return amount if math.isfinite(amount) else None

    text = _AMOUNT_NOISE.sub('', str(value))
    if not text:
        return None

    negative = False
    if text.startswith('(') and text.endswith(')'):
        negative = True
        text = text[1:-1]

    try:
        amount = float(text)
    except ValueError:
        logger.debug(f"Cannot parse amount '{value}'")
        return None

    if not math.isfinite(amount):
        return None

    return -amount if negative else amount


def resolve_polarity(type_value: Any, signed_amount: float) -> Polarity:
    """
    Decide transaction polarity.

    An explicit type word wins; otherwise a positive raw amount is a credit
    and anything else is a debit.
    """
    if type_value is not None:
        word = str(type_value).strip().lower()
        if word in CREDIT_WORDS:
            return Polarity.CREDIT
        if word in DEBIT_WORDS:
            return Polarity.DEBIT
        if word:
            logger.debug(f"Unrecognised type value '{type_value}', inferring from sign")

    return Polarity.CREDIT if signed_amount > 0 else Polarity.DEBIT


def format_amount_display(amount: float, polarity: Polarity) -> str:
    """
    Format amount for display with explicit sign.

    Credits: +1600.00
    Debits: -250.00
    """
    sign = "+" if polarity is Polarity.CREDIT else "-"
    return f"{sign}{abs(amount):.2f}"

"""
Financial Validator Module
Validates raw extracted row fields and turns the good ones into canonical
transactions. Bad rows are skipped and counted, never raised.
"""

import logging
import re
from datetime import date, datetime
from typing import Any, Iterable, NamedTuple, Optional

from config import config
from extractors.categorizer import classify
from extractors.financial_rules import Polarity, Transaction, parse_amount, resolve_polarity

logger = logging.getLogger(__name__)


# Tried in order; month-first wins for ambiguous slash dates
DATE_FORMATS = (
    '%Y-%m-%d',    # 2025-06-01
    '%Y/%m/%d',    # 2025/06/01
    '%m/%d/%Y',    # 06/01/2025
    '%m/%d/%y',    # 06/01/25
    '%m-%d-%Y',    # 06-01-2025
    '%m-%d-%y',    # 06-01-25
    '%d %b %Y',    # 01 Jun 2025
    '%d %B %Y',    # 01 June 2025
    '%b %d, %Y',   # Jun 01, 2025
    '%B %d, %Y',   # June 01, 2025
    '%d-%b-%Y',    # 01-Jun-2025
    '%d-%b-%y',    # 01-Jun-25
)

_QUOTES = re.compile(r'["\'‘’“”]')
_WHITESPACE = re.compile(r'\s+')


class RawRow(NamedTuple):
    """Raw field tuple produced by an extractor before validation."""
    date: Any
    description: Any
    amount: Any
    type: Any = None


def parse_date(value: Any) -> Optional[date]:
    """
    Parse a date cell.

    Supports native date/datetime values and the textual formats in
    DATE_FORMATS, plus ISO timestamps.

    Returns:
        Calendar date, or None if the value cannot be parsed
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        return None

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def clean_description(value: Any) -> str:
    """Trim, strip quote characters and collapse whitespace."""
    if value is None:
        return ""
    text = _QUOTES.sub('', str(value))
    return _WHITESPACE.sub(' ', text).strip()


class TransactionValidator:
    """Validates raw rows and builds canonical transactions."""

    def __init__(
        self,
        allow_zero_amounts: Optional[bool] = None,
        min_description_length: Optional[int] = None
    ):
        """
        Initialize validator with configurable settings.

        Args:
            allow_zero_amounts: If True, keep rows whose amount is 0.
                                Defaults to Config.ALLOW_ZERO_AMOUNTS.
            min_description_length: Minimum characters required in description.
                                    Defaults to Config.MIN_DESCRIPTION_LENGTH.
        """
        if allow_zero_amounts is None:
            allow_zero_amounts = config.ALLOW_ZERO_AMOUNTS
        if min_description_length is None:
            min_description_length = config.MIN_DESCRIPTION_LENGTH

        self.allow_zero_amounts = allow_zero_amounts
        self.min_description_length = max(1, min_description_length)
        self.validation_stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> dict:
        return {
            "total_validated": 0,
            "valid": 0,
            "invalid": 0,
            "invalid_date": 0,
            "invalid_amount": 0,
            "invalid_description": 0
        }

    def to_transaction(self, row: RawRow) -> Optional[Transaction]:
        """
        Validate a single raw row.

        Args:
            row: Raw field tuple from an extractor

        Returns:
            Transaction when the row is valid, None when it is skipped
        """
        self.validation_stats["total_validated"] += 1

        description = clean_description(row.description)
        if len(description) < self.min_description_length:
            return self._skip("invalid_description", "missing description", row)

        signed_amount = parse_amount(row.amount)
        if signed_amount is None:
            return self._skip("invalid_amount", f"invalid amount {row.amount!r}", row)

        if signed_amount == 0 and not self.allow_zero_amounts:
            return self._skip("invalid_amount", "zero amount", row)

        txn_date = parse_date(row.date)
        if txn_date is None:
            return self._skip("invalid_date", f"invalid date {row.date!r}", row)

        if isinstance(row.type, Polarity):
            polarity = row.type
        else:
            polarity = resolve_polarity(row.type, signed_amount)

        self.validation_stats["valid"] += 1
        return Transaction(
            date=txn_date,
            description=description,
            amount=abs(signed_amount),
            polarity=polarity,
            category=classify(description)
        )

    def _skip(self, reason: str, message: str, row: RawRow) -> None:
        self.validation_stats[reason] += 1
        self.validation_stats["invalid"] += 1
        logger.debug(f"Skipping row ({message}): {row}")
        return None

    def validate_rows(self, rows: Iterable[RawRow]) -> list[Transaction]:
        """
        Validate a sequence of raw rows.

        Args:
            rows: Raw field tuples

        Returns:
            List of valid transactions (invalid rows filtered out)
        """
        transactions = []

        for row in rows:
            txn = self.to_transaction(row)
            if txn is not None:
                transactions.append(txn)

        logger.info(
            f"Validation complete: {self.validation_stats['valid']} valid, "
            f"{self.validation_stats['invalid']} invalid out of "
            f"{self.validation_stats['total_validated']} total"
        )

        return transactions

    def get_stats(self) -> dict:
        """Get validation statistics."""
        return self.validation_stats.copy()

    def reset_stats(self):
        """Reset validation statistics."""
        self.validation_stats = self._empty_stats()


def validate_rows(rows: Iterable[RawRow]) -> list[Transaction]:
    """
    Convenience function to validate raw rows with default settings.

    Args:
        rows: Raw field tuples

    Returns:
        List of valid transactions
    """
    validator = TransactionValidator()
    return validator.validate_rows(rows)

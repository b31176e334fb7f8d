from datetime import date, datetime

import pytest

from config import Config
from extractors.financial_rules import Category, Polarity
from validators.financial_validator import (
    RawRow,
    TransactionValidator,
    clean_description,
    parse_date,
)


@pytest.mark.parametrize(
    "raw",
    [
        "2025-06-01",
        "2025/06/01",
        "06/01/2025",
        "06/01/25",
        "06-01-2025",
        "01 Jun 2025",
        "Jun 01, 2025",
        "01-Jun-2025",
        "2025-06-01T09:30:00",
        datetime(2025, 6, 1, 9, 30),
        date(2025, 6, 1),
    ],
)
def test_parse_date_formats(raw):
    assert parse_date(raw) == date(2025, 6, 1)


@pytest.mark.parametrize("raw", [None, "", "yesterday", "13/45/2025", "2025-02-30"])
def test_parse_date_failures(raw):
    assert parse_date(raw) is None


def test_clean_description_strips_quotes_and_whitespace():
    assert clean_description('  "Joe\'s   Pizza"  ') == "Joes Pizza"
    assert clean_description(None) == ""


def test_valid_row_becomes_classified_transaction():
    validator = TransactionValidator()
    txn = validator.to_transaction(RawRow("2025-06-03", "Grocery Store", "-150", None))

    assert txn is not None
    assert txn.amount == 150.0
    assert txn.polarity is Polarity.DEBIT
    assert txn.category is Category.FOOD_AND_DINING


def test_explicit_polarity_is_kept():
    validator = TransactionValidator()
    txn = validator.to_transaction(RawRow("06/01/2025", "Refund", "4.50", Polarity.DEBIT))
    assert txn.polarity is Polarity.DEBIT


def test_skipped_rows_are_counted_by_reason():
    validator = TransactionValidator()
    rows = [
        RawRow("2025-06-01", "", "abc"),
        RawRow("2025-06-01", "Lunch", "abc"),
        RawRow("not a date", "Lunch", "12.00"),
        RawRow("2025-06-01", "Lunch", "0"),
        RawRow("2025-06-01", "Lunch", "12.00"),
    ]

    transactions = validator.validate_rows(rows)
    stats = validator.get_stats()

    assert len(transactions) == 1
    assert stats["valid"] == 1
    assert stats["invalid"] == 4
    assert stats["invalid_description"] == 1
    assert stats["invalid_amount"] == 2
    assert stats["invalid_date"] == 1

    validator.reset_stats()
    assert validator.get_stats()["total_validated"] == 0


def test_zero_amounts_allowed_when_configured(monkeypatch):
    monkeypatch.setattr(Config, "ALLOW_ZERO_AMOUNTS", True)
    validator = TransactionValidator()

    txn = validator.to_transaction(RawRow("2025-06-01", "Fee waiver", "0.00"))

    assert txn is not None
    assert txn.amount == 0.0

import math
from datetime import date

import pytest

from extractors.financial_rules import (
    Category,
    Polarity,
    Transaction,
    format_amount_display,
    parse_amount,
    resolve_polarity,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("150", 150.0),
        ("1,234.56", 1234.56),
        ("-$4.50", -4.5),
        ("$ 20.00", 20.0),
        ("(12.00)", -12.0),
        (42, 42.0),
        (-3.25, -3.25),
    ],
)
def test_parse_amount_accepts_common_shapes(raw, expected):
    assert parse_amount(raw) == pytest.approx(expected)


@pytest.mark.parametrize("raw", [None, "", "abc", "nan", "inf", float("nan"), math.inf, True])
def test_parse_amount_rejects_missing_and_non_finite(raw):
    assert parse_amount(raw) is None


def test_explicit_type_wins_over_sign():
    assert resolve_polarity("Credit", -10.0) is Polarity.CREDIT
    assert resolve_polarity(" DR ", 10.0) is Polarity.DEBIT


def test_sign_decides_without_recognised_type():
    assert resolve_polarity(None, 10.0) is Polarity.CREDIT
    assert resolve_polarity(None, -10.0) is Polarity.DEBIT
    assert resolve_polarity("pending", 5.0) is Polarity.CREDIT


def test_transaction_rejects_negative_amount():
    with pytest.raises(ValueError):
        Transaction(date(2025, 1, 1), "Refund", -1.0, Polarity.CREDIT, Category.OTHER)


def test_transaction_to_dict_uses_wire_names():
    txn = Transaction(date(2025, 6, 3), "Grocery Store", 150.0, Polarity.DEBIT, Category.FOOD_AND_DINING)
    assert txn.to_dict() == {
        "date": "2025-06-03",
        "description": "Grocery Store",
        "amount": 150.0,
        "type": "debit",
        "category": "Food & Dining",
    }
    assert format_amount_display(txn.amount, txn.polarity) == "-150.00"

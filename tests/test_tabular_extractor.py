import textwrap
from datetime import date, datetime

from extractors.financial_rules import Category, Polarity
from extractors.tabular_extractor import (
    COLUMN_ALIASES,
    TabularExtractor,
    extract_transactions_from_csv,
    lookup_field,
)


def _dedent(s: str) -> str:
    return textwrap.dedent(s).lstrip("\n")


def test_scenario_csv_rows(scenario_csv):
    transactions = extract_transactions_from_csv(scenario_csv)

    assert [(t.amount, t.polarity, t.category) for t in transactions] == [
        (5200.0, Polarity.CREDIT, Category.OTHER),
        (150.0, Polarity.DEBIT, Category.FOOD_AND_DINING),
    ]
    assert transactions[0].date == date(2025, 6, 1)


def test_malformed_row_is_dropped_and_batch_continues():
    csv_text = _dedent(
        """
        Date,Description,Amount
        2025-01-02,Starbucks,-5.25
        2025-01-03,,abc
        2025-01-04,Shell Oil,-40.00
        2025-01-05,Payroll,2000.00
        2025-01-06,Walgreens,-12.80
        """
    )
    extractor = TabularExtractor()
    transactions = extractor.extract_csv(csv_text)

    assert len(transactions) == 4
    assert extractor.get_stats() == {
        "rows_processed": 5,
        "transactions_found": 4,
        "rows_skipped": 1,
    }
    assert all(t.amount >= 0 for t in transactions)


def test_headers_are_case_insensitive_and_aliased():
    csv_text = _dedent(
        """
        DATE,Merchant,Debit
        03/15/2025,"Netflix, Inc.",15.99
        """
    )
    [txn] = extract_transactions_from_csv(csv_text)

    assert txn.description == "Netflix, Inc."
    assert txn.category is Category.ENTERTAINMENT
    # No type column: a positive raw amount is a credit
    assert txn.polarity is Polarity.CREDIT


def test_sign_infers_polarity_without_type_column():
    csv_text = _dedent(
        """
        date,description,amount
        2025-02-01,Rent payment,-1500.00
        2025-02-02,Refund,25.00
        """
    )
    rent, refund = extract_transactions_from_csv(csv_text)

    assert rent.polarity is Polarity.DEBIT
    assert rent.amount == 1500.0
    assert refund.polarity is Polarity.CREDIT


def test_alias_priority_order():
    row = {"merchant": "Second", "description": "First", "amount": "", "debit": "9.99"}
    assert COLUMN_ALIASES["description"][0] == "description"
    assert lookup_field(row, "description") == "First"
    # Blank values fall through to the next alias
    assert lookup_field(row, "amount") == "9.99"
    assert lookup_field(row, "type") is None


def test_extract_rows_accepts_native_spreadsheet_values():
    rows = [
        {"Date": datetime(2025, 4, 2), "Description": "Uber Ride", "Amount": -18, "Type": None},
        {"Date": None, "Description": "Undated", "Amount": 10, "Type": None},
    ]
    [txn] = TabularExtractor().extract_rows(rows)

    assert txn.date == date(2025, 4, 2)
    assert txn.amount == 18.0
    assert txn.polarity is Polarity.DEBIT
    assert txn.category is Category.TRANSPORTATION


def test_header_only_and_empty_input():
    assert extract_transactions_from_csv("Date,Description,Amount\n") == []
    assert extract_transactions_from_csv("") == []

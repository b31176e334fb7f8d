"""
Tabular Extractor Module
Parses header-keyed rows (CSV files, or spreadsheet sheets normalized by the
spreadsheet loader) into canonical transactions.
"""

import csv
import io
import logging
from typing import Any, Iterable, Mapping, Optional

from errors import UnreadableInputError
from extractors.financial_rules import Transaction
from validators.financial_validator import RawRow, TransactionValidator

logger = logging.getLogger(__name__)


# Accepted header names per logical field, tried in this priority order.
# Headers are matched case-insensitively after trimming.
COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "date": ("date", "transaction date", "posted date", "posting date"),
    "description": ("description", "merchant", "payee", "details", "narrative"),
    "amount": ("amount", "debit", "credit"),
    "type": ("type", "transaction type"),
}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def lookup_field(row: Mapping[str, Any], field: str) -> Optional[Any]:
    """
    Read a logical field from a row using COLUMN_ALIASES.

    Args:
        row: Row keyed by lower-cased, trimmed header names
        field: Logical field name (date, description, amount, type)

    Returns:
        Value of the first alias present with a non-blank value, else None
    """
    for alias in COLUMN_ALIASES[field]:
        value = row.get(alias)
        if not _is_blank(value):
            return value
    return None


def normalize_headers(row: Mapping[Any, Any]) -> dict[str, Any]:
    """Lower-case and trim header keys; drop unnamed columns."""
    normalized = {}
    for key, value in row.items():
        if key is None:
            continue
        header = str(key).strip().lower()
        # First occurrence wins when two headers collapse to the same name
        if header and header not in normalized:
            normalized[header] = value
    return normalized


class TabularExtractor:
    """Extracts transactions from header-keyed tabular rows."""

    def __init__(self, validator: TransactionValidator = None):
        """Initialize extractor with an optional shared validator."""
        self.validator = validator or TransactionValidator()
        self.stats = {
            "rows_processed": 0,
            "transactions_found": 0,
            "rows_skipped": 0
        }

    def extract_rows(self, rows: Iterable[Mapping[Any, Any]]) -> list[Transaction]:
        """
        Extract transactions from header-keyed rows.

        Args:
            rows: Mappings of header name to cell value

        Returns:
            List of Transaction objects
        """
        transactions = []

        for raw in rows:
            self.stats["rows_processed"] += 1
            row = normalize_headers(raw)

            txn = self.validator.to_transaction(RawRow(
                date=lookup_field(row, "date"),
                description=lookup_field(row, "description"),
                amount=lookup_field(row, "amount"),
                type=lookup_field(row, "type")
            ))
            if txn is None:
                self.stats["rows_skipped"] += 1
                continue

            transactions.append(txn)
            self.stats["transactions_found"] += 1

        logger.info(
            f"Extraction complete: {self.stats['transactions_found']} transactions from "
            f"{self.stats['rows_processed']} rows ({self.stats['rows_skipped']} skipped)"
        )
        return transactions

    def extract_csv(self, text: str) -> list[Transaction]:
        """
        Extract transactions from CSV text whose first row is the header.

        Raises:
            UnreadableInputError: If the CSV is structurally malformed
        """
        try:
            reader = csv.DictReader(io.StringIO(text, newline=''), skipinitialspace=True)
            if not reader.fieldnames:
                logger.warning("CSV input has no header row")
                return []
            logger.info(f"CSV header: {reader.fieldnames}")
            rows = [row for row in reader if any(not _is_blank(v) for v in row.values())]
        except csv.Error as e:
            logger.error(f"Malformed CSV input: {e}")
            raise UnreadableInputError(f"Malformed CSV input: {e}") from e

        return self.extract_rows(rows)

    def get_stats(self) -> dict:
        """Get extraction statistics."""
        return self.stats.copy()


def extract_transactions_from_csv(text: str) -> list[Transaction]:
    """
    Convenience function to extract transactions from CSV text.

    Args:
        text: CSV text

    Returns:
        List of Transaction objects
    """
    extractor = TabularExtractor()
    return extractor.extract_csv(text)

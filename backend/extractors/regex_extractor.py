"""
Regex Extractor Module
Parses statement text (plain text or the text layer of a PDF) into canonical
transactions using a fixed regex pattern.

Known limitations: only MM/DD/YYYY dates and dollar-style amounts with two
decimals are recognised, and descriptions must sit on the same line as their
date and amount. This is a best-effort adapter, not a layout parser.
"""

import logging
import re

from extractors.financial_rules import Polarity, Transaction
from validators.financial_validator import RawRow, TransactionValidator

logger = logging.getLogger(__name__)


class StatementTextExtractor:
    """
    Extracts transactions from statement text.
    A line may hold zero, one or several transactions.
    """

    # <date> <description> <signed-currency-amount>
    # e.g. "06/01/2025 Coffee Shop -$4.50"
    TRANSACTION_PATTERN = re.compile(
        r'(\d{1,2}/\d{1,2}/\d{4})'    # MM/DD/YYYY
        r'\s+(.+?)'                    # description (lazy)
        r'\s+(-?\$?[\d,]+\.\d{2})'     # amount, optional sign and dollar
    )

    def __init__(self, validator: TransactionValidator = None):
        """Initialize extractor with an optional shared validator."""
        self.validator = validator or TransactionValidator()
        self.stats = {
            "lines_processed": 0,
            "matches_found": 0,
            "transactions_found": 0,
            "rows_skipped": 0
        }

    def extract_transactions(self, text: str) -> list[Transaction]:
        """
        Extract all transactions from statement text.

        Args:
            text: Full statement text

        Returns:
            List of Transaction objects
        """
        if not text or not text.strip():
            logger.warning("Empty text provided for extraction")
            return []

        lines = text.splitlines()
        logger.info(f"Starting extraction from {len(lines)} lines")

        transactions = []
        for line in lines:
            self.stats["lines_processed"] += 1
            for row in self._match_line(line):
                txn = self.validator.to_transaction(row)
                if txn is None:
                    self.stats["rows_skipped"] += 1
                    continue
                transactions.append(txn)
                self.stats["transactions_found"] += 1

        logger.info(
            f"Extraction complete: {self.stats['transactions_found']} transactions found "
            f"from {self.stats['matches_found']} matches, "
            f"{self.stats['rows_skipped']} skipped"
        )

        if not transactions:
            logger.warning(
                f"No transactions found in {len(lines)} lines. "
                "Check that lines follow '<MM/DD/YYYY> <description> <amount>'"
            )

        return transactions

    def _match_line(self, line: str) -> list[RawRow]:
        """Return a raw row for every transaction embedded in a line."""
        rows = []
        for match in self.TRANSACTION_PATTERN.finditer(line):
            date_str, description, amount_str = match.groups()
            self.stats["matches_found"] += 1

            # Polarity comes from the sign of the matched amount only
            polarity = Polarity.DEBIT if amount_str.startswith('-') else Polarity.CREDIT
            rows.append(RawRow(date=date_str, description=description, amount=amount_str, type=polarity))

            logger.debug(f"Matched: {date_str} | {description[:30]} | {amount_str}")

        return rows

    def get_stats(self) -> dict:
        """Get extraction statistics."""
        return self.stats.copy()


def extract_transactions_from_text(text: str) -> list[Transaction]:
    """
    Convenience function to extract transactions from statement text.

    Args:
        text: Statement text

    Returns:
        List of Transaction objects
    """
    extractor = StatementTextExtractor()
    return extractor.extract_transactions(text)

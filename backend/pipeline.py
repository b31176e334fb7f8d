"""
Finbaba Statement Analyzer - Ingestion Pipeline
Selects an extractor by file type, extracts canonical transactions and
aggregates them into a financial summary.
"""

import argparse
import json
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from analytics.aggregator import FinancialSummary, aggregate
from errors import IngestionError, UnsupportedFormatError
from extractors.financial_rules import Transaction
from extractors.regex_extractor import StatementTextExtractor
from extractors.tabular_extractor import TabularExtractor
from loaders.pdf_loader import load_pdf_bytes
from loaders.spreadsheet_loader import load_spreadsheet_rows
from loaders.text_loader import decode_text
from logging_config import get_logger, log_stats, setup_logging
from validators.financial_validator import TransactionValidator

logger = get_logger(__name__)


class SourceFormat(Enum):
    """Declared format of an uploaded statement."""
    CSV = "csv"
    SPREADSHEET = "spreadsheet"
    PDF = "pdf"
    TEXT = "text"

    @classmethod
    def from_filename(cls, filename: str) -> "SourceFormat":
        """
        Map a file name to its format by extension.

        Raises:
            UnsupportedFormatError: If the extension is not handled
        """
        suffix = Path(filename).suffix.lower()
        try:
            return _EXTENSION_FORMATS[suffix]
        except KeyError:
            raise UnsupportedFormatError(
                f"Unsupported file type '{suffix or filename}'. "
                f"Supported: {', '.join(sorted(_EXTENSION_FORMATS))}"
            ) from None

    @classmethod
    def parse(cls, value: Union[str, "SourceFormat"]) -> "SourceFormat":
        """Accept a SourceFormat or its string tag."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise UnsupportedFormatError(f"Unsupported format tag '{value}'") from None


_EXTENSION_FORMATS = {
    ".csv": SourceFormat.CSV,
    ".xlsx": SourceFormat.SPREADSHEET,
    ".xls": SourceFormat.SPREADSHEET,
    ".pdf": SourceFormat.PDF,
    ".txt": SourceFormat.TEXT,
}


@dataclass(frozen=True)
class IngestionResult:
    """Transactions and the summary produced from them by one upload."""
    transactions: tuple
    summary: FinancialSummary

    def to_dict(self) -> dict:
        """Summary fields plus the serialized transactions."""
        data = self.summary.to_dict()
        data["transactions"] = [txn.to_dict() for txn in self.transactions]
        return data


class IngestionPipeline:
    """Main orchestrator for the statement ingestion pipeline."""

    def __init__(self):
        """Initialize pipeline."""
        self.stats = {
            "bytes_read": 0,
            "rows_processed": 0,
            "transactions_extracted": 0,
            "rows_skipped": 0
        }

    def process(self, data: bytes, source_format: Union[str, SourceFormat], source: str = "<upload>") -> IngestionResult:
        """
        Ingest one statement.

        Args:
            data: Raw file bytes
            source_format: Declared format (SourceFormat or its tag)
            source: Name used in log messages

        Returns:
            IngestionResult with the transactions and their summary

        Raises:
            UnsupportedFormatError: If the format is not handled
            UnreadableInputError: If the input cannot be decoded or parsed
        """
        source_format = SourceFormat.parse(source_format)
        self.stats["bytes_read"] = len(data)

        logger.info("=" * 60)
        logger.info(f"Ingesting {source} as {source_format.value} ({len(data)} bytes)")

        # Step 1: Extract transactions
        try:
            transactions = self._extract(data, source_format, source)
        except IngestionError as e:
            logger.error(f"Extraction failed for {source}: {e}")
            raise

        if not transactions:
            logger.warning(f"No transactions found in {source}")

        # Step 2: Aggregate
        summary = aggregate(transactions)

        self._log_summary()
        logger.info("=" * 60)
        return IngestionResult(transactions=tuple(transactions), summary=summary)

    def process_file(self, file_path: Union[str, Path], source_format: Optional[Union[str, SourceFormat]] = None) -> IngestionResult:
        """
        Ingest a statement file, detecting its format from the extension
        unless one is declared.
        """
        path = Path(file_path)
        if source_format is None:
            source_format = SourceFormat.from_filename(path.name)
        return self.process(path.read_bytes(), source_format, source=path.name)

    def _extract(self, data: bytes, source_format: SourceFormat, source: str) -> list[Transaction]:
        validator = TransactionValidator()

        if source_format is SourceFormat.CSV:
            extractor = TabularExtractor(validator)
            transactions = extractor.extract_csv(decode_text(data))
            rows_processed = extractor.stats["rows_processed"]

        elif source_format is SourceFormat.SPREADSHEET:
            extractor = TabularExtractor(validator)
            transactions = extractor.extract_rows(load_spreadsheet_rows(data, source))
            rows_processed = extractor.stats["rows_processed"]

        elif source_format is SourceFormat.PDF:
            extractor = StatementTextExtractor(validator)
            transactions = extractor.extract_transactions(load_pdf_bytes(data, source))
            rows_processed = extractor.stats["matches_found"]

        else:
            extractor = StatementTextExtractor(validator)
            transactions = extractor.extract_transactions(decode_text(data))
            rows_processed = extractor.stats["matches_found"]

        self.stats["rows_processed"] = rows_processed
        self.stats["transactions_extracted"] = len(transactions)
        self.stats["rows_skipped"] = validator.get_stats()["invalid"]
        return transactions

    def _log_summary(self):
        """Log extraction summary."""
        log_stats(logger, "EXTRACTION SUMMARY", self.stats)


def process_statement(data: bytes, source_format: Union[str, SourceFormat]) -> IngestionResult:
    """Convenience function running a fresh pipeline."""
    return IngestionPipeline().process(data, source_format)


def main(argv: Optional[list[str]] = None) -> int:
    """Command-line entry point: print the summary of a statement file as JSON."""
    parser = argparse.ArgumentParser(description="Summarize a bank statement file")
    parser.add_argument("statement", help="CSV, Excel, PDF or text statement")
    parser.add_argument("--format", dest="source_format", choices=[f.value for f in SourceFormat],
                        help="Override format detection by extension")
    parser.add_argument("--transactions", action="store_true", help="Include transactions in the output")
    args = parser.parse_args(argv)

    setup_logging(console_output=False, log_file="statement_analyzer.log")

    statement = Path(args.statement)
    if not statement.exists():
        print(f"Error: file not found: {statement}", file=sys.stderr)
        return 1

    try:
        result = IngestionPipeline().process_file(statement, args.source_format)
    except IngestionError as e:
        logger.error(f"Ingestion failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    output = result.to_dict() if args.transactions else result.summary.to_dict()
    print(json.dumps(output, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())

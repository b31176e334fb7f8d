"""
Spreadsheet Loader Module
Normalizes Excel workbooks (.xlsx, .xls) into header-keyed rows for the
tabular extractor, using pandas.
"""

import io
import logging

import pandas as pd

from errors import UnreadableInputError

logger = logging.getLogger(__name__)


class SpreadsheetLoadError(UnreadableInputError):
    """Custom exception for spreadsheet loading errors."""
    pass


def load_spreadsheet_rows(data: bytes, source: str = "<upload>") -> list[dict]:
    """
    Read the first sheet of a workbook.

    The first row is the header. Empty cells become None.

    Args:
        data: Raw workbook bytes
        source: Name used in log and error messages

    Returns:
        One dict per data row, keyed by header

    Raises:
        SpreadsheetLoadError: If the workbook cannot be read
    """
    if not data:
        raise SpreadsheetLoadError(f"Spreadsheet is empty: {source}")

    try:
        df = pd.read_excel(io.BytesIO(data), sheet_name=0, dtype=object)
    except ImportError:
        # Missing engine (openpyxl/xlrd) is a deployment problem, not bad input
        raise
    except Exception as e:
        logger.error(f"Unable to read spreadsheet {source}: {e}", exc_info=True)
        raise SpreadsheetLoadError(f"Unable to read spreadsheet {source}: {e}") from e

    df = df.dropna(how="all")
    df = df.astype(object).where(pd.notna(df), None)

    logger.info(f"Loaded spreadsheet {source}: {len(df)} rows, columns {list(df.columns)}")
    return df.to_dict(orient="records")

"""
Validators Module - Row validation and canonical transaction building.
"""

from .financial_validator import (
    RawRow,
    TransactionValidator,
    clean_description,
    parse_date,
    validate_rows
)

__all__ = [
    'RawRow',
    'TransactionValidator',
    'clean_description',
    'parse_date',
    'validate_rows',
]

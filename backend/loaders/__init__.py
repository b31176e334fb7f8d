"""
Loaders Module - Turning uploaded bytes into text or rows.
"""

from .pdf_loader import (
    load_pdf,
    load_pdf_bytes,
    PDFLoadError
)

from .spreadsheet_loader import (
    load_spreadsheet_rows,
    SpreadsheetLoadError
)

from .staging import staged_upload

from .text_loader import (
    decode_text,
    TextDecodeError
)

__all__ = [
    'load_pdf',
    'load_pdf_bytes',
    'PDFLoadError',
    'load_spreadsheet_rows',
    'SpreadsheetLoadError',
    'staged_upload',
    'decode_text',
    'TextDecodeError',
]

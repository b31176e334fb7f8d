"""
Ingestion error taxonomy.
Errors that fail a whole upload. Row-level problems are never raised;
the row validator skips them instead.
"""


class IngestionError(Exception):
    """Base exception for a failed statement ingestion."""
    pass


class UnsupportedFormatError(IngestionError):
    """Declared file type is not handled by any extractor."""
    pass


class UnreadableInputError(IngestionError):
    """Input cannot be decoded or parsed at the structural level."""
    pass

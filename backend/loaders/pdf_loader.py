"""
PDF Loader Module
Extracts the text layer from multi-page bank statement PDFs using PyMuPDF (fitz).
"""

import fitz  # PyMuPDF
import logging
from pathlib import Path

from errors import UnreadableInputError

logger = logging.getLogger(__name__)


class PDFLoadError(UnreadableInputError):
    """Custom exception for PDF loading errors."""
    pass


def _extract_text(doc, source: str) -> str:
    """Join the text of every page that has any."""
    if doc.page_count == 0:
        logger.error(f"PDF has no pages: {source}")
        raise PDFLoadError(f"PDF has no pages: {source}")

    logger.info(f"Loading PDF: {source} ({doc.page_count} pages)")

    text_chunks = []
    empty_pages = 0

    for page_num in range(doc.page_count):
        text = doc[page_num].get_text()
        if text.strip():
            text_chunks.append(text)
            logger.debug(f"Page {page_num + 1}: extracted {len(text)} characters")
        else:
            empty_pages += 1
            logger.warning(f"Page {page_num + 1}: empty or no extractable text")

    combined_text = "\n".join(text_chunks)

    logger.info(
        f"Extraction complete: {len(combined_text)} characters from "
        f"{len(text_chunks)} pages ({empty_pages} empty pages skipped)"
    )
    return combined_text


def load_pdf_bytes(data: bytes, source: str = "<upload>") -> str:
    """
    Extract text from all pages of an in-memory PDF.

    Args:
        data: Raw PDF bytes
        source: Name used in log and error messages

    Returns:
        Combined text from all pages; empty when no page has a text layer

    Raises:
        PDFLoadError: If the PDF cannot be opened or read
    """
    if not data:
        raise PDFLoadError(f"PDF is empty: {source}")

    doc = None
    try:
        doc = fitz.open(stream=data, filetype="pdf")
        return _extract_text(doc, source)

    except PDFLoadError:
        raise

    except fitz.FileDataError as e:
        logger.error(f"Invalid or corrupted PDF file: {source}", exc_info=True)
        raise PDFLoadError(f"Invalid or corrupted PDF file: {source}") from e

    except Exception as e:
        logger.error(f"Unexpected error loading PDF {source}: {e}", exc_info=True)
        raise PDFLoadError(f"Failed to load PDF {source}: {str(e)}") from e

    finally:
        if doc is not None:
            doc.close()
            logger.debug(f"PDF document closed: {source}")


def load_pdf(file_path: str) -> str:
    """
    Extract text from all pages of a PDF file.

    Args:
        file_path: Path to the PDF file

    Returns:
        Combined text from all pages as a single string

    Raises:
        PDFLoadError: If the PDF cannot be loaded or read
    """
    pdf_path = Path(file_path)
    if not pdf_path.exists():
        logger.error(f"PDF file not found: {file_path}")
        raise PDFLoadError(f"PDF file not found: {file_path}")

    return load_pdf_bytes(pdf_path.read_bytes(), source=str(file_path))

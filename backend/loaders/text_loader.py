"""
Text Loader Module
Decodes uploaded CSV and statement-text bytes.
"""

import logging
from typing import Optional, Sequence

from config import config
from errors import UnreadableInputError

logger = logging.getLogger(__name__)


class TextDecodeError(UnreadableInputError):
    """Raised when no configured encoding can decode the input."""
    pass


def decode_text(data: bytes, encodings: Optional[Sequence[str]] = None) -> str:
    """
    Decode bytes with the first encoding that succeeds.

    Args:
        data: Raw file bytes
        encodings: Encodings to try in order (default: Config.TEXT_ENCODINGS)

    Returns:
        Decoded text

    Raises:
        TextDecodeError: If every encoding fails
    """
    if encodings is None:
        encodings = config.TEXT_ENCODINGS

    for encoding in encodings:
        try:
            text = data.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            logger.debug(f"Could not decode input as {encoding}")
            continue
        logger.info(f"Decoded {len(data)} bytes as {encoding}")
        return text

    raise TextDecodeError(f"Unable to decode input with any of: {', '.join(encodings)}")

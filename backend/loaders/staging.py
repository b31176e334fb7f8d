"""
Upload staging.
Uploaded statements are written to a temporary file for the duration of
extraction and always deleted afterwards.
"""

import logging
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from config import config

logger = logging.getLogger(__name__)


@contextmanager
def staged_upload(content: bytes, suffix: str = "", directory: Optional[Path] = None) -> Iterator[Path]:
    """
    Stage upload bytes on disk.

    Args:
        content: Uploaded file bytes
        suffix: File extension to keep (e.g. ".pdf")
        directory: Staging directory (default: Config.UPLOAD_DIR)

    Yields:
        Path of the staged file, removed on every exit path
    """
    if directory is None:
        config.ensure_directories()
        directory = config.UPLOAD_DIR

    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix, dir=directory) as tmp_file:
        tmp_file.write(content)
        staged_path = Path(tmp_file.name)

    logger.debug(f"Staged upload at {staged_path} ({len(content)} bytes)")
    try:
        yield staged_path
    finally:
        staged_path.unlink(missing_ok=True)
        logger.debug(f"Removed staged upload {staged_path}")

"""
Text extraction for uploaded files.

Only markdown and plain-text uploads are read. PDF and Word files are
accepted by the upload filter, but their content is not extracted and an
empty string is returned for them.
"""

import logging
from pathlib import Path
from typing import Union

from intake.models.document import FileType

logger = logging.getLogger(__name__)


class DocumentReadError(Exception):
    """Raised when an uploaded file cannot be read as text."""
    pass


def detect_file_type(file_name: str) -> FileType:
    """
    Derive the file type from the file name extension.

    Unknown or missing extensions are treated as plain text.
    """
    extension = Path(file_name).suffix.lower().lstrip(".")
    try:
        return FileType(extension)
    except ValueError:
        return FileType.TEXT


def read_text(file_name: str, content: Union[bytes, str]) -> str:
    """
    Read the text of an uploaded file.

    Args:
        file_name: Original file name, used for the file type
        content: Raw bytes of the upload, or already-decoded text

    Returns:
        Decoded text ("" for binary formats)

    Raises:
        DocumentReadError: If text content cannot be decoded
    """
    file_type = detect_file_type(file_name)

    if not file_type.is_text:
        logger.warning(f"Content extraction not supported for {file_type.value} files: {file_name}")
        return ""

    if isinstance(content, str):
        return content

    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        logger.error(f"Error decoding {file_name}: {e}")
        raise DocumentReadError(f"Could not read {file_name} as UTF-8 text: {e}")


def read_file(path: Union[str, Path]) -> bytes:
    """Read raw bytes from disk, wrapping I/O errors in DocumentReadError."""
    path = Path(path)
    try:
        return path.read_bytes()
    except OSError as e:
        logger.error(f"Error reading file {path}: {e}")
        raise DocumentReadError(f"Could not read {path}: {e}")

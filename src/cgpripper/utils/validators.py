"""
Argument Validation Utilities

Validates the values given to the rip command before any network call is
made.
"""

import re
from typing import Tuple, Optional

from ..core.errors import InvalidArgumentError


QUALITY_TIERS = (1, 2, 3, 4)

BOOK_ID_PATTERN = re.compile(r'^[A-Za-z0-9_-]+$')


def validate_page_count(value: Optional[str]) -> int:
    """
    Parse the --pages value.

    Returns:
        The page count as a positive integer

    Raises:
        InvalidArgumentError: missing, not an integer, or below 1
    """
    if value is None:
        raise InvalidArgumentError("Invalid page count. Use --pages <number>")
    try:
        pages = int(str(value).strip())
    except ValueError:
        raise InvalidArgumentError(f"Invalid page count '{value}'. Use --pages <number>") from None
    if pages < 1:
        raise InvalidArgumentError(f"Page count must be at least 1, got {pages}")
    return pages


def validate_quality(value) -> int:
    """
    Parse the --quality value.

    Raises:
        InvalidArgumentError: not one of 1, 2, 3 or 4
    """
    try:
        quality = int(str(value).strip())
    except ValueError:
        raise InvalidArgumentError("Quality must be between 1 and 4") from None
    if quality not in QUALITY_TIERS:
        raise InvalidArgumentError("Quality must be between 1 and 4")
    return quality


def validate_book_id(book_id: str) -> Tuple[bool, str]:
    """
    Check that a book id is safe to use in URLs and file names.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not book_id or not isinstance(book_id, str):
        return False, "Book ID cannot be empty"
    if not BOOK_ID_PATTERN.match(book_id):
        return False, f"Book ID may only contain letters, digits, '-' or '_', got '{book_id}'"
    return True, ""


def validate_concurrency(value: Optional[str]) -> Optional[int]:
    """Parse --max-concurrency; None means no limit."""
    if value is None:
        return None
    try:
        limit = int(str(value).strip())
    except ValueError:
        raise InvalidArgumentError(f"Invalid concurrency limit '{value}'") from None
    if limit < 1:
        raise InvalidArgumentError("Concurrency limit must be at least 1")
    return limit

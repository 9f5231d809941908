"""
Field validation and normalization for book payloads.
"""

import re
from datetime import datetime
from typing import Tuple

import structlog
from dateutil import parser as date_parser

from api.models import BookPayload

logger = structlog.get_logger(__name__)

# Checked in this order; the first missing field wins.
REQUIRED_FIELDS = (
    ("title", "Missing Book Title"),
    ("author", "Missing Book Author"),
    ("publishedDate", "Missing Book Published Date"),
    ("summary", "Missing Book Summary"),
)

# Fills in the month and day when only a year (or year and month) is given.
_DATE_DEFAULTS = datetime(2000, 1, 1)

_BOOK_ID_PATTERN = re.compile(r"[0-9]+")


class InvalidBookId(ValueError):
    """Raised when a path id is not a non-negative decimal integer."""

    def __init__(self):
        super().__init__("Invalid book ID")


def verify_book_fields(payload: BookPayload) -> Tuple[bool, str]:
    """
    Check that all required book fields are present and non-empty.

    Args:
        payload: Candidate book data

    Returns:
        ``(True, "")`` when complete, otherwise ``(False, message)`` naming
        the first missing field.
    """
    for field_name, message in REQUIRED_FIELDS:
        if not getattr(payload, field_name):
            return False, message
    return True, ""


def normalize_published_date(value: str) -> str:
    """
    Return a published date as YYYY-MM-DD.

    Accepts ISO-8601 dates and date-times as well as looser forms such as
    ``March 1, 1969``, ``01/02/1961`` or a bare year. Values that cannot be
    read as a date are returned unchanged.
    """
    try:
        parsed = date_parser.parse(value.strip(), default=_DATE_DEFAULTS)
    except (ValueError, OverflowError):
        logger.debug("Published date kept as given", published_date=value)
        return value
    return parsed.date().isoformat()


def parse_book_id(raw: str) -> int:
    """Parse a path id as a non-negative decimal integer."""
    if not _BOOK_ID_PATTERN.fullmatch(raw or ""):
        raise InvalidBookId()
    return int(raw)

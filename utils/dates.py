"""Date parsing and formatting for exercise log queries."""

import re
from datetime import date, datetime
from typing import Optional

ISO_DATE_PATTERN = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")
DISPLAY_DATE_FORMAT = "%a %b %d %Y"

# Sentinels for a missing or unreadable bound
UNBOUNDED_FROM = date.min
UNBOUNDED_TO = date.max


def parse_date(text: Optional[str]) -> Optional[date]:
    """Parse a strict ``YYYY-MM-DD`` string into a date.

    Returns None for anything that is not a real calendar date in that exact
    form ("2020-1-1", "2020-02-30", "garbage", "" and None all give None).
    """
    if not isinstance(text, str):
        return None
    text = text.strip()
    if not ISO_DATE_PATTERN.match(text):
        return None
    try:
        return datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError:
        return None


def normalize_from(text: Optional[str]) -> date:
    """Lower query bound; absent or malformed means no lower bound."""
    parsed = parse_date(text)
    return parsed if parsed is not None else UNBOUNDED_FROM


def normalize_to(text: Optional[str]) -> date:
    """Upper query bound; absent or malformed means no upper bound."""
    parsed = parse_date(text)
    return parsed if parsed is not None else UNBOUNDED_TO


def format_display_date(value: date) -> str:
    """Format a date like ``Mon Jan 01 2020``."""
    return value.strftime(DISPLAY_DATE_FORMAT)


def to_storage_datetime(value: date) -> datetime:
    """MongoDB has no date-only type, so dates are stored at midnight."""
    return datetime.combine(value, datetime.min.time())


def from_storage_datetime(value) -> date:
    """Inverse of to_storage_datetime; tolerates documents already holding a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    parsed = parse_date(str(value)[:10])
    if parsed is None:
        raise ValueError(f"Unreadable stored date: {value!r}")
    return parsed

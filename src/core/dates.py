"""Date key helpers for the day-bucket store.

Day buckets are keyed by ISO calendar dates (``YYYY-MM-DD``). Lexicographic order
of valid keys is chronological order, which the analytics rely on.
"""

import re
from collections.abc import Iterable
from datetime import date, datetime

from dateutil import parser as dateutil_parser

from src.core.config import constants


_DATE_KEY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class InvalidDateKeyError(ValueError):
    """Raised when a string is not a valid YYYY-MM-DD date key."""


def format_date_key(value: date | datetime) -> str:
    """Format a date (or the date part of a datetime) as a bucket key."""
    if isinstance(value, datetime):
        value = value.date()
    return value.strftime(constants.DATE_KEY_FORMAT)


def parse_date_key(key: str) -> date:
    """Parse a bucket key into a date.

    Raises:
        InvalidDateKeyError: If the key is not a real calendar date in YYYY-MM-DD form
    """
    if not isinstance(key, str) or not _DATE_KEY_RE.match(key):
        raise InvalidDateKeyError(f"Invalid date key: {key!r}. Expected YYYY-MM-DD")
    try:
        return dateutil_parser.isoparse(key).date()
    except ValueError as e:
        raise InvalidDateKeyError(f"Invalid date key: {key!r}. {e}") from e


def validate_date_key(key: str) -> str:
    """Return the key unchanged if valid, raising InvalidDateKeyError otherwise."""
    parse_date_key(key)
    return key


def weekday_label(key: str) -> str:
    """Short English weekday label (Mon..Sun) for a bucket key."""
    return constants.WEEKDAY_LABELS[parse_date_key(key).weekday()]


def most_recent_keys(keys: Iterable[str], limit: int) -> list[str]:
    """Return the last ``limit`` keys in ascending order."""
    if limit <= 0:
        return []
    return sorted(keys)[-limit:]

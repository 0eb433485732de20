"""
Pure normalizers applied to Event fields at write time.

- derive_slug: title -> URL-safe slug
- normalize_date: free-form date -> YYYY-MM-DD
- normalize_time: 24-hour or 12-hour clock -> HH:MM (24-hour)
"""

import re
from datetime import datetime

from dateutil import parser as date_parser

from devevent.core.errors import InvalidDateError, InvalidTimeError, SlugDerivationError

_SLUG_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")

_TWENTY_FOUR_HOUR = re.compile(r"([01]?[0-9]|2[0-3]):([0-5][0-9])")
_TWELVE_HOUR = re.compile(r"(0?[1-9]|1[0-2]):([0-5][0-9])\s?(AM|PM)", re.IGNORECASE)

_FILL_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def derive_slug(title: str) -> str:
    slug = _SLUG_DISALLOWED.sub("", title.lower().strip())
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHENS.sub("-", slug).strip("-")

    if not slug:
        raise SlugDerivationError()
    return slug


def normalize_date(raw: str) -> str:
    """
    Parse any representation dateutil understands and keep the calendar date.

    Input must name a year, month and day; a time or weekday alone is
    rejected. Time of day and zone offsets are discarded without shifting
    the date.
    """
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidDateError("Event date is required")

    # Components missing from the input would be filled from `default`;
    # two different defaults only agree when the input names a full date
    try:
        first, second = (
            date_parser.parse(raw.strip(), default=default).date()
            for default in _FILL_DEFAULTS
        )
    except (ValueError, OverflowError) as e:
        raise InvalidDateError() from e

    if first != second:
        raise InvalidDateError()
    return first.isoformat()


def normalize_time(raw: str) -> str:
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidTimeError("Event time is required")

    trimmed = raw.strip()

    match = _TWENTY_FOUR_HOUR.fullmatch(trimmed)
    if match:
        hours, minutes = match.groups()
        return f"{int(hours):02d}:{minutes}"

    match = _TWELVE_HOUR.fullmatch(trimmed)
    if match:
        hours = int(match.group(1))
        minutes = match.group(2)
        if hours == 12:
            hours = 0
        if match.group(3).upper() == "PM":
            hours += 12
        return f"{hours:02d}:{minutes}"

    raise InvalidTimeError()

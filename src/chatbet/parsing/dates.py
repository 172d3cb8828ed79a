"""Event date parsing with year inference."""

from __future__ import annotations

import re
from datetime import datetime, timezone

from chatbet.errors import InvalidDateError, InvalidWriteinDateError

SUPPORTED_FORMATS = "YYYY-MM-DD, MM/DD/YYYY, YYYY/MM/DD, MM-DD-YYYY, MM/DD, MM-DD"

_YEAR_FIRST_RE = re.compile(r"^(\d{4})[/-](\d{1,2})[/-](\d{1,2})$")
_YEAR_LAST_RE = re.compile(r"^(\d{1,2})[/-](\d{1,2})[/-](\d{4})$")
_SHORT_YEAR_RE = re.compile(r"^(\d{1,2})[/-](\d{1,2})[/-](\d{2})$")
_NO_YEAR_RE = re.compile(r"^(\d{1,2})[/-](\d{1,2})$")

# Anything shaped like a date, used to spot positional dates in a leg.
DATE_TOKEN_RE = re.compile(r"^\d{1,4}[/-]\d{1,2}(?:[/-]\d{2,4})?$")


def looks_like_date(token: str) -> bool:
    return bool(DATE_TOKEN_RE.match(token))


def _split(text: str, reference: datetime) -> tuple[int, int, int] | None:
    match = _YEAR_FIRST_RE.match(text)
    if match:
        return int(match.group(1)), int(match.group(2)), int(match.group(3))
    match = _YEAR_LAST_RE.match(text)
    if match:
        return int(match.group(3)), int(match.group(1)), int(match.group(2))
    match = _SHORT_YEAR_RE.match(text)
    if match:
        return 2000 + int(match.group(3)), int(match.group(1)), int(match.group(2))
    match = _NO_YEAR_RE.match(text)
    if match:
        month, day = int(match.group(1)), int(match.group(2))
        year = reference.year
        try:
            candidate = datetime(year, month, day).date()
        except ValueError:
            # Validated below with the proper error message.
            return year, month, day
        if candidate < reference.date():
            year += 1
        return year, month, day
    return None


def parse_event_date(
    text: str,
    raw_input: str,
    reference: datetime,
    writein: bool = False,
) -> datetime:
    """Parse an event date into a UTC-midnight ``datetime``.

    Dates without a year resolve to the nearest occurrence on or after the
    reference day.
    """

    error_class = InvalidWriteinDateError if writein else InvalidDateError
    cleaned = text.strip()
    if not cleaned:
        raise error_class(raw_input, text, "Date cannot be empty")

    parts = _split(cleaned, reference)
    if parts is None:
        raise error_class(raw_input, text, f"Unable to parse date. Supported formats: {SUPPORTED_FORMATS}")

    year, month, day = parts
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        raise error_class(raw_input, text, f"Unable to parse date. Supported formats: {SUPPORTED_FORMATS}")
    try:
        return datetime(year, month, day, tzinfo=timezone.utc)
    except ValueError:
        raise error_class(
            raw_input, text, "Invalid calendar date (e.g., February 30th doesn't exist)"
        ) from None

"""Scalar coercion helpers for date-like and decimal-like values.

None of these functions raise: unparseable input yields None.
"""

import math
import re
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Optional

# Fractional seconds of any length, followed by an optional UTC offset
_FRACTION = re.compile(r"(T\d{2}:\d{2}:\d{2})\.(\d+)(?=[+-]\d{2}:?\d{2}$|$)")


def _pad_fraction(match: "re.Match[str]") -> str:
    digits = match.group(2)[:6].ljust(6, "0")
    return f"{match.group(1)}.{digits}"


def _fromisoformat(text: str) -> Optional[datetime]:
    # Python < 3.11 accepts neither a trailing "Z" nor fractions other than 3 or 6 digits
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(_pad_fraction, text, count=1)
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 string into a datetime.

    A plain date string ("2024-01-15") yields midnight of that day.
    Fractional seconds may have any number of digits; beyond microseconds
    they are truncated. Existing datetime/date objects pass through (a date
    is promoted to midnight). Anything else, including blank or malformed
    strings, returns None.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        return None
    return _fromisoformat(value.strip())


def _calendar_date(value: datetime) -> date:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.date()


def parse_date(value: Any) -> Optional[date]:
    """Parse an ISO-8601 string into a date.

    Accepts full timestamps too ("2024-01-15T10:00:00Z"). A timestamp with
    an offset yields its UTC calendar date; a naive one keeps its own.
    """
    if isinstance(value, datetime):
        return _calendar_date(value)
    if isinstance(value, date):
        return value
    parsed = parse_datetime(value)
    if parsed is None:
        return None
    return _calendar_date(parsed)


def parse_decimal(value: Any) -> Optional[str]:
    """Return a decimal-like value as a string without losing precision.

    Strings are returned exactly as given (no float round trip). Numeric
    input uses its exact textual form: ``repr`` for floats (shortest
    round-tripping representation, so 123.45 gives "123.45"), ``str`` for
    ints and Decimals. Booleans, non-finite numbers, blank strings and
    other types return None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return repr(value)
    if isinstance(value, Decimal):
        if not value.is_finite():
            return None
        return str(value)
    if isinstance(value, str) and value.strip():
        return value
    return None

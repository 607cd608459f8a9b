"""Lenient field parsing - Pure functions.

The source page is hand-maintained HTML, so numeric and date cells are
parsed leniently. Parse failures are represented explicitly rather than
raising, and callers decide how to treat an unparsed value.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from zoneinfo import ZoneInfo

from dateutil import parser


# Leading decimal literal, e.g. "12.5" in "12.5 km" or "-.5" in "-.5N"
_LEADING_NUMBER = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True)
class ParsedNumber:
    """Result of a lenient numeric parse.

    Attributes:
        value: Parsed value, or None if the text held no leading number
    """
    value: float | None

    @property
    def ok(self) -> bool:
        """True if a number was parsed."""
        return self.value is not None

    def or_zero(self) -> float:
        """Return the parsed value, or 0.0 if parsing failed."""
        return self.value if self.value is not None else 0.0


def parse_number(text: str | None) -> ParsedNumber:
    """Parse the leading decimal number of a text cell.

    Pure function. Surrounding whitespace is ignored and trailing text such
    as units is discarded, so "015 km" parses to 15.0.

    Args:
        text: Raw cell text

    Returns:
        ParsedNumber, with value None if no leading number was found
    """
    if text is None:
        return ParsedNumber(None)

    match = _LEADING_NUMBER.match(text.strip())
    if match is None:
        return ParsedNumber(None)

    return ParsedNumber(float(match.group(0)))


def parse_occurred_at(
    date_text: str,
    time_text: str,
    timezone_name: str = "Asia/Manila",
) -> int | None:
    """Combine date and time cells into epoch milliseconds.

    Pure function. Both cells are parsed independently with dateutil and
    combined; the result is interpreted in the source's local timezone.

    Args:
        date_text: Date cell, e.g. "15 January 2024"
        time_text: Time cell, e.g. "10:30 PM"
        timezone_name: IANA timezone the source reports times in

    Returns:
        Epoch milliseconds, or None if either cell cannot be parsed
    """
    if not date_text or not time_text:
        return None

    try:
        date_seed = parser.parse(date_text)
        hour_seed = parser.parse(time_text)
    except (ValueError, OverflowError):
        return None

    occurred_at = datetime(
        date_seed.year,
        date_seed.month,
        date_seed.day,
        hour_seed.hour,
        hour_seed.minute,
        hour_seed.second,
        hour_seed.microsecond,
        tzinfo=ZoneInfo(timezone_name),
    )

    return int(occurred_at.timestamp() * 1000)

"""Numeric text normalization for scraped counters.

GitHub renders counters as display text ("1,234", "150 stars today").
These helpers turn that text into integers and never raise.
"""

import re
from typing import Final

_NUMBER_RE: Final = re.compile(r"[\d,.]+")
_LEADING_DIGITS_RE: Final = re.compile(r"\d+")
_STARS_TODAY_RE: Final = re.compile(r"(\d+(?:,\d+)*)\s+stars?\s+today", re.IGNORECASE)


def parse_number(text: str | None) -> int:
    """Parse the first number in a display string.

    Thousands separators are dropped and only the integer part is kept,
    so "1,234" gives 1234 and "1.5" gives 1.

    Args:
        text: Raw counter text

    Returns:
        Parsed integer, or 0 when nothing parseable is found
    """
    if not text:
        return 0

    match = _NUMBER_RE.search(text.replace(",", "").strip())
    if not match:
        return 0

    digits = _LEADING_DIGITS_RE.match(match.group(0).replace(",", ""))
    return int(digits.group(0)) if digits else 0


def extract_stars_today(text: str | None) -> int:
    """Extract the "<n> stars today" counter from a stats line.

    Args:
        text: Text that may contain e.g. "1,234 stars today" or "1 star today"

    Returns:
        Star count, or 0 if the phrase is absent
    """
    if not text:
        return 0

    match = _STARS_TODAY_RE.search(text)
    if not match:
        return 0

    return parse_number(match.group(1))

"""Publication date normalization for PubMed PubDate fragments."""

from __future__ import annotations

import re

_MONTHS: dict[str, str] = {
    "Jan": "01",
    "Feb": "02",
    "Mar": "03",
    "Apr": "04",
    "May": "05",
    "Jun": "06",
    "Jul": "07",
    "Aug": "08",
    "Sep": "09",
    "Oct": "10",
    "Nov": "11",
    "Dec": "12",
}

_DEFAULT = "01"
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def month_to_number(token: str | None) -> str:
    """Map a month abbreviation ("Mar") or number ("3") to a two-digit string.

    Anything else falls back to "01" so bad month data never drops a record.
    """
    if not token:
        return _DEFAULT
    if token in _MONTHS:
        return _MONTHS[token]

    # Leading-integer parse: "3rd" and "3.0" both read as 3.
    match = _LEADING_INT.match(token)
    if match is None:
        return _DEFAULT
    number = int(match.group(1))

    if 1 <= number <= 12:
        return f"{number:02d}"
    return _DEFAULT


def format_day(token: str | None) -> str:
    value = token.strip() if token else ""
    if not value:
        return _DEFAULT
    return value.zfill(2)


def format_publication_date(
    year: str | None, month: str | None = None, day: str | None = None
) -> str | None:
    """Return YYYY-MM-DD, or None when the year is missing."""
    year = year.strip() if year else ""
    if not year:
        return None
    return f"{year}-{month_to_number(month)}-{format_day(day)}"

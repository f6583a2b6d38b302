"""
Date normalization.

The listing and the detail pages write dates by hand, e.g.

    "10 Dec 2025"
    "10 Dec 2025 -  14 Dec 2025"
    "On-Demand"

Everything is converted to a 6-character key ``YYMMDD``. Keys of the same
century sort lexicographically in chronological order, so comparing two
dates is a plain string comparison.

Nothing in this module raises on bad input: text that cannot be read is
reported as on-demand (or as an empty key) and left for the enrichment step.
"""

from __future__ import annotations

import re
from datetime import date, timedelta
from typing import Optional, Tuple

from rhythmsfeed.model import Dated, DateState, ON_DEMAND


MONTHS = {
    "Jan": "01", "Feb": "02", "Mar": "03", "Apr": "04",
    "May": "05", "Jun": "06", "Jul": "07", "Aug": "08",
    "Sep": "09", "Oct": "10", "Nov": "11", "Dec": "12",
}

# Sentinel month for three-letter tokens that are not in MONTHS
UNKNOWN_MONTH = "00"

ON_DEMAND_TOKEN = "on-demand"

_SINGLE_RE = re.compile(r"^(\d{1,2})\s+(\w{3})\s+(\d{4})$")
_RANGE_RE = re.compile(r"^(.+?)\s+-\s+(.+)$")

# Patterns used to find dates inside free page text
_MONTH_ALT = "|".join(MONTHS)
_TOKEN = rf"\d{{1,2}}\s+(?:{_MONTH_ALT})\s+\d{{4}}"
_TEXT_RANGE_RE = re.compile(rf"({_TOKEN})\s*-\s*({_TOKEN})")
_TEXT_SINGLE_RE = re.compile(rf"({_TOKEN})")

_KEY_RE = re.compile(r"^\d{6}$")


def normalize_single(text: Optional[str]) -> str:
    """
    Convert one "D Mon YYYY" token into a YYMMDD key.

    Returns "" if the text is not a single date token.
    """
    if not text:
        return ""

    match = _SINGLE_RE.match(text.strip())
    if not match:
        return ""

    day, month, year = match.groups()
    return f"{year[2:]}{MONTHS.get(month, UNKNOWN_MONTH)}{day.zfill(2)}"


def normalize_range(text: Optional[str]) -> DateState:
    """
    Convert the text of a dates cell into a date state.

    - "on-demand" (any case), blank or unreadable text -> ON_DEMAND
    - "A - B" -> Dated(A, B) if both sides are dates
    - "A" -> Dated(A, A)
    """
    if not text:
        return ON_DEMAND

    raw = text.strip()
    if not raw or raw.lower() == ON_DEMAND_TOKEN:
        return ON_DEMAND

    range_match = _RANGE_RE.match(raw)
    if range_match:
        date_from = normalize_single(range_match.group(1))
        date_to = normalize_single(range_match.group(2))
        if date_from and date_to:
            return Dated(date_from, date_to)
        return ON_DEMAND

    single = normalize_single(raw)
    if single:
        return Dated(single, single)

    return ON_DEMAND


def find_date_range(text: Optional[str]) -> Optional[Tuple[str, str]]:
    """
    Search free text (e.g. a detail page body) for the first date range.

    Falls back to the first single date, returned as (date, date).
    The returned tokens are still in "D Mon YYYY" form.
    """
    if not text:
        return None

    range_match = _TEXT_RANGE_RE.search(text)
    if range_match:
        return range_match.group(1), range_match.group(2)

    single_match = _TEXT_SINGLE_RE.search(text)
    if single_match:
        return single_match.group(1), single_match.group(1)

    return None


def to_key(d: date) -> str:
    return d.strftime("%y%m%d")


def yesterday_key(today: Optional[date] = None) -> str:
    """
    Key of the day before ``today`` (local date by default).

    Used as the cutoff below which an event counts as past.
    """
    base = today if today is not None else date.today()
    return to_key(base - timedelta(days=1))


def is_date_key(value: Optional[str]) -> bool:
    return bool(value) and bool(_KEY_RE.match(value))

"""
Date and date-range recognition for résumé entries.

Dates are normalized to ``YYYY-MM``. A bare year becomes January when it
opens a range and December when it closes one.
"""

import re
from typing import List, NamedTuple, Optional, Tuple


MONTHS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}

_MONTH = (
    r"(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|"
    r"aug(?:ust)?|sept?(?:ember)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)\.?"
)
_YEAR = r"(?:19|20)\d{2}"
_MONTH_NUMBER = r"(?:0?[1-9]|1[0-2])"

DATE_TOKEN = (
    rf"(?:\b{_MONTH},?\s*{_YEAR}\b"
    rf"|\b{_MONTH_NUMBER}[/.-]{_YEAR}\b"
    rf"|\b{_YEAR}[/.-]{_MONTH_NUMBER}\b(?![/.-]\d)"
    rf"|\b{_YEAR}\b)"
)
PRESENT = r"(?:present|current(?:ly)?|now|ongoing|today|date)"
RANGE_SEPARATOR = r"\s*(?:-|–|—|‒|~|\bto\b|\buntil\b|\btill\b|\bthrough\b)\s*"

DATE_TOKEN_RE = re.compile(DATE_TOKEN, re.IGNORECASE)
DATE_RANGE_RE = re.compile(
    rf"(?P<start>{DATE_TOKEN}){RANGE_SEPARATOR}(?P<end>{DATE_TOKEN}|\b{PRESENT}\b)",
    re.IGNORECASE,
)
PRESENT_RE = re.compile(rf"^{PRESENT}$", re.IGNORECASE)

_LEFTOVER_SEPARATORS = " \t|•·,;:–—-/~"


class DateRange(NamedTuple):
    """A recognized date range (or single date) and where it sits in the line."""
    start: Optional[str]
    end: Optional[str]
    is_current: bool
    span: Tuple[int, int]


def normalize_date(token: str, is_end: bool = False) -> Optional[str]:
    """
    Convert a date token to ``YYYY-MM``.

    Args:
        token: Text matched by ``DATE_TOKEN_RE``
        is_end: Whether the token closes a range (affects bare years)

    Returns:
        Normalized date, or None when the token holds no usable date
    """
    token = token.strip().lower()
    year_match = re.search(_YEAR, token)
    if not year_match:
        return None
    year = int(year_match.group())

    name_match = re.match(r"[a-z]+", token)
    if name_match:
        month = MONTHS.get(name_match.group()[:3])
    else:
        numbers = re.findall(r"\d+", token)
        if len(numbers) == 2:
            first, second = numbers
            month = int(second) if len(first) == 4 else int(first)
        else:
            month = 12 if is_end else 1

    if not month or not 1 <= month <= 12:
        return None
    return f"{year:04d}-{month:02d}"


def find_date_range(text: str) -> Optional[DateRange]:
    """Find the first date range in a line."""
    match = DATE_RANGE_RE.search(text)
    if not match:
        return None

    start = normalize_date(match.group("start"))
    end_text = match.group("end")
    if PRESENT_RE.match(end_text.strip()):
        return DateRange(start, None, True, match.span())
    return DateRange(start, normalize_date(end_text, is_end=True), False, match.span())


def find_dates(text: str) -> List[Tuple[str, Tuple[int, int]]]:
    """Find every standalone date token in a line, normalized, with spans."""
    found = []
    for match in DATE_TOKEN_RE.finditer(text):
        normalized = normalize_date(match.group())
        if normalized:
            found.append((normalized, match.span()))
    return found


def strip_dates(text: str) -> str:
    """
    Remove date ranges and date tokens from a line.

    Separators left dangling at either end are trimmed, as are empty
    brackets.
    """
    text = DATE_RANGE_RE.sub(" ", text)
    text = DATE_TOKEN_RE.sub(" ", text)
    text = re.sub(r"[(\[]\s*[)\]]", " ", text)
    text = re.sub(r"\s{2,}", " ", text)
    return text.strip(_LEFTOVER_SEPARATORS)

"""
Contact token recognition: e-mail, phone, profile links and locations.
"""

import re
from typing import List, NamedTuple

from email_validator import EmailNotValidError, validate_email

from ..config.vocabulary import COUNTRIES, REMOTE_WORDS
from .dates import DATE_RANGE_RE, DATE_TOKEN_RE


EMAIL_RE = re.compile(r"[A-Za-z0-9._%+\-]+@[A-Za-z0-9.\-]+\.[A-Za-z]{2,}")
PHONE_RE = re.compile(r"(?<![\w/])\+?\(?\d[\d\s().\-]{5,}\d(?![\w/])")
LINKEDIN_RE = re.compile(
    r"(?:https?://)?(?:[a-z]{2,3}\.)?linkedin\.com/(?:in|pub)/([A-Za-z0-9_%\-]+)/?",
    re.IGNORECASE,
)
GITHUB_RE = re.compile(r"(?:https?://)?(?:www\.)?github\.com/([A-Za-z0-9\-]+)/?", re.IGNORECASE)
URL_RE = re.compile(r"(?:https?://|www\.)[^\s<>\"'|,]+", re.IGNORECASE)

LOCATION_RE = re.compile(
    r"^[A-Z][\w.'\-]*(?:\s[A-Z][\w.'\-]*){0,3},\s*(?P<region>[A-Za-z .]+?)"
    r"(?:\s+\d{5}(?:-\d{4})?)?$"
)

PHONE_ALLOWED_RE = re.compile(r"^\+?[\d\s().\-]+$")


class ContactToken(NamedTuple):
    """A contact detail found in a line."""
    kind: str
    value: str
    start: int
    end: int


def _looks_like_dates(candidate: str) -> bool:
    # "2019 - 2021" or "06/2020" matched as a phone number
    if DATE_RANGE_RE.search(candidate):
        return True
    remainder = DATE_TOKEN_RE.sub("", candidate)
    return not re.search(r"\d", remainder)


def digit_count(value: str) -> int:
    return sum(1 for char in value if char.isdigit())


def find_contact_tokens(line: str) -> List[ContactToken]:
    """
    Find contact details in a line, ordered by position.

    LinkedIn and GitHub profile links are normalized to canonical URLs;
    any other URL is reported as a portfolio link.

    Args:
        line: Normalized text line

    Returns:
        List of ContactToken
    """
    tokens = []
    taken = []

    def claim(kind: str, value: str, span) -> None:
        tokens.append(ContactToken(kind, value, span[0], span[1]))
        taken.append(span)

    def is_taken(span) -> bool:
        return any(start < span[1] and span[0] < end for start, end in taken)

    for match in LINKEDIN_RE.finditer(line):
        claim("linkedin_url", f"https://linkedin.com/in/{match.group(1)}", match.span())
    for match in GITHUB_RE.finditer(line):
        claim("github_url", f"https://github.com/{match.group(1)}", match.span())
    for match in EMAIL_RE.finditer(line):
        if not is_taken(match.span()):
            claim("email", match.group(), match.span())
    for match in URL_RE.finditer(line):
        if not is_taken(match.span()):
            url = match.group().rstrip(".;)")
            if url.lower().startswith("www."):
                url = f"https://{url}"
            claim("portfolio_url", url, match.span())
    for match in PHONE_RE.finditer(line):
        candidate = match.group().strip()
        if is_taken(match.span()) or _looks_like_dates(candidate):
            continue
        if 7 <= digit_count(candidate) <= 15:
            claim("phone", candidate, match.span())

    return sorted(tokens, key=lambda token: token.start)


def is_valid_email(value: str) -> bool:
    """Check e-mail syntax without a DNS lookup."""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_valid_phone(value: str) -> bool:
    """A phone is valid when it only uses phone punctuation and has 7-15 digits."""
    return bool(PHONE_ALLOWED_RE.match(value)) and 7 <= digit_count(value) <= 15


def is_location(segment: str) -> bool:
    """
    Recognize "City, ST", "City, Country", a bare country or a remote marker.

    Args:
        segment: One separator-delimited piece of a header line

    Returns:
        True if the segment reads as a location
    """
    segment = segment.strip()
    lowered = segment.lower()
    if lowered in REMOTE_WORDS or lowered in COUNTRIES:
        return True
    match = LOCATION_RE.match(segment)
    if not match:
        return False
    region = match.group("region").strip()
    return bool(re.fullmatch(r"[A-Z]{2}", region)) or region.lower() in COUNTRIES

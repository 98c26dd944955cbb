"""
Text normalization helpers shared by ingestion and the parser.
"""

import re
import unicodedata
from typing import List, Tuple


# Internal page separator; stripped before any text is exposed
PAGE_BREAK = "\f"

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_line(text: str) -> str:
    """
    Normalize a single line of extracted text.

    Applies NFKC, drops control/format characters and collapses whitespace
    runs to a single space.

    Args:
        text: Raw line text (must not contain newlines)

    Returns:
        Normalized, trimmed line
    """
    text = unicodedata.normalize("NFKC", text)
    cleaned = []
    for char in text:
        category = unicodedata.category(char)
        if char.isspace():
            cleaned.append(" ")
        elif category in ("Cc", "Cf", "Co", "Cs"):
            continue
        else:
            cleaned.append(char)
    return _WHITESPACE_RUN.sub(" ", "".join(cleaned)).strip()


def split_normalized_lines(raw: str) -> List[Tuple[int, str, bool]]:
    """
    Split raw text into normalized non-empty lines.

    Pages are separated by ``PAGE_BREAK``. A blank line marks the next
    non-empty line as starting a paragraph; a page boundary does not.

    Args:
        raw: Text as produced by an extractor

    Returns:
        List of ``(page, line, gap_before)`` tuples
    """
    result = []
    for page, page_text in enumerate(raw.split(PAGE_BREAK)):
        pending_gap = False
        for line in page_text.splitlines():
            normalized = normalize_line(line)
            if not normalized:
                pending_gap = bool(result) and result[-1][0] == page
                continue
            result.append((page, normalized, pending_gap))
            pending_gap = False
    return result


def count_alphanumeric(text: str) -> int:
    """Count letters and digits in text."""
    return sum(1 for char in text if char.isalnum())


def count_words(text: str) -> int:
    """Count whitespace-delimited words."""
    return len(text.split())

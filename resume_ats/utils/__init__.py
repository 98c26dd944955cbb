"""Utility modules."""

from .logger import get_logger, setup_logging
from .text import normalize_line, split_normalized_lines, count_alphanumeric, count_words, PAGE_BREAK

__all__ = [
    "get_logger",
    "setup_logging",
    "normalize_line",
    "split_normalized_lines",
    "count_alphanumeric",
    "count_words",
    "PAGE_BREAK",
]

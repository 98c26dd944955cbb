"""
Résumé intake and ATS scoring.

    extracted = extract_text(pdf_bytes, "application/pdf")
    resume = parse(extracted)
    result = score(resume)
"""

from .exceptions import (
    EmptyTextError,
    FormatError,
    IngestionError,
    NoExtractableTextError,
    ResumeIntakeError,
    SizeError,
)
from .models import ATSCheck, ATSScoreResult, ExtractedText, ResumeData, TextLine
from .services import (
    IntakeResult,
    ParseResult,
    ResumePipeline,
    extract_text,
    parse,
    parse_with_warnings,
    score,
)

__version__ = "1.0.0"

__all__ = [
    "extract_text",
    "parse",
    "parse_with_warnings",
    "score",
    "ResumePipeline",
    "IntakeResult",
    "ParseResult",
    "ExtractedText",
    "TextLine",
    "ResumeData",
    "ATSCheck",
    "ATSScoreResult",
    "ResumeIntakeError",
    "IngestionError",
    "FormatError",
    "SizeError",
    "NoExtractableTextError",
    "EmptyTextError",
]

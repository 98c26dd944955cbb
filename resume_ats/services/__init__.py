"""Service modules for ingestion, parsing and scoring."""

from .ingestion_service import DocumentIngestionService, extract_text
from .parser_service import ParseResult, ResumeParser, parse, parse_with_warnings
from .scoring_service import ATSScorer, score
from .pipeline_service import IntakeResult, ResumePipeline

__all__ = [
    "DocumentIngestionService",
    "extract_text",
    "ResumeParser",
    "ParseResult",
    "parse",
    "parse_with_warnings",
    "ATSScorer",
    "score",
    "ResumePipeline",
    "IntakeResult",
]

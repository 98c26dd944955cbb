"""
End-to-end intake: ingestion, parsing and scoring behind one call.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional

from pydantic import BaseModel, Field

from ..config.settings import Settings, get_settings
from ..models.ats import ATSScoreResult
from ..models.document import ExtractedText, RawDocument
from ..models.resume import ResumeData
from ..utils.logger import get_logger, setup_logging
from .ingestion_service import DocumentIngestionService
from .parser_service import ResumeParser
from .scoring_service import ATSScorer

logger = get_logger(__name__)


class IntakeResult(BaseModel):
    """Everything produced for one uploaded résumé."""
    extracted: ExtractedText
    resume: ResumeData
    warnings: List[str] = Field(default_factory=list)
    score: ATSScoreResult


class ResumePipeline:
    """Run uploaded résumés through ingestion, parsing and scoring."""

    def __init__(self, settings: Optional[Settings] = None, configure_logging: bool = False):
        """
        Initialize pipeline.

        Args:
            settings: Application settings; defaults to the cached global settings
            configure_logging: Attach handlers for the configured log level and file
        """
        self.settings = settings or get_settings()
        if configure_logging:
            setup_logging(level=self.settings.log_level, log_file=self.settings.log_file)
        self.ingestion = DocumentIngestionService(self.settings.ingestion)
        self.parser = ResumeParser(self.settings.parser)
        self.scorer = ATSScorer(self.settings.scoring)

    def process(self, document: bytes, media_type: str) -> IntakeResult:
        """
        Extract, parse and score one document.

        Ingestion errors propagate unchanged so callers can show their
        ``user_message``.

        Args:
            document: Raw document bytes
            media_type: Declared media type

        Returns:
            IntakeResult
        """
        extracted = self.ingestion.extract(RawDocument(content=document, media_type=media_type))
        parsed = self.parser.parse_with_warnings(extracted)
        result = self.scorer.score(parsed.resume)
        return IntakeResult(
            extracted=extracted,
            resume=parsed.resume,
            warnings=parsed.warnings,
            score=result,
        )

    def score_many(self, records: Iterable[ResumeData], max_workers: Optional[int] = None) -> List[ATSScoreResult]:
        """
        Score several résumés concurrently.

        The scorer shares no mutable state, so records are scored on a thread
        pool; results come back in input order.

        Args:
            records: Résumés to score
            max_workers: Thread pool size; ``None`` lets the executor decide

        Returns:
            One ATSScoreResult per record, in input order
        """
        records = list(records)
        if not records:
            return []
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results = list(executor.map(self.scorer.score, records))
        logger.info(f"Scored {len(results)} résumés")
        return results

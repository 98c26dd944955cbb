"""
Document ingestion: turn an uploaded PDF, DOCX or plain-text résumé into
normalized text with per-line layout hints.
"""

import io
from statistics import median
from typing import Dict, List, Optional

import pdfplumber
from docx import Document
from docx.table import Table

from ..config.settings import IngestionSettings, get_settings
from ..exceptions import FormatError, IngestionError, NoExtractableTextError, SizeError
from ..models.document import ExtractedText, RawDocument, TextLine
from ..utils.logger import get_logger
from ..utils.text import count_alphanumeric, normalize_line

logger = get_logger(__name__)

PDF = "application/pdf"
DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
TEXT = "text/plain"

# Alternate spellings seen from browsers and mail clients
MEDIA_TYPE_ALIASES: Dict[str, str] = {
    "application/x-pdf": PDF,
    "application/acrobat": PDF,
    "application/docx": DOCX,
    "text/x-plain": TEXT,
}

BOLD_FONT_MARKERS = ("bold", "black", "heavy")


def normalize_media_type(media_type: str) -> str:
    """Lower-case a media type and strip parameters such as ``charset``."""
    base = (media_type or "").split(";", 1)[0].strip().lower()
    return MEDIA_TYPE_ALIASES.get(base, base)


class DocumentIngestionService:
    """Extract normalized text and layout hints from résumé documents."""

    def __init__(self, settings: Optional[IngestionSettings] = None):
        """
        Initialize ingestion service.

        Args:
            settings: Ingestion limits; defaults to the global settings
        """
        self.settings = settings or get_settings().ingestion
        self._extractors = {
            PDF: self._extract_pdf,
            DOCX: self._extract_docx,
            TEXT: self._extract_plain_text,
        }

    def extract(self, document: RawDocument) -> ExtractedText:
        """
        Extract text from a document.

        Args:
            document: Raw bytes plus declared media type

        Returns:
            ExtractedText with normalized lines

        Raises:
            FormatError: If the media type is not supported
            SizeError: If the document exceeds the byte or page ceiling
            IngestionError: If the document is corrupt
            NoExtractableTextError: If no meaningful text could be recovered
        """
        media_type = normalize_media_type(document.media_type)
        extractor = self._extractors.get(media_type)
        if extractor is None:
            raise FormatError(f"Unsupported media type: {document.media_type!r}")

        if document.size > self.settings.max_document_bytes:
            raise SizeError(
                f"Document is {document.size} bytes; the limit is "
                f"{self.settings.max_document_bytes} bytes"
            )

        extracted = extractor(document.content)

        alphanumeric = count_alphanumeric(extracted.text)
        if alphanumeric < self.settings.min_text_chars:
            raise NoExtractableTextError(
                f"Only {alphanumeric} alphanumeric characters recovered from "
                f"{extracted.page_count} page(s)"
            )

        logger.info(
            f"Extracted {len(extracted.lines)} lines from {extracted.page_count} page(s) "
            f"of {media_type}"
        )
        return extracted

    def _extract_pdf(self, content: bytes) -> ExtractedText:
        if not content.startswith(b"%PDF-"):
            raise IngestionError("Document does not start with a PDF header")

        try:
            with pdfplumber.open(io.BytesIO(content)) as pdf:
                page_count = len(pdf.pages)
                if page_count > self.settings.max_pages:
                    raise SizeError(
                        f"Document has {page_count} pages; the limit is {self.settings.max_pages}"
                    )
                lines = []
                for page_number, page in enumerate(pdf.pages):
                    lines.extend(self._pdf_page_lines(page, page_number))
        except IngestionError:
            raise
        except Exception as exc:
            raise IngestionError(f"PDF could not be read: {exc}") from exc

        return ExtractedText.from_lines(lines, media_type=PDF, page_count=page_count)

    def _pdf_page_lines(self, page, page_number: int) -> List[TextLine]:
        """Build TextLines for one PDF page, in reading order."""
        raw_lines = page.extract_text_lines(return_chars=True)
        heights = [
            line["bottom"] - line["top"] for line in raw_lines
            if line["bottom"] > line["top"]
        ]
        median_height = median(heights) if heights else 0.0
        threshold = self.settings.paragraph_gap_ratio * median_height

        lines = []
        previous_bottom = None
        for raw in raw_lines:
            text = normalize_line(raw["text"])
            if not text:
                continue
            chars = [char for char in raw.get("chars", []) if not char["text"].isspace()]
            gap_before = (
                previous_bottom is not None
                and median_height > 0
                and raw["top"] - previous_bottom > threshold
            )
            lines.append(TextLine(
                text=text,
                approx_y=round(float(raw["top"]), 2),
                is_bold=self._chars_are_bold(chars),
                font_size=round(median(char["size"] for char in chars), 2) if chars else None,
                page=page_number,
                gap_before=gap_before,
            ))
            previous_bottom = raw["bottom"]

        logger.debug(f"Page {page_number + 1}: {len(lines)} lines, median height {median_height:.1f}")
        return lines

    @staticmethod
    def _chars_are_bold(chars: List[dict]) -> Optional[bool]:
        if not chars:
            return None
        bold = sum(
            1 for char in chars
            if any(marker in char.get("fontname", "").lower() for marker in BOLD_FONT_MARKERS)
        )
        return bold * 2 > len(chars)

    def _extract_docx(self, content: bytes) -> ExtractedText:
        try:
            doc = Document(io.BytesIO(content))
            paragraphs = []
            for block in doc.iter_inner_content():
                if isinstance(block, Table):
                    paragraphs.extend(self._table_paragraphs(block))
                else:
                    paragraphs.append(block)
            lines = self._docx_lines(paragraphs)
        except Exception as exc:
            raise IngestionError(f"DOCX could not be read: {exc}") from exc

        return ExtractedText.from_lines(lines, media_type=DOCX, page_count=1)

    @staticmethod
    def _table_paragraphs(table: Table) -> list:
        paragraphs = []
        for row in table.rows:
            previous_text = None
            for cell in row.cells:
                # Merged cells repeat across the row
                if cell.text == previous_text:
                    continue
                previous_text = cell.text
                paragraphs.extend(cell.paragraphs)
        return paragraphs

    def _docx_lines(self, paragraphs) -> List[TextLine]:
        lines = []
        pending_gap = False
        for paragraph in paragraphs:
            # Soft line breaks inside a paragraph become separate lines
            pieces = [normalize_line(piece) for piece in paragraph.text.splitlines()]
            pieces = [piece for piece in pieces if piece]
            if not pieces:
                pending_gap = bool(lines)
                continue

            is_bold, font_size = self._paragraph_style(paragraph)
            for index, piece in enumerate(pieces):
                lines.append(TextLine(
                    text=piece,
                    is_bold=is_bold,
                    font_size=font_size,
                    gap_before=pending_gap and index == 0,
                ))
            pending_gap = False
        return lines

    @staticmethod
    def _paragraph_style(paragraph):
        """Return (is_bold, font_size) for a paragraph from its runs and style."""
        style = paragraph.style
        style_name = (style.name or "") if style is not None else ""
        style_bold = bool(style is not None and style.font.bold)
        if style_name.startswith(("Heading", "Title")):
            style_bold = True

        total = 0
        bold = 0
        sizes = []
        for run in paragraph.runs:
            length = len(run.text.strip())
            if not length:
                continue
            total += length
            run_bold = run.bold if run.bold is not None else style_bold
            if run_bold:
                bold += length
            if run.font.size is not None:
                sizes.append(run.font.size.pt)

        if not total:
            return style_bold, None
        if not sizes and style is not None and style.font.size is not None:
            sizes.append(style.font.size.pt)
        return bold * 2 > total, (median(sizes) if sizes else None)

    @staticmethod
    def _extract_plain_text(content: bytes) -> ExtractedText:
        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise IngestionError(f"Text document is not valid UTF-8: {exc}") from exc
        return ExtractedText.from_string(text)


def extract_text(document: bytes, media_type: str) -> ExtractedText:
    """
    Extract normalized text from a résumé document.

    Args:
        document: Raw document bytes
        media_type: Declared media type, e.g. ``application/pdf``

    Returns:
        ExtractedText
    """
    return DocumentIngestionService().extract(RawDocument(content=document, media_type=media_type))

"""Document and extracted-text data models."""

from typing import Iterable, Optional, Tuple

from pydantic import BaseModel, Field

from ..utils.text import split_normalized_lines


class RawDocument(BaseModel):
    """An uploaded document as handed over by the caller."""
    content: bytes
    media_type: str

    @property
    def size(self) -> int:
        return len(self.content)


class TextLine(BaseModel):
    """One normalized line of text with the layout hints recovered for it."""
    text: str
    approx_y: Optional[float] = None
    is_bold: Optional[bool] = None
    font_size: Optional[float] = None
    page: int = 0
    gap_before: bool = False

    class Config:
        frozen = True


class ExtractedText(BaseModel):
    """Normalized document text plus per-line layout hints."""
    text: str
    lines: Tuple[TextLine, ...] = Field(default_factory=tuple)
    media_type: str = "text/plain"
    page_count: int = 1

    class Config:
        frozen = True

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[TextLine],
        media_type: str = "text/plain",
        page_count: int = 1
    ) -> "ExtractedText":
        """Build from already-normalized lines."""
        lines = tuple(lines)
        return cls(
            text="\n".join(line.text for line in lines),
            lines=lines,
            media_type=media_type,
            page_count=page_count,
        )

    @classmethod
    def from_string(cls, text: str) -> "ExtractedText":
        """
        Build from plain text, normalizing it the same way ingestion does.

        Blank lines become paragraph breaks on the following line.
        """
        entries = split_normalized_lines(text)
        lines = [
            TextLine(text=line, page=page, gap_before=gap)
            for page, line, gap in entries
        ]
        page_count = entries[-1][0] + 1 if entries else 1
        return cls.from_lines(lines, page_count=page_count)

    @property
    def has_bold_hints(self) -> bool:
        return any(line.is_bold is not None for line in self.lines)

    def is_empty(self) -> bool:
        return not self.text.strip()

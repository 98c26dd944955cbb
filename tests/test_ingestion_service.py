"""Tests for document ingestion and text extraction."""

from __future__ import annotations

import io

import pytest  # type: ignore
from docx import Document

from resume_ats.config.settings import IngestionSettings
from resume_ats.exceptions import (
    FormatError,
    IngestionError,
    NoExtractableTextError,
    SizeError,
)
from resume_ats.models.document import RawDocument
from resume_ats.services import ingestion_service
from resume_ats.services.ingestion_service import (
    DOCX,
    DocumentIngestionService,
    extract_text,
    normalize_media_type,
)


def _service(**overrides) -> DocumentIngestionService:
    return DocumentIngestionService(IngestionSettings(**overrides))


def test_unsupported_media_type_raises_format_error() -> None:
    """Only PDF, DOCX and plain text are accepted."""
    with pytest.raises(FormatError) as excinfo:
        extract_text(b"\x89PNG\r\n", "image/png")
    assert "PDF" in excinfo.value.user_message


def test_media_type_parameters_are_ignored() -> None:
    """Case and parameters such as charset do not affect dispatch."""
    assert normalize_media_type("Text/Plain; charset=UTF-8") == "text/plain"
    assert normalize_media_type("application/x-pdf") == "application/pdf"
    extracted = extract_text(b"Jane Doe\nSoftware engineer in Austin", "text/plain; charset=utf-8")
    assert extracted.lines[0].text == "Jane Doe"


def test_oversized_document_rejected_before_parsing(monkeypatch: pytest.MonkeyPatch) -> None:
    """The size ceiling is enforced before the PDF library is touched."""
    def fail_open(*args, **kwargs):
        raise AssertionError("pdfplumber.open must not be called")

    monkeypatch.setattr(ingestion_service.pdfplumber, "open", fail_open)
    service = _service(max_document_bytes=100)
    with pytest.raises(SizeError):
        service.extract(RawDocument(content=b"%PDF-1.4\n" + b"0" * 200, media_type="application/pdf"))


def test_too_many_pages_raises_size_error(pdf_factory) -> None:
    pdf = pdf_factory([["Jane Doe software engineer"], ["Page two of the resume text"]])
    with pytest.raises(SizeError):
        _service(max_pages=1).extract(RawDocument(content=pdf, media_type="application/pdf"))


def test_pdf_lines_and_layout_hints(pdf_factory) -> None:
    """Lines come back in order with bold, size, position and paragraph-gap hints."""
    pdf = pdf_factory([[
        ("Jane Doe", True),
        "jane.doe@gmail.com",
        None,
        ("Experience", True),
        "Engineer at Acme since 2020",
    ]])
    extracted = extract_text(pdf, "application/pdf")

    assert [line.text for line in extracted.lines] == [
        "Jane Doe",
        "jane.doe@gmail.com",
        "Experience",
        "Engineer at Acme since 2020",
    ]
    assert extracted.text == "\n".join(line.text for line in extracted.lines)
    assert extracted.page_count == 1
    assert extracted.media_type == "application/pdf"

    name, email, heading, body = extracted.lines
    assert name.is_bold is True
    assert email.is_bold is False
    assert heading.is_bold is True
    assert name.font_size == pytest.approx(11, abs=0.5)
    assert email.gap_before is False
    assert heading.gap_before is True
    assert body.gap_before is False
    assert name.approx_y < email.approx_y < heading.approx_y < body.approx_y


def test_page_boundary_is_not_a_paragraph_gap(pdf_factory) -> None:
    pdf = pdf_factory([["Jane Doe software engineer"], ["Experience at Acme Corp"]])
    extracted = extract_text(pdf, "application/pdf")

    assert extracted.page_count == 2
    assert [line.page for line in extracted.lines] == [0, 1]
    assert extracted.lines[1].gap_before is False
    assert "\f" not in extracted.text


def test_image_only_pdf_raises_no_extractable_text(pdf_factory) -> None:
    """A PDF whose pages carry no text objects is treated as a scanned image."""
    pdf = pdf_factory([[], []])
    with pytest.raises(NoExtractableTextError) as excinfo:
        extract_text(pdf, "application/pdf")
    assert "scanned" in excinfo.value.user_message


def test_missing_pdf_header_raises_ingestion_error() -> None:
    with pytest.raises(IngestionError):
        extract_text(b"this is not a pdf at all", "application/pdf")


def test_corrupt_pdf_raises_ingestion_error() -> None:
    with pytest.raises(IngestionError):
        extract_text(b"%PDF-1.4\n%garbage without objects or trailer", "application/pdf")


def test_plain_text_normalization() -> None:
    """NFKC, control characters, whitespace runs and blank lines."""
    raw = "ﬁnance\x00 team\t\tlead\r\n\r\n  Second   line \u200b here\n"
    extracted = extract_text(raw.encode("utf-8"), "text/plain")

    assert [line.text for line in extracted.lines] == ["finance team lead", "Second line here"]
    assert extracted.text == "finance team lead\nSecond line here"
    assert extracted.lines[1].gap_before is True


def test_plain_text_too_short_raises_no_extractable_text() -> None:
    with pytest.raises(NoExtractableTextError):
        extract_text(b"Hi  \n  there", "text/plain")


def test_invalid_utf8_raises_ingestion_error() -> None:
    with pytest.raises(IngestionError):
        extract_text(b"\xff\xfe\xfa" * 20, "text/plain")


def test_docx_paragraphs_styles_and_tables() -> None:
    """DOCX paragraphs become lines; bold runs and heading styles set is_bold."""
    doc = Document()
    doc.add_paragraph().add_run("Jane Doe").bold = True
    doc.add_paragraph("jane.doe@gmail.com | (555) 123-4567")
    doc.add_paragraph("")
    doc.add_heading("Skills", level=1)
    table = doc.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Python"
    table.rows[0].cells[1].text = "SQL"
    buffer = io.BytesIO()
    doc.save(buffer)

    extracted = extract_text(buffer.getvalue(), DOCX)
    texts = [line.text for line in extracted.lines]

    assert texts == ["Jane Doe", "jane.doe@gmail.com | (555) 123-4567", "Skills", "Python", "SQL"]
    assert extracted.lines[0].is_bold is True
    assert extracted.lines[1].is_bold is False
    assert extracted.lines[2].is_bold is True
    assert extracted.lines[2].gap_before is True
    assert extracted.has_bold_hints


def test_corrupt_docx_raises_ingestion_error() -> None:
    with pytest.raises(IngestionError):
        extract_text(b"PK\x03\x04 definitely not a word document", DOCX)


def test_errors_share_a_common_base() -> None:
    for error in (FormatError, SizeError, NoExtractableTextError):
        assert issubclass(error, IngestionError)
        assert error().user_message

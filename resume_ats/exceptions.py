"""
Error taxonomy for résumé intake.

Only ingestion raises. The parser raises ``EmptyTextError`` for empty input
and nothing else; the scorer never raises for a valid ``ResumeData``.
"""


class ResumeIntakeError(Exception):
    """Base class for every error raised by this package."""

    user_message = "The résumé could not be processed."

    def __init__(self, message: str = "", user_message: str = ""):
        super().__init__(message or self.user_message)
        if user_message:
            self.user_message = user_message


class IngestionError(ResumeIntakeError):
    """The document is corrupt or could not be read."""

    user_message = (
        "We couldn't read this document. It may be damaged; "
        "try exporting it again as a PDF."
    )


class FormatError(IngestionError):
    """The declared media type is not a supported document format."""

    user_message = "Unsupported file type. Please upload a PDF, DOCX or plain-text résumé."


class SizeError(IngestionError):
    """The document exceeds the size or page ceiling."""

    user_message = "This document is too large. Please upload a résumé under the size limit."


class NoExtractableTextError(IngestionError):
    """The document contains no recoverable text (scanned or image-only)."""

    user_message = (
        "No text could be found in this document. It looks like a scanned image; "
        "please re-export it as a text-based PDF or enter your details manually."
    )


class EmptyTextError(ResumeIntakeError, ValueError):
    """The parser was handed text with no content."""

    user_message = "There is no résumé text to parse."

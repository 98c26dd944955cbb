"""Data models for the application."""

from .document import RawDocument, TextLine, ExtractedText
from .resume import (
    PersonalInfo,
    Experience,
    Education,
    Certification,
    Project,
    Language,
    LanguageProficiency,
    ResumeData,
)
from .ats import ATSCheck, ATSScoreResult, CheckCategory, Grade

__all__ = [
    "RawDocument",
    "TextLine",
    "ExtractedText",
    "PersonalInfo",
    "Experience",
    "Education",
    "Certification",
    "Project",
    "Language",
    "LanguageProficiency",
    "ResumeData",
    "ATSCheck",
    "ATSScoreResult",
    "CheckCategory",
    "Grade",
]

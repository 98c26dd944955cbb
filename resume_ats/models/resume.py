"""Resume related data models."""

import re
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


MONTH_DATE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


class ResumeModel(BaseModel):
    """
    Base for every résumé record.

    Accepts snake_case or camelCase keys, so form payloads and parser output
    validate the same way, and re-validates on assignment.
    """

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        validate_assignment = True
        str_strip_whitespace = True


def _required_text(value: str) -> str:
    if not value:
        raise ValueError("must not be blank")
    return value


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _month_date(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    # Accept full ISO dates from form date pickers
    if re.match(r"^\d{4}-\d{2}-\d{2}$", value):
        value = value[:7]
    if not MONTH_DATE.match(value):
        raise ValueError(f"expected a YYYY-MM date, got {value!r}")
    return value


class DatedEntry(ResumeModel):
    """Shared start/end date handling for time-bounded entries."""
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    is_current: bool = False

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def blank_dates(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("start_date", "end_date")
    @classmethod
    def check_date_format(cls, value: Optional[str]) -> Optional[str]:
        return _month_date(value)

    @model_validator(mode="after")
    def check_date_order(self) -> "DatedEntry":
        if self.is_current and self.end_date:
            raise ValueError("an entry cannot be current and have an end date")
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError(
                f"end date {self.end_date} is before start date {self.start_date}"
            )
        return self

    @property
    def has_dates(self) -> bool:
        return bool(self.start_date or self.end_date)


class PersonalInfo(ResumeModel):
    """Candidate identity and contact details; every field is optional."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    headline: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    linkedin_url: Optional[str] = None
    github_url: Optional[str] = None
    portfolio_url: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_fields(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class Experience(DatedEntry):
    """Represents a work experience entry."""
    title: str
    company: str
    location: Optional[str] = None
    description: str = ""
    achievements: List[str] = Field(default_factory=list)

    @field_validator("title", "company")
    @classmethod
    def required_fields(cls, value: str) -> str:
        return _required_text(value)


class Education(DatedEntry):
    """Represents an education entry."""
    institution: str
    degree: str
    field_of_study: Optional[str] = None
    grade: Optional[str] = None

    @field_validator("institution", "degree")
    @classmethod
    def required_fields(cls, value: str) -> str:
        return _required_text(value)

    @field_validator("field_of_study", "grade", mode="before")
    @classmethod
    def blank_optional(cls, value: Any) -> Any:
        return _blank_to_none(value)


class Certification(ResumeModel):
    """Represents a certification or licence."""
    name: str
    issuer: str = ""
    issue_date: Optional[str] = None
    expiry_date: Optional[str] = None

    @field_validator("name")
    @classmethod
    def required_name(cls, value: str) -> str:
        return _required_text(value)

    @field_validator("issue_date", "expiry_date", mode="before")
    @classmethod
    def blank_dates(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("issue_date", "expiry_date")
    @classmethod
    def check_date_format(cls, value: Optional[str]) -> Optional[str]:
        return _month_date(value)

    @model_validator(mode="after")
    def check_date_order(self) -> "Certification":
        if self.issue_date and self.expiry_date and self.expiry_date < self.issue_date:
            raise ValueError(
                f"expiry date {self.expiry_date} is before issue date {self.issue_date}"
            )
        return self


class Project(ResumeModel):
    """Represents a personal or professional project."""
    name: str
    description: str = ""
    technologies: List[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def required_name(cls, value: str) -> str:
        return _required_text(value)


class LanguageProficiency(str, Enum):
    """Spoken language proficiency levels."""
    BASIC = "basic"
    CONVERSATIONAL = "conversational"
    PROFESSIONAL = "professional"
    FLUENT = "fluent"
    NATIVE = "native"


class Language(ResumeModel):
    """Represents a spoken language."""
    name: str
    proficiency: LanguageProficiency = LanguageProficiency.CONVERSATIONAL

    @field_validator("name")
    @classmethod
    def required_name(cls, value: str) -> str:
        return _required_text(value)


class ResumeData(ResumeModel):
    """
    Canonical structured résumé.

    Produced by the parser or by manual form entry and accepted by the
    scorer either way.
    """
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    summary: Optional[str] = None
    experience: List[Experience] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    certifications: List[Certification] = Field(default_factory=list)
    projects: List[Project] = Field(default_factory=list)
    languages: List[Language] = Field(default_factory=list)

    @field_validator("summary", mode="before")
    @classmethod
    def blank_summary(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("skills", mode="before")
    @classmethod
    def skill_names(cls, value: Any) -> Any:
        # Form payloads send skills as {"name": ..., "level": ...} objects
        if isinstance(value, (list, tuple, set)):
            return [
                item.get("name", "") if isinstance(item, dict) else item
                for item in value
            ]
        return value

    @field_validator("skills")
    @classmethod
    def dedupe_skills(cls, skills: List[str]) -> List[str]:
        seen = set()
        unique = []
        for skill in skills:
            cleaned = " ".join(skill.split())
            key = cleaned.casefold()
            if cleaned and key not in seen:
                seen.add(key)
                unique.append(cleaned)
        return unique

    def to_dict(self, by_alias: bool = False) -> dict:
        """Convert to a JSON-ready dictionary."""
        return self.model_dump(mode="json", by_alias=by_alias)

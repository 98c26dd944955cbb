"""Tests for the structural résumé parser."""

from __future__ import annotations

import pytest  # type: ignore

from resume_ats.config.settings import ParserSettings
from resume_ats.exceptions import EmptyTextError
from resume_ats.models.document import ExtractedText, TextLine
from resume_ats.models.resume import LanguageProficiency
from resume_ats.services.parser_service import ResumeParser, parse, parse_with_warnings


def _parse(text: str):
    return parse(ExtractedText.from_string(text))


def test_minimal_contact_block() -> None:
    resume = _parse("Jane Doe\njane@x.com\n555-0100")

    assert resume.personal_info.first_name == "Jane"
    assert resume.personal_info.last_name == "Doe"
    assert resume.personal_info.email == "jane@x.com"
    assert resume.personal_info.phone == "555-0100"
    assert resume.summary is None
    assert resume.experience == []
    assert resume.education == []
    assert resume.skills == []


def test_well_formed_resume(well_formed_text: ExtractedText) -> None:
    result = parse_with_warnings(well_formed_text)
    resume = result.resume
    info = resume.personal_info

    assert result.warnings == []
    assert info.full_name == "Jane Doe"
    assert info.headline == "Senior Data Engineer"
    assert info.phone == "(555) 123-4567"
    assert info.location == "Austin, TX"
    assert info.linkedin_url == "https://linkedin.com/in/janedoe"
    assert resume.summary.startswith("Data engineer with eight years")

    first, second = resume.experience
    assert (first.title, first.company) == ("Senior Data Engineer", "Acme Analytics")
    assert (first.start_date, first.end_date, first.is_current) == ("2020-01", None, True)
    assert len(first.achievements) == 3
    assert first.achievements[1].startswith("Reduced nightly pipeline runtime by 35%")
    assert first.description.startswith("• Led a team of 6 engineers")
    assert (second.title, second.company) == ("Data Engineer", "Beta Corp")
    assert (second.start_date, second.end_date) == ("2016-06", "2019-12")

    (education,) = resume.education
    assert education.institution == "University of Texas at Austin"
    assert education.degree == "B.S."
    assert education.field_of_study == "Computer Science"
    assert education.end_date == "2016-12"

    assert resume.skills == ["Python", "SQL", "Spark", "Airflow", "Kafka", "dbt", "AWS", "Docker"]


def test_all_caps_name_is_title_cased() -> None:
    resume = _parse("JANE DOE | Data Scientist | Delhi, India\njane@x.com | 555-0100")
    assert resume.personal_info.first_name == "Jane"
    assert resume.personal_info.last_name == "Doe"
    assert resume.personal_info.headline == "Data Scientist"
    assert resume.personal_info.location == "Delhi, India"


def test_section_synonyms_and_heading_punctuation() -> None:
    resume = _parse(
        "Jane Doe\n\n"
        "WORK HISTORY\n"
        "Engineer | Acme | 2019 - 2021\n\n"
        "Academic Background\n"
        "State University\n"
        "Bachelor of Arts, 2015\n\n"
        "Core Competencies:\n"
        "Python, SQL\n"
    )
    assert [entry.company for entry in resume.experience] == ["Acme"]
    assert resume.education[0].institution == "State University"
    assert resume.education[0].degree == "Bachelor of Arts"
    assert resume.skills == ["Python", "SQL"]


def test_repeated_headings_merge() -> None:
    resume = _parse("Jane Doe\n\nSkills\nPython\n\nExperience\nEngineer | Acme | 2019 - 2021\n\nSkills\nSQL")
    assert resume.skills == ["Python", "SQL"]


def test_inline_heading_carries_remainder() -> None:
    resume = _parse("Jane Doe\njane@x.com\n\nSkills: Python, SQL, Docker")
    assert resume.skills == ["Python", "SQL", "Docker"]


def test_entry_without_title_is_dropped_not_corrupted() -> None:
    """A dated line with no recoverable title is dropped and reported; neighbours survive."""
    result = parse_with_warnings(ExtractedText.from_string(
        "Jane Doe\njane@x.com\n\n"
        "Experience\n"
        "Jan 2020 - Present\n"
        "Led a team of 5 engineers.\n\n"
        "Software Engineer | Acme | 2018 - 2019\n"
        "• Built the billing service\n"
    ))
    experience = result.resume.experience

    assert len(experience) == 1
    assert experience[0].title == "Software Engineer"
    assert experience[0].company == "Acme"
    assert experience[0].achievements == ["Built the billing service"]
    assert all(entry.title and entry.company for entry in experience)
    assert any("Dropped experience entry" in warning for warning in result.warnings)


def test_title_above_dates_and_company_below() -> None:
    resume = _parse(
        "Jane Doe\n\nExperience\n"
        "Backend Engineer\n"
        "2019 - 2021\n"
        "Globex, Berlin, Germany\n"
        "• Scaled the API to 10000 requests per second\n"
        "  and cut error rates\n"
    )
    (entry,) = resume.experience
    assert entry.title == "Backend Engineer"
    assert entry.company == "Globex"
    assert entry.location == "Berlin, Germany"
    assert (entry.start_date, entry.end_date) == ("2019-01", "2021-12")
    assert entry.achievements == ["Scaled the API to 10000 requests per second and cut error rates"]


def test_bare_date_line_never_takes_a_title_from_below() -> None:
    """Lines below a bare date line supply at most the company, so the untitled entry is dropped."""
    result = parse_with_warnings(ExtractedText.from_string(
        "Jane Doe\njane@x.com\n\n"
        "Experience\n"
        "Jan 2020 - Present\n"
        "Acme Corp\n"
        "Led a team of 5 engineers.\n"
    ))
    assert result.resume.experience == []
    assert any("Dropped experience entry 'Acme Corp'" in warning for warning in result.warnings)


@pytest.mark.parametrize("line", ["Shipped it on time.", "Managed the on-call rotation"])
def test_sentences_never_name_an_entry(line: str) -> None:
    """A sentence below the dates is description, so the entry lacks a company and is dropped."""
    resume = _parse(f"Jane Doe\n\nExperience\nPlatform Engineer\nMar 2019 - Dec 2021\n{line}\n")
    assert resume.experience == []


def test_company_with_trailing_period_is_kept() -> None:
    resume = _parse(
        "Jane Doe\n\nExperience\n"
        "Platform Engineer\n"
        "Mar 2019 - Dec 2021\n"
        "Acme Inc.\n"
        "Shipped the billing service on time.\n"
    )
    (entry,) = resume.experience
    assert (entry.title, entry.company) == ("Platform Engineer", "Acme Inc.")
    assert entry.description == "Shipped the billing service on time."


def test_skills_delimiters_and_filters() -> None:
    resume = _parse(
        "Jane Doe\n\nSkills\n"
        "Languages: Python, Go; Rust\n"
        "Frameworks: Django | Flask\n"
        "• Docker • Kubernetes\n"
        "python, 3, A, 2024\n"
    )
    assert resume.skills == ["Python", "Go", "Rust", "Django", "Flask", "Docker", "Kubernetes"]
    assert resume.languages == []


def test_certifications_with_dates_and_issuers() -> None:
    resume = _parse(
        "Jane Doe\n\nCertifications\n"
        "AWS Certified Solutions Architect - Amazon Web Services, 2023\n"
        "Google Data Analytics Certificate\n"
        "Mar 2022\n"
        "CKA | Expires 2026\n"
    )
    aws, google, cka = resume.certifications
    assert aws.name == "AWS Certified Solutions Architect"
    assert aws.issuer == "Amazon Web Services"
    assert aws.issue_date == "2023-01"
    assert google.name == "Google Data Analytics Certificate"
    assert google.issue_date == "2022-03"
    assert cka.name == "CKA"
    assert cka.issue_date is None
    assert cka.expiry_date.startswith("2026")


def test_education_degree_field_and_gpa() -> None:
    resume = _parse(
        "Jane Doe\n\nEducation\n"
        "MIT | Master of Science in Data Science | 2018 - 2020\n"
        "GPA: 3.9/4.0\n"
    )
    (entry,) = resume.education
    assert entry.institution == "MIT"
    assert entry.degree == "Master of Science"
    assert entry.field_of_study == "Data Science"
    assert entry.grade == "3.9/4.0"
    assert (entry.start_date, entry.end_date) == ("2018-01", "2020-12")


def test_preamble_becomes_summary_without_summary_section() -> None:
    resume = _parse(
        "Jane Doe\njane@x.com\n\n"
        "Passionate engineer who loves building data products.\n\n"
        "Skills\nPython"
    )
    assert resume.summary == "Passionate engineer who loves building data products."


def test_projects_and_languages() -> None:
    resume = _parse(
        "Jane Doe\n\nProjects\n"
        "Resume Parser (Python, spaCy) [GitHub]\n"
        "• Extracts structured data from PDF resumes\n"
        "Price Tracker\n"
        "Tech stack: Django, Celery\n\n"
        "Languages\n"
        "English (Native), Spanish - Fluent, German\n"
    )
    parser_project, tracker = resume.projects
    assert parser_project.name == "Resume Parser"
    assert parser_project.technologies == ["Python", "spaCy"]
    assert "Extracts structured data" in parser_project.description
    assert tracker.name == "Price Tracker"
    assert tracker.technologies == ["Django", "Celery"]

    assert [(language.name, language.proficiency) for language in resume.languages] == [
        ("English", LanguageProficiency.NATIVE),
        ("Spanish", LanguageProficiency.FLUENT),
        ("German", LanguageProficiency.CONVERSATIONAL),
    ]


def test_bold_headings_required_when_configured() -> None:
    lines = [
        TextLine(text="Jane Doe", is_bold=True),
        TextLine(text="Skills", is_bold=True),
        TextLine(text="Python, SQL", is_bold=False),
        TextLine(text="Experience", is_bold=False),
        TextLine(text="Go", is_bold=False),
    ]
    text = ExtractedText.from_lines(lines)
    resume = ResumeParser(ParserSettings(require_bold_headers=True)).parse(text)
    assert resume.skills == ["Python", "SQL", "Experience", "Go"]

    relaxed = ResumeParser(ParserSettings()).parse(text)
    assert relaxed.skills == ["Python", "SQL"]


def test_parse_is_deterministic(well_formed_text: ExtractedText) -> None:
    assert parse(well_formed_text) == parse(well_formed_text)


@pytest.mark.parametrize("raw", ["", "   \n\n  "])
def test_empty_text_raises(raw: str) -> None:
    with pytest.raises(EmptyTextError):
        parse(ExtractedText.from_string(raw))


def test_empty_text_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        parse(ExtractedText(text=""))

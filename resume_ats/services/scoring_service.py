"""
ATS compatibility scoring.

Evaluates a ResumeData against a fixed rubric of weighted checks and
aggregates them into a percentage, a letter grade and the most important
issues to fix. Scoring is a pure function of the résumé and the settings.
"""

import math
import re
from typing import Callable, Iterable, List, Optional

from ..config.settings import GradeThresholds, ScoringSettings, get_settings
from ..config.vocabulary import ACTION_VERBS, COUNT_NOUNS, GRADE_SUMMARIES
from ..models.ats import ATSCheck, ATSScoreResult, CheckCategory, Grade
from ..models.resume import Experience, ResumeData
from ..utils.contact import is_valid_email, is_valid_phone
from ..utils.logger import get_logger
from ..utils.text import count_words

logger = get_logger(__name__)

# Contact points out of 15, scaled to the configured maximum
CONTACT_POINTS = {"email": 5, "phone": 5, "name": 3, "location": 1, "link": 1}
CONTACT_TOTAL = sum(CONTACT_POINTS.values())
INVALID_CONTACT_POINTS = 2

# Share of the maximum awarded just for having at least one entry
EXPERIENCE_PRESENCE_SHARE = 0.2
EDUCATION_PRESENCE_SHARE = 0.4
# Share of the maximum for out-of-band summary or content length
OUT_OF_BAND_SHARE = 0.6
QUANTIFIED_ENTRY_SHARE = 0.7

_YEAR = r"(?:19|20)\d{2}"
QUANTIFIABLE_RE = re.compile(
    r"\d+(?:\.\d+)?\s?%"
    r"|\b\d+(?:\.\d+)?\s?percent\b"
    r"|[$€£₹¥]\s?\d[\d,]*(?:\.\d+)?(?:\s?(?:k|m|bn|million|billion|thousand)\b)?"
    r"|\b\d+(?:\.\d+)?\s?(?:k|m|bn|million|billion|thousand)\b"
    r"|\b\d+(?:\.\d+)?x\b"
    rf"|(?<![\d.,])(?!{_YEAR}\b)\d[\d,]*\+?\s+(?:{'|'.join(COUNT_NOUNS)})\b",
    re.IGNORECASE,
)
WORD_RE = re.compile(r"[a-z]+")
ACTION_VERB_SET = frozenset(ACTION_VERBS)


def grade_for(percentage: int, thresholds: GradeThresholds) -> Grade:
    """Map a percentage onto the grade table."""
    for grade in (Grade.A, Grade.B, Grade.C, Grade.D):
        if percentage >= getattr(thresholds, grade.value):
            return grade
    return Grade.F


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def count_quantifiable(text: str) -> int:
    """Count measurable-result patterns (percentages, money, counts) in text."""
    return sum(1 for _ in QUANTIFIABLE_RE.finditer(text))


def _experience_text(entry: Experience) -> str:
    # Parsed descriptions already hold their bullet lines
    extra = [item for item in entry.achievements if item not in entry.description]
    return "\n".join([entry.description, *extra])


class ATSScorer:
    """Score résumés for applicant tracking system compatibility."""

    def __init__(self, settings: Optional[ScoringSettings] = None):
        """
        Initialize scorer.

        Args:
            settings: Rubric weights and bands; defaults to the global settings
        """
        self.settings = settings or get_settings().scoring
        self._checks: List[Callable[[ResumeData], ATSCheck]] = [
            self._check_contact_info,
            self._check_professional_summary,
            self._check_work_experience,
            self._check_education,
            self._check_skills,
            self._check_keywords,
            self._check_quantifiable,
            self._check_content_length,
        ]

    def score(self, data: ResumeData) -> ATSScoreResult:
        """
        Calculate the ATS score for a résumé.

        Args:
            data: Parsed or manually entered résumé

        Returns:
            ATSScoreResult with every check, in rubric order
        """
        checks = [check(data) for check in self._checks]

        overall = round(sum(check.score for check in checks), 1)
        max_score = round(sum(check.max_score for check in checks), 1)
        percentage = round_half_up(100 * overall / max_score) if max_score else 0
        grade = grade_for(percentage, self.settings.grades)

        # sorted() is stable, so ties keep rubric order
        failing = sorted((check for check in checks if not check.passed), key=lambda check: check.ratio)
        top_issues = tuple(check.feedback for check in failing[: self.settings.max_top_issues])

        logger.info(f"ATS score {overall}/{max_score} ({percentage}%, grade {grade.value})")
        return ATSScoreResult(
            overall_score=overall,
            max_score=max_score,
            percentage=percentage,
            grade=grade,
            summary=GRADE_SUMMARIES[grade.value].format(percentage=percentage),
            top_issues=top_issues,
            checks=tuple(checks),
        )

    def _max(self, check_id: str) -> float:
        return float(self.settings.max_scores[check_id])

    @staticmethod
    def _make_check(
        check_id: str,
        name: str,
        category: CheckCategory,
        description: str,
        score: float,
        max_score: float,
        passed: bool,
        feedback: str,
        suggestions: Iterable[str] = ()
    ) -> ATSCheck:
        return ATSCheck(
            id=check_id,
            name=name,
            category=category,
            description=description,
            score=round(min(max(score, 0.0), max_score), 1),
            max_score=max_score,
            passed=passed,
            feedback=feedback,
            suggestions=tuple(suggestions),
        )

    def _check_contact_info(self, data: ResumeData) -> ATSCheck:
        info = data.personal_info
        points = 0
        suggestions = []

        email_valid = bool(info.email) and is_valid_email(info.email)
        if email_valid:
            points += CONTACT_POINTS["email"]
        elif info.email:
            points += INVALID_CONTACT_POINTS
            suggestions.append(f"Check your email address; '{info.email}' is not a valid format")
        else:
            suggestions.append("Add your email address")

        phone_valid = bool(info.phone) and is_valid_phone(info.phone)
        if phone_valid:
            points += CONTACT_POINTS["phone"]
        elif info.phone:
            points += INVALID_CONTACT_POINTS
            suggestions.append(f"Check your phone number; '{info.phone}' is not a valid format")
        else:
            suggestions.append("Add your phone number")

        if info.first_name and info.last_name:
            points += CONTACT_POINTS["name"]
        else:
            suggestions.append("Add your full name")

        if info.location:
            points += CONTACT_POINTS["location"]
        else:
            suggestions.append("Add your location (city, state)")

        if info.linkedin_url or info.github_url or info.portfolio_url:
            points += CONTACT_POINTS["link"]
        else:
            suggestions.append("Consider adding your LinkedIn profile URL")

        passed = email_valid and phone_valid
        max_score = self._max("contact-info")
        return self._make_check(
            "contact-info", "Contact Information", CheckCategory.FORMATTING,
            "Essential contact details for recruiters",
            max_score * points / CONTACT_TOTAL, max_score, passed,
            "Contact information is complete and ATS-friendly" if passed
            else "Add a valid email address and phone number so recruiters can reach you",
            suggestions,
        )

    def _check_professional_summary(self, data: ResumeData) -> ATSCheck:
        max_score = self._max("professional-summary")
        summary = data.summary or ""
        length = len(summary)
        low, high = self.settings.summary_min_chars, self.settings.summary_max_chars

        if not summary:
            score, passed = 0.0, False
            feedback = "Add a professional summary to introduce yourself"
            suggestions = ["Write 2-4 sentences on your experience, strengths and goals"]
        elif length < low:
            score, passed = max_score * OUT_OF_BAND_SHARE * length / low, False
            feedback = "Professional summary is too short"
            suggestions = [f"Expand your summary to at least {low} characters"]
        elif length > high:
            score, passed = max_score * OUT_OF_BAND_SHARE, False
            feedback = "Professional summary is too long"
            suggestions = [f"Shorten your summary to under {high} characters"]
        else:
            score, passed = max_score, True
            feedback = "Professional summary is well-sized"
            suggestions = []

        return self._make_check(
            "professional-summary", "Professional Summary", CheckCategory.CONTENT,
            "Brief overview of your professional background",
            score, max_score, passed, feedback, suggestions,
        )

    def _check_work_experience(self, data: ResumeData) -> ATSCheck:
        max_score = self._max("work-experience")
        entries = data.experience
        if not entries:
            return self._make_check(
                "work-experience", "Work Experience", CheckCategory.CONTENT,
                "Professional work history", 0.0, max_score, False,
                "No work experience added",
                ["Add work experience to strengthen your resume"],
            )

        completeness = []
        missing_dates = short_descriptions = 0
        for entry in entries:
            has_dates = bool(entry.start_date and (entry.end_date or entry.is_current))
            has_description = len(entry.description) >= self.settings.min_description_chars
            parts = [bool(entry.title), bool(entry.company), has_dates, has_description]
            completeness.append(sum(parts) / len(parts))
            missing_dates += not has_dates
            short_descriptions += not has_description

        mean = sum(completeness) / len(completeness)
        score = max_score * (EXPERIENCE_PRESENCE_SHARE + (1 - EXPERIENCE_PRESENCE_SHARE) * mean)
        score = round(score, 1)
        passed = score >= max_score * self.settings.pass_ratio

        suggestions = []
        if missing_dates:
            suggestions.append("Add start and end dates to all positions")
        if short_descriptions:
            suggestions.append("Add descriptions with accomplishments to each position")
        if not any(entry.achievements for entry in entries):
            suggestions.append("Consider adding bullet-point achievements to each position")

        return self._make_check(
            "work-experience", "Work Experience", CheckCategory.CONTENT,
            "Professional work history", score, max_score, passed,
            "Work experience section is comprehensive" if passed
            else "Work experience section needs more detail",
            suggestions,
        )

    def _check_education(self, data: ResumeData) -> ATSCheck:
        max_score = self._max("education")
        entries = data.education
        if not entries:
            return self._make_check(
                "education", "Education", CheckCategory.CONTENT,
                "Academic qualifications", 0.0, max_score, False,
                "No education information added",
                ["Add your educational background"],
            )

        completeness = [
            sum([bool(entry.institution), bool(entry.degree), entry.has_dates]) / 3
            for entry in entries
        ]
        mean = sum(completeness) / len(completeness)
        score = round(max_score * (EDUCATION_PRESENCE_SHARE + (1 - EDUCATION_PRESENCE_SHARE) * mean), 1)
        passed = score >= max_score * self.settings.pass_ratio

        suggestions = []
        if not all(entry.has_dates for entry in entries):
            suggestions.append("Add graduation dates to your education")

        return self._make_check(
            "education", "Education", CheckCategory.CONTENT,
            "Academic qualifications", score, max_score, passed,
            "Education section is complete" if passed
            else "Education section needs more information",
            suggestions,
        )

    def _check_skills(self, data: ResumeData) -> ATSCheck:
        max_score = self._max("skills")
        count = len(data.skills)
        ideal = self.settings.ideal_skills
        passed = count >= self.settings.min_skills

        suggestions = []
        if count == 0:
            feedback = "No skills added"
            suggestions.append("Add relevant skills to your resume")
        elif count < ideal:
            feedback = "Skills section is well-populated" if passed else "Add more skills"
            suggestions.append(f"Consider adding more relevant skills ({ideal}-20 is optimal)")
        elif count > self.settings.max_skills:
            feedback = "Skills section is well-populated"
            suggestions.append("Trim your skills list to the ones most relevant to your target roles")
        else:
            feedback = "Skills section is well-populated"

        return self._make_check(
            "skills", "Skills Section", CheckCategory.KEYWORDS,
            "Technical and professional skills",
            max_score * min(count, ideal) / ideal, max_score, passed, feedback, suggestions,
        )

    def _check_keywords(self, data: ResumeData) -> ATSCheck:
        max_score = self._max("keywords")
        texts = [data.summary or ""]
        texts.extend(_experience_text(entry) for entry in data.experience)
        texts.extend(project.description for project in data.projects)
        words = set(WORD_RE.findall(" ".join(texts).lower()))
        verbs = sorted(words & ACTION_VERB_SET)

        target = self.settings.action_verb_target
        passed = len(verbs) >= math.ceil(target * self.settings.action_verb_pass_ratio)
        suggestions = []
        if len(verbs) < target:
            suggestions.append('Use action verbs like "achieved", "led", "developed"')

        return self._make_check(
            "keywords", "Action Verbs", CheckCategory.KEYWORDS,
            "Strong action verbs that ATS and recruiters look for",
            max_score * min(len(verbs), target) / target, max_score, passed,
            f"Good use of action verbs ({len(verbs)} found)" if passed
            else "Use more action verbs to describe your experience",
            suggestions,
        )

    def _check_quantifiable(self, data: ResumeData) -> ATSCheck:
        max_score = self._max("quantifiable")
        entries = data.experience
        if not entries:
            return self._make_check(
                "quantifiable", "Quantifiable Achievements", CheckCategory.STRUCTURE,
                "Numbers and metrics that show impact", 0.0, max_score, False,
                "Add measurable achievements to your experience",
                ["Add work experience with measurable results"],
            )

        hits_per_entry = [count_quantifiable(_experience_text(entry)) for entry in entries]
        hit_rate = sum(1 for hits in hits_per_entry if hits) / len(entries)
        target = self.settings.quantifiable_hit_target
        hits = min(sum(hits_per_entry), target) / target

        score = round(max_score * (QUANTIFIED_ENTRY_SHARE * hit_rate + (1 - QUANTIFIED_ENTRY_SHARE) * hits), 1)
        passed = score >= max_score * self.settings.quantifiable_pass_ratio

        suggestions = []
        if hit_rate < 1:
            suggestions.append('Add numbers to show impact (e.g., "increased sales by 25%")')

        return self._make_check(
            "quantifiable", "Quantifiable Achievements", CheckCategory.STRUCTURE,
            "Numbers and metrics that show impact", score, max_score, passed,
            "Good use of quantifiable achievements" if passed
            else "Add measurable achievements to your experience",
            suggestions,
        )

    def _check_content_length(self, data: ResumeData) -> ATSCheck:
        max_score = self._max("content-length")
        words = count_words(resume_text(data))
        low, high = self.settings.content_min_words, self.settings.content_max_words

        if words < low:
            score, passed = max_score * OUT_OF_BAND_SHARE * words / low, False
            feedback = "Resume content is too brief"
            suggestions = [f"Add more detail; aim for {low}-{high} words"]
        elif words > high:
            score, passed = max_score * OUT_OF_BAND_SHARE, False
            feedback = "Resume content is too long"
            suggestions = [f"Tighten your resume to under {high} words"]
        else:
            score, passed = max_score, True
            feedback = f"Resume length is appropriate ({words} words)"
            suggestions = []

        return self._make_check(
            "content-length", "Content Length", CheckCategory.STRUCTURE,
            "Overall amount of résumé content", score, max_score, passed, feedback, suggestions,
        )


def resume_text(data: ResumeData) -> str:
    """Flatten every user-visible text field of a résumé, in section order."""
    info = data.personal_info
    parts: List[Optional[str]] = [
        info.first_name, info.last_name, info.headline, info.email, info.phone, info.location,
        data.summary,
    ]
    for entry in data.experience:
        parts.extend([entry.title, entry.company, entry.location, entry.description])
    for education in data.education:
        parts.extend([education.institution, education.degree, education.field_of_study, education.grade])
    parts.extend(data.skills)
    for certification in data.certifications:
        parts.extend([certification.name, certification.issuer])
    for project in data.projects:
        parts.extend([project.name, project.description, *project.technologies])
    for language in data.languages:
        parts.append(language.name)
    return "\n".join(part for part in parts if part)


def score(data: ResumeData) -> ATSScoreResult:
    """
    Score a résumé for ATS compatibility.

    Args:
        data: Résumé to evaluate

    Returns:
        ATSScoreResult
    """
    return ATSScorer().score(data)

"""
Structural résumé parser.

Turns ExtractedText into ResumeData with rule-based heuristics: contact
header extraction, section segmentation by heading synonyms, and entry
segmentation keyed on date ranges. Nothing here raises for odd input
except an empty document; entries that fail validation are dropped and
reported as warnings.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError

from ..config.settings import ParserSettings, get_settings
from ..config.vocabulary import (
    ACTION_VERBS,
    DEGREE_KEYWORDS,
    HEADER_LOOKUP,
    INSTITUTION_KEYWORDS,
    LANGUAGE_PROFICIENCY,
    NAME_STOPWORDS,
)
from ..exceptions import EmptyTextError
from ..models.document import ExtractedText, TextLine
from ..models.resume import (
    Certification,
    Education,
    Experience,
    Language,
    PersonalInfo,
    Project,
    ResumeData,
)
from ..utils.contact import ContactToken, find_contact_tokens, is_location
from ..utils.dates import DateRange, find_date_range, find_dates, normalize_date, strip_dates
from ..utils.logger import get_logger

logger = get_logger(__name__)

BULLET_RE = re.compile(r"^(?:[•·▪●◦‣⁃➢►✓■❖]\s*|[*\-–—]\s+|\(?\d{1,2}[.)]\s+)")
FIELD_SEPARATOR_RE = re.compile(r"\s*(?:\||•|·|\t)\s*|\s+[–—-]\s+|\s+(?:at|@)\s+")
# Institution names contain "at" ("University of Texas at Austin")
EDUCATION_SEPARATOR_RE = re.compile(r"\s*(?:\||•|·|\t)\s*|\s+[–—-]\s+")
SKILL_SEPARATOR_RE = re.compile(r"\s*(?:[,;|•·▪●◦‣]|\s[–—-]\s|\t)\s*")
LANGUAGE_SEPARATOR_RE = re.compile(r"\s*[,;|•·▪●◦‣]\s*")

DEGREE_RE = re.compile(r"(?<![\w.])(?:" + "|".join(DEGREE_KEYWORDS) + r")(?!\w)", re.IGNORECASE)
INSTITUTION_RE = re.compile(r"\b(?:" + "|".join(INSTITUTION_KEYWORDS) + r")\b", re.IGNORECASE)
GPA_RE = re.compile(
    r"\b(?:c?gpa|grade|percentage)\s*[:\-]?\s*(\d+(?:\.\d+)?(?:\s*/\s*\d+(?:\.\d+)?)?%?)",
    re.IGNORECASE,
)
CORPORATE_SUFFIX_RE = re.compile(r"^(?:inc|llc|ltd|co|corp|gmbh|plc|pvt|pty|ag|sa)\.?$", re.IGNORECASE)
EXPIRY_RE = re.compile(r"\b(?:expires?|expiry|expiration|valid until|exp)\b\.?:?", re.IGNORECASE)
ISSUED_RE = re.compile(r"\b(?:issued|obtained|earned|completed)\b:?", re.IGNORECASE)
LINK_LABEL_RE = re.compile(r"\[[^\]]*\]")
TRAILING_PARENS_RE = re.compile(r"\(([^()]*)\)\s*$")
TECH_LINE_RE = re.compile(r"^(?:tech(?:nologies|nology)?(?:\s+stack)?|stack|built with|tools)\s*:\s*", re.IGNORECASE)
NUMERIC_RE = re.compile(r"^[\d\s.,%+\-/]+$")

FIELD_STRIP = " \t|•·,;:–—-"
SENTENCE_END = ".!?;:"
ACTION_VERB_SET = frozenset(ACTION_VERBS)

# Sections whose body lines often read "Label: value"; an inline heading
# inside them needs a layout cue before it is trusted
LABELLED_CONTENT_SECTIONS = {"experience", "projects", "skills"}


def header_key(text: str) -> str:
    """Normalize a candidate heading for synonym lookup."""
    key = text.lower().replace("&", " and ")
    key = re.sub(r"[^\w\s]", " ", key)
    return " ".join(key.split())


def strip_bullet(text: str) -> Tuple[bool, str]:
    """Return (is_bullet, text without the bullet glyph)."""
    match = BULLET_RE.match(text)
    if match:
        return True, text[match.end():].strip()
    return False, text


def _split_location_tail(part: str) -> Tuple[str, Optional[str]]:
    # "Acme Corp, San Francisco, CA" -> ("Acme Corp", "San Francisco, CA")
    pieces = part.split(",")
    for index in range(1, len(pieces)):
        tail = ",".join(pieces[index:]).strip()
        if is_location(tail):
            return ",".join(pieces[:index]).strip(), tail
    return part, None


def split_fields(text: str, separator: re.Pattern = FIELD_SEPARATOR_RE) -> Tuple[List[str], Optional[str]]:
    """
    Split an entry header line into fields, pulling out a location.

    Args:
        text: Header text, dates already removed
        separator: Field separator pattern

    Returns:
        Tuple of (fields, location or None)
    """
    fields = []
    location = None
    for part in separator.split(text):
        part = part.strip(FIELD_STRIP)
        if not part:
            continue
        if location is None and is_location(part):
            location = part
            continue
        if location is None and "," in part:
            part, location = _split_location_tail(part)
        fields.append(part)

    # "Software Engineer, Acme Corp" but not "Acme, Inc."
    if len(fields) == 1 and ", " in fields[0]:
        first, rest = fields[0].split(", ", 1)
        if not CORPORATE_SUFFIX_RE.match(rest.strip()):
            fields = [first.strip(), rest.strip()]
    return fields, location


@dataclass
class Section:
    """Lines collected under one heading."""
    name: str
    lines: List[TextLine] = field(default_factory=list)


@dataclass
class EntryBlock:
    """A dated entry found inside the experience or education section."""
    dates: Optional[DateRange]
    header: List[str]
    after: List[str] = field(default_factory=list)
    body: List[TextLine] = field(default_factory=list)

    @property
    def header_texts(self) -> List[str]:
        return self.header + self.after


class ParseResult(BaseModel):
    """Parser output plus the warnings collected while building it."""
    resume: ResumeData
    warnings: List[str] = Field(default_factory=list)


class ResumeBuilder:
    """
    Accumulates parsed records and validates each one as it is added.

    A record that fails validation is dropped and a warning recorded, so one
    bad entry never corrupts or aborts the rest of the résumé.
    """

    def __init__(self):
        self.personal_info: Dict[str, Any] = {}
        self.summary: Optional[str] = None
        self.skills: List[str] = []
        self.entries: Dict[str, list] = {
            "experience": [],
            "education": [],
            "certifications": [],
            "projects": [],
            "languages": [],
        }
        self.warnings: List[str] = []

    def warn(self, message: str) -> None:
        logger.warning(message)
        self.warnings.append(message)

    def add(self, collection: str, model_cls, **fields) -> None:
        """
        Validate and append one record.

        Args:
            collection: ResumeData list field the record belongs to
            model_cls: Model to validate with
            **fields: Record fields
        """
        try:
            record = model_cls(**fields)
        except ValidationError as exc:
            self.warn(f"Dropped {collection} entry {self._describe(fields)}: {self._reasons(exc)}")
            return
        self.entries[collection].append(record)

    @staticmethod
    def _describe(fields: Dict[str, Any]) -> str:
        label = next(
            (fields[key] for key in ("title", "institution", "name", "company", "degree") if fields.get(key)),
            "(unnamed)",
        )
        start = fields.get("start_date") or fields.get("issue_date")
        end = "present" if fields.get("is_current") else fields.get("end_date") or fields.get("expiry_date")
        if start or end:
            return f"'{label}' ({start or '?'} to {end or '?'})"
        return f"'{label}'"

    @staticmethod
    def _reasons(exc: ValidationError) -> str:
        reasons = []
        for error in exc.errors():
            location = ".".join(str(part) for part in error["loc"]) or "entry"
            reasons.append(f"{location}: {error['msg']}")
        return "; ".join(reasons)

    def build(self) -> ParseResult:
        resume = ResumeData(
            personal_info=PersonalInfo(**self.personal_info),
            summary=self.summary,
            skills=self.skills,
            **self.entries,
        )
        return ParseResult(resume=resume, warnings=self.warnings)


class ResumeParser:
    """Parse extracted résumé text into ResumeData."""

    def __init__(self, settings: Optional[ParserSettings] = None):
        """
        Initialize parser.

        Args:
            settings: Parser heuristics; defaults to the global settings
        """
        self.settings = settings or get_settings().parser
        self._section_parsers: Dict[str, Callable[[List[TextLine], ResumeBuilder], None]] = {
            "summary": self._parse_summary,
            "experience": self._parse_experience,
            "education": self._parse_education,
            "skills": self._parse_skills,
            "certifications": self._parse_certifications,
            "projects": self._parse_projects,
            "languages": self._parse_languages,
        }

    def parse(self, text: ExtractedText) -> ResumeData:
        """Parse text into ResumeData, discarding warnings."""
        return self.parse_with_warnings(text).resume

    def parse_with_warnings(self, text: ExtractedText) -> ParseResult:
        """
        Parse text into ResumeData and report dropped content.

        Args:
            text: Extracted résumé text

        Returns:
            ParseResult with the résumé and any warnings

        Raises:
            EmptyTextError: If the text is empty
        """
        if text.is_empty():
            raise EmptyTextError("Cannot parse an empty résumé")

        lines = [line for line in text.lines if line.text.strip()]
        if not lines:
            lines = list(ExtractedText.from_string(text.text).lines)

        builder = ResumeBuilder()
        preamble, sections = self._segment_sections(lines, text.has_bold_hints)
        logger.debug(
            f"Segmented {len(preamble)} preamble lines and sections "
            f"{[(name, len(section.lines)) for name, section in sections.items()]}"
        )

        block_end = self._parse_header(preamble, builder)
        if "summary" not in sections:
            leftover = preamble[block_end + 1:]
            if leftover:
                builder.summary = self._join_paragraphs(leftover)

        for name, section in sections.items():
            self._section_parsers[name](section.lines, builder)

        result = builder.build()
        resume = result.resume
        logger.info(
            f"Parsed résumé: {len(resume.experience)} experience, {len(resume.education)} education, "
            f"{len(resume.skills)} skills, {len(resume.certifications)} certifications, "
            f"{len(result.warnings)} warnings"
        )
        return result

    # Section segmentation

    def _segment_sections(
        self,
        lines: List[TextLine],
        has_bold_hints: bool
    ) -> Tuple[List[TextLine], Dict[str, Section]]:
        preamble: List[TextLine] = []
        sections: Dict[str, Section] = {}
        current: Optional[Section] = None

        for line in lines:
            heading = self._classify_heading(line, has_bold_hints, current.name if current else None)
            if heading is not None:
                name, remainder = heading
                current = sections.setdefault(name, Section(name))
                if remainder:
                    current.lines.append(line.model_copy(update={"text": remainder}))
                continue
            if current is None:
                preamble.append(line)
            else:
                current.lines.append(line)
        return preamble, sections

    def _classify_heading(
        self,
        line: TextLine,
        has_bold_hints: bool,
        current: Optional[str]
    ) -> Optional[Tuple[str, str]]:
        """Return (section, inline remainder) if the line is a section heading."""
        head, _, remainder = line.text.partition(":")
        key = header_key(head)
        section = HEADER_LOOKUP.get(key)
        if section is None or len(key.split()) > self.settings.max_header_tokens:
            return None

        remainder = remainder.strip()
        has_layout_cue = line.gap_before or bool(line.is_bold)
        if remainder and current in LABELLED_CONTENT_SECTIONS and not has_layout_cue:
            return None

        if (
            self.settings.require_bold_headers
            and has_bold_hints
            and line.is_bold is False
            and not head.strip().isupper()
        ):
            return None
        return section, remainder

    # Header block

    def _parse_header(self, preamble: List[TextLine], builder: ResumeBuilder) -> int:
        """
        Extract name, headline, location and contact details.

        Returns:
            Index of the last preamble line that belongs to the header block,
            or -1 when there is none
        """
        window = preamble[: self.settings.header_window]
        if not window:
            return -1

        contacts = [find_contact_tokens(line.text) for line in window]
        contact_rows = [index for index, tokens in enumerate(contacts) if tokens]
        for tokens in contacts:
            for token in tokens:
                builder.personal_info.setdefault(token.kind, token.value)

        info = builder.personal_info
        name_row = None
        last_name_row = min(contact_rows[0] if contact_rows else 2, len(window) - 1, 2)
        for index in range(last_name_row + 1):
            segments = self._segments(window[index].text, contacts[index])
            if not segments:
                continue
            name = self._name_tokens(segments[0])
            if name:
                name_row = index
                info["first_name"] = name[0]
                if len(name) > 1:
                    info["last_name"] = " ".join(name[1:])
                for segment in segments[1:]:
                    self._header_segment(segment, info)
                break

        headline_row = None
        if name_row is not None and name_row + 1 < len(window) and "headline" not in info:
            row = name_row + 1
            inside_block = any(contact_row > row for contact_row in contact_rows)
            if not contacts[row] and self._is_headline(window[row], inside_block):
                info["headline"] = window[row].text
                headline_row = row

        block_rows = contact_rows + [row for row in (name_row, headline_row) if row is not None]
        block_end = max(block_rows) if block_rows else -1

        for index in range(block_end + 1):
            if index in (name_row, headline_row):
                continue
            for segment in self._segments(window[index].text, contacts[index]):
                if "location" not in info and is_location(segment):
                    info["location"] = segment

        # A location line directly under the contact block belongs to it
        if block_end >= 0 and block_end + 1 < len(window) and is_location(window[block_end + 1].text):
            info.setdefault("location", window[block_end + 1].text)
            block_end += 1

        logger.debug(f"Header block ends at preamble line {block_end}; found {sorted(info)}")
        return block_end

    @staticmethod
    def _segments(text: str, tokens: List[ContactToken]) -> List[str]:
        """Split a header line into segments with contact tokens removed."""
        for token in reversed(tokens):
            text = f"{text[:token.start]} | {text[token.end:]}"
        pieces = re.split(r"\s*[|•·\t]\s*|\s+[–—-]\s+|\s{3,}", text)
        segments = []
        for piece in pieces:
            piece = re.sub(r"^(?:e-?mail|phone|tel|mobile|linkedin|github|web(?:site)?)\s*:", "", piece, flags=re.IGNORECASE)
            piece = piece.strip(FIELD_STRIP)
            if piece:
                segments.append(piece)
        return segments

    def _name_tokens(self, text: str) -> Optional[List[str]]:
        tokens = text.split()
        if not 1 <= len(tokens) <= self.settings.max_name_tokens:
            return None
        if any(token.lower().strip(".,:") in NAME_STOPWORDS for token in tokens):
            return None
        if header_key(text) in HEADER_LOOKUP:
            return None
        for token in tokens:
            core = re.sub(r"['’.\-]", "", token)
            if not core or not core.isalpha() or not token[0].isupper():
                return None
        return [token.title() if token.isupper() else token for token in tokens]

    @staticmethod
    def _header_segment(segment: str, info: Dict[str, Any]) -> None:
        # Remaining pieces of the name line: "JANE DOE | Data Scientist | Austin, TX"
        if is_location(segment):
            info.setdefault("location", segment)
        elif "headline" not in info and 5 <= len(segment) <= 100:
            info["headline"] = segment

    @staticmethod
    def _is_headline(line: TextLine, inside_block: bool) -> bool:
        text = line.text
        if not 5 <= len(text) <= 100 or is_location(text) or find_date_range(text):
            return False
        if inside_block:
            return True
        return not line.gap_before and len(text.split()) <= 8 and not text.endswith(".")

    # Shared helpers

    def _is_entry_header(self, line: TextLine) -> bool:
        """Short, non-bullet, non-sentence line that can name an entry."""
        text = line.text
        if BULLET_RE.match(text) or len(text) > self.settings.max_entry_header_chars:
            return False
        if find_date_range(text):
            return False
        words = text.split()
        if len(words) > 12 or text.endswith(("!", "?")):
            return False
        # "Led a team of 5 engineers." is a sentence; "Acme Inc." and "B.S." are names
        if text.endswith(".") and (len(words) > 6 or words[-1][:-1].islower()):
            return False
        return not (len(words) > 2 and words[0].lower() in ACTION_VERB_SET and words[1].islower())

    def _dated_line(self, line: TextLine, allow_single: bool = False) -> Optional[DateRange]:
        text = line.text
        if BULLET_RE.match(text) or len(text) > self.settings.max_entry_header_chars:
            return None
        dates = find_date_range(text)
        if dates or not allow_single:
            return dates
        found = find_dates(text)
        if len(found) != 1:
            return None
        _, span = found[0]
        # A graduation year closes the entry
        return DateRange(None, normalize_date(text[span[0]:span[1]], is_end=True), False, span)

    def _segment_entries(
        self,
        lines: List[TextLine],
        boundaries: List[Tuple[int, Optional[DateRange]]],
        needs_more: Callable[[EntryBlock], bool],
        section: str,
        builder: ResumeBuilder
    ) -> List[EntryBlock]:
        """
        Split section lines into entries around boundary lines.

        Up to two short lines above a boundary, plus the boundary line's own
        text, form the entry header. When ``needs_more`` says the header is
        incomplete, up to two short lines below the boundary are added too;
        only one when nothing above or on the boundary line names the entry,
        since a title is never taken from below.
        """
        blocks: List[EntryBlock] = []
        floor = 0
        body_start = 0
        for position, (index, dates) in enumerate(boundaries):
            residual = strip_dates(lines[index].text) if dates else lines[index].text
            start = index
            # "Title | Company | 2020 - Present" needs nothing from the lines above
            self_contained = bool(residual) and not needs_more(EntryBlock(dates=dates, header=[residual]))
            while (
                not self_contained
                and start > floor
                and index - start < 2
                and self._is_entry_header(lines[start - 1])
            ):
                start -= 1

            if blocks:
                blocks[-1].body = lines[body_start:start]
            elif start > 0:
                builder.warn(f"Ignored {start} line(s) before the first {section} entry")

            header = [line.text for line in lines[start:index]]
            if residual:
                header.append(residual)
            block = EntryBlock(dates=dates, header=header)

            body_start = index + 1
            max_after = 2 if header else 1
            limit = boundaries[position + 1][0] if position + 1 < len(boundaries) else len(lines)
            while (
                body_start < limit
                and len(block.after) < max_after
                and self._is_entry_header(lines[body_start])
                and needs_more(block)
            ):
                block.after.append(lines[body_start].text)
                body_start += 1

            floor = body_start
            blocks.append(block)

        if blocks:
            blocks[-1].body = lines[body_start:]
        return blocks

    @staticmethod
    def _collect_body(lines: List[TextLine]) -> Tuple[str, List[str]]:
        """
        Join description lines, merging wrapped continuations.

        Returns:
            Tuple of (description, achievements) where achievements are the
            bullet items
        """
        items: List[List[Any]] = []
        for line in lines:
            is_bullet, text = strip_bullet(line.text)
            if not text:
                continue
            if is_bullet:
                items.append([True, text])
                continue
            if items and not line.gap_before:
                previous_bullet, previous_text = items[-1]
                if not previous_bullet or text[:1].islower() or not previous_text.endswith(tuple(SENTENCE_END)):
                    items[-1][1] = f"{previous_text} {text}"
                    continue
            items.append([False, text])

        description = "\n".join(f"• {text}" if is_bullet else text for is_bullet, text in items)
        achievements = [text for is_bullet, text in items if is_bullet]
        return description, achievements

    @staticmethod
    def _join_paragraphs(lines: List[TextLine]) -> Optional[str]:
        paragraphs: List[str] = []
        for line in lines:
            is_bullet, text = strip_bullet(line.text)
            if paragraphs and not line.gap_before and not is_bullet:
                paragraphs[-1] = f"{paragraphs[-1]} {text}"
            else:
                paragraphs.append(text)
        return "\n".join(paragraphs) or None

    # Section parsers

    def _parse_summary(self, lines: List[TextLine], builder: ResumeBuilder) -> None:
        builder.summary = self._join_paragraphs(lines)

    def _parse_experience(self, lines: List[TextLine], builder: ResumeBuilder) -> None:
        boundaries = [
            (index, dates) for index, dates in
            ((index, self._dated_line(line)) for index, line in enumerate(lines))
            if dates is not None
        ]
        if not boundaries:
            if lines:
                builder.warn(f"No dated entries found in the experience section; {len(lines)} line(s) ignored")
            return

        def needs_more(block: EntryBlock) -> bool:
            fields, _ = self._experience_fields(block.header_texts)
            return len(fields) < 2

        for block in self._segment_entries(lines, boundaries, needs_more, "experience", builder):
            fields, location = self._experience_fields(block.header_texts)
            if not block.header:
                # Only a company can sit below a bare date line
                fields = ["", *fields[:1]]
            body = block.body
            if location is None and body and is_location(body[0].text):
                location = body[0].text
                body = body[1:]
            description, achievements = self._collect_body(body)
            builder.add(
                "experience",
                Experience,
                title=fields[0] if fields else "",
                company=fields[1] if len(fields) > 1 else "",
                location=location,
                start_date=block.dates.start,
                end_date=block.dates.end,
                is_current=block.dates.is_current,
                description=description,
                achievements=achievements,
            )

    @staticmethod
    def _experience_fields(texts: List[str]) -> Tuple[List[str], Optional[str]]:
        fields: List[str] = []
        location = None
        for text in texts:
            found, found_location = split_fields(text)
            fields.extend(found)
            location = location or found_location
        return fields, location

    def _parse_education(self, lines: List[TextLine], builder: ResumeBuilder) -> None:
        boundaries = [
            (index, dates) for index, dates in
            ((index, self._dated_line(line, allow_single=True)) for index, line in enumerate(lines))
            if dates is not None
        ]
        if not boundaries:
            # Undated education: each degree line starts an entry
            boundaries = [
                (index, None) for index, line in enumerate(lines)
                if not BULLET_RE.match(line.text) and DEGREE_RE.search(line.text)
            ]
        if not boundaries:
            if lines:
                builder.warn(f"No education entries recognized; {len(lines)} line(s) ignored")
            return

        def needs_more(block: EntryBlock) -> bool:
            info = self._education_fields(block.header_texts)
            return not info["institution"] or not info["degree"]

        for block in self._segment_entries(lines, boundaries, needs_more, "education", builder):
            info = self._education_fields(block.header_texts)
            for line in block.body:
                _, text = strip_bullet(line.text)
                grade = GPA_RE.search(text)
                if grade and not info["grade"]:
                    info["grade"] = grade.group(1)
                elif not info["degree"] and DEGREE_RE.search(text):
                    degree, _, study = text.partition(" in ")
                    info["degree"] = degree.strip(FIELD_STRIP)
                    info["field_of_study"] = info["field_of_study"] or study.strip(FIELD_STRIP) or None

            dates = block.dates or DateRange(None, None, False, (0, 0))
            builder.add(
                "education",
                Education,
                institution=info["institution"] or "",
                degree=info["degree"] or "",
                field_of_study=info["field_of_study"],
                grade=info["grade"],
                start_date=dates.start,
                end_date=dates.end,
                is_current=dates.is_current,
            )

    @staticmethod
    def _education_fields(texts: List[str]) -> Dict[str, Optional[str]]:
        info: Dict[str, Optional[str]] = dict.fromkeys(("institution", "degree", "field_of_study", "grade"))
        leftovers = []
        for text in texts:
            grade = GPA_RE.search(text)
            if grade:
                info["grade"] = info["grade"] or grade.group(1)
                text = GPA_RE.sub(" ", text)

            fields, _ = split_fields(text, EDUCATION_SEPARATOR_RE)
            degree_in_text = False
            for item in fields:
                has_degree = bool(DEGREE_RE.search(item))
                has_institution = bool(INSTITUTION_RE.search(item))
                if has_degree and not info["degree"]:
                    degree, separator, study = item.partition(" in ")
                    info["degree"] = degree.strip(FIELD_STRIP)
                    if separator and study.strip():
                        info["field_of_study"] = study.strip(FIELD_STRIP)
                    degree_in_text = True
                elif has_institution and not info["institution"]:
                    info["institution"] = item
                elif degree_in_text and not info["field_of_study"]:
                    info["field_of_study"] = item
                else:
                    leftovers.append(item)

        for item in leftovers:
            if not info["institution"]:
                info["institution"] = item
            elif not info["degree"]:
                info["degree"] = item
        return info

    def _parse_skills(self, lines: List[TextLine], builder: ResumeBuilder) -> None:
        for line in lines:
            _, text = strip_bullet(line.text)
            # "Languages: Python, Go" -> "Python, Go"
            label, separator, rest = text.partition(":")
            if separator and rest.strip() and len(label.split()) <= 4:
                text = rest
            for token in SKILL_SEPARATOR_RE.split(text):
                token = token.strip(" .()[]")
                if (
                    len(token) < 2
                    or len(token) > self.settings.max_skill_chars
                    or NUMERIC_RE.match(token)
                ):
                    continue
                if len(builder.skills) >= self.settings.max_skills:
                    builder.warn(f"Skills list truncated at {self.settings.max_skills} entries")
                    return
                builder.skills.append(token)

    def _parse_certifications(self, lines: List[TextLine], builder: ResumeBuilder) -> None:
        pending: List[Dict[str, Any]] = []
        for line in lines:
            _, text = strip_bullet(line.text)
            issue_date, expiry_date = self._certification_dates(text)
            residual = strip_dates(ISSUED_RE.sub(" ", EXPIRY_RE.sub(" ", text)))

            if not residual:
                # Date-only line belongs to the certification above it
                if pending and not (pending[-1]["issue_date"] or pending[-1]["expiry_date"]):
                    pending[-1]["issue_date"] = issue_date
                    pending[-1]["expiry_date"] = expiry_date
                elif issue_date or expiry_date:
                    builder.warn(f"Ignored certification date line without a certification: {text!r}")
                continue

            fields, _ = split_fields(residual, EDUCATION_SEPARATOR_RE)
            pending.append({
                "name": fields[0] if fields else residual,
                "issuer": fields[1] if len(fields) > 1 else "",
                "issue_date": issue_date,
                "expiry_date": expiry_date,
            })

        for fields in pending:
            builder.add("certifications", Certification, **fields)

    @staticmethod
    def _certification_dates(text: str) -> Tuple[Optional[str], Optional[str]]:
        """Return (issue_date, expiry_date) for a certification line."""
        dates = find_date_range(text)
        if dates:
            return dates.start, dates.end
        found = find_dates(text)
        if not found:
            return None, None
        if len(found) == 1:
            date, span = found[0]
            if EXPIRY_RE.search(text[:span[0]]):
                return None, date
            return date, None
        return found[0][0], found[1][0]

    def _parse_projects(self, lines: List[TextLine], builder: ResumeBuilder) -> None:
        projects: List[Dict[str, Any]] = []
        for line in lines:
            is_bullet, text = strip_bullet(line.text)
            current = projects[-1] if projects else None
            starts_project = not is_bullet and self._is_entry_header(line) and (
                current is None
                or line.gap_before
                or bool(line.is_bold)
                or bool(TRAILING_PARENS_RE.search(LINK_LABEL_RE.sub("", text)))
                or (current["body"] and BULLET_RE.match(current["body"][-1].text))
            )
            if starts_project:
                projects.append({"header": text, "body": []})
            elif current is not None:
                current["body"].append(line)

        for project in projects:
            name, technologies = self._project_header(project["header"])
            body = []
            for line in project["body"]:
                _, text = strip_bullet(line.text)
                tech_line = TECH_LINE_RE.match(text)
                if tech_line:
                    technologies.extend(
                        item.strip() for item in SKILL_SEPARATOR_RE.split(text[tech_line.end():]) if item.strip()
                    )
                else:
                    body.append(line)
            description, _ = self._collect_body(body)
            builder.add("projects", Project, name=name, description=description, technologies=technologies)

    @staticmethod
    def _project_header(text: str) -> Tuple[str, List[str]]:
        text = strip_dates(LINK_LABEL_RE.sub(" ", text))
        technologies: List[str] = []
        parens = TRAILING_PARENS_RE.search(text)
        if parens:
            technologies = [item.strip() for item in SKILL_SEPARATOR_RE.split(parens.group(1)) if item.strip()]
            text = text[:parens.start()]
        fields, _ = split_fields(text, EDUCATION_SEPARATOR_RE)
        return (fields[0] if fields else text.strip()), technologies

    def _parse_languages(self, lines: List[TextLine], builder: ResumeBuilder) -> None:
        keywords = sorted(LANGUAGE_PROFICIENCY, key=len, reverse=True)
        for line in lines:
            _, text = strip_bullet(line.text)
            for item in LANGUAGE_SEPARATOR_RE.split(text):
                name = item
                proficiency = None
                for keyword in keywords:
                    pattern = rf"\b{re.escape(keyword)}\b"
                    if re.search(pattern, item, re.IGNORECASE):
                        proficiency = LANGUAGE_PROFICIENCY[keyword]
                        name = re.sub(pattern, " ", item, flags=re.IGNORECASE)
                        break
                name = re.sub(r"\(\s*\)", " ", name)
                name = re.sub(r"\b(?:speaker|level|proficiency)\b", " ", name, flags=re.IGNORECASE)
                name = " ".join(name.split()).strip(FIELD_STRIP + "()")
                if not name:
                    continue
                fields = {"name": name}
                if proficiency:
                    fields["proficiency"] = proficiency
                builder.add("languages", Language, **fields)


def parse(text: ExtractedText) -> ResumeData:
    """
    Parse extracted text into ResumeData.

    Args:
        text: Output of ``extract_text``

    Returns:
        ResumeData; dropped entries are logged
    """
    return ResumeParser().parse(text)


def parse_with_warnings(text: ExtractedText) -> ParseResult:
    """Parse extracted text and return the warnings alongside the résumé."""
    return ResumeParser().parse_with_warnings(text)

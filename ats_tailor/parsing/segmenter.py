from __future__ import annotations

import logging
import re
from collections.abc import Callable

from ats_tailor.collaborators.location import LocationNormalizer
from ats_tailor.core.scoring import get_scoring_value
from ats_tailor.schemas.resume import ContactInfo, Section, SectionType, SegmentedDocument
from ats_tailor.taxonomy import Lexicon, resolve_lexicon

logger = logging.getLogger(__name__)

_TRAILING_HEADER_PUNCT = re.compile(r"[:\s]+$")
_EMAIL_RE = re.compile(r"[\w.+-]+@[\w.-]+\.[a-zA-Z]{2,}")
_PHONE_RE = re.compile(r"(?:\+\d{1,3}[\s-]?)?(?:\(?\d{2,4}\)?[\s.-]?)?\d{3,4}[\s.-]?\d{3,4}")
_LINKEDIN_RE = re.compile(r"linkedin\.com/in/[\w-]+", re.IGNORECASE)
_GITHUB_RE = re.compile(r"github\.com/[\w-]+", re.IGNORECASE)
_LOCATION_RE = re.compile(r"\b[A-Z][a-zA-Z ]+,\s*(?:[A-Z]{2}\b|[A-Z][a-zA-Z ]+)")
_NAME_RE = re.compile(r"^[A-Za-z\s\-']+$")
_NOT_A_HEADER = re.compile(r"[|–—\d]")


class PartitionInvariantError(AssertionError):
    """Raised when segmentation loses or duplicates a non-blank input line."""


HeaderRule = tuple[SectionType, Callable[[str], bool]]


def build_header_rules(lexicon: Lexicon, *, regex_max_words: int | None = None) -> list[HeaderRule]:
    max_words = int(regex_max_words or get_scoring_value("resume.header_regex_max_words", 6))
    rules: list[HeaderRule] = []
    for rule in lexicon.section_rules:

        def predicate(line: str, _rule=rule) -> bool:
            cleaned = _TRAILING_HEADER_PUNCT.sub("", line).strip()
            if cleaned.lower() in _rule.aliases:
                return True
            if _NOT_A_HEADER.search(cleaned) or len(cleaned.split()) > max_words:
                return False
            match = _rule.pattern.match(cleaned)
            # "Research Engineer" is a job title, not a Research header.
            return bool(match) and not lexicon.has_title_keyword(cleaned[match.end() :])

        rules.append((rule.section_type, predicate))
    return rules


def detect_section_header(line: str, rules: list[HeaderRule]) -> SectionType | None:
    for section_type, predicate in rules:
        if predicate(line):
            return section_type
    return None


def _flush_section(section_type: SectionType, header: str, buffer: list[str]) -> Section:
    content = "\n".join(buffer).strip()
    line_count = sum(1 for line in buffer if line.strip())
    return Section(type=section_type, header=header, content=content, line_count=line_count)


def segment_document(text: str, lexicon: Lexicon | None = None) -> SegmentedDocument:
    """Split normalized résumé text into a contact preamble and typed sections.

    Single pass, no lookahead: a header closes the open section and opens the
    next one; lines before the first header form the contact preamble.
    """
    rules = build_header_rules(resolve_lexicon(lexicon))
    contact_lines: list[str] = []
    sections: list[Section] = []
    open_type: SectionType | None = None
    open_header = ""
    buffer: list[str] = []
    header_count = 0
    non_blank_count = 0

    for raw_line in text.split("\n"):
        stripped = raw_line.strip()
        if not stripped:
            if open_type is not None:
                buffer.append("")
            continue

        non_blank_count += 1
        section_type = detect_section_header(stripped, rules)
        if section_type is not None:
            if open_type is not None:
                sections.append(_flush_section(open_type, open_header, buffer))
            open_type, open_header, buffer = section_type, stripped, []
            header_count += 1
            continue

        if open_type is not None:
            buffer.append(raw_line.rstrip())
        else:
            contact_lines.append(stripped)

    if open_type is not None:
        sections.append(_flush_section(open_type, open_header, buffer))

    content_count = sum(section.line_count for section in sections)
    if len(contact_lines) + content_count != non_blank_count - header_count:
        raise PartitionInvariantError(
            f"segmentation partition broken: contact={len(contact_lines)} content={content_count} "
            f"non_blank={non_blank_count} headers={header_count}"
        )

    logger.debug(
        "resume_segmented sections=%s contact_lines=%s headers=%s",
        [section.type.value for section in sections],
        len(contact_lines),
        header_count,
    )
    return SegmentedDocument(
        contact_lines=contact_lines,
        sections=sections,
        header_line_count=header_count,
        content_line_count=content_count,
    )


def _title_case(value: str) -> str:
    return re.sub(r"\b\w", lambda match: match.group(0).upper(), value.lower())


def _first_match(pattern: re.Pattern[str], lines: list[str]) -> str:
    for line in lines:
        match = pattern.search(line)
        if match:
            return match.group(0).strip()
    return ""


def parse_contact(
    contact_lines: list[str],
    *,
    location_normalizer: LocationNormalizer | None = None,
    scan_lines: int | None = None,
) -> ContactInfo:
    limit = int(scan_lines or get_scoring_value("resume.contact_scan_lines", 15))
    max_name_tokens = int(get_scoring_value("resume.max_name_tokens", 5))
    head = [line for line in contact_lines if line.strip()][:limit]

    contact = ContactInfo(
        email=_first_match(_EMAIL_RE, head),
        phone=_first_match(_PHONE_RE, head),
        linkedin=_first_match(_LINKEDIN_RE, head),
        github=_first_match(_GITHUB_RE, head),
    )

    location = _first_match(_LOCATION_RE, head)
    if location and location_normalizer is not None:
        canonical = location_normalizer.normalize(location)
        if canonical:
            location = canonical
    contact.location = location

    if head:
        first_line = head[0].strip()
        if _NAME_RE.match(first_line) and len(first_line.split()) <= max_name_tokens:
            contact.name = _title_case(first_line)
    return contact

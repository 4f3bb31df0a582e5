from __future__ import annotations

import logging
from typing import Any

from ats_tailor.collaborators.location import LocationNormalizer
from ats_tailor.core.scoring import get_scoring_value
from ats_tailor.normalize.text import normalize_text
from ats_tailor.schemas.resume import ExperienceEntry, ParseOutcome, ResumeDocument, SectionType
from ats_tailor.taxonomy import Lexicon, resolve_lexicon

from .ancillary import (
    extract_certifications,
    extract_education,
    extract_projects,
    extract_skills,
    extract_summary,
)
from .experience import extract_experience
from .segmenter import parse_contact, segment_document

logger = logging.getLogger(__name__)


def _overall_confidence(entries: list[ExperienceEntry]) -> float:
    """Mean confidence of the locked company, title and date fields."""
    scores = [
        score
        for entry in entries
        for score in (entry.company.confidence, entry.title.confidence, entry.dates.confidence)
    ]
    if not scores:
        return 0.5
    return round(sum(scores) / len(scores), 2)


def parse_resume(
    text: Any,
    *,
    lexicon: Lexicon | None = None,
    location_normalizer: LocationNormalizer | None = None,
) -> ParseOutcome:
    if not isinstance(text, str):
        return ParseOutcome.insufficient_input("", "Resume text must be a string.")

    normalized = normalize_text(text)
    min_chars = int(get_scoring_value("resume.min_input_chars", 100))
    max_chars = int(get_scoring_value("resume.max_input_chars", 50000))
    if len(normalized) < min_chars:
        logger.info("resume_parse_skipped reason=too_short chars=%s", len(normalized))
        return ParseOutcome.insufficient_input(
            text, f"Resume text is too short to parse ({len(normalized)} < {min_chars} characters)."
        )
    if len(normalized) > max_chars:
        logger.info("resume_parse_skipped reason=too_long chars=%s", len(normalized))
        return ParseOutcome.insufficient_input(
            text, f"Resume text is too long to parse ({len(normalized)} > {max_chars} characters)."
        )

    resolved = resolve_lexicon(lexicon)
    segmented = segment_document(normalized, resolved)
    experience, warnings = extract_experience(segmented.content_of(SectionType.EXPERIENCE), resolved)
    if segmented.first(SectionType.EXPERIENCE) is None:
        warnings.insert(0, "No experience section found.")

    document = ResumeDocument(
        raw_text=text,
        normalized_text=normalized,
        contact=parse_contact(segmented.contact_lines, location_normalizer=location_normalizer),
        sections=segmented.sections,
        summary=extract_summary(segmented.content_of(SectionType.SUMMARY)),
        experience=experience,
        education=extract_education(segmented.content_of(SectionType.EDUCATION), resolved),
        skills=extract_skills(segmented.content_of(SectionType.SKILLS), resolved),
        certifications=extract_certifications(segmented.content_of(SectionType.CERTIFICATIONS)),
        projects=extract_projects(segmented.content_of(SectionType.PROJECTS)),
        awards=segmented.content_of(SectionType.AWARDS),
        publications=segmented.content_of(SectionType.PUBLICATIONS),
        warnings=warnings,
        confidence=_overall_confidence(experience),
    )
    logger.info(
        "resume_parsed sections=%s entries=%s warnings=%s",
        len(document.sections),
        len(document.experience),
        len(document.warnings),
    )
    return ParseOutcome(status="ok", document=document)

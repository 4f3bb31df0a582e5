from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from ats_tailor.ai.resilient import extract_qualifications_resilient
from ats_tailor.ai.types import QualificationExtractionService
from ats_tailor.collaborators.location import GazetteerLocationNormalizer, LocationNormalizer
from ats_tailor.collaborators.sanitizer import Sanitizer, TermMapSanitizer, sanitize_document
from ats_tailor.parsing.resume import parse_resume
from ats_tailor.qualifications.extractor import extract_qualifications
from ats_tailor.qualifications.keywords import bucket_keywords, keywords_from_qualifications
from ats_tailor.schemas.qualification import QualificationSet
from ats_tailor.schemas.tailoring import TailoringReport
from ats_tailor.scoring.matcher import score_match
from ats_tailor.scoring.recommendations import build_recommendations
from ats_tailor.tailoring.applier import apply_plan
from ats_tailor.tailoring.planner import Bounds, build_plan
from ats_tailor.taxonomy import Lexicon, resolve_lexicon

logger = logging.getLogger(__name__)

KeywordInput = Sequence[str] | Mapping[str, Any] | None


def _tailor_with_qualifications(
    resume_text: Any,
    qualifications: QualificationSet,
    keywords: KeywordInput,
    *,
    lexicon: Lexicon,
    sanitizer: Sanitizer | None,
    location_normalizer: LocationNormalizer | None,
    bounds: Bounds | None,
) -> TailoringReport:
    outcome = parse_resume(
        resume_text,
        lexicon=lexicon,
        location_normalizer=location_normalizer or GazetteerLocationNormalizer.from_lexicon(lexicon),
    )
    if not outcome.ok:
        logger.info("tailor_skipped reason=%s", outcome.status)
        return TailoringReport(
            parse_status=outcome.status,
            message=outcome.message,
            qualification_source=qualifications.source,
            document=outcome.document,
        )

    document = outcome.document
    initial_match = score_match(document, qualifications)
    if keywords is None:
        keywords = keywords_from_qualifications(qualifications, initial_match)
    buckets = bucket_keywords(keywords)

    plan = build_plan(buckets, document, bounds)
    tailored, stats = apply_plan(document, plan, buckets, lexicon=lexicon)
    tailored = sanitize_document(tailored, sanitizer or TermMapSanitizer.from_lexicon(lexicon))
    final_match = score_match(tailored, qualifications)

    logger.info(
        "tailor_completed initial_required_pct=%s final_required_pct=%s injected=%s unmet=%s",
        initial_match.required_match_pct,
        final_match.required_match_pct,
        stats.keywords_injected,
        len(stats.unmet_keywords),
    )
    return TailoringReport(
        parse_status=outcome.status,
        initial_match=initial_match,
        final_match=final_match,
        plan=plan,
        stats=stats,
        recommendations=build_recommendations(final_match),
        qualification_source=qualifications.source,
        document=tailored,
    )


def tailor_resume(
    resume_text: Any,
    job_text: Any,
    keywords: KeywordInput = None,
    *,
    lexicon: Lexicon | None = None,
    sanitizer: Sanitizer | None = None,
    location_normalizer: LocationNormalizer | None = None,
    bounds: Bounds | None = None,
) -> TailoringReport:
    """Parse, score, inject keywords, sanitize and rescore a resume against a job posting."""
    resolved = resolve_lexicon(lexicon)
    qualifications = extract_qualifications(job_text, resolved)
    return _tailor_with_qualifications(
        resume_text,
        qualifications,
        keywords,
        lexicon=resolved,
        sanitizer=sanitizer,
        location_normalizer=location_normalizer,
        bounds=bounds,
    )


async def tailor_resume_async(
    resume_text: Any,
    job_text: Any,
    keywords: KeywordInput = None,
    *,
    service: QualificationExtractionService | None = None,
    timeout_s: float | None = None,
    lexicon: Lexicon | None = None,
    sanitizer: Sanitizer | None = None,
    location_normalizer: LocationNormalizer | None = None,
    bounds: Bounds | None = None,
) -> TailoringReport:
    resolved = resolve_lexicon(lexicon)
    job = job_text if isinstance(job_text, str) else ""
    qualifications = await extract_qualifications_resilient(job, service, timeout_s, lexicon=resolved)
    return _tailor_with_qualifications(
        resume_text,
        qualifications,
        keywords,
        lexicon=resolved,
        sanitizer=sanitizer,
        location_normalizer=location_normalizer,
        bounds=bounds,
    )

from __future__ import annotations

import logging
import math

from ats_tailor.core.scoring import get_scoring_value
from ats_tailor.schemas.match import MatchResult, QualificationMatch
from ats_tailor.schemas.qualification import Qualification, QualificationSet
from ats_tailor.schemas.resume import ResumeDocument

logger = logging.getLogger(__name__)

_THRESHOLD_MESSAGES = {
    "excellent": "Excellent match: the resume strongly aligns with this role.",
    "good": "Good match: the required qualification threshold is met. Consider strengthening weak areas.",
    "close": "Close: just below the required qualification threshold. Apply the recommended tailoring.",
    "low": "Significant gap: substantial tailoring is needed for this role.",
}


def round_half_up(value: float, digits: int = 0) -> float:
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def render_resume_text(document: ResumeDocument | str) -> str:
    """Flatten the fields a recruiter screen reads into one searchable string."""
    if isinstance(document, str):
        return document

    parts: list[str] = []
    if document.summary:
        parts.append(document.summary)
    for entry in document.experience:
        parts.append(entry.company.value)
        parts.append(entry.title.value)
        parts.append(" ".join(bullet.text for bullet in entry.bullets))
    if document.skills:
        parts.append(" ".join(document.skills))
    for education in document.education:
        parts.append(education.institution)
        parts.append(education.degree)
    if document.certifications:
        parts.append(" ".join(document.certifications))
    return " ".join(parts)


def check_qualification(resume_lower: str, qualification: Qualification) -> QualificationMatch:
    window = int(get_scoring_value("matching.evidence_window", 30))
    evidence_limit = int(get_scoring_value("matching.evidence_limit", 2))
    word_limit = int(get_scoring_value("matching.semantic_word_limit", 8))
    word_min_chars = int(get_scoring_value("matching.semantic_word_min_chars", 5))
    discount = float(get_scoring_value("matching.semantic_discount", 0.8))
    met_confidence = float(get_scoring_value("matching.met_confidence", 0.5))

    matched = 0
    evidence: list[str] = []
    for keyword in qualification.keywords:
        needle = keyword.lower()
        index = resume_lower.find(needle)
        if index == -1:
            continue
        matched += 1
        start = max(0, index - window)
        end = min(len(resume_lower), index + len(needle) + window)
        evidence.append(f"...{resume_lower[start:end]}...")

    words = [word for word in qualification.text.lower().split() if len(word) >= word_min_chars][:word_limit]
    semantic_hits = sum(1 for word in words if word in resume_lower)

    keyword_ratio = matched / len(qualification.keywords) if qualification.keywords else 0.0
    semantic_ratio = semantic_hits / len(words) if words else 0.0
    confidence = round_half_up(max(keyword_ratio, semantic_ratio * discount), 2)

    return QualificationMatch(
        qualification=qualification,
        met=confidence >= met_confidence,
        confidence=min(confidence, 1.0),
        evidence=evidence[:evidence_limit],
        matched_keywords=matched,
        total_keywords=len(qualification.keywords),
    )


def threshold_status(required_pct: int) -> str:
    if required_pct >= int(get_scoring_value("matching.thresholds.excellent", 85)):
        return "excellent"
    if required_pct >= int(get_scoring_value("matching.thresholds.good", 75)):
        return "good"
    if required_pct >= int(get_scoring_value("matching.thresholds.close", 60)):
        return "close"
    return "low"


def _pct(met: int, total: int) -> int:
    return int(round_half_up(100 * met / total)) if total else 0


def score_match(document: ResumeDocument | str, qualifications: QualificationSet) -> MatchResult:
    if qualifications.is_empty:
        return MatchResult()

    resume_lower = render_resume_text(document).lower()
    required = [check_qualification(resume_lower, item) for item in qualifications.required]
    preferred = [check_qualification(resume_lower, item) for item in qualifications.preferred]

    required_met = sum(1 for row in required if row.met)
    preferred_met = sum(1 for row in preferred if row.met)
    required_pct = _pct(required_met, len(required))
    preferred_pct = _pct(preferred_met, len(preferred))

    required_weight = float(get_scoring_value("matching.weights.required", 0.7))
    preferred_weight = float(get_scoring_value("matching.weights.preferred", 0.3))
    overall_pct = int(round_half_up(required_pct * required_weight + preferred_pct * preferred_weight))

    status = threshold_status(required_pct)
    result = MatchResult(
        breakdown=[*required, *preferred],
        required_met_count=required_met,
        required_total_count=len(required),
        preferred_met_count=preferred_met,
        preferred_total_count=len(preferred),
        required_match_pct=required_pct,
        preferred_match_pct=preferred_pct,
        overall_match_pct=overall_pct,
        threshold_status=status,
        meets_threshold=required_pct >= int(get_scoring_value("matching.thresholds.pass", 75)),
        threshold_message=_THRESHOLD_MESSAGES[status],
        weighted_score=round(sum(row.qualification.weight * row.confidence for row in required if row.met), 4),
        max_weighted_score=round(sum(row.qualification.weight for row in required), 4),
    )
    logger.info(
        "match_scored required_pct=%s preferred_pct=%s overall_pct=%s status=%s",
        result.required_match_pct,
        result.preferred_match_pct,
        result.overall_match_pct,
        result.threshold_status,
    )
    return result

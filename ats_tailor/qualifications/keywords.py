from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from ats_tailor.core.scoring import get_scoring_value
from ats_tailor.schemas.match import MatchResult
from ats_tailor.schemas.qualification import QualificationPriority, QualificationSet, dedupe_keywords
from ats_tailor.schemas.tailoring import KeywordBuckets


def bucket_keywords(keywords: Sequence[str] | Mapping[str, Any] | None) -> KeywordBuckets:
    """Build priority buckets from a flat list (split by configured shares) or a bucket mapping."""
    if keywords is None or isinstance(keywords, Mapping):
        return KeywordBuckets.from_input(keywords)
    flat = keywords.split(",") if isinstance(keywords, str) else list(keywords)
    return KeywordBuckets.from_flat(
        flat,
        high_share=float(get_scoring_value("keywords.split.high", 0.70)),
        medium_share=float(get_scoring_value("keywords.split.medium", 0.15)),
    )


def keywords_from_qualifications(qualifications: QualificationSet, match: MatchResult | None = None) -> list[str]:
    """Keywords worth injecting: unmet required qualifications first, closest to met first.

    Without a match result every qualification counts as unmet.
    """
    if match is None:
        ranked = [(item.priority, 0.0, item.keywords) for item in qualifications.combined]
    else:
        ranked = [
            (row.qualification.priority, row.confidence, row.qualification.keywords)
            for row in match.breakdown
            if not row.met
        ]
    ranked.sort(key=lambda row: (row[0] != QualificationPriority.REQUIRED, -row[1]))
    return dedupe_keywords([keyword for _, _, keywords in ranked for keyword in keywords])

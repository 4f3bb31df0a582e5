from __future__ import annotations

import logging
from collections.abc import Mapping

from ats_tailor.core.scoring import get_scoring_value
from ats_tailor.schemas.resume import ResumeDocument
from ats_tailor.schemas.tailoring import BUCKET_ORDER, KeywordBuckets, KeywordInjectionPlan, KeywordTarget

logger = logging.getLogger(__name__)

Bounds = Mapping[str, tuple[int, int]]

DEFAULT_BOUNDS: dict[str, tuple[int, int]] = {
    "high": (3, 5),
    "medium": (3, 5),
    "low": (1, 2),
    "unbucketed": (2, 3),
}


def load_bounds() -> dict[str, tuple[int, int]]:
    configured = get_scoring_value("tailoring.bounds", {}) or {}
    bounds = dict(DEFAULT_BOUNDS)
    for bucket in BUCKET_ORDER:
        value = configured.get(bucket)
        if isinstance(value, (list, tuple)) and len(value) == 2:
            target, maximum = int(value[0]), int(value[1])
            if not 0 <= target <= maximum:
                raise RuntimeError(f"Invalid tailoring bounds for '{bucket}': target must be within [0, max].")
            bounds[bucket] = (target, maximum)
    return bounds


def count_mentions(text: str, keyword: str) -> int:
    """Case-insensitive, non-overlapping substring occurrences of keyword in text."""
    needle = keyword.lower()
    if not needle:
        return 0
    return text.lower().count(needle)


def count_document_mentions(document: ResumeDocument, keyword: str) -> int:
    return sum(count_mentions(bullet.text, keyword) for bullet in document.all_bullets())


def build_plan(buckets: KeywordBuckets, document: ResumeDocument, bounds: Bounds | None = None) -> KeywordInjectionPlan:
    resolved_bounds = dict(bounds) if bounds is not None else load_bounds()
    targets = []
    for keyword in buckets.ordered_keywords():
        bucket = buckets.bucket_of(keyword)
        target, maximum = resolved_bounds.get(bucket, DEFAULT_BOUNDS[bucket])
        targets.append(
            KeywordTarget(
                keyword=keyword,
                bucket=bucket,
                target=target,
                max=maximum,
                current_count=count_document_mentions(document, keyword),
            )
        )
    plan = KeywordInjectionPlan(targets=targets)
    logger.info(
        "injection_plan_built keywords=%s needing_more=%s",
        len(plan.targets),
        sum(1 for item in plan.targets if item.needs_more),
    )
    return plan

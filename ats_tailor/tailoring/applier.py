from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, replace
from types import MappingProxyType

from ats_tailor.core.scoring import get_scoring_value
from ats_tailor.schemas.resume import ResumeDocument
from ats_tailor.schemas.tailoring import (
    BUCKET_ORDER,
    InjectionRecord,
    InjectionStats,
    KeywordBuckets,
    KeywordInjectionPlan,
    KeywordTarget,
)
from ats_tailor.taxonomy import Lexicon, resolve_lexicon

from .planner import count_mentions
from .strategies import InsertionContext, insert_keyword

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InjectionState:
    """Accumulator threaded through the bullet pass; every step returns a new one."""

    counts: MappingProxyType[str, int]
    bullets: tuple[tuple[str, ...], ...]
    records: tuple[InjectionRecord, ...] = ()


def per_bullet_cap(entry_index: int) -> int:
    base = int(get_scoring_value("tailoring.per_bullet_cap.base", 4))
    floor = int(get_scoring_value("tailoring.per_bullet_cap.floor", 2))
    return max(floor, base - entry_index)


def _ordered_targets(plan: KeywordInjectionPlan) -> list[KeywordTarget]:
    rank = {bucket: position for position, bucket in enumerate(BUCKET_ORDER)}
    return sorted(plan.targets, key=lambda item: rank[item.bucket])


def mention_delta(before: str, after: str, keywords: Iterable[str]) -> dict[str, int]:
    return {
        keyword: count_mentions(after, keyword) - count_mentions(before, keyword)
        for keyword in keywords
    }


def inject_bullet(
    state: InjectionState,
    entry_index: int,
    bullet_index: int,
    targets: list[KeywordTarget],
    context: InsertionContext,
) -> InjectionState:
    text = state.bullets[entry_index][bullet_index]
    counts = dict(state.counts)
    candidates = [
        item
        for item in targets
        if counts[item.keyword] < item.target and item.keyword.lower() not in text.lower()
    ][: per_bullet_cap(entry_index)]
    if not candidates:
        return state

    limits = {item.keyword: item.max for item in targets}
    records = list(state.records)
    for item in candidates:
        if counts[item.keyword] >= item.max or item.keyword.lower() in text.lower():
            continue
        rewritten, strategy = insert_keyword(text, item.keyword, context)
        # A splice can add mentions of other keywords too ("PostgreSQL" carries "SQL").
        added = mention_delta(text, rewritten, counts)
        if any(delta > 0 and counts[keyword] + delta > limits[keyword] for keyword, delta in added.items()):
            continue
        for keyword, delta in added.items():
            counts[keyword] += delta
        text = rewritten
        records.append(
            InjectionRecord(entry_index=entry_index, bullet_index=bullet_index, keyword=item.keyword, strategy=strategy)
        )

    entry_bullets = list(state.bullets[entry_index])
    entry_bullets[bullet_index] = text
    bullets = state.bullets[:entry_index] + (tuple(entry_bullets),) + state.bullets[entry_index + 1 :]
    return replace(state, counts=MappingProxyType(counts), bullets=bullets, records=tuple(records))


def apply_plan(
    document: ResumeDocument,
    plan: KeywordInjectionPlan,
    buckets: KeywordBuckets | None = None,
    *,
    lexicon: Lexicon | None = None,
) -> tuple[ResumeDocument, InjectionStats]:
    """Inject planned keywords into experience bullets and return a new document.

    Entries are visited in document order, which is taken to be most recent
    first. The input document is never modified.
    """
    targets = _ordered_targets(plan)
    if buckets is not None:
        # Buckets passed alongside the plan override the plan's own assignment.
        rank = {bucket: position for position, bucket in enumerate(BUCKET_ORDER)}
        targets = sorted(targets, key=lambda item: rank[buckets.bucket_of(item.keyword)])

    context = InsertionContext.from_config(resolve_lexicon(lexicon))
    state = InjectionState(
        counts=MappingProxyType({item.keyword: item.current_count for item in targets}),
        bullets=tuple(tuple(bullet.text for bullet in entry.bullets) for entry in document.experience),
    )
    for entry_index, entry_bullets in enumerate(state.bullets):
        for bullet_index in range(len(entry_bullets)):
            state = inject_bullet(state, entry_index, bullet_index, targets, context)

    tailored = document.model_copy(deep=True)
    for entry, texts in zip(tailored.experience, state.bullets):
        for bullet, text in zip(entry.bullets, texts):
            bullet.text = text

    stats = InjectionStats(
        bullets_modified=len({(record.entry_index, record.bullet_index) for record in state.records}),
        keywords_injected=len(state.records),
        strategies_used=dict(Counter(record.strategy for record in state.records)),
        final_counts=dict(state.counts),
        unmet_keywords=[item.keyword for item in plan.targets if state.counts[item.keyword] < item.target],
        records=list(state.records),
    )
    if stats.unmet_keywords:
        logger.info("injection_partial unmet=%s", stats.unmet_keywords)
    logger.info(
        "injection_applied bullets_modified=%s keywords_injected=%s strategies=%s",
        stats.bullets_modified,
        stats.keywords_injected,
        stats.strategies_used,
    )
    return tailored, stats

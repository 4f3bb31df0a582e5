from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ats_tailor.core.scoring import get_scoring_value
from ats_tailor.normalize.text import normalize_text
from ats_tailor.schemas.qualification import (
    Qualification,
    QualificationPriority,
    QualificationSet,
    QualificationType,
)
from ats_tailor.taxonomy import Lexicon, resolve_lexicon

logger = logging.getLogger(__name__)

_EXPERIENCE_YEARS_RE = re.compile(r"(\d+)\+?\s*(?:years?|yrs?)", re.IGNORECASE)
_CANDIDATE_SPLIT_RE = re.compile(r"[\n•▪*]")
_LIST_MARKER_RE = re.compile(r"^(?:[-–]\s+|\d+[.)]\s+)")
_WORD_STRIP = ".,;:!?()[]{}\"'"

_DEFAULT_WEIGHTS = {
    QualificationType.EDUCATION: 1.2,
    QualificationType.EXPERIENCE_YEARS: 1.5,
    QualificationType.TECHNICAL_SKILL: 1.3,
    QualificationType.CERTIFICATION: 1.1,
    QualificationType.SOFT_SKILL: 0.8,
    QualificationType.DOMAIN_KNOWLEDGE: 1.2,
    QualificationType.TOOL_PROFICIENCY: 1.0,
}


@dataclass(frozen=True)
class TypeRule:
    type: QualificationType
    pattern: re.Pattern[str] | None
    capture: Callable[[re.Match[str]], str] | None = None

    def match(self, line: str) -> re.Match[str] | None:
        return self.pattern.search(line) if self.pattern is not None else None


def build_type_rules(lexicon: Lexicon) -> tuple[TypeRule, ...]:
    """Ordered classification rules; the first that matches decides the type."""
    return (
        TypeRule(QualificationType.EXPERIENCE_YEARS, _EXPERIENCE_YEARS_RE, lambda m: f"{m.group(1)}+ years"),
        TypeRule(QualificationType.EDUCATION, lexicon.education_pattern),
        TypeRule(QualificationType.CERTIFICATION, lexicon.certification_pattern),
        TypeRule(QualificationType.SOFT_SKILL, lexicon.soft_skill_pattern),
    )


def qualification_weight(qualification_type: QualificationType) -> float:
    configured = get_scoring_value(f"qualifications.weights.{qualification_type.value}")
    if configured is None:
        return _DEFAULT_WEIGHTS.get(qualification_type, 1.0)
    return float(configured)


def _vocabulary_patterns(lexicon: Lexicon) -> list[tuple[str, re.Pattern[str] | None]]:
    patterns: list[tuple[str, re.Pattern[str] | None]] = []
    for term in lexicon.technical_vocabulary:
        if len(term) <= 4:
            # Short terms need boundaries so "java" does not fire inside "javascript".
            patterns.append((term, re.compile(rf"(?<![a-z0-9]){re.escape(term)}(?![a-z0-9])")))
        else:
            patterns.append((term, None))
    return patterns


def vocabulary_terms(line: str, lexicon: Lexicon) -> list[str]:
    lowered = line.lower()
    found = []
    for term, pattern in _vocabulary_patterns(lexicon):
        if pattern is not None:
            if pattern.search(lowered):
                found.append(term)
        elif term in lowered:
            found.append(term)
    return found


def _fallback_keywords(line: str, lexicon: Lexicon) -> list[str]:
    limit = int(get_scoring_value("qualifications.fallback_keyword_limit", 5))
    min_chars = int(get_scoring_value("qualifications.fallback_keyword_min_chars", 5))
    words = []
    for raw_word in line.lower().split():
        word = raw_word.strip(_WORD_STRIP)
        if len(word) >= min_chars and word not in lexicon.stop_words and word not in words:
            words.append(word)
    return words[:limit]


def _is_anchor_heading(line: str, lexicon: Lexicon) -> bool:
    remainder = line
    for pattern in (*lexicon.required_anchors, *lexicon.preferred_anchors):
        remainder = pattern.sub("", remainder)
    return not re.search(r"\w", remainder)


def candidate_lines(text: str, lexicon: Lexicon) -> list[str]:
    min_len = int(get_scoring_value("qualifications.line_length.min", 10))
    max_len = int(get_scoring_value("qualifications.line_length.max", 500))
    lines = []
    for piece in _CANDIDATE_SPLIT_RE.split(text):
        line = _LIST_MARKER_RE.sub("", piece.strip()).strip()
        if not min_len <= len(line) <= max_len:
            continue
        if _is_anchor_heading(line, lexicon):
            continue
        lines.append(line)
    return lines


def parse_qualification_line(
    line: str,
    priority: QualificationPriority,
    lexicon: Lexicon,
    rules: tuple[TypeRule, ...] | None = None,
) -> Qualification:
    qualification_type = QualificationType.TECHNICAL_SKILL
    keywords: list[str] = []
    for rule in rules or build_type_rules(lexicon):
        match = rule.match(line)
        if match is None:
            continue
        qualification_type = rule.type
        if rule.capture is not None:
            keywords.append(rule.capture(match))
        break

    keywords.extend(vocabulary_terms(line, lexicon))
    if not keywords:
        keywords = _fallback_keywords(line, lexicon)

    return Qualification(
        text=line,
        type=qualification_type,
        priority=priority,
        weight=qualification_weight(qualification_type),
        keywords=keywords,
    )


def parse_qualification_list(text: str, priority: QualificationPriority, lexicon: Lexicon) -> list[Qualification]:
    rules = build_type_rules(lexicon)
    return [parse_qualification_line(line, priority, lexicon, rules) for line in candidate_lines(text, lexicon)]


def _earliest(patterns: tuple[re.Pattern[str], ...], text: str) -> int:
    positions = [match.start() for match in (pattern.search(text) for pattern in patterns) if match]
    return min(positions) if positions else -1


def identify_zones(text: str, lexicon: Lexicon) -> tuple[str, str]:
    """Return (required_zone, preferred_zone); the required zone is the whole text when unanchored."""
    required_start = _earliest(lexicon.required_anchors, text)
    preferred_start = _earliest(lexicon.preferred_anchors, text)

    if required_start == -1:
        required = text
    else:
        required_end = preferred_start if preferred_start > required_start else len(text)
        required = text[required_start:required_end]
    preferred = text[preferred_start:] if preferred_start != -1 else ""
    return required, preferred


def extract_qualifications(text: Any, lexicon: Lexicon | None = None) -> QualificationSet:
    normalized = normalize_text(text)
    min_chars = int(get_scoring_value("qualifications.min_input_chars", 100))
    if len(normalized) < min_chars:
        logger.info("qualifications_skipped reason=too_short chars=%s", len(normalized))
        return QualificationSet()

    resolved = resolve_lexicon(lexicon)
    required_zone, preferred_zone = identify_zones(normalized, resolved)
    required = parse_qualification_list(required_zone, QualificationPriority.REQUIRED, resolved)
    preferred = parse_qualification_list(preferred_zone, QualificationPriority.PREFERRED, resolved)
    if not required:
        required = parse_qualification_list(normalized, QualificationPriority.REQUIRED, resolved)

    result = QualificationSet(required=required, preferred=preferred, source="deterministic")
    logger.info(
        "qualifications_extracted required=%s preferred=%s by_type=%s",
        len(result.required),
        len(result.preferred),
        result.count_by_type(),
    )
    return result

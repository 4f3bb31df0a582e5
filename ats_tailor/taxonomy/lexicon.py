from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from ats_tailor.schemas.resume import SectionType


def _alternation(terms: Iterable[str], *, escape: bool = True) -> str:
    parts = [re.escape(term) if escape else term for term in terms if term]
    return "|".join(parts) if parts else r"(?!x)x"


def _word_pattern(terms: Iterable[str], *, escape: bool = True) -> re.Pattern[str]:
    return re.compile(rf"\b(?:{_alternation(terms, escape=escape)})\b", re.IGNORECASE)


@dataclass(frozen=True)
class SectionRule:
    section_type: SectionType
    aliases: frozenset[str]
    pattern: re.Pattern[str]


@dataclass(frozen=True)
class Lexicon:
    """Read-only lookup tables shared by every parsing and tailoring stage."""

    section_rules: tuple[SectionRule, ...]
    known_companies: tuple[str, ...]
    title_keywords: frozenset[str]
    title_pattern: re.Pattern[str]
    company_suffix_pattern: re.Pattern[str]
    action_verbs: tuple[str, ...]
    action_verb_pattern: re.Pattern[str]
    technical_vocabulary: tuple[str, ...]
    soft_skill_pattern: re.Pattern[str]
    education_pattern: re.Pattern[str]
    certification_pattern: re.Pattern[str]
    institution_pattern: re.Pattern[str]
    degree_pattern: re.Pattern[str]
    skills_denylist: frozenset[str]
    acronyms: frozenset[str]
    stop_words: frozenset[str]
    required_anchors: tuple[re.Pattern[str], ...]
    preferred_anchors: tuple[re.Pattern[str], ...]
    term_replacements: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    cities: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    regions: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "Lexicon":
        section_rules = tuple(
            SectionRule(
                section_type=SectionType(str(item["type"]).strip().lower()),
                aliases=frozenset(str(alias).strip().lower() for alias in item.get("aliases", [])),
                pattern=re.compile(str(item["regex"]), re.IGNORECASE),
            )
            for item in raw.get("section_headers", [])
        )
        companies = [str(name).strip().lower() for name in raw.get("known_companies", []) if str(name).strip()]
        title_keywords = [str(word).strip().lower() for word in raw.get("title_keywords", []) if str(word).strip()]
        verbs = [str(verb).strip() for verb in raw.get("action_verbs", []) if str(verb).strip()]
        gazetteer = raw.get("gazetteer", {}) or {}

        return cls(
            section_rules=section_rules,
            # Longest names first so "morgan stanley" wins over a shorter prefix.
            known_companies=tuple(sorted(dict.fromkeys(companies), key=lambda name: (-len(name), name))),
            title_keywords=frozenset(title_keywords),
            title_pattern=_word_pattern(title_keywords),
            company_suffix_pattern=_word_pattern(raw.get("company_suffixes", [])),
            action_verbs=tuple(verbs),
            action_verb_pattern=re.compile(rf"^(?:{_alternation(verbs)})\b", re.IGNORECASE),
            technical_vocabulary=tuple(str(term).strip().lower() for term in raw.get("technical_vocabulary", [])),
            soft_skill_pattern=re.compile(_alternation(raw.get("soft_skill_terms", []), escape=False), re.IGNORECASE),
            education_pattern=re.compile(_alternation(raw.get("education_terms", [])), re.IGNORECASE),
            certification_pattern=re.compile(_alternation(raw.get("certification_terms", [])), re.IGNORECASE),
            institution_pattern=_word_pattern(raw.get("institution_terms", [])),
            degree_pattern=_word_pattern(raw.get("degree_terms", []), escape=False),
            skills_denylist=frozenset(str(item).strip().lower() for item in raw.get("skills_denylist", [])),
            acronyms=frozenset(str(item).strip().lower() for item in raw.get("acronyms", [])),
            stop_words=frozenset(str(item).strip().lower() for item in raw.get("stop_words", [])),
            required_anchors=tuple(re.compile(str(p), re.IGNORECASE) for p in raw.get("required_anchors", [])),
            preferred_anchors=tuple(re.compile(str(p), re.IGNORECASE) for p in raw.get("preferred_anchors", [])),
            term_replacements=MappingProxyType(
                {str(k).strip().lower(): str(v) for k, v in (raw.get("term_replacements") or {}).items()}
            ),
            cities=MappingProxyType({str(k).strip().lower(): str(v) for k, v in (gazetteer.get("cities") or {}).items()}),
            regions=MappingProxyType({str(k).strip().lower(): str(v) for k, v in (gazetteer.get("regions") or {}).items()}),
        )

    def looks_like_company(self, text: str) -> bool:
        lowered = text.strip().lower()
        if lowered in self.known_companies:
            return True
        return bool(self.company_suffix_pattern.search(text))

    def looks_like_title(self, text: str) -> bool:
        lowered = text.lower()
        return any(keyword in lowered for keyword in self.title_keywords)

    def has_title_keyword(self, text: str) -> bool:
        return bool(self.title_pattern.search(text))

    def known_company_prefix(self, text: str) -> str | None:
        lowered = text.lower()
        for company in self.known_companies:
            if lowered.startswith(company) and (len(lowered) == len(company) or not lowered[len(company)].isalnum()):
                return company
        return None

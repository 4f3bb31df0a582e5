from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Protocol

from ats_tailor.schemas.resume import ResumeDocument
from ats_tailor.taxonomy import Lexicon, resolve_lexicon

_DOUBLE_SPACE = re.compile(r" {2,}")
_SPACE_BEFORE_PUNCT = re.compile(r"\s+([,.;:!?])")


class Sanitizer(Protocol):
    def sanitize(self, text: str) -> str:
        ...


def _term_pattern(term: str) -> re.Pattern[str]:
    return re.compile(rf"\b{re.escape(term)}\b", re.IGNORECASE)


class TermMapSanitizer:
    """Whole-word term replacement.

    A replacement value may not contain any source term, so running the
    sanitizer twice gives the same text as running it once.
    """

    def __init__(self, replacements: Mapping[str, str]) -> None:
        cleaned = {str(k).strip().lower(): str(v).strip() for k, v in replacements.items() if str(k).strip()}
        for source in cleaned:
            pattern = _term_pattern(source)
            offending = [value for value in cleaned.values() if pattern.search(value)]
            if offending:
                raise ValueError(f"replacement {offending[0]!r} reintroduces term {source!r}")

        self._replacements = cleaned
        ordered = sorted(cleaned, key=lambda term: (-len(term), term))
        self._pattern = (
            re.compile(r"\b(?:" + "|".join(re.escape(term) for term in ordered) + r")\b", re.IGNORECASE)
            if ordered
            else None
        )

    @classmethod
    def from_lexicon(cls, lexicon: Lexicon | None = None) -> "TermMapSanitizer":
        return cls(resolve_lexicon(lexicon).term_replacements)

    def _replace(self, match: re.Match[str]) -> str:
        found = match.group(0)
        replacement = self._replacements[found.lower()]
        if found[:1].isupper() and replacement:
            return replacement[0].upper() + replacement[1:]
        return replacement

    def sanitize(self, text: str) -> str:
        if not text:
            return ""
        output = self._pattern.sub(self._replace, text) if self._pattern is not None else text
        output = _DOUBLE_SPACE.sub(" ", output)
        output = _SPACE_BEFORE_PUNCT.sub(r"\1", output)
        return output.strip()


def sanitize_document(document: ResumeDocument, sanitizer: Sanitizer) -> ResumeDocument:
    """Return a copy with free text sanitized; locked company/title/date fields are left alone."""
    cleaned = document.model_copy(deep=True)
    cleaned.summary = sanitizer.sanitize(cleaned.summary)
    for entry in cleaned.experience:
        for bullet in entry.bullets:
            bullet.text = sanitizer.sanitize(bullet.text)
        entry.summary = sanitizer.sanitize(entry.summary)
    cleaned.skills = [sanitizer.sanitize(skill) for skill in cleaned.skills]
    return cleaned

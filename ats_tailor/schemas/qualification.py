from __future__ import annotations

from collections import Counter
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class QualificationType(str, Enum):
    EDUCATION = "education"
    EXPERIENCE_YEARS = "experience_years"
    TECHNICAL_SKILL = "technical_skill"
    CERTIFICATION = "certification"
    SOFT_SKILL = "soft_skill"
    DOMAIN_KNOWLEDGE = "domain_knowledge"
    TOOL_PROFICIENCY = "tool_proficiency"


class QualificationPriority(str, Enum):
    REQUIRED = "required"
    PREFERRED = "preferred"


def dedupe_keywords(keywords: list[str]) -> list[str]:
    """Drop case-insensitive duplicates, keeping the first spelling seen."""
    seen: set[str] = set()
    output: list[str] = []
    for keyword in keywords:
        cleaned = " ".join(str(keyword).split())
        key = cleaned.lower()
        if not cleaned or key in seen:
            continue
        seen.add(key)
        output.append(cleaned)
    return output


class Qualification(BaseModel):
    model_config = {"frozen": True}

    text: str
    type: QualificationType
    priority: QualificationPriority
    weight: float = Field(gt=0.0)
    keywords: list[str] = Field(default_factory=list)

    @field_validator("keywords")
    @classmethod
    def _dedupe(cls, value: list[str]) -> list[str]:
        return dedupe_keywords(value)


class QualificationSet(BaseModel):
    required: list[Qualification] = Field(default_factory=list)
    preferred: list[Qualification] = Field(default_factory=list)
    source: str = "deterministic"

    @field_validator("source")
    @classmethod
    def _validate_source(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in {"deterministic", "llm"}:
            raise ValueError("source must be 'deterministic' or 'llm'")
        return normalized

    @property
    def combined(self) -> list[Qualification]:
        return [*self.required, *self.preferred]

    @property
    def is_empty(self) -> bool:
        return not self.required and not self.preferred

    def count_by_type(self) -> dict[str, int]:
        counts = Counter(item.type.value for item in self.combined)
        return dict(counts)

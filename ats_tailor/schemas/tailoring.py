from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel, Field, field_validator

from .match import MatchResult, Recommendation
from .qualification import dedupe_keywords
from .resume import ResumeDocument

BUCKET_ORDER = ("high", "medium", "low", "unbucketed")


class KeywordBuckets(BaseModel):
    high: list[str] = Field(default_factory=list)
    medium: list[str] = Field(default_factory=list)
    low: list[str] = Field(default_factory=list)
    all: list[str] = Field(default_factory=list)

    @field_validator("high", "medium", "low", "all")
    @classmethod
    def _dedupe(cls, value: list[str]) -> list[str]:
        return dedupe_keywords(value)

    @classmethod
    def from_flat(cls, keywords: Sequence[str], high_share: float = 0.70, medium_share: float = 0.15) -> "KeywordBuckets":
        ordered = dedupe_keywords(list(keywords))
        high_count = math.ceil(len(ordered) * high_share)
        medium_count = math.ceil(len(ordered) * medium_share)
        high = ordered[:high_count]
        medium = ordered[high_count : high_count + medium_count]
        low = ordered[high_count + medium_count :]
        return cls(high=high, medium=medium, low=low, all=ordered)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "KeywordBuckets":
        high = list(payload.get("highPriority") or payload.get("high") or [])
        medium = list(payload.get("mediumPriority") or payload.get("medium") or [])
        low = list(payload.get("lowPriority") or payload.get("low") or [])
        all_keywords = list(payload.get("all") or [])
        if not (high or medium or low) and all_keywords:
            return cls.from_flat(all_keywords)
        return cls(high=high, medium=medium, low=low, all=all_keywords or [*high, *medium, *low])

    @classmethod
    def from_input(cls, payload: Sequence[str] | Mapping[str, Any] | None) -> "KeywordBuckets":
        if payload is None:
            return cls()
        if isinstance(payload, Mapping):
            return cls.from_mapping(payload)
        if isinstance(payload, str):
            return cls.from_flat([item for item in payload.split(",")])
        return cls.from_flat(list(payload))

    def bucket_of(self, keyword: str) -> str:
        key = keyword.lower()
        for name in ("high", "medium", "low"):
            if any(item.lower() == key for item in getattr(self, name)):
                return name
        return "unbucketed"

    def ordered_keywords(self) -> list[str]:
        return dedupe_keywords([*self.high, *self.medium, *self.low, *self.all])


class KeywordTarget(BaseModel):
    keyword: str
    bucket: str
    target: int = Field(ge=0)
    max: int = Field(ge=0)
    current_count: int = Field(default=0, ge=0)

    @field_validator("bucket")
    @classmethod
    def _validate_bucket(cls, value: str) -> str:
        if value not in BUCKET_ORDER:
            raise ValueError(f"bucket must be one of: {', '.join(BUCKET_ORDER)}")
        return value

    @property
    def needs_more(self) -> bool:
        return self.current_count < self.target


class KeywordInjectionPlan(BaseModel):
    targets: list[KeywordTarget] = Field(default_factory=list)

    def get(self, keyword: str) -> KeywordTarget | None:
        key = keyword.lower()
        for target in self.targets:
            if target.keyword.lower() == key:
                return target
        return None


class InjectionRecord(BaseModel):
    entry_index: int
    bullet_index: int
    keyword: str
    strategy: str


class InjectionStats(BaseModel):
    bullets_modified: int = 0
    keywords_injected: int = 0
    strategies_used: dict[str, int] = Field(default_factory=dict)
    final_counts: dict[str, int] = Field(default_factory=dict)
    unmet_keywords: list[str] = Field(default_factory=list)
    records: list[InjectionRecord] = Field(default_factory=list)


class TailoringReport(BaseModel):
    parse_status: str
    message: str = ""
    initial_match: MatchResult = Field(default_factory=MatchResult)
    final_match: MatchResult = Field(default_factory=MatchResult)
    plan: KeywordInjectionPlan = Field(default_factory=KeywordInjectionPlan)
    stats: InjectionStats = Field(default_factory=InjectionStats)
    recommendations: list[Recommendation] = Field(default_factory=list)
    qualification_source: str = "deterministic"
    document: ResumeDocument = Field(default_factory=ResumeDocument)

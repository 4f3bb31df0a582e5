from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from .qualification import Qualification


class QualificationMatch(BaseModel):
    qualification: Qualification
    met: bool
    confidence: float = Field(ge=0.0, le=1.0)
    evidence: list[str] = Field(default_factory=list)
    matched_keywords: int = 0
    total_keywords: int = 0


class MatchResult(BaseModel):
    breakdown: list[QualificationMatch] = Field(default_factory=list)
    required_met_count: int = 0
    required_total_count: int = 0
    preferred_met_count: int = 0
    preferred_total_count: int = 0
    required_match_pct: int = 0
    preferred_match_pct: int = 0
    overall_match_pct: int = 0
    threshold_status: str = "low"
    meets_threshold: bool = False
    threshold_message: str = ""
    weighted_score: float = 0.0
    max_weighted_score: float = 0.0

    @field_validator("threshold_status")
    @classmethod
    def _validate_status(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in {"excellent", "good", "close", "low"}:
            raise ValueError("threshold_status must be one of: excellent, good, close, low")
        return normalized


class Recommendation(BaseModel):
    priority: str
    qualification_type: str
    qualification: str
    keywords: list[str] = Field(default_factory=list)
    action: str
    impact: int = 0

    @field_validator("priority")
    @classmethod
    def _validate_priority(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in {"critical", "high", "medium"}:
            raise ValueError("priority must be one of: critical, high, medium")
        return normalized

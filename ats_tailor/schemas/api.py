from __future__ import annotations

from pydantic import BaseModel, Field

from .match import MatchResult, Recommendation
from .qualification import QualificationSet


class ParseResumeRequest(BaseModel):
    resume_text: str = Field(default="", max_length=200000)


class ExtractQualificationsRequest(BaseModel):
    job_text: str = Field(default="", max_length=200000)


class MatchRequest(BaseModel):
    resume_text: str = Field(default="", max_length=200000)
    job_text: str = Field(default="", max_length=200000)


class MatchResponse(BaseModel):
    parse_status: str
    message: str = ""
    qualifications: QualificationSet = Field(default_factory=QualificationSet)
    match: MatchResult = Field(default_factory=MatchResult)
    recommendations: list[Recommendation] = Field(default_factory=list)


class TailorRequest(BaseModel):
    resume_text: str = Field(default="", max_length=200000)
    job_text: str = Field(default="", max_length=200000)
    keywords: list[str] | dict[str, list[str]] | None = None

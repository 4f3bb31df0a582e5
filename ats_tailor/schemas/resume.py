from __future__ import annotations

import datetime
import re
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field, computed_field, field_validator


class SectionType(str, Enum):
    SUMMARY = "summary"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    SKILLS = "skills"
    CERTIFICATIONS = "certifications"
    PROJECTS = "projects"
    AWARDS = "awards"
    PUBLICATIONS = "publications"
    UNKNOWN = "unknown"


class BulletClassification(str, Enum):
    LEADERSHIP = "leadership"
    ACHIEVEMENT = "achievement"
    TECHNICAL = "technical"
    COLLABORATION = "collaboration"
    QUANTIFIED = "quantified"
    GENERAL = "general"


_BULLET_CLASS_RULES: tuple[tuple[BulletClassification, re.Pattern[str]], ...] = (
    (BulletClassification.LEADERSHIP, re.compile(r"\b(?:led|managed|directed|oversaw|supervised)\b", re.IGNORECASE)),
    (BulletClassification.ACHIEVEMENT, re.compile(r"\b(?:improved|increased|reduced|optimi[sz]ed|enhanced)\b", re.IGNORECASE)),
    (BulletClassification.TECHNICAL, re.compile(r"\b(?:developed|built|created|designed|implemented)\b", re.IGNORECASE)),
    (BulletClassification.COLLABORATION, re.compile(r"\b(?:collaborated|worked with|partnered)\b", re.IGNORECASE)),
    (BulletClassification.QUANTIFIED, re.compile(r"\d+%|\$\d+|\d+x\b", re.IGNORECASE)),
)


def classify_bullet(text: str) -> BulletClassification:
    for classification, pattern in _BULLET_CLASS_RULES:
        if pattern.search(text or ""):
            return classification
    return BulletClassification.GENERAL


class ContactInfo(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    github: str = ""


class Section(BaseModel):
    model_config = {"frozen": True}

    type: SectionType
    header: str = ""
    content: str = ""
    line_count: int = 0


class SegmentedDocument(BaseModel):
    contact_lines: list[str] = Field(default_factory=list)
    sections: list[Section] = Field(default_factory=list)
    header_line_count: int = 0
    content_line_count: int = 0

    def first(self, section_type: SectionType) -> Section | None:
        for section in self.sections:
            if section.type == section_type:
                return section
        return None

    def content_of(self, section_type: SectionType) -> str:
        """Join the content of every section of a type; repeated headers are merged."""
        chunks = [section.content for section in self.sections if section.type == section_type and section.content]
        return "\n".join(chunks)


class LockedField(BaseModel):
    model_config = {"frozen": True}

    value: str = ""
    confidence: float = Field(default=0.5, ge=0.0, le=1.0)
    original_text: str = ""
    locked: Literal[True] = True


class DateRange(BaseModel):
    model_config = {"frozen": True}

    text: str = ""
    start: str = ""
    end: str = ""
    is_current: bool = False
    confidence: float = Field(default=0.5, ge=0.0, le=1.0)
    original_text: str = ""
    locked: Literal[True] = True

    @computed_field  # type: ignore[prop-decorator]
    @property
    def duration_months(self) -> int:
        if not self.start[:4].isdigit():
            return 0
        start_year = int(self.start[:4])
        if self.is_current:
            end_year = datetime.date.today().year
        elif self.end[:4].isdigit():
            end_year = int(self.end[:4])
        else:
            return 0
        return max(0, (end_year - start_year) * 12)


class Bullet(BaseModel):
    text: str

    @computed_field  # type: ignore[prop-decorator]
    @property
    def classification(self) -> BulletClassification:
        return classify_bullet(self.text)


class QualityFlags(BaseModel):
    is_valid: bool = True
    missing_fields: list[str] = Field(default_factory=list)
    suspicious_patterns: list[str] = Field(default_factory=list)
    swapped_company_title: bool = False


class ExperienceEntry(BaseModel):
    company: LockedField = Field(default_factory=LockedField)
    title: LockedField = Field(default_factory=LockedField)
    dates: DateRange = Field(default_factory=DateRange)
    location: str = ""
    bullets: list[Bullet] = Field(default_factory=list)
    summary: str = ""
    quality_flags: QualityFlags = Field(default_factory=QualityFlags)


class EducationEntry(BaseModel):
    institution: str = ""
    degree: str = ""
    date: str = ""
    gpa: str = ""


class ProjectEntry(BaseModel):
    name: str
    role: str = ""
    bullets: list[Bullet] = Field(default_factory=list)


class ResumeDocument(BaseModel):
    raw_text: str = ""
    normalized_text: str = ""
    contact: ContactInfo = Field(default_factory=ContactInfo)
    sections: list[Section] = Field(default_factory=list)
    summary: str = ""
    experience: list[ExperienceEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)
    projects: list[ProjectEntry] = Field(default_factory=list)
    awards: str = ""
    publications: str = ""
    warnings: list[str] = Field(default_factory=list)
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)

    def all_bullets(self) -> list[Bullet]:
        return [bullet for entry in self.experience for bullet in entry.bullets]


class ParseOutcome(BaseModel):
    status: str
    document: ResumeDocument
    message: str = ""

    @field_validator("status")
    @classmethod
    def _validate_status(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in {"ok", "insufficient_input"}:
            raise ValueError("status must be 'ok' or 'insufficient_input'")
        return normalized

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @classmethod
    def insufficient_input(cls, raw_text: str, message: str) -> "ParseOutcome":
        return cls(
            status="insufficient_input",
            document=ResumeDocument(raw_text=raw_text, warnings=[message], confidence=0.0),
            message=message,
        )

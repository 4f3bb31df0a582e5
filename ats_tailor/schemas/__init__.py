from .match import MatchResult, QualificationMatch, Recommendation
from .qualification import (
    Qualification,
    QualificationPriority,
    QualificationSet,
    QualificationType,
    dedupe_keywords,
)
from .resume import (
    Bullet,
    BulletClassification,
    ContactInfo,
    DateRange,
    EducationEntry,
    ExperienceEntry,
    LockedField,
    ParseOutcome,
    ProjectEntry,
    QualityFlags,
    ResumeDocument,
    Section,
    SectionType,
    SegmentedDocument,
    classify_bullet,
)
from .tailoring import (
    BUCKET_ORDER,
    InjectionRecord,
    InjectionStats,
    KeywordBuckets,
    KeywordInjectionPlan,
    KeywordTarget,
    TailoringReport,
)

__all__ = [
    "BUCKET_ORDER",
    "Bullet",
    "BulletClassification",
    "ContactInfo",
    "DateRange",
    "EducationEntry",
    "ExperienceEntry",
    "InjectionRecord",
    "InjectionStats",
    "KeywordBuckets",
    "KeywordInjectionPlan",
    "KeywordTarget",
    "LockedField",
    "MatchResult",
    "ParseOutcome",
    "ProjectEntry",
    "Qualification",
    "QualificationMatch",
    "QualificationPriority",
    "QualificationSet",
    "QualificationType",
    "QualityFlags",
    "Recommendation",
    "ResumeDocument",
    "Section",
    "SectionType",
    "SegmentedDocument",
    "TailoringReport",
    "classify_bullet",
    "dedupe_keywords",
]

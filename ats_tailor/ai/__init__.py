from .config import llm_extraction_enabled, load_ai_config
from .resilient import extract_qualifications_resilient
from .types import ExtractionServiceError, QualificationExtractionService

__all__ = [
    "ExtractionServiceError",
    "QualificationExtractionService",
    "extract_qualifications_resilient",
    "llm_extraction_enabled",
    "load_ai_config",
]

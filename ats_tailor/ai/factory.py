from __future__ import annotations

from ats_tailor.ai.config import load_ai_config
from ats_tailor.ai.providers.openai_extractor import OpenAIQualificationExtractor
from ats_tailor.ai.types import QualificationExtractionService


def get_extraction_service() -> QualificationExtractionService | None:
    cfg = load_ai_config()
    if not cfg.enabled:
        return None
    return OpenAIQualificationExtractor(model=cfg.model)

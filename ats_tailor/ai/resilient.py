from __future__ import annotations

import asyncio
import logging

from ats_tailor.core.config import settings
from ats_tailor.qualifications.extractor import extract_qualifications
from ats_tailor.schemas.qualification import QualificationSet
from ats_tailor.taxonomy import Lexicon

from .types import ExtractionServiceError, QualificationExtractionService

logger = logging.getLogger(__name__)


async def extract_qualifications_resilient(
    text: str,
    service: QualificationExtractionService | None = None,
    timeout_s: float | None = None,
    *,
    lexicon: Lexicon | None = None,
) -> QualificationSet:
    """Ask the extraction service first; fall back to the deterministic extractor.

    Timeouts, service errors and empty answers all degrade to the deterministic
    result. Cancellation by the caller is not swallowed.
    """
    if service is None:
        return extract_qualifications(text, lexicon)

    timeout = settings.llm_extraction_timeout_s if timeout_s is None else timeout_s
    try:
        result = await asyncio.wait_for(service.extract(text), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning("llm_extraction_failed reason=timeout timeout_s=%s", timeout)
    except ExtractionServiceError as exc:
        logger.warning("llm_extraction_failed reason=%s: %s", exc.code, exc)
    except Exception as exc:  # noqa: BLE001 - deterministic fallback is expected
        logger.warning("llm_extraction_failed reason=exception: %s", exc)
    else:
        if isinstance(result, QualificationSet) and not result.is_empty:
            return result.model_copy(update={"source": "llm"})
        logger.warning("llm_extraction_failed reason=empty_result")

    return extract_qualifications(text, lexicon)

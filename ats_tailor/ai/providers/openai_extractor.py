from __future__ import annotations

import json
import logging
from typing import Any

from openai import AsyncOpenAI

from ats_tailor.core.config import settings
from ats_tailor.qualifications.extractor import qualification_weight
from ats_tailor.schemas.qualification import (
    Qualification,
    QualificationPriority,
    QualificationSet,
    QualificationType,
)

from ..types import ExtractionServiceError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You extract hiring qualifications from job postings. "
    "Return JSON with two arrays, \"required\" and \"preferred\". "
    "Each item is an object with \"text\" (the qualification as written), "
    "\"type\" (one of: education, experience_years, technical_skill, certification, "
    "soft_skill, domain_knowledge, tool_proficiency) and \"keywords\" (short terms a "
    "resume would need to contain). Do not invent qualifications."
)


def _coerce_type(value: Any) -> QualificationType:
    try:
        return QualificationType(str(value or "").strip().lower())
    except ValueError:
        return QualificationType.TECHNICAL_SKILL


def _to_qualifications(items: Any, priority: QualificationPriority) -> list[Qualification]:
    if not isinstance(items, list):
        return []
    output: list[Qualification] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        text = " ".join(str(item.get("text") or "").split())
        if not text:
            continue
        qualification_type = _coerce_type(item.get("type"))
        raw_keywords = item.get("keywords")
        keywords = [str(keyword) for keyword in raw_keywords] if isinstance(raw_keywords, list) else []
        output.append(
            Qualification(
                text=text,
                type=qualification_type,
                priority=priority,
                weight=qualification_weight(qualification_type),
                keywords=keywords,
            )
        )
    return output


def qualifications_from_payload(payload: dict[str, Any]) -> QualificationSet:
    return QualificationSet(
        required=_to_qualifications(payload.get("required"), QualificationPriority.REQUIRED),
        preferred=_to_qualifications(payload.get("preferred"), QualificationPriority.PREFERRED),
        source="llm",
    )


class OpenAIQualificationExtractor:
    def __init__(
        self,
        model: str | None = None,
        api_key: str | None = None,
        base_url: str | None = None,
        max_retries: int | None = None,
        temperature: float = 0.0,
    ):
        key = (api_key or settings.openai_api_key or "").strip()
        if not key:
            raise ExtractionServiceError("OPENAI_API_KEY is missing", code="llm_disabled")

        self._model = model or settings.ai_model
        self._temperature = temperature
        self._client = AsyncOpenAI(
            api_key=key,
            base_url=(base_url or settings.openai_base_url or None),
            max_retries=settings.openai_max_retries if max_retries is None else max_retries,
        )

    async def extract(self, text: str) -> QualificationSet:
        response = await self._client.chat.completions.create(
            model=self._model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": text},
            ],
            temperature=self._temperature,
            response_format={"type": "json_object"},
        )
        content = response.choices[0].message.content if response.choices else ""
        if not content:
            raise ExtractionServiceError("Extraction service returned an empty response.", code="empty_response")
        try:
            payload = json.loads(content)
        except json.JSONDecodeError as exc:
            raise ExtractionServiceError(f"Extraction service returned invalid JSON: {exc}", code="invalid_json") from exc
        if not isinstance(payload, dict):
            raise ExtractionServiceError("Extraction service returned a non-object payload.", code="invalid_schema")

        result = qualifications_from_payload(payload)
        logger.info(
            "llm_qualifications_extracted model=%s required=%s preferred=%s",
            self._model,
            len(result.required),
            len(result.preferred),
        )
        return result

from __future__ import annotations

from typing import Protocol

from ats_tailor.schemas.qualification import QualificationSet


class ExtractionServiceError(RuntimeError):
    def __init__(self, message: str, *, code: str = "llm_unavailable"):
        super().__init__(message)
        self.code = code


class QualificationExtractionService(Protocol):
    async def extract(self, text: str) -> QualificationSet: ...

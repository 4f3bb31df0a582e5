from __future__ import annotations

from dataclasses import dataclass

from ats_tailor.core.config import Settings, settings


@dataclass(frozen=True)
class AIConfig:
    enabled: bool
    model: str
    timeout_s: float


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your_") or lower.startswith("replace_") or lower in {"changeme", "todo"}


def llm_extraction_enabled(current: Settings | None = None) -> bool:
    cfg = current or settings
    if not cfg.llm_extraction_enabled:
        return False
    api_key = (cfg.openai_api_key or "").strip()
    return bool(api_key) and not _looks_like_placeholder(api_key)


def load_ai_config(current: Settings | None = None) -> AIConfig:
    cfg = current or settings
    return AIConfig(
        enabled=llm_extraction_enabled(cfg),
        model=cfg.ai_model,
        timeout_s=cfg.llm_extraction_timeout_s,
    )

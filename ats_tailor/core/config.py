from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    log_level: str
    sentry_dsn: str | None
    rate_limit: str
    rate_limit_enabled: bool
    tailor_rate_limit: str
    cors_allowed_origins: tuple[str, ...]
    scoring_config_path: str | None
    llm_extraction_enabled: bool
    llm_extraction_timeout_s: float
    ai_model: str
    openai_api_key: str | None
    openai_base_url: str | None
    openai_max_retries: int


def load_settings() -> Settings:
    return Settings(
        log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
        sentry_dsn=_get_env("SENTRY_DSN"),
        rate_limit=_get_env("RATE_LIMIT", "30/minute") or "30/minute",
        rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
        tailor_rate_limit=_get_env("TAILOR_RATE_LIMIT", "10/minute") or "10/minute",
        cors_allowed_origins=_get_env_list(
            "CORS_ALLOWED_ORIGINS",
            ["http://localhost:5173", "http://127.0.0.1:5173", "http://localhost:3000"],
        ),
        scoring_config_path=_get_env("SCORING_CONFIG_PATH"),
        llm_extraction_enabled=_get_env_bool("LLM_EXTRACTION_ENABLED", False),
        llm_extraction_timeout_s=_get_env_float("LLM_EXTRACTION_TIMEOUT_S", 20.0),
        ai_model=(_get_env("AI_MODEL") or _get_env("OPENAI_MODEL") or "gpt-4o-mini").strip(),
        openai_api_key=_get_env("OPENAI_API_KEY"),
        openai_base_url=_get_env("OPENAI_BASE_URL"),
        openai_max_retries=_get_env_int("OPENAI_MAX_RETRIES", 2),
    )


settings = load_settings()

if settings.llm_extraction_timeout_s <= 0:
    raise RuntimeError("LLM_EXTRACTION_TIMEOUT_S must be greater than 0.")

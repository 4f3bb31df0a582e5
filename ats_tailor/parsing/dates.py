from __future__ import annotations

import re

from ats_tailor.schemas.resume import DateRange

_DASH = r"\s*[-–—]\s*"
_MONTH = (
    r"(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|Jun(?:e)?|Jul(?:y)?|"
    r"Aug(?:ust)?|Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)\.?"
)

# Evaluated top-down; the first member with a match wins.
DATE_CHAIN: tuple[tuple[str, re.Pattern[str]], ...] = (
    (
        "year_month_range",
        re.compile(rf"\b\d{{4}}[-/]\d{{1,2}}{_DASH}(?:Present|\d{{4}}[-/]\d{{1,2}})\b", re.IGNORECASE),
    ),
    (
        "month_year_range",
        re.compile(rf"\b{_MONTH}\s+\d{{4}}{_DASH}(?:Present|{_MONTH}\s+\d{{4}})\b", re.IGNORECASE),
    ),
    (
        "year_range",
        re.compile(rf"\b\d{{4}}{_DASH}(?:Present|\d{{4}})\b", re.IGNORECASE),
    ),
)
_SINGLE_YEAR = re.compile(r"\b(?:19|20)\d{2}\b")
_YEAR = re.compile(r"(?<!\d)\d{4}(?!\d)")
_PRESENT = re.compile(r"present", re.IGNORECASE)
_CURRENT = re.compile(r"\b(?:present|current|now)\b", re.IGNORECASE)
_DANGLING_SEPARATOR_END = re.compile(r"\s*[|–—,-]\s*$")
_DANGLING_SEPARATOR_START = re.compile(r"^\s*[|–—,-]\s*")


def find_date_match(text: str, *, allow_single_year: bool = False) -> str:
    """Return the raw substring matched by the first applicable chain member."""
    if not text:
        return ""
    for _, pattern in DATE_CHAIN:
        match = pattern.search(text)
        if match:
            return match.group(0)
    if allow_single_year:
        match = _SINGLE_YEAR.search(text)
        if match:
            return match.group(0)
    return ""


def normalize_dates(date_text: str) -> str:
    if not date_text:
        return ""
    years = _YEAR.findall(date_text)
    has_present = bool(_PRESENT.search(date_text))

    if has_present and years:
        return f"{years[0]} – Present"
    if len(years) >= 2:
        return f"{years[0]} – {years[1]}"
    if len(years) == 1:
        return years[0]
    return re.sub(r"\s*–\s*", " – ", date_text.replace("-", "–")).strip()


def extract_dates(text: str, *, allow_single_year: bool = False) -> str:
    return normalize_dates(find_date_match(text, allow_single_year=allow_single_year))


def is_date_line(text: str) -> bool:
    return any(pattern.search(text or "") for _, pattern in DATE_CHAIN)


def strip_dates(text: str) -> str:
    if not text:
        return ""
    stripped = text
    for _, pattern in DATE_CHAIN:
        stripped = pattern.sub("", stripped)
    stripped = _DANGLING_SEPARATOR_END.sub("", stripped)
    stripped = _DANGLING_SEPARATOR_START.sub("", stripped)
    return re.sub(r"\s{2,}", " ", stripped).strip()


def parse_date_range(raw: str) -> DateRange:
    """Build the locked date field for an experience entry from raw date text."""
    normalized = normalize_dates(raw)
    years = _YEAR.findall(raw or "")
    is_current = bool(years) and bool(_CURRENT.search(raw or ""))

    start = years[0] if years else ""
    if is_current:
        end = "Present"
    elif len(years) >= 2:
        end = years[1]
    else:
        end = ""

    return DateRange(
        text=normalized,
        start=start,
        end=end,
        is_current=is_current,
        confidence=1.0 if start else 0.5,
        original_text=raw or "",
    )

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field

from ats_tailor.schemas.resume import Bullet, DateRange, ExperienceEntry, LockedField, QualityFlags
from ats_tailor.taxonomy import Lexicon, resolve_lexicon

from .dates import find_date_match, is_date_line, parse_date_range, strip_dates

logger = logging.getLogger(__name__)

BULLET_PREFIX_RE = re.compile(r"^(?:[•\-\*▪▸►→]\s+|\d+[.)]\s+)")
_LOCATION_LINE_RE = re.compile(r"^[A-Z][a-zA-Z\s]+,\s*(?:[A-Z]{2}|[A-Z][a-zA-Z\s]+)$")
_DASH_SPLIT_RE = re.compile(r"\s*[–—]\s*")
_HEADER_SPLIT_RE = re.compile(r"\s*[|–—]\s*")
_LONG_TENURE_MONTHS = 480
SWAP_PATTERN = "possible_company_title_swap"


@dataclass(frozen=True)
class HeaderParts:
    company: str
    title: str
    raw_dates: str = ""
    location: str = ""


HeaderRule = Callable[[str, Lexicon], "HeaderParts | None"]


def _split(pattern: re.Pattern[str], text: str) -> list[str]:
    return [part.strip() for part in pattern.split(text) if part and part.strip()]


def _pipe_rule(line: str, lexicon: Lexicon) -> HeaderParts | None:
    if "|" not in line:
        return None
    parts = [part.strip() for part in line.split("|") if part.strip()]
    if len(parts) < 2:
        return None
    fields = [value for value in (strip_dates(part) for part in parts) if value]
    if not fields:
        return None
    return HeaderParts(
        company=fields[0],
        title=fields[1] if len(fields) > 1 else "",
        raw_dates=find_date_match(line),
        location=fields[2] if len(fields) > 2 else "",
    )


def _dash_rule(line: str, lexicon: Lexicon) -> HeaderParts | None:
    parts = _split(_DASH_SPLIT_RE, strip_dates(line))
    if len(parts) < 2:
        return None
    if not (lexicon.looks_like_company(parts[0]) or lexicon.looks_like_title(parts[1])):
        return None
    return HeaderParts(
        company=parts[0],
        title=parts[1],
        raw_dates=find_date_match(line),
        location=parts[2] if len(parts) > 2 else "",
    )


def _known_company_prefix_rule(line: str, lexicon: Lexicon) -> HeaderParts | None:
    company = lexicon.known_company_prefix(line)
    if company is None:
        return None
    rest = line[len(company) :]
    pieces = _split(_HEADER_SPLIT_RE, strip_dates(rest))
    return HeaderParts(
        company=line[: len(company)].strip(),
        title=pieces[0] if pieces else "",
        raw_dates=find_date_match(rest),
    )


def _suffix_and_title_rule(line: str, lexicon: Lexicon) -> HeaderParts | None:
    if not (lexicon.company_suffix_pattern.search(line) or lexicon.has_title_keyword(line)):
        return None
    body = strip_dates(line)
    separator = next((sep for sep in ("|", "–", "—") if sep in body), None)
    if separator is None:
        return None
    parts = [part.strip() for part in body.split(separator) if part.strip()]
    if len(parts) < 2:
        return None
    return HeaderParts(company=parts[0], title=parts[1], raw_dates=find_date_match(line))


# Evaluated top-down; the first rule that returns parts wins.
JOB_HEADER_RULES: tuple[tuple[str, HeaderRule], ...] = (
    ("pipe", _pipe_rule),
    ("dash", _dash_rule),
    ("known_company_prefix", _known_company_prefix_rule),
    ("suffix_and_title", _suffix_and_title_rule),
)


def is_bullet_line(line: str) -> bool:
    return bool(BULLET_PREFIX_RE.match(line))


def strip_bullet(line: str) -> str:
    return BULLET_PREFIX_RE.sub("", line, count=1).strip()


def match_job_header(line: str, lexicon: Lexicon) -> tuple[str, HeaderParts] | None:
    if not line or is_bullet_line(line):
        return None
    for name, rule in JOB_HEADER_RULES:
        parts = rule(line, lexicon)
        if parts is not None:
            return name, parts
    return None


def _locked(value: str, original_text: str) -> LockedField:
    return LockedField(value=value, confidence=1.0 if value else 0.5, original_text=original_text)


@dataclass
class _EntryDraft:
    company: LockedField
    title: LockedField
    dates: DateRange
    location: str = ""
    bullets: list[Bullet] = field(default_factory=list)
    flags: QualityFlags = field(default_factory=QualityFlags)
    warnings: list[str] = field(default_factory=list)


def _open_entry(line: str, parts: HeaderParts, lexicon: Lexicon) -> _EntryDraft:
    company, title = parts.company, parts.title
    flags = QualityFlags()
    warnings: list[str] = []

    company_reads_as_title = lexicon.has_title_keyword(company) and not lexicon.looks_like_company(company)
    title_reads_as_company = lexicon.looks_like_company(title) and not lexicon.has_title_keyword(title)
    if company_reads_as_title and title_reads_as_company:
        logger.warning("company_title_swapped company=%r title=%r", company, title)
        company, title = title, company
        flags.swapped_company_title = True
        flags.suspicious_patterns.append(SWAP_PATTERN)
        warnings.append(f"Swapped company and title in header: {line}")
    elif company_reads_as_title or title_reads_as_company:
        flags.suspicious_patterns.append(SWAP_PATTERN)
        warnings.append(f"Company and title may be swapped in header: {line}")

    return _EntryDraft(
        company=_locked(company, line),
        title=_locked(title, line),
        dates=parse_date_range(parts.raw_dates) if parts.raw_dates else DateRange(),
        location=parts.location,
        flags=flags,
        warnings=warnings,
    )


def _finalize(draft: _EntryDraft) -> tuple[ExperienceEntry, list[str]]:
    flags = draft.flags
    warnings = list(draft.warnings)
    label = draft.company.value or draft.title.value or "entry"

    if not draft.company.value:
        flags.missing_fields.append("company")
    if not draft.title.value:
        flags.missing_fields.append("title")
    if not draft.dates.start:
        flags.missing_fields.append("start_date")
    flags.is_valid = bool(draft.company.value and draft.title.value and draft.bullets)

    if flags.missing_fields:
        warnings.append(f"{label}: missing {', '.join(flags.missing_fields)}")
    if not draft.bullets:
        warnings.append(f"{label}: no bullet points")
    if draft.dates.duration_months > _LONG_TENURE_MONTHS:
        warnings.append(f"{label}: duration over {_LONG_TENURE_MONTHS // 12} years")

    entry = ExperienceEntry(
        company=draft.company,
        title=draft.title,
        dates=draft.dates,
        location=draft.location,
        bullets=draft.bullets,
        summary=" ".join(bullet.text for bullet in draft.bullets[:3]),
        quality_flags=flags,
    )
    return entry, warnings


def extract_experience(content: str, lexicon: Lexicon | None = None) -> tuple[list[ExperienceEntry], list[str]]:
    """Turn the Experience section into entries, most recent first as written."""
    resolved = resolve_lexicon(lexicon)
    entries: list[ExperienceEntry] = []
    warnings: list[str] = []
    draft: _EntryDraft | None = None

    for raw_line in (content or "").split("\n"):
        line = raw_line.strip()
        if not line:
            continue

        header = match_job_header(line, resolved)
        if header is not None:
            if draft is not None:
                entry, entry_warnings = _finalize(draft)
                entries.append(entry)
                warnings.extend(entry_warnings)
            rule_name, parts = header
            logger.debug("job_header_matched rule=%s line=%r", rule_name, line)
            draft = _open_entry(line, parts, resolved)
            continue

        if draft is None:
            logger.debug("experience_line_skipped reason=no_open_entry line=%r", line)
            continue
        if is_bullet_line(line):
            text = strip_bullet(line)
            if text:
                draft.bullets.append(Bullet(text=text))
        elif not draft.location and _LOCATION_LINE_RE.match(line):
            draft.location = line
        elif not draft.dates.start and is_date_line(line):
            draft.dates = parse_date_range(find_date_match(line))
        else:
            logger.debug("experience_line_skipped reason=unclassified line=%r", line)

    if draft is not None:
        entry, entry_warnings = _finalize(draft)
        entries.append(entry)
        warnings.extend(entry_warnings)

    return entries, warnings

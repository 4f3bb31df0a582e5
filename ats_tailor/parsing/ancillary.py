from __future__ import annotations

import re

from ats_tailor.schemas.resume import Bullet, EducationEntry, ProjectEntry
from ats_tailor.taxonomy import Lexicon, resolve_lexicon

from .dates import extract_dates
from .experience import is_bullet_line, strip_bullet

_GPA_RE = re.compile(r"GPA[:\s]*(\d+\.?\d*)", re.IGNORECASE)
_LIST_GLYPH_RE = re.compile(r"[•▪*]|(?:^|\s)-\s", re.MULTILINE)
_LIST_SPLIT_RE = re.compile(r"[,\n;]")
_CATEGORY_LABEL_RE = re.compile(r"^[A-Za-z][A-Za-z &/]{1,30}:\s*", re.MULTILINE)
_LEADING_GLYPH_RE = re.compile(r"^[•\-\*▪▸►→]\s*")


def extract_gpa(text: str) -> str:
    match = _GPA_RE.search(text or "")
    return match.group(1) if match else ""


def extract_education(content: str, lexicon: Lexicon | None = None) -> list[EducationEntry]:
    resolved = resolve_lexicon(lexicon)
    entries: list[EducationEntry] = []
    current: EducationEntry | None = None

    for raw_line in (content or "").split("\n"):
        line = raw_line.strip()
        if not line:
            continue

        has_institution = bool(resolved.institution_pattern.search(line))
        has_degree = bool(resolved.degree_pattern.search(line))
        if has_institution or has_degree:
            if current is not None:
                entries.append(current)
            if "|" in line:
                parts = [part.strip() for part in line.split("|")]
                current = EducationEntry(
                    institution=parts[0],
                    degree=parts[1] if len(parts) > 1 else "",
                    date=extract_dates(parts[2] if len(parts) > 2 else line, allow_single_year=True),
                    gpa=extract_gpa(line),
                )
            else:
                current = EducationEntry(
                    institution=line if has_institution else "",
                    degree=line if has_degree else "",
                    date=extract_dates(line, allow_single_year=True),
                    gpa=extract_gpa(line),
                )
            continue

        if current is None:
            continue
        if not current.gpa:
            current.gpa = extract_gpa(line)
        if not current.date:
            current.date = extract_dates(line, allow_single_year=True)

    if current is not None:
        entries.append(current)
    return entries


def _split_list(content: str) -> list[str]:
    text = _CATEGORY_LABEL_RE.sub("", content or "")
    text = _LIST_GLYPH_RE.sub(",", text)
    return [item.strip() for item in _LIST_SPLIT_RE.split(text) if item.strip()]


def format_skill(skill: str, acronyms: frozenset[str]) -> str:
    if skill.lower() in acronyms:
        return skill.upper()
    words = []
    for word in skill.split():
        if len(word) <= 2 or word.lower() in acronyms:
            words.append(word.upper())
        else:
            words.append(word[:1].upper() + word[1:].lower())
    return " ".join(words)


def extract_skills(content: str, lexicon: Lexicon | None = None) -> list[str]:
    resolved = resolve_lexicon(lexicon)
    seen: set[str] = set()
    skills: list[str] = []
    for item in _split_list(content):
        key = item.lower()
        if not 2 <= len(item) <= 40 or key in resolved.skills_denylist or key in seen:
            continue
        seen.add(key)
        skills.append(format_skill(item, resolved.acronyms))
    return skills


def extract_certifications(content: str) -> list[str]:
    return [item for item in _split_list(content) if 5 < len(item) < 100]


def extract_summary(content: str) -> str:
    lines = [_LEADING_GLYPH_RE.sub("", line.strip()) for line in (content or "").split("\n")]
    return " ".join(line for line in lines if line)


def extract_projects(content: str) -> list[ProjectEntry]:
    projects: list[ProjectEntry] = []
    current: ProjectEntry | None = None

    for raw_line in (content or "").split("\n"):
        line = raw_line.strip()
        if not line:
            continue
        if is_bullet_line(line):
            text = strip_bullet(line)
            if current is not None and text:
                current.bullets.append(Bullet(text=text))
            continue
        if len(line) > 5:
            if current is not None:
                projects.append(current)
            parts = [part.strip() for part in line.split("|")]
            current = ProjectEntry(name=parts[0] or line, role=parts[1] if len(parts) > 1 else "")

    if current is not None:
        projects.append(current)
    return projects

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ats_tailor.core.scoring import get_scoring_value
from ats_tailor.taxonomy import Lexicon


@dataclass(frozen=True)
class InsertionContext:
    lexicon: Lexicon
    phrase: str = "using"
    comma_start: float = 0.2
    comma_end: float = 0.8

    @classmethod
    def from_config(cls, lexicon: Lexicon) -> "InsertionContext":
        return cls(
            lexicon=lexicon,
            phrase=str(get_scoring_value("tailoring.connective_phrase", "using")),
            comma_start=float(get_scoring_value("tailoring.comma_window.start", 0.2)),
            comma_end=float(get_scoring_value("tailoring.comma_window.end", 0.8)),
        )


Strategy = Callable[[str, str, InsertionContext], "str | None"]


def after_verb(bullet: str, keyword: str, context: InsertionContext) -> str | None:
    match = context.lexicon.action_verb_pattern.match(bullet)
    if match is None:
        return None
    rest = bullet[match.end() :].lstrip()
    # One compound modifier per bullet, whatever its word count.
    if not rest or "-focused" in rest.split(",", 1)[0].lower():
        return None
    return f"{match.group(0)} {keyword}-focused {rest}"


def before_comma(bullet: str, keyword: str, context: InsertionContext) -> str | None:
    index = bullet.find(",")
    if index == -1:
        return None
    length = len(bullet)
    if not length * context.comma_start <= index <= length * context.comma_end:
        return None
    return f"{bullet[:index]}, {context.phrase} {keyword}{bullet[index:]}"


def before_period(bullet: str, keyword: str, context: InsertionContext) -> str | None:
    if not bullet.endswith("."):
        return None
    return f"{bullet[:-1]}, {context.phrase} {keyword}."


def append(bullet: str, keyword: str, context: InsertionContext) -> str:
    return f"{bullet}, {context.phrase} {keyword}"


# Tried in order; append always succeeds.
STRATEGIES: tuple[tuple[str, Strategy], ...] = (
    ("after_verb", after_verb),
    ("before_comma", before_comma),
    ("before_period", before_period),
    ("append", append),
)


def insert_keyword(bullet: str, keyword: str, context: InsertionContext) -> tuple[str, str]:
    for name, strategy in STRATEGIES:
        rewritten = strategy(bullet, keyword, context)
        if rewritten is not None:
            return rewritten, name
    raise AssertionError("append strategy must always apply")

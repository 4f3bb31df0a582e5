from functools import lru_cache

from .lexicon import Lexicon, SectionRule
from .local_lexicon import LocalLexicon


@lru_cache(maxsize=1)
def get_default_lexicon() -> Lexicon:
    return LocalLexicon().lexicon


def resolve_lexicon(lexicon: Lexicon | None) -> Lexicon:
    return lexicon if lexicon is not None else get_default_lexicon()


__all__ = ["Lexicon", "SectionRule", "LocalLexicon", "get_default_lexicon", "resolve_lexicon"]

from __future__ import annotations

import re
from typing import Any

_BULLET_VARIANTS = "\u2022\u25cf\u25e6\u2043\u2219\uf0b7"
_EN_DASH_VARIANTS = "\u2013\u2012\u2010\u2011"
_EM_DASH_VARIANTS = "\u2014\u2015"
_SINGLE_QUOTE_VARIANTS = "\u2018\u2019\u201a\u201b\u2032"
_DOUBLE_QUOTE_VARIANTS = "\u201c\u201d\u201e\u201f\u2033"

_FOLD_TABLE = str.maketrans(
    {
        **{char: "•" for char in _BULLET_VARIANTS},
        **{char: "–" for char in _EN_DASH_VARIANTS},
        **{char: "—" for char in _EM_DASH_VARIANTS},
        **{char: "'" for char in _SINGLE_QUOTE_VARIANTS},
        **{char: '"' for char in _DOUBLE_QUOTE_VARIANTS},
        "\t": " ",
        "\u00a0": " ",
    }
)
_EXCESS_NEWLINES = re.compile(r"\n{3,}")


def normalize_text(text: Any) -> str:
    """Canonicalize line endings, whitespace and punctuation variants before parsing.

    Non-string input yields an empty string.
    """
    if not isinstance(text, str):
        return ""
    unified = text.replace("\r\n", "\n").replace("\r", "\n")
    folded = unified.translate(_FOLD_TABLE)
    return _EXCESS_NEWLINES.sub("\n\n", folded).strip()


def normalize_line(line: str) -> str:
    return re.sub(r"\s+", " ", line).strip()

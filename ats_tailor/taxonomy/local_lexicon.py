from __future__ import annotations

import json
from pathlib import Path

from .lexicon import Lexicon


class LocalLexicon:
    def __init__(self, lexicon_path: str | Path | None = None) -> None:
        path = Path(lexicon_path) if lexicon_path else Path(__file__).with_name("lexicon.json")
        self._lexicon = self._load_lexicon(path)

    @staticmethod
    def _load_lexicon(path: Path) -> Lexicon:
        with path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
        if not isinstance(raw, dict):
            raise RuntimeError(f"Invalid lexicon '{path}': expected a top-level mapping.")
        return Lexicon.from_mapping(raw)

    @property
    def lexicon(self) -> Lexicon:
        return self._lexicon

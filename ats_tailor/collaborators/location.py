from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

from ats_tailor.taxonomy import Lexicon, resolve_lexicon


class LocationNormalizer(Protocol):
    def normalize(self, raw: str) -> str:
        ...


class GazetteerLocationNormalizer:
    """Map "City, Region" strings to "City, Country" using a small lookup table."""

    def __init__(self, cities: Mapping[str, str], regions: Mapping[str, str]) -> None:
        self._cities = {str(k).strip().lower(): str(v) for k, v in cities.items()}
        self._regions = {str(k).strip().lower(): str(v) for k, v in regions.items()}

    @classmethod
    def from_lexicon(cls, lexicon: Lexicon | None = None) -> "GazetteerLocationNormalizer":
        resolved = resolve_lexicon(lexicon)
        return cls(resolved.cities, resolved.regions)

    def normalize(self, raw: str) -> str:
        if not isinstance(raw, str):
            return ""
        parts = [part.strip() for part in raw.split(",") if part.strip()]
        if not parts:
            return ""

        city = " ".join(parts[0].split())
        country = self._cities.get(city.lower())
        if country is None and len(parts) > 1:
            country = self._regions.get(parts[-1].lower())
        if country is None:
            return ""
        return f"{city.title()}, {country}"

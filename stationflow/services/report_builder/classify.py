"""Division classification for station names."""

from __future__ import annotations

from typing import Dict

from .models import MappingTable

FALLBACK_DIVISION = "Other"


def classify(station: str, mapping: MappingTable, fallback: str = FALLBACK_DIVISION) -> str:
    """Return the first division (in mapping order) listing ``station``.

    Matching is case-insensitive on trimmed text. A station listed under
    several divisions belongs to the one declared first; unmatched stations
    fall back to ``fallback``.
    """

    wanted = station.strip().lower()
    for division, members in mapping.items():
        if any(member.strip().lower() == wanted for member in members):
            return division
    return fallback


class DivisionClassifier:
    """Pre-indexed equivalent of :func:`classify` for repeated lookups."""

    def __init__(self, mapping: MappingTable, fallback: str = FALLBACK_DIVISION) -> None:
        self.fallback = fallback
        self._index: Dict[str, str] = {}
        for division, members in mapping.items():
            for member in members:
                # setdefault keeps the first declaring division.
                self._index.setdefault(member.strip().lower(), division)

    def __contains__(self, station: object) -> bool:
        return isinstance(station, str) and station.strip().lower() in self._index

    def classify(self, station: str) -> str:
        return self._index.get(station.strip().lower(), self.fallback)

    __call__ = classify

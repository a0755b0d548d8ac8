"""Grouping of station counts into sorted division blocks."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Tuple

from .classify import FALLBACK_DIVISION, DivisionClassifier
from .models import AggregationResult, DivisionGroup, MappingTable, MemberCount, ReportMode

LOGGER = logging.getLogger(__name__)


def member_sort_key(name: str) -> Tuple[str, str]:
    """Codepoint order on the lower-cased name, original text breaks ties."""

    return (name.lower(), name)


def _dedupe_members(members: Iterable[str]) -> List[str]:
    seen: Dict[str, str] = {}
    for member in members:
        cleaned = member.strip()
        if not cleaned:
            continue
        seen.setdefault(cleaned.lower(), cleaned)
    return sorted(seen.values(), key=member_sort_key)


def _fold_counts(counts: Mapping[str, int]) -> Dict[str, int]:
    """Index counts by lower-cased station; the first spelling seen wins.

    Stations differing only in case are not summed. This mirrors the lookup
    the report has always done and is logged so the data can be cleaned up.
    """

    folded: Dict[str, int] = {}
    first_spelling: Dict[str, str] = {}
    for station, count in counts.items():
        key = station.lower()
        if key in folded:
            LOGGER.warning(
                "Station %r collides case-insensitively with %r; keeping count %s from %r",
                station,
                first_spelling[key],
                folded[key],
                first_spelling[key],
            )
            continue
        folded[key] = count
        first_spelling[key] = station
    return folded


def _unmapped(counts: Mapping[str, int], classifier: DivisionClassifier) -> Dict[str, int]:
    return {station: count for station, count in counts.items() if station not in classifier}


def aggregate_by_mapping(counts: Mapping[str, int], mapping: MappingTable) -> AggregationResult:
    """Emit every mapped division with all of its declared members.

    Members without a matching station get a count of 0.
    """

    folded = _fold_counts(counts)
    groups: List[DivisionGroup] = []
    for division in sorted(mapping):
        members = tuple(
            MemberCount(member=name, count=folded.get(name.lower(), 0))
            for name in _dedupe_members(mapping[division])
        )
        groups.append(DivisionGroup(name=division, members=members))

    unmapped = _unmapped(counts, DivisionClassifier(mapping))
    if unmapped:
        LOGGER.warning(
            "%s station(s) not listed in any division and left out of the report: %s",
            len(unmapped),
            ", ".join(sorted(unmapped, key=member_sort_key)),
        )
    return AggregationResult(groups=groups, unmapped=unmapped)


def aggregate_observed(
    counts: Mapping[str, int],
    mapping: MappingTable,
    fallback: str = FALLBACK_DIVISION,
) -> AggregationResult:
    """Classify observed stations only; unmatched ones land in ``fallback``."""

    classifier = DivisionClassifier(mapping, fallback=fallback)
    buckets: Dict[str, List[MemberCount]] = {}
    for station, count in counts.items():
        if count <= 0:
            continue
        buckets.setdefault(classifier(station), []).append(MemberCount(member=station, count=count))

    groups = [
        DivisionGroup(
            name=division,
            members=tuple(sorted(buckets[division], key=lambda item: member_sort_key(item.member))),
        )
        for division in sorted(buckets)
    ]
    return AggregationResult(groups=groups, unmapped=_unmapped(counts, classifier))


def aggregate(
    counts: Mapping[str, int],
    mapping: MappingTable,
    mode: ReportMode = ReportMode.MAPPING_DRIVEN,
    *,
    fallback: str = FALLBACK_DIVISION,
) -> AggregationResult:
    """Group station counts into divisions according to ``mode``."""

    mode = ReportMode(mode)
    if mode is ReportMode.MAPPING_DRIVEN:
        return aggregate_by_mapping(counts, mapping)
    return aggregate_observed(counts, mapping, fallback=fallback)

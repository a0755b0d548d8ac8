"""Station occurrence counting for a single sheet."""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Sequence

import pandas as pd

from stationflow.core.errors import MissingColumnError

from .models import Record

DEFAULT_STATION_FIELD = "STATION"


def _normalize(label: object) -> str:
    return str(label).strip().lower()


def _is_missing(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and value.strip() == "":
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _coerce_station(value: object) -> str:
    # Numeric columns with blanks come back from pandas as floats.
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def find_station_field(fields: Iterable[object], hint: str = DEFAULT_STATION_FIELD) -> Optional[str]:
    """Return the first field whose trimmed, case-folded name equals ``hint``."""

    wanted = _normalize(hint)
    for name in fields:
        if _normalize(name) == wanted:
            return name  # type: ignore[return-value]
    return None


def count_stations(
    records: Sequence[Record],
    field_hint: str = DEFAULT_STATION_FIELD,
    *,
    sheet: str = "",
    columns: Optional[Sequence[object]] = None,
) -> Dict[str, int]:
    """Count occurrences of each distinct trimmed station value.

    The station field is located on the header (``columns``) when given,
    otherwise on the keys of the first record. Keys of the result keep the
    exact trimmed text, so ``"ABC"`` and ``"abc"`` are counted separately.

    Raises:
        MissingColumnError: When neither the header nor the first record
            carries a field matching ``field_hint``.
    """

    if columns is not None:
        fields: Iterable[object] = columns
    elif records:
        fields = records[0].keys()
    else:
        fields = ()

    station_key = find_station_field(fields, field_hint)
    if station_key is None:
        raise MissingColumnError(sheet, field_hint)

    counts: Dict[str, int] = {}
    for record in records:
        value = record.get(station_key)
        if _is_missing(value):
            continue
        station = _coerce_station(value)
        if not station:
            continue
        counts[station] = counts.get(station, 0) + 1
    return counts

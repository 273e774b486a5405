# dashboard/filters.py
"""
Search + facet filtering over in-memory lists (patients, alerts).

- search: case-insensitive substring match against any of the given
  text fields; an empty term matches everything.
- facet:  exact match on one field, switched off by the "all" sentinel.
Both must hold. Input order is preserved.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional, Sequence, TypeVar

from dashboard.models import Patient
from dashboard.preview import is_recent_checkin


T = TypeVar("T")

ALL = "all"


def _value(item, field: str):
    if isinstance(item, dict):
        return item.get(field)
    value = getattr(item, field, None)
    # str-valued enums compare by their value
    return getattr(value, "value", value)


def matches_search(item, search_term: str, text_fields: Sequence[str]) -> bool:
    needle = (search_term or "").lower()
    if not needle:
        return True
    for field in text_fields:
        haystack = _value(item, field)
        if haystack is not None and needle in str(haystack).lower():
            return True
    return False


def matches_facet(item, facet_value: Optional[str], facet_field: str) -> bool:
    if not facet_value or facet_value == ALL:
        return True
    return _value(item, facet_field) == facet_value


def filter_items(
    items: Iterable[T],
    search_term: str = "",
    facet_value: Optional[str] = ALL,
    *,
    text_fields: Sequence[str],
    facet_field: str,
) -> List[T]:
    return [
        item
        for item in items
        if matches_facet(item, facet_value, facet_field)
        and matches_search(item, search_term, text_fields)
    ]


def filter_patients(patients: Iterable[Patient], search_term: str = "", language: str = ALL) -> List[Patient]:
    return filter_items(
        patients,
        search_term,
        language,
        text_fields=("name", "phone"),
        facet_field="language",
    )


def filter_alerts(alerts: Iterable, search_term: str = "", status: str = ALL) -> list:
    return filter_items(
        alerts,
        search_term,
        status,
        text_fields=("patient_name", "reason"),
        facet_field="status",
    )


@dataclass
class PatientStats:
    total: int
    active_this_week: int
    with_conditions: int
    never_checked_in: int


def patient_stats(patients: Sequence[Patient], now: Optional[datetime] = None) -> PatientStats:
    """Counters shown above the patient table (always over the full list)."""
    return PatientStats(
        total=len(patients),
        active_this_week=sum(1 for p in patients if is_recent_checkin(p.last_checkin, now)),
        with_conditions=sum(1 for p in patients if p.conditions),
        never_checked_in=sum(1 for p in patients if p.last_checkin is None),
    )

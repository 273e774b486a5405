# dashboard/preview.py
"""
Derived, human-readable values shown next to the forms and in the
patient table.

Everything here is a pure function of its arguments (plus an injectable
`now`), so callers simply recompute on every change.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import List, Optional, Sequence, Union

from dashboard.models import Patient
from dashboard.wizard.schema import LANGUAGE_OPTIONS, PrescriptionDraft, find_frequency


DateLike = Union[str, date]

SECONDS_PER_DAY = 24 * 60 * 60
RECENT_CHECKIN_WINDOW = timedelta(days=7)


class StatusBadge(str, Enum):
    NEW = "New"
    NEEDS_FOLLOW_UP = "Needs Follow-up"
    ACTIVE = "Active"
    INACTIVE = "Inactive"


@dataclass
class ScheduleSummary:
    duration_days: int
    total_doses: Optional[int] = None


def _parse_date(value: DateLike) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps from the backend are UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _now(now: Optional[datetime]) -> datetime:
    return _as_utc(now) if now is not None else datetime.now(timezone.utc)


# ----------------------------------------------------------------------
# Prescription form
# ----------------------------------------------------------------------

def suggested_end_date(start_date: DateLike, frequency: str) -> Optional[str]:
    """
    Default end date offered next to the end-date picker.

    Policy, not a clinical calculation: two weeks for "... daily"
    schedules, one week for everything else.
    """
    start = _parse_date(start_date)
    if start is None:
        return None
    days = 14 if "daily" in (frequency or "") else 7
    return (start + timedelta(days=days)).isoformat()


def frequency_description(frequency: str) -> Optional[str]:
    option = find_frequency(frequency)
    if option is None:
        return None
    return f"{option.times_per_day} times per day (every {option.interval_hours} hours)"


def treatment_duration_days(start: DateLike, end: DateLike) -> int:
    """
    Whole days between start and end, rounded up.

    Signed: an end before the start gives a negative number. Callers that
    show a count to users decide how to present that.
    """
    start_d = _parse_date(start)
    end_d = _parse_date(end)
    if start_d is None or end_d is None:
        raise ValueError(f"Invalid treatment dates: start={start!r} end={end!r}")
    return math.ceil((end_d - start_d).total_seconds() / SECONDS_PER_DAY)


def total_doses(duration_days: int, times_per_day: int) -> int:
    return duration_days * times_per_day


def medication_summary(draft: PrescriptionDraft) -> Optional[str]:
    """e.g. "Ibuprofen 200mg - twice daily (Brand: Advil)"."""
    if not (draft.dosage_amount and draft.dosage_unit and draft.frequency):
        return None
    text = f"{draft.generic_medication_name} {draft.dosage_amount}{draft.dosage_unit} - {draft.frequency}"
    if draft.brand_medication_name:
        text += f" (Brand: {draft.brand_medication_name})"
    return text


def schedule_summary(draft: PrescriptionDraft) -> Optional[ScheduleSummary]:
    start = _parse_date(draft.start_date)
    end = _parse_date(draft.end_date)
    if start is None or end is None:
        return None

    duration = treatment_duration_days(start, end)
    summary = ScheduleSummary(duration_days=duration)
    if draft.frequency:
        option = find_frequency(draft.frequency)
        times = option.times_per_day if option else 1
        summary.total_doses = total_doses(max(duration, 0), times)
    return summary


# ----------------------------------------------------------------------
# Patient table
# ----------------------------------------------------------------------

def elapsed_days(timestamp: datetime, now: Optional[datetime] = None) -> int:
    delta = abs(_now(now) - _as_utc(timestamp))
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def format_calendar_date(value: Union[date, datetime]) -> str:
    """US short form, e.g. "Jan 5, 2024"."""
    return f"{value:%b} {value.day}, {value.year}"


def last_checkin_label(timestamp: Optional[datetime], now: Optional[datetime] = None) -> str:
    if timestamp is None:
        return "Never"

    days = elapsed_days(timestamp, now)
    if days <= 1:
        return "Today"
    if days == 2:
        return "Yesterday"
    if days <= 7:
        return f"{days - 1} days ago"
    return format_calendar_date(timestamp)


def is_recent_checkin(timestamp: Optional[datetime], now: Optional[datetime] = None) -> bool:
    if timestamp is None:
        return False
    return _as_utc(timestamp) > _now(now) - RECENT_CHECKIN_WINDOW


def status_badge(
    last_checkin: Optional[datetime],
    conditions: Sequence[str],
    now: Optional[datetime] = None,
) -> StatusBadge:
    # Order matters: New wins over everything else
    if last_checkin is None:
        return StatusBadge.NEW

    recent = is_recent_checkin(last_checkin, now)
    if conditions and not recent:
        return StatusBadge.NEEDS_FOLLOW_UP
    if recent:
        return StatusBadge.ACTIVE
    return StatusBadge.INACTIVE


def language_name(code: str) -> str:
    for option in LANGUAGE_OPTIONS:
        if option.value == code:
            return option.label
    return code


def initials(name: str) -> str:
    return "".join(part[0] for part in name.split()).upper()


def _plural(count: int, singular: str, plural: str) -> str:
    return f"{count} {singular if count == 1 else plural}"


def health_summary(patient: Patient) -> List[str]:
    """Short counters under the status badge, e.g. ["2 conditions", "1 allergy"]."""
    parts: List[str] = []
    if patient.conditions:
        parts.append(_plural(len(patient.conditions), "condition", "conditions"))
    if patient.allergies:
        parts.append(_plural(len(patient.allergies), "allergy", "allergies"))
    if patient.medications:
        parts.append(_plural(len(patient.medications), "med", "meds"))
    return parts

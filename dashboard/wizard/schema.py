# dashboard/wizard/schema.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FrequencyOption(BaseModel):
    value: str
    label: str
    times_per_day: int
    interval_hours: int


class Option(BaseModel):
    value: str
    label: str


# Fixed table; preview maths (dose totals, end-date suggestion) depend on it.
FREQUENCY_OPTIONS: List[FrequencyOption] = [
    FrequencyOption(value="once daily", label="Once daily", times_per_day=1, interval_hours=24),
    FrequencyOption(value="twice daily", label="Twice daily", times_per_day=2, interval_hours=12),
    FrequencyOption(value="three times daily", label="Three times daily", times_per_day=3, interval_hours=8),
    FrequencyOption(value="every 8 hours", label="Every 8 hours", times_per_day=3, interval_hours=8),
    FrequencyOption(value="every 6 hours", label="Every 6 hours", times_per_day=4, interval_hours=6),
    FrequencyOption(value="every 4 hours", label="Every 4 hours", times_per_day=6, interval_hours=4),
]

DOSAGE_UNIT_OPTIONS: List[Option] = [
    Option(value="mg", label="mg (milligrams)"),
    Option(value="g", label="g (grams)"),
    Option(value="ml", label="ml (milliliters)"),
    Option(value="mcg", label="mcg (micrograms)"),
    Option(value="units", label="units"),
    Option(value="tablets", label="tablets"),
    Option(value="capsules", label="capsules"),
    Option(value="drops", label="drops"),
    Option(value="tsp", label="tsp (teaspoons)"),
    Option(value="tbsp", label="tbsp (tablespoons)"),
]

LANGUAGE_OPTIONS: List[Option] = [
    Option(value="en", label="English"),
    Option(value="ha", label="Hausa"),
    Option(value="ig", label="Igbo"),
    Option(value="yo", label="Yoruba"),
]

STATE_OPTIONS: List[Option] = [
    Option(value="rivers", label="Rivers State"),
    Option(value="lagos", label="Lagos State"),
    Option(value="abuja", label="FCT - Abuja"),
    Option(value="kano", label="Kano State"),
    Option(value="kaduna", label="Kaduna State"),
    Option(value="oyo", label="Oyo State"),
    Option(value="delta", label="Delta State"),
    Option(value="edo", label="Edo State"),
    Option(value="anambra", label="Anambra State"),
    Option(value="imo", label="Imo State"),
]


def find_frequency(value: str) -> Optional[FrequencyOption]:
    for option in FREQUENCY_OPTIONS:
        if option.value == value:
            return option
    return None


class PatientDraft(BaseModel):
    """
    In-progress patient record collected by the three-step wizard.

    The list fields are append-only from the wizard's point of view:
    items are added or removed by index, never edited in place.
    """

    name: str = ""
    phone: str = ""
    language: str = ""

    address: str = ""
    city: str = ""
    state: str = ""

    allergies: List[str] = Field(default_factory=list)
    medications: List[str] = Field(default_factory=list)
    conditions: List[str] = Field(default_factory=list)
    family_history: List[str] = Field(default_factory=list)
    medical_history: List[str] = Field(default_factory=list)

    model_config = ConfigDict(validate_assignment=True)


PATIENT_LIST_FIELDS = (
    "allergies",
    "medications",
    "conditions",
    "family_history",
    "medical_history",
)


class PrescriptionDraft(BaseModel):
    patient_phone: str = ""
    doctor_id: str = ""

    generic_medication_name: str = ""
    brand_medication_name: str = ""
    instructions: str = ""
    dosage_amount: str = ""
    dosage_unit: str = ""
    frequency: str = ""

    # Calendar dates as YYYY-MM-DD, empty when unset
    start_date: str = ""
    end_date: str = ""
    refill_date: str = ""

    is_active: bool = True

    model_config = ConfigDict(validate_assignment=True)


@dataclass(frozen=True)
class DoctorSession:
    """Who is signed in. Passed explicitly into anything that needs it."""

    doctor_id: str

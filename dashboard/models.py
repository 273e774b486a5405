# dashboard/models.py
"""
Read-only projections of records owned by the external patient API.

The dashboard keeps a copy for the lifetime of one view and never writes
these back.
"""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class Location(BaseModel):
    address: str = ""
    city: str = ""
    state: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    model_config = {
        "extra": "ignore",
    }


class Prescription(BaseModel):
    id: str
    patient_phone: str = ""
    doctor_id: str = ""
    generic_medication_name: str = ""
    brand_medication_name: str = ""
    instructions: str = ""
    dosage_amount: str = ""
    dosage_unit: str = ""
    frequency: str = ""
    start_date: str = ""
    end_date: str = ""
    is_active: bool = False
    refill_date: str = ""

    model_config = {
        "extra": "ignore",
    }

    @field_validator("id", "dosage_amount", mode="before")
    @classmethod
    def stringify(cls, value):
        return "" if value is None else str(value)

    @field_validator(
        "patient_phone",
        "doctor_id",
        "generic_medication_name",
        "brand_medication_name",
        "instructions",
        "dosage_unit",
        "frequency",
        "start_date",
        "end_date",
        "refill_date",
        mode="before",
    )
    @classmethod
    def none_as_empty(cls, value):
        return "" if value is None else value

    @field_validator("is_active", mode="before")
    @classmethod
    def null_as_inactive(cls, value):
        return False if value is None else value


class Patient(BaseModel):
    id: str
    name: str
    phone: str = ""
    language: str = ""
    last_checkin: Optional[datetime] = None
    location: Location = Field(default_factory=Location)

    allergies: List[str] = Field(default_factory=list)
    medications: List[str] = Field(default_factory=list)
    conditions: List[str] = Field(default_factory=list)
    family_history: List[str] = Field(default_factory=list)
    medical_history: List[str] = Field(default_factory=list)

    prescriptions: List[Prescription] = Field(default_factory=list)

    # The backend adds fields over time; ignore what we don't render
    model_config = {
        "extra": "ignore",
    }

    @field_validator("id", "phone", mode="before")
    @classmethod
    def stringify(cls, value):
        return "" if value is None else str(value)

    @field_validator(
        "allergies",
        "medications",
        "conditions",
        "family_history",
        "medical_history",
        "prescriptions",
        mode="before",
    )
    @classmethod
    def none_as_empty_list(cls, value):
        return [] if value is None else value

    @field_validator("location", mode="before")
    @classmethod
    def none_as_empty_location(cls, value):
        return {} if value is None else value

    @field_validator("last_checkin", mode="before")
    @classmethod
    def blank_checkin_as_none(cls, value):
        # Backend sends "" for patients who never checked in
        return None if value in ("", None) else value

    @property
    def active_prescriptions(self) -> List[Prescription]:
        return [p for p in self.prescriptions if p.is_active]

# dashboard/api/schemas.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from dashboard.wizard.schema import FrequencyOption, Option


class StartPrescriptionRequest(BaseModel):
    patient_phone: Optional[str] = None


class FieldUpdateRequest(BaseModel):
    value: Any


class ListInputRequest(BaseModel):
    text: str = ""


class ListItemRequest(BaseModel):
    # Omit to add whatever is pending in the field's input box
    value: Optional[str] = None


class ErrorBody(BaseModel):
    type: str
    code: str
    message: str
    detail: Any = None


class PrescriptionPreview(BaseModel):
    medication_summary: Optional[str] = None
    frequency_description: Optional[str] = None
    suggested_end_date: Optional[str] = None
    duration_days: Optional[int] = None
    total_doses: Optional[int] = None


class WizardResponse(BaseModel):
    wizard_id: str
    kind: str
    step: int
    total_steps: int
    step_title: str
    can_advance: bool
    can_retreat: bool
    can_submit: bool
    is_submitted: bool
    draft: Dict[str, Any]
    list_inputs: Dict[str, str]
    preview: Optional[PrescriptionPreview] = None


class SubmitResponse(BaseModel):
    ok: bool
    wizard: WizardResponse
    response: Any = None
    error: Optional[ErrorBody] = None


class PatientRow(BaseModel):
    id: str
    name: str
    initials: str
    phone: str
    language: str
    language_name: str
    city: str
    state: str
    status: str
    health_summary: List[str]
    last_checkin_label: str


class PatientStatsSchema(BaseModel):
    total: int
    active_this_week: int
    with_conditions: int
    never_checked_in: int


class PatientListResponse(BaseModel):
    patients: List[PatientRow]
    stats: PatientStatsSchema


class PrescriptionSchema(BaseModel):
    id: str
    generic_medication_name: str
    brand_medication_name: str
    dosage: str
    frequency: str
    instructions: str
    start_date: str
    end_date: str
    is_active: bool


class PatientDetailResponse(BaseModel):
    id: str
    name: str
    initials: str
    status: str
    phone: str
    language_name: str
    address: str
    city: str
    state: str
    last_checkin_label: str
    conditions: List[str]
    allergies: List[str]
    medications: List[str]
    family_history: List[str]
    medical_history: List[str]
    active_prescriptions: List[PrescriptionSchema]


class AlertSchema(BaseModel):
    id: int
    patient_name: str
    patient_id: str
    reason: str
    timestamp: datetime
    age_label: str
    severity: str
    status: str
    type: str


class AlertListResponse(BaseModel):
    alerts: List[AlertSchema]
    counts: Dict[str, int]


class OptionsResponse(BaseModel):
    frequencies: List[FrequencyOption]
    dosage_units: List[Option]
    languages: List[Option]
    states: List[Option]

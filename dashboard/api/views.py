# dashboard/api/views.py
"""Turn core objects into the response models the front end renders."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from dashboard import preview
from dashboard.alerts import Alert, format_alert_timestamp
from dashboard.filters import PatientStats
from dashboard.gateway.types import SubmitResult
from dashboard.models import Patient
from dashboard.wizard.controller import PrescriptionWizard, WizardController
from dashboard.wizard.schema import PrescriptionDraft
from .schemas import (
    AlertSchema,
    ErrorBody,
    PatientDetailResponse,
    PatientRow,
    PatientStatsSchema,
    PrescriptionPreview,
    PrescriptionSchema,
    SubmitResponse,
    WizardResponse,
)


def prescription_preview(draft: PrescriptionDraft) -> PrescriptionPreview:
    schedule = preview.schedule_summary(draft)
    return PrescriptionPreview(
        medication_summary=preview.medication_summary(draft),
        frequency_description=preview.frequency_description(draft.frequency),
        suggested_end_date=preview.suggested_end_date(draft.start_date, draft.frequency),
        duration_days=schedule.duration_days if schedule else None,
        total_doses=schedule.total_doses if schedule else None,
    )


def wizard_view(wizard_id: str, wizard: WizardController) -> WizardResponse:
    return WizardResponse(
        wizard_id=wizard_id,
        kind=wizard.KIND,
        step=wizard.step,
        total_steps=wizard.TOTAL_STEPS,
        step_title=wizard.step_title,
        can_advance=wizard.can_advance,
        can_retreat=wizard.can_retreat,
        can_submit=wizard.can_submit,
        is_submitted=wizard.state.is_submitted,
        draft=wizard.draft.model_dump(),
        list_inputs=dict(wizard.state.list_inputs),
        preview=(
            prescription_preview(wizard.draft)
            if isinstance(wizard, PrescriptionWizard)
            else None
        ),
    )


def submit_view(wizard_id: str, wizard: WizardController, result: SubmitResult) -> SubmitResponse:
    return SubmitResponse(
        ok=result.ok,
        wizard=wizard_view(wizard_id, wizard),
        response=result.response,
        error=ErrorBody(**result.error.to_dict()) if result.error else None,
    )


def patient_row(patient: Patient, now: Optional[datetime] = None) -> PatientRow:
    return PatientRow(
        id=patient.id,
        name=patient.name,
        initials=preview.initials(patient.name),
        phone=patient.phone,
        language=patient.language,
        language_name=preview.language_name(patient.language),
        city=patient.location.city,
        state=patient.location.state,
        status=preview.status_badge(patient.last_checkin, patient.conditions, now).value,
        health_summary=preview.health_summary(patient),
        last_checkin_label=preview.last_checkin_label(patient.last_checkin, now),
    )


def stats_view(stats: PatientStats) -> PatientStatsSchema:
    return PatientStatsSchema(
        total=stats.total,
        active_this_week=stats.active_this_week,
        with_conditions=stats.with_conditions,
        never_checked_in=stats.never_checked_in,
    )


def patient_detail(patient: Patient, now: Optional[datetime] = None) -> PatientDetailResponse:
    return PatientDetailResponse(
        id=patient.id,
        name=patient.name,
        initials=preview.initials(patient.name),
        status=preview.status_badge(patient.last_checkin, patient.conditions, now).value,
        phone=patient.phone,
        language_name=preview.language_name(patient.language),
        address=patient.location.address,
        city=patient.location.city,
        state=patient.location.state,
        last_checkin_label=preview.last_checkin_label(patient.last_checkin, now),
        conditions=patient.conditions,
        allergies=patient.allergies,
        medications=patient.medications,
        family_history=patient.family_history,
        medical_history=patient.medical_history,
        active_prescriptions=[
            PrescriptionSchema(
                id=p.id,
                generic_medication_name=p.generic_medication_name,
                brand_medication_name=p.brand_medication_name,
                dosage=f"{p.dosage_amount} {p.dosage_unit}".strip(),
                frequency=p.frequency,
                instructions=p.instructions,
                start_date=p.start_date,
                end_date=p.end_date,
                is_active=p.is_active,
            )
            for p in patient.active_prescriptions
        ],
    )


def alert_view(alert: Alert, now: Optional[datetime] = None) -> AlertSchema:
    return AlertSchema(
        **alert.model_dump(),
        age_label=format_alert_timestamp(alert.timestamp, now),
    )

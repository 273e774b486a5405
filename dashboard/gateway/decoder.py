# dashboard/gateway/decoder.py
"""
Translation between the external API's JSON and our own types.

The patient list endpoint has been seen returning either of:

  [ {patient}, {patient}, ... ]
  { "<key>": {patient}, "<key>": {patient}, ... }

Both are folded into one ordered list here so nothing downstream has to
care which shape arrived.
"""
from __future__ import annotations

from typing import Any, List

from pydantic import ValidationError

from dashboard.exceptions import NetworkFailure
from dashboard.models import Patient
from dashboard.wizard.schema import PatientDraft, PrescriptionDraft


def decode_patient_collection(body: Any) -> List[Patient]:
    if isinstance(body, list):
        records = body
    elif isinstance(body, dict):
        records = list(body.values())
    else:
        raise NetworkFailure(
            "Unexpected patient list payload",
            code="BAD_PAYLOAD",
            detail={"received": type(body).__name__},
        )

    try:
        return [Patient.model_validate(record) for record in records]
    except ValidationError as e:
        raise NetworkFailure(
            "Patient list payload did not match the expected schema",
            code="BAD_PAYLOAD",
            detail=e.errors(include_url=False, include_context=False, include_input=False),
        ) from e


def to_patient_payload(draft: PatientDraft) -> dict:
    """Patient draft → body for POST /api/v1/patient."""
    return {
        "name": draft.name.strip(),
        "phone": draft.phone.strip(),
        "language": draft.language,
        "location": {
            "address": draft.address.strip(),
            "city": draft.city.strip(),
            "state": draft.state,
        },
        "allergies": list(draft.allergies),
        "medications": list(draft.medications),
        "conditions": list(draft.conditions),
        "family_history": list(draft.family_history),
        "medical_history": list(draft.medical_history),
    }


def to_prescription_payload(draft: PrescriptionDraft) -> dict:
    """Prescription draft → body for POST /api/v1/prescription."""
    return {
        "patient_phone": draft.patient_phone,
        "doctor_id": draft.doctor_id,
        "generic_medication_name": draft.generic_medication_name.strip(),
        "brand_medication_name": draft.brand_medication_name.strip(),
        "instructions": draft.instructions,
        "dosage_amount": draft.dosage_amount,
        "dosage_unit": draft.dosage_unit,
        "frequency": draft.frequency,
        "start_date": draft.start_date,
        "end_date": draft.end_date,
        "is_active": draft.is_active,
        # Optional on the form; send null rather than an empty date
        "refill_date": draft.refill_date or None,
    }

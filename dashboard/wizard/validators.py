# dashboard/wizard/validators.py
"""
Step validity predicates.

Each one is a pure function of the current draft. A step is either
valid or not; there is no partial credit. Whitespace-only values count
as empty.
"""
from __future__ import annotations

import math

from dashboard.wizard.schema import PatientDraft, PrescriptionDraft


def _filled(*values: str) -> bool:
    return all(v is not None and str(v).strip() for v in values)


def _numeric(value: str) -> bool:
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


def is_patient_step1_valid(draft: PatientDraft) -> bool:
    return _filled(draft.name, draft.phone, draft.language)


def is_patient_step2_valid(draft: PatientDraft) -> bool:
    return _filled(draft.address, draft.city, draft.state)


def is_patient_step3_valid(draft: PatientDraft) -> bool:
    # Medical info is optional
    return True


def is_prescription_step1_valid(draft: PrescriptionDraft) -> bool:
    return _filled(
        draft.generic_medication_name,
        draft.dosage_amount,
        draft.dosage_unit,
        draft.frequency,
    ) and _numeric(draft.dosage_amount)


def is_prescription_step2_valid(draft: PrescriptionDraft) -> bool:
    return _filled(draft.start_date, draft.end_date)

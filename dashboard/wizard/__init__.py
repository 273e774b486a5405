# dashboard/wizard/__init__.py
from .schema import PatientDraft, PrescriptionDraft, DoctorSession, FREQUENCY_OPTIONS

__all__ = ["PatientDraft", "PrescriptionDraft", "DoctorSession", "FREQUENCY_OPTIONS"]

# dashboard/wizard/stages.py
from enum import IntEnum


class PatientStep(IntEnum):
    BASIC = 1
    LOCATION = 2
    MEDICAL = 3


class PrescriptionStep(IntEnum):
    MEDICATION = 1
    SCHEDULE = 2


STEP_TITLES = {
    "patient": {
        PatientStep.BASIC: "Basic Info",
        PatientStep.LOCATION: "Location",
        PatientStep.MEDICAL: "Medical Info",
    },
    "prescription": {
        PrescriptionStep.MEDICATION: "Medication Details",
        PrescriptionStep.SCHEDULE: "Treatment Schedule",
    },
}

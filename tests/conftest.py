"""
Shared fixtures for all tests.

FakeGateway lives here so both unit/ and integration/ can use it without
touching the network.
"""
from datetime import datetime, timedelta, timezone

import pytest

from dashboard.exceptions import NetworkFailure
from dashboard.gateway import DataGateway, SubmitResult, decode_patient_collection


NOW = datetime(2024, 6, 10, 12, 0, tzinfo=timezone.utc)


class FakeGateway(DataGateway):
    """In-memory stand-in for the external API."""

    def __init__(self, body=None, fetch_error=None, submit_error=None):
        self.body = body if body is not None else []
        self.fetch_error = fetch_error
        self.submit_error = submit_error
        self.fetch_calls = 0
        self.submitted_patients = []
        self.submitted_prescriptions = []
        self.on_fetch = None

    def fetch_patients(self, token=None):
        self.fetch_calls += 1
        if self.on_fetch is not None:
            self.on_fetch()
        if self.fetch_error is not None:
            raise self.fetch_error
        return decode_patient_collection(self.body)

    def submit_patient(self, draft):
        if self.submit_error is not None:
            return SubmitResult(draft=draft, error=self.submit_error)
        self.submitted_patients.append(draft.model_copy(deep=True))
        return SubmitResult(draft=draft, response={"id": "new-patient"})

    def submit_prescription(self, draft):
        if self.submit_error is not None:
            return SubmitResult(draft=draft, error=self.submit_error)
        self.submitted_prescriptions.append(draft.model_copy(deep=True))
        return SubmitResult(draft=draft, response={"id": "new-prescription"})


def make_patient(**overrides):
    record = {
        "id": "p1",
        "name": "John Smith",
        "phone": "08100000000",
        "language": "en",
        "last_checkin": None,
        "location": {"address": "1 Aba Road", "city": "Port Harcourt", "state": "rivers"},
        "allergies": [],
        "medications": [],
        "conditions": [],
        "family_history": [],
        "medical_history": [],
        "prescriptions": [],
    }
    record.update(overrides)
    return record


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def patient_factory():
    return make_patient


@pytest.fixture
def patient_records():
    """Raw patient JSON as the external API sends it."""
    return [
        make_patient(
            id="p1",
            name="John Smith",
            phone="08100000000",
            language="en",
            last_checkin=(NOW - timedelta(days=1)).isoformat(),
        ),
        make_patient(
            id="p2",
            name="Mary Jane",
            phone="08199999999",
            language="yo",
            last_checkin=(NOW - timedelta(days=8)).isoformat(),
            conditions=["asthma"],
            allergies=["Penicillin"],
            medications=["Salbutamol", "Montelukast"],
            prescriptions=[
                {
                    "id": "rx1",
                    "generic_medication_name": "Salbutamol",
                    "brand_medication_name": "Ventolin",
                    "dosage_amount": "100",
                    "dosage_unit": "mcg",
                    "frequency": "every 6 hours",
                    "start_date": "2024-06-01",
                    "end_date": "2024-06-08",
                    "is_active": True,
                },
                {
                    "id": "rx2",
                    "generic_medication_name": "Prednisolone",
                    "is_active": False,
                },
            ],
        ),
        make_patient(id="p3", name="Chidi Okafor", phone="08122223333", language="ig"),
    ]


@pytest.fixture
def fake_gateway(patient_records):
    return FakeGateway(body=patient_records)


@pytest.fixture
def failing_gateway():
    return FakeGateway(
        fetch_error=NetworkFailure("Failed to fetch patients", code="FETCH_FAILED"),
        submit_error=NetworkFailure("Failed to create patient", code="SUBMIT_FAILED"),
    )

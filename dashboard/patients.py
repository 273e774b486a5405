# dashboard/patients.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from dashboard.exceptions import NetworkFailure, PatientNotFound
from dashboard.filters import ALL, PatientStats, filter_patients, patient_stats
from dashboard.gateway.client import DataGateway
from dashboard.gateway.types import CancellationToken
from dashboard.models import Patient

logger = logging.getLogger(__name__)


FETCH_ERROR_MESSAGE = "Failed to fetch patients"


class PatientDirectory:
    """
    State behind the patient table: one fetched copy of the patient list
    plus the current search term and language filter.

    The copy is read-only and lives as long as this object. `load()`
    writes its result at most once per call, and not at all when the
    caller's token was cancelled while the request was in flight.
    """

    def __init__(self, gateway: DataGateway):
        self.gateway = gateway
        self.patients: List[Patient] = []
        self.loading: bool = False
        self.error: Optional[str] = None

        self.search_term: str = ""
        self.language_filter: str = ALL

    def load(self, token: Optional[CancellationToken] = None) -> bool:
        """
        Fetch the patient list. Returns False when the result was dropped
        because the token was cancelled.
        """
        self.loading = True
        try:
            patients = self.gateway.fetch_patients(token)
        except NetworkFailure as e:
            if token is not None and token.cancelled:
                logger.debug("Dropping fetch failure for cancelled view: %s", e.message)
                return False
            logger.error("%s: %s", FETCH_ERROR_MESSAGE, e.detail or e.message)
            self.error = FETCH_ERROR_MESSAGE
            self.loading = False
            return True

        if token is not None and token.cancelled:
            logger.debug("Dropping %d fetched patients for cancelled view", len(patients))
            return False

        self.patients = patients
        self.error = None
        self.loading = False
        return True

    def retry(self, token: Optional[CancellationToken] = None) -> bool:
        """Start over from a clean slate, like reloading the page."""
        self.patients = []
        self.error = None
        return self.load(token)

    def set_search(self, term: str) -> None:
        self.search_term = term or ""

    def set_language_filter(self, language: str) -> None:
        self.language_filter = language or ALL

    @property
    def visible(self) -> List[Patient]:
        return filter_patients(self.patients, self.search_term, self.language_filter)

    def stats(self, now: Optional[datetime] = None) -> PatientStats:
        return patient_stats(self.patients, now)

    def get(self, patient_id: str) -> Patient:
        for patient in self.patients:
            if patient.id == patient_id:
                return patient
        raise PatientNotFound(f"Patient {patient_id} not found", detail={"patient_id": patient_id})

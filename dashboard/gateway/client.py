# dashboard/gateway/client.py
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

import requests

from dashboard.config import get_settings
from dashboard.exceptions import NetworkFailure
from dashboard.gateway.decoder import (
    decode_patient_collection,
    to_patient_payload,
    to_prescription_payload,
)
from dashboard.gateway.types import CancellationToken, SubmitResult
from dashboard.models import Patient
from dashboard.wizard.schema import PatientDraft, PrescriptionDraft

logger = logging.getLogger(__name__)


PATIENT_PATH = "/api/v1/patient"
PRESCRIPTION_PATH = "/api/v1/prescription"

# ngrok serves an interstitial HTML page to browsers unless this is set
DEFAULT_HEADERS = {"ngrok-skip-browser-warning": "true"}


class DataGateway(ABC):
    """
    Boundary to the external patient API.

    One call per user action: no retry, no backoff, no pagination.
    """

    @abstractmethod
    def fetch_patients(self, token: Optional[CancellationToken] = None) -> List[Patient]:
        """
        Return every patient, in the order the API sent them.
        Raises NetworkFailure on any transport or payload problem.
        """
        ...

    @abstractmethod
    def submit_patient(self, draft: PatientDraft) -> SubmitResult[PatientDraft]:
        ...

    @abstractmethod
    def submit_prescription(self, draft: PrescriptionDraft) -> SubmitResult[PrescriptionDraft]:
        ...


class HttpDataGateway(DataGateway):
    """
    requests-based implementation talking plain HTTP to the backend.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.session = session or requests.Session()
        self.session.headers.update(DEFAULT_HEADERS)

    def fetch_patients(self, token: Optional[CancellationToken] = None) -> List[Patient]:
        url = self.base_url + PATIENT_PATH
        if token is not None and token.cancelled:
            logger.debug("Skipping patient fetch, caller already cancelled")
            return []

        logger.info("Fetching patients from %s", url)
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            body = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error("Patient fetch failed: %s", e)
            raise NetworkFailure(
                "Failed to fetch patients",
                code="FETCH_FAILED",
                detail={"reason": str(e)},
            ) from e

        patients = decode_patient_collection(body)
        logger.info("Fetched %d patients", len(patients))
        return patients

    def submit_patient(self, draft: PatientDraft) -> SubmitResult[PatientDraft]:
        return self._post(PATIENT_PATH, to_patient_payload(draft), draft, "patient")

    def submit_prescription(self, draft: PrescriptionDraft) -> SubmitResult[PrescriptionDraft]:
        return self._post(PRESCRIPTION_PATH, to_prescription_payload(draft), draft, "prescription")

    def _post(self, path: str, payload: dict, draft, label: str) -> SubmitResult:
        url = self.base_url + path
        logger.info("Submitting %s to %s", label, url)
        try:
            response = self.session.post(url, json=payload, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            server_body = None
            if getattr(e, "response", None) is not None:
                server_body = _safe_body(e.response)
            logger.error("Error creating %s: %s %s", label, e, server_body or "")
            return SubmitResult(
                draft=draft,
                error=NetworkFailure(
                    f"Failed to create {label}",
                    code="SUBMIT_FAILED",
                    detail={"reason": str(e), "response": server_body},
                ),
            )

        body = _safe_body(response)
        logger.info("%s created successfully", label.capitalize())
        return SubmitResult(draft=draft, response=body)


def _safe_body(response: requests.Response):
    try:
        return response.json()
    except ValueError:
        return response.text or None

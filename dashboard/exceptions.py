# dashboard/exceptions.py
"""
Error taxonomy for the dashboard.

Every error carries:
  - type:        error family ("network_error", "validation_blocked", "not_found")
  - code:        specific code, e.g. FETCH_FAILED
  - message:     human readable text
  - detail:      optional extra payload
  - http_status: status used when the API layer renders the error

Wizard navigation never raises; a blocked step simply does not move.
ValidationBlocked and NetworkFailure from a submit are returned inside a
SubmitResult instead of being raised.
"""
from __future__ import annotations

from typing import Any, Optional


class DashboardError(Exception):
    type = "error"
    code = "UNKNOWN_ERROR"
    http_status = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        detail: Any = None,
        http_status: Optional[int] = None,
    ):
        self.message = message
        if code is not None:
            self.code = code
        if http_status is not None:
            self.http_status = http_status
        self.detail = detail
        super().__init__(message)

    def to_dict(self) -> dict:
        body = {
            "type": self.type,
            "code": self.code,
            "message": self.message,
        }
        if self.detail is not None:
            body["detail"] = self.detail
        return body


class NetworkFailure(DashboardError):
    """A fetch or submit against the external API could not complete."""

    type = "network_error"
    code = "NETWORK_FAILURE"
    http_status = 502


class ValidationBlocked(DashboardError):
    """A submit was attempted while the terminal step is not valid."""

    type = "validation_blocked"
    code = "STEP_INVALID"
    http_status = 409


class NotFound(DashboardError):
    type = "not_found"
    code = "NOT_FOUND"
    http_status = 404


class WizardNotFound(NotFound):
    code = "WIZARD_NOT_FOUND"


class PatientNotFound(NotFound):
    code = "PATIENT_NOT_FOUND"


class AlertNotFound(NotFound):
    code = "ALERT_NOT_FOUND"

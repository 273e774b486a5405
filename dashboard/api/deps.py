# dashboard/api/deps.py
"""Shared dependencies for API routes."""
from functools import lru_cache

from dashboard.alerts import SAMPLE_ALERTS, AlertBoard
from dashboard.config import get_settings
from dashboard.gateway import DataGateway, HttpDataGateway
from dashboard.services import WizardSessionService
from dashboard.wizard.schema import DoctorSession


@lru_cache(maxsize=1)
def get_gateway() -> DataGateway:
    return HttpDataGateway()


@lru_cache(maxsize=1)
def get_wizard_service() -> WizardSessionService:
    return WizardSessionService(get_gateway())


@lru_cache(maxsize=1)
def get_alert_board() -> AlertBoard:
    return AlertBoard(SAMPLE_ALERTS)


def get_doctor_session() -> DoctorSession:
    # TODO: read the doctor from the signed-in user once auth lands
    return DoctorSession(doctor_id=get_settings().doctor_id)

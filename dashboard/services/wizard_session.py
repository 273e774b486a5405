# dashboard/services/wizard_session.py
from __future__ import annotations

import logging
import uuid
from typing import Dict, Tuple

from dashboard.exceptions import WizardNotFound
from dashboard.gateway.client import DataGateway
from dashboard.gateway.types import SubmitResult
from dashboard.wizard.controller import PatientWizard, PrescriptionWizard, WizardController
from dashboard.wizard.schema import DoctorSession

logger = logging.getLogger(__name__)


class WizardSessionService:
    """
    Service that coordinates:
      - creating patient / prescription wizards
      - keeping each running wizard in memory, keyed by an id
      - handing finished drafts to the data gateway, then forgetting them

    Nothing is persisted: restarting the process drops every draft.
    """

    def __init__(self, gateway: DataGateway):
        self.gateway = gateway
        self._wizards: Dict[str, WizardController] = {}

    def start_patient(self) -> Tuple[str, PatientWizard]:
        wizard = PatientWizard()
        return self._register(wizard), wizard

    def start_prescription(
        self,
        session: DoctorSession,
        patient_phone: str = "",
    ) -> Tuple[str, PrescriptionWizard]:
        wizard = PrescriptionWizard(session=session, patient_phone=patient_phone)
        return self._register(wizard), wizard

    def get(self, wizard_id: str) -> WizardController:
        wizard = self._wizards.get(wizard_id)
        if wizard is None:
            raise WizardNotFound(
                "Wizard not found. Start a new form.",
                detail={"wizard_id": wizard_id},
            )
        return wizard

    def submit(self, wizard_id: str) -> SubmitResult:
        wizard = self.get(wizard_id)
        result = wizard.submit(self.gateway)
        if result.ok:
            # A submitted draft can never be edited or sent again
            self._wizards.pop(wizard_id, None)
            logger.info("Wizard %s (%s) submitted", wizard_id, wizard.KIND)
        return result

    def discard(self, wizard_id: str) -> WizardController:
        wizard = self.get(wizard_id)
        del self._wizards[wizard_id]
        logger.debug("Discarded %s wizard %s", wizard.KIND, wizard_id)
        return wizard

    @property
    def active_count(self) -> int:
        return len(self._wizards)

    def _register(self, wizard: WizardController) -> str:
        wizard_id = str(uuid.uuid4())
        self._wizards[wizard_id] = wizard
        logger.debug("Started %s wizard %s", wizard.KIND, wizard_id)
        return wizard_id

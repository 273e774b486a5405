"""
Wizard session service: registry lifetime of running wizards.
"""
import pytest

from dashboard.exceptions import WizardNotFound
from dashboard.services import WizardSessionService
from dashboard.wizard.schema import DoctorSession


def _complete_patient(wizard):
    for field, value in [("name", "Ada Obi"), ("phone", "0812"), ("language", "en")]:
        wizard.set_field(field, value)
    wizard.advance()
    for field, value in [("address", "1 Road"), ("city", "Kano"), ("state", "kano")]:
        wizard.set_field(field, value)
    wizard.advance()


class TestWizardSessionService:
    def test_started_wizards_are_held(self, fake_gateway):
        service = WizardSessionService(fake_gateway)
        patient_id, patient = service.start_patient()
        rx_id, rx = service.start_prescription(DoctorSession(doctor_id="DR1"), "0810")

        assert service.active_count == 2
        assert service.get(patient_id) is patient
        assert service.get(rx_id).draft.doctor_id == "DR1"

    def test_unknown_id(self, fake_gateway):
        with pytest.raises(WizardNotFound):
            WizardSessionService(fake_gateway).get("nope")

    def test_successful_submit_evicts_wizard(self, fake_gateway):
        service = WizardSessionService(fake_gateway)
        wizard_id, wizard = service.start_patient()
        _complete_patient(wizard)

        assert service.submit(wizard_id).ok is True
        assert service.active_count == 0
        with pytest.raises(WizardNotFound):
            service.get(wizard_id)

    def test_failed_submit_keeps_wizard_for_retry(self, failing_gateway):
        service = WizardSessionService(failing_gateway)
        wizard_id, wizard = service.start_patient()
        _complete_patient(wizard)

        assert service.submit(wizard_id).ok is False
        assert service.get(wizard_id) is wizard

    def test_blocked_submit_keeps_wizard(self, fake_gateway):
        service = WizardSessionService(fake_gateway)
        wizard_id, _ = service.start_patient()
        assert service.submit(wizard_id).ok is False
        assert service.active_count == 1

    def test_discard(self, fake_gateway):
        service = WizardSessionService(fake_gateway)
        for _ in range(100):
            service.start_patient()
        ids = list(service._wizards)

        for wizard_id in ids:
            service.discard(wizard_id)

        assert service.active_count == 0
        with pytest.raises(WizardNotFound):
            service.discard(ids[0])

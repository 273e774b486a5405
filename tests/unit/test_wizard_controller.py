"""
Wizard state machine:
- step gating by the validity predicates
- retreat bounds
- list field add/remove
- submit as a separate, explicit action
"""
import pytest
from pydantic import ValidationError

from dashboard.exceptions import NetworkFailure, ValidationBlocked
from dashboard.wizard.controller import PatientWizard, PrescriptionWizard
from dashboard.wizard.schema import DoctorSession
from dashboard.wizard.stages import PatientStep, PrescriptionStep


def _fill_basic(wizard):
    wizard.set_field("name", "Ada Obi")
    wizard.set_field("phone", "08123456789")
    wizard.set_field("language", "ig")


def _fill_location(wizard):
    wizard.set_field("address", "12 Aba Road")
    wizard.set_field("city", "Port Harcourt")
    wizard.set_field("state", "rivers")


# ── Patient wizard navigation ─────────────────────────────────────────────

class TestPatientWizardNavigation:
    def test_starts_at_basic_step(self):
        wizard = PatientWizard()
        assert wizard.step == PatientStep.BASIC
        assert wizard.TOTAL_STEPS == 3
        assert wizard.step_title == "Basic Info"

    def test_advance_blocked_with_empty_name_no_matter_how_often(self):
        wizard = PatientWizard()
        wizard.set_field("phone", "08123456789")
        wizard.set_field("language", "en")
        for _ in range(5):
            assert wizard.advance() == 1
        assert wizard.step == 1
        assert wizard.can_advance is False

    def test_whitespace_name_does_not_unlock_step(self):
        wizard = PatientWizard()
        _fill_basic(wizard)
        wizard.set_field("name", "   ")
        assert wizard.advance() == 1

    def test_advance_through_all_steps(self):
        wizard = PatientWizard()
        _fill_basic(wizard)
        assert wizard.advance() == PatientStep.LOCATION

        assert wizard.advance() == PatientStep.LOCATION  # location still empty
        _fill_location(wizard)
        assert wizard.advance() == PatientStep.MEDICAL
        assert wizard.is_terminal is True

    def test_terminal_step_never_advances(self):
        wizard = PatientWizard()
        _fill_basic(wizard)
        wizard.advance()
        _fill_location(wizard)
        wizard.advance()
        assert wizard.advance() == 3
        assert wizard.can_advance is False
        assert wizard.can_submit is True  # medical info is optional

    def test_retreat_never_goes_below_one(self):
        wizard = PatientWizard()
        assert wizard.retreat() == 1
        _fill_basic(wizard)
        wizard.advance()
        assert wizard.retreat() == 1
        assert wizard.retreat() == 1

    def test_retreat_is_unconditional(self):
        wizard = PatientWizard()
        _fill_basic(wizard)
        wizard.advance()
        wizard.set_field("name", "")
        assert wizard.retreat() == 1
        assert wizard.can_advance is False

    def test_clearing_earlier_field_blocks_advance(self):
        wizard = PatientWizard()
        _fill_basic(wizard)
        wizard.advance()
        _fill_location(wizard)
        wizard.set_field("phone", "  ")

        assert wizard.can_advance is False
        assert wizard.advance() == PatientStep.LOCATION

    def test_clearing_earlier_fields_blocks_submit(self, fake_gateway):
        wizard = PatientWizard()
        _fill_basic(wizard)
        wizard.advance()
        _fill_location(wizard)
        wizard.advance()
        wizard.set_field("name", "")
        wizard.set_field("city", "")

        assert wizard.can_submit is False
        result = wizard.submit(fake_gateway)
        assert isinstance(result.error, ValidationBlocked)
        assert fake_gateway.submitted_patients == []

        wizard.set_field("name", "Ada Obi")
        assert wizard.can_submit is False
        wizard.set_field("city", "Port Harcourt")
        assert wizard.can_submit is True

    def test_explicit_step_is_checked_not_current(self):
        wizard = PatientWizard()
        _fill_basic(wizard)
        wizard.advance()
        assert wizard.is_step_valid() is False
        assert wizard.is_step_valid(PatientStep.BASIC) is True
        # no validator registered for step 0
        assert wizard.is_step_valid(0) is True


# ── List fields ───────────────────────────────────────────────────────────

class TestPatientWizardLists:
    def test_append_trims_value(self):
        wizard = PatientWizard()
        assert wizard.append_list_item("allergies", "  Penicillin ") is True
        assert wizard.draft.allergies == ["Penicillin"]

    def test_append_blank_is_noop(self):
        wizard = PatientWizard()
        wizard.append_list_item("allergies", "Peanuts")
        assert wizard.append_list_item("allergies", "  ") is False
        assert wizard.append_list_item("allergies", "") is False
        assert wizard.draft.allergies == ["Peanuts"]

    def test_append_uses_and_clears_input_buffer(self):
        wizard = PatientWizard()
        wizard.set_list_input("conditions", "Hypertension")
        wizard.append_list_item("conditions")
        assert wizard.draft.conditions == ["Hypertension"]
        assert wizard.state.list_inputs["conditions"] == ""

    def test_blank_buffer_is_kept_on_noop(self):
        wizard = PatientWizard()
        wizard.set_list_input("conditions", "   ")
        assert wizard.append_list_item("conditions") is False
        assert wizard.state.list_inputs["conditions"] == "   "

    def test_remove_keeps_order_of_the_rest(self):
        wizard = PatientWizard()
        for item in ["a", "b", "c", "d"]:
            wizard.append_list_item("medications", item)
        assert wizard.remove_list_item("medications", 1) is True
        assert wizard.draft.medications == ["a", "c", "d"]

    @pytest.mark.parametrize("index", [-1, 3, 99])
    def test_remove_out_of_range_is_noop(self, index):
        wizard = PatientWizard()
        for item in ["a", "b", "c"]:
            wizard.append_list_item("family_history", item)
        assert wizard.remove_list_item("family_history", index) is False
        assert wizard.draft.family_history == ["a", "b", "c"]

    def test_unknown_list_field_raises(self):
        wizard = PatientWizard()
        with pytest.raises(KeyError):
            wizard.append_list_item("name", "x")

    def test_set_field_rejects_list_fields(self):
        wizard = PatientWizard()
        with pytest.raises(TypeError):
            wizard.set_field("allergies", ["x"])

    def test_set_field_rejects_unknown_field(self):
        wizard = PatientWizard()
        with pytest.raises(KeyError):
            wizard.set_field("favourite_colour", "blue")


# ── Prescription wizard ───────────────────────────────────────────────────

class TestPrescriptionWizard:
    def _make(self, phone="08100000000"):
        return PrescriptionWizard(session=DoctorSession(doctor_id="DR777"), patient_phone=phone)

    def _fill_medication(self, wizard):
        wizard.set_field("generic_medication_name", "Ibuprofen")
        wizard.set_field("dosage_amount", "200")
        wizard.set_field("dosage_unit", "mg")
        wizard.set_field("frequency", "twice daily")

    def test_doctor_and_patient_come_from_constructor(self):
        wizard = self._make()
        assert wizard.draft.doctor_id == "DR777"
        assert wizard.draft.patient_phone == "08100000000"
        assert wizard.draft.is_active is True

    def test_doctor_id_cannot_be_overwritten(self):
        wizard = self._make()
        with pytest.raises(TypeError):
            wizard.set_field("doctor_id", "DR000")

    def test_step1_requires_all_medication_fields(self):
        wizard = self._make()
        wizard.set_field("generic_medication_name", "Ibuprofen")
        wizard.set_field("dosage_amount", "200")
        wizard.set_field("dosage_unit", "mg")
        assert wizard.advance() == PrescriptionStep.MEDICATION
        wizard.set_field("frequency", "twice daily")
        assert wizard.advance() == PrescriptionStep.SCHEDULE

    def test_brand_name_is_optional(self):
        wizard = self._make()
        self._fill_medication(wizard)
        assert wizard.draft.brand_medication_name == ""
        assert wizard.can_advance is True

    def test_submit_disabled_until_dates_set(self, fake_gateway):
        wizard = self._make()
        self._fill_medication(wizard)
        wizard.advance()
        assert wizard.can_submit is False

        result = wizard.submit(fake_gateway)
        assert result.ok is False
        assert isinstance(result.error, ValidationBlocked)
        assert fake_gateway.submitted_prescriptions == []

        wizard.set_field("start_date", "2024-01-01")
        wizard.set_field("end_date", "2024-01-15")
        assert wizard.can_submit is True

    def test_submit_hands_draft_to_gateway(self, fake_gateway):
        wizard = self._make()
        self._fill_medication(wizard)
        wizard.advance()
        wizard.set_field("start_date", "2024-01-01")
        wizard.set_field("end_date", "2024-01-15")

        result = wizard.submit(fake_gateway)
        assert result.ok is True
        assert result.response == {"id": "new-prescription"}
        assert fake_gateway.submitted_prescriptions[0].generic_medication_name == "Ibuprofen"
        assert wizard.state.is_submitted is True

    def test_clearing_medication_on_schedule_step_blocks_submit(self, fake_gateway):
        wizard = self._make()
        self._fill_medication(wizard)
        wizard.advance()
        wizard.set_field("start_date", "2024-01-01")
        wizard.set_field("end_date", "2024-01-15")
        wizard.set_field("generic_medication_name", "")

        assert wizard.can_submit is False
        result = wizard.submit(fake_gateway)
        assert isinstance(result.error, ValidationBlocked)
        assert fake_gateway.submitted_prescriptions == []

    def test_non_numeric_dosage_blocks_advance(self):
        wizard = self._make()
        self._fill_medication(wizard)
        wizard.set_field("dosage_amount", "abc")
        assert wizard.advance() == PrescriptionStep.MEDICATION

    def test_is_active_accepts_boolean(self):
        wizard = self._make()
        wizard.set_field("is_active", False)
        assert wizard.draft.is_active is False

    def test_invalid_value_type_rejected(self):
        wizard = self._make()
        with pytest.raises(ValidationError):
            wizard.set_field("dosage_amount", ["200"])


# ── Submission ────────────────────────────────────────────────────────────

class TestPatientSubmit:
    def _ready(self):
        wizard = PatientWizard()
        _fill_basic(wizard)
        wizard.advance()
        _fill_location(wizard)
        wizard.advance()
        return wizard

    def test_submit_before_terminal_step_is_blocked(self, fake_gateway):
        wizard = PatientWizard()
        _fill_basic(wizard)
        result = wizard.submit(fake_gateway)
        assert isinstance(result.error, ValidationBlocked)
        assert wizard.step == 1
        assert fake_gateway.submitted_patients == []

    def test_submit_success(self, fake_gateway):
        wizard = self._ready()
        wizard.append_list_item("allergies", "Penicillin")
        result = wizard.submit(fake_gateway)
        assert result.ok is True
        assert fake_gateway.submitted_patients[0].allergies == ["Penicillin"]

    def test_second_submit_is_blocked(self, fake_gateway):
        wizard = self._ready()
        wizard.submit(fake_gateway)
        result = wizard.submit(fake_gateway)
        assert isinstance(result.error, ValidationBlocked)
        assert len(fake_gateway.submitted_patients) == 1

    def test_network_failure_is_returned_not_raised(self, failing_gateway):
        wizard = self._ready()
        result = wizard.submit(failing_gateway)
        assert result.ok is False
        assert isinstance(result.error, NetworkFailure)
        assert result.draft.name == "Ada Obi"
        # can try again after a failure
        assert wizard.can_submit is True

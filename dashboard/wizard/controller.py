# dashboard/wizard/controller.py
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Dict, Optional, Tuple

from dashboard.exceptions import ValidationBlocked
from dashboard.gateway.types import SubmitResult
from dashboard.wizard.schema import (
    PATIENT_LIST_FIELDS,
    DoctorSession,
    PatientDraft,
    PrescriptionDraft,
)
from dashboard.wizard.stages import STEP_TITLES, PatientStep, PrescriptionStep
from dashboard.wizard.state import Draft, WizardState
from dashboard.wizard import validators

if TYPE_CHECKING:
    from dashboard.gateway.client import DataGateway

logger = logging.getLogger(__name__)


class WizardController:
    """
    WizardController drives a multi-step form.

    - `step` always stays inside [1, TOTAL_STEPS].
    - Moving forward and submitting are gated by the validators of every
      step reached so far, so clearing an earlier field blocks both. A
      blocked advance leaves the state untouched rather than raising.
    - Moving back is always allowed (down to step 1).
    - The last step never advances: it offers submit instead.

    Subclasses provide KIND, TOTAL_STEPS, STEP_VALIDATORS and LIST_FIELDS.
    """

    KIND: str = ""
    TOTAL_STEPS: int = 1
    STEP_VALIDATORS: Dict[int, Callable[[Draft], bool]] = {}
    LIST_FIELDS: Tuple[str, ...] = ()
    READ_ONLY_FIELDS: Tuple[str, ...] = ()

    def __init__(self, state: WizardState):
        self.state = state

    # ------------------------------------------------------------------
    # Read-only view of the current state
    # ------------------------------------------------------------------

    @property
    def step(self) -> int:
        return self.state.step

    @property
    def draft(self) -> Draft:
        return self.state.draft

    @property
    def step_title(self) -> str:
        return STEP_TITLES[self.KIND][self.state.step]

    @property
    def is_terminal(self) -> bool:
        return self.state.step == self.TOTAL_STEPS

    def is_step_valid(self, step: Optional[int] = None) -> bool:
        validator = self.STEP_VALIDATORS.get(self.state.step if step is None else step)
        if validator is None:
            return True
        return validator(self.state.draft)

    def is_complete_so_far(self) -> bool:
        """True when every step up to and including the current one is valid."""
        return all(self.is_step_valid(s) for s in range(1, self.state.step + 1))

    @property
    def can_advance(self) -> bool:
        return not self.is_terminal and self.is_complete_so_far()

    @property
    def can_retreat(self) -> bool:
        return self.state.step > 1

    @property
    def can_submit(self) -> bool:
        return self.is_terminal and self.is_complete_so_far() and not self.state.is_submitted

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def advance(self) -> int:
        if self.can_advance:
            self.state.step += 1
            logger.debug("%s wizard advanced to step %d", self.KIND, self.state.step)
        else:
            logger.debug("%s wizard held at step %d", self.KIND, self.state.step)
        return self.state.step

    def retreat(self) -> int:
        self.state.step = max(1, self.state.step - 1)
        return self.state.step

    # ------------------------------------------------------------------
    # Draft edits
    # ------------------------------------------------------------------

    def set_field(self, key: str, value) -> None:
        """Replace one scalar field of the draft with a new value."""
        if key not in type(self.state.draft).model_fields:
            raise KeyError(f"Unknown field {key!r} for {self.KIND} draft")
        if key in self.LIST_FIELDS:
            raise TypeError(f"{key!r} is a list field; use append_list_item/remove_list_item")
        if key in self.READ_ONLY_FIELDS:
            raise TypeError(f"{key!r} is fixed when the wizard is created")
        setattr(self.state.draft, key, value)

    def set_list_input(self, key: str, text: str) -> None:
        self._check_list_field(key)
        self.state.list_inputs[key] = text

    def append_list_item(self, key: str, value: Optional[str] = None) -> bool:
        """
        Add one item to a list field.

        Uses the pending input text when `value` is not given. Blank input
        is ignored. Returns True when something was appended.
        """
        self._check_list_field(key)
        raw = self.state.list_inputs.get(key, "") if value is None else value
        item = (raw or "").strip()
        if not item:
            return False

        current = getattr(self.state.draft, key)
        setattr(self.state.draft, key, [*current, item])
        self.state.list_inputs[key] = ""
        return True

    def remove_list_item(self, key: str, index: int) -> bool:
        self._check_list_field(key)
        current = getattr(self.state.draft, key)
        if index < 0 or index >= len(current):
            return False
        setattr(self.state.draft, key, [v for i, v in enumerate(current) if i != index])
        return True

    def _check_list_field(self, key: str) -> None:
        if key not in self.LIST_FIELDS:
            raise KeyError(f"{key!r} is not a list field of the {self.KIND} draft")

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def submit(self, gateway: "DataGateway") -> SubmitResult:
        """
        Hand the finished draft to the gateway.

        Never raises for expected failures: an invalid or premature submit
        comes back as ValidationBlocked, a transport problem as
        NetworkFailure, both inside the result.
        """
        if not self.can_submit:
            reason = "already submitted" if self.state.is_submitted else "step is not complete"
            return SubmitResult(
                draft=self.state.draft,
                error=ValidationBlocked(
                    f"Cannot submit {self.KIND}: {reason}",
                    detail={"step": self.state.step, "total_steps": self.TOTAL_STEPS},
                ),
            )

        result = self._send(gateway)
        if result.ok:
            self.state.is_submitted = True
        else:
            logger.warning("%s submission failed: %s", self.KIND, result.error.message)
        return result

    def _send(self, gateway: "DataGateway") -> SubmitResult:
        raise NotImplementedError


class PatientWizard(WizardController):
    """
    Basic info → Location → Medical info (terminal, optional lists).
    """

    KIND = "patient"
    TOTAL_STEPS = len(PatientStep)
    STEP_VALIDATORS = {
        PatientStep.BASIC: validators.is_patient_step1_valid,
        PatientStep.LOCATION: validators.is_patient_step2_valid,
        PatientStep.MEDICAL: validators.is_patient_step3_valid,
    }
    LIST_FIELDS = PATIENT_LIST_FIELDS

    def __init__(self, state: Optional[WizardState] = None):
        super().__init__(state or WizardState(kind=self.KIND, draft=PatientDraft()))

    def _send(self, gateway: "DataGateway") -> SubmitResult:
        return gateway.submit_patient(self.state.draft)


class PrescriptionWizard(WizardController):
    """
    Medication details → Treatment schedule (terminal).

    The prescribing doctor comes from the session the wizard is built with.
    """

    KIND = "prescription"
    TOTAL_STEPS = len(PrescriptionStep)
    STEP_VALIDATORS = {
        PrescriptionStep.MEDICATION: validators.is_prescription_step1_valid,
        PrescriptionStep.SCHEDULE: validators.is_prescription_step2_valid,
    }
    READ_ONLY_FIELDS = ("doctor_id",)

    def __init__(
        self,
        session: DoctorSession,
        patient_phone: str = "",
        state: Optional[WizardState] = None,
    ):
        self.session = session
        if state is None:
            state = WizardState(
                kind=self.KIND,
                draft=PrescriptionDraft(patient_phone=patient_phone, doctor_id=session.doctor_id),
            )
        super().__init__(state)

    def _send(self, gateway: "DataGateway") -> SubmitResult:
        return gateway.submit_prescription(self.state.draft)

# dashboard/wizard/state.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Union

from dashboard.wizard.schema import PatientDraft, PrescriptionDraft


Draft = Union[PatientDraft, PrescriptionDraft]


@dataclass
class WizardState:
    """
    In-memory representation of one wizard run.

    Nothing here is persisted; a new wizard starts from an empty draft.
    """

    kind: str  # "patient" or "prescription"
    draft: Draft
    step: int = 1

    # Pending text typed into each list field's input box, keyed by field name
    list_inputs: Dict[str, str] = field(default_factory=dict)

    is_submitted: bool = False

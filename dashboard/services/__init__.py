# dashboard/services/__init__.py
from .wizard_session import WizardSessionService

__all__ = ["WizardSessionService"]

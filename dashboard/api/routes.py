# dashboard/api/routes.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import ValidationError

from dashboard.alerts import AlertBoard
from dashboard.exceptions import NetworkFailure
from dashboard.gateway import DataGateway
from dashboard.patients import PatientDirectory
from dashboard.services import WizardSessionService
from dashboard.wizard.schema import (
    DOSAGE_UNIT_OPTIONS,
    FREQUENCY_OPTIONS,
    LANGUAGE_OPTIONS,
    STATE_OPTIONS,
    DoctorSession,
)
from .deps import get_alert_board, get_doctor_session, get_gateway, get_wizard_service
from .schemas import (
    AlertListResponse,
    AlertSchema,
    FieldUpdateRequest,
    ListInputRequest,
    ListItemRequest,
    OptionsResponse,
    PatientDetailResponse,
    PatientListResponse,
    StartPrescriptionRequest,
    SubmitResponse,
    WizardResponse,
)
from .views import alert_view, patient_detail, patient_row, stats_view, submit_view, wizard_view

router = APIRouter()


# ----------------------------------------------------------------------
# Wizards
# ----------------------------------------------------------------------

@router.post("/wizards/patient", response_model=WizardResponse)
def start_patient_wizard(
    service: WizardSessionService = Depends(get_wizard_service),
) -> WizardResponse:
    wizard_id, wizard = service.start_patient()
    return wizard_view(wizard_id, wizard)


@router.post("/wizards/prescription", response_model=WizardResponse)
def start_prescription_wizard(
    payload: StartPrescriptionRequest | None = None,
    service: WizardSessionService = Depends(get_wizard_service),
    session: DoctorSession = Depends(get_doctor_session),
) -> WizardResponse:
    phone = payload.patient_phone if payload and payload.patient_phone else ""
    wizard_id, wizard = service.start_prescription(session, patient_phone=phone)
    return wizard_view(wizard_id, wizard)


@router.get("/wizards/{wizard_id}", response_model=WizardResponse)
def get_wizard(
    wizard_id: str,
    service: WizardSessionService = Depends(get_wizard_service),
) -> WizardResponse:
    return wizard_view(wizard_id, service.get(wizard_id))


@router.put("/wizards/{wizard_id}/fields/{field}", response_model=WizardResponse)
def set_wizard_field(
    wizard_id: str,
    field: str,
    payload: FieldUpdateRequest,
    service: WizardSessionService = Depends(get_wizard_service),
) -> WizardResponse:
    wizard = service.get(wizard_id)
    try:
        wizard.set_field(field, payload.value)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown field: {field}")
    except TypeError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=e.errors(include_url=False, include_context=False, include_input=False),
        )
    return wizard_view(wizard_id, wizard)


@router.put("/wizards/{wizard_id}/inputs/{field}", response_model=WizardResponse)
def set_wizard_list_input(
    wizard_id: str,
    field: str,
    payload: ListInputRequest,
    service: WizardSessionService = Depends(get_wizard_service),
) -> WizardResponse:
    wizard = service.get(wizard_id)
    try:
        wizard.set_list_input(field, payload.text)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown list field: {field}")
    return wizard_view(wizard_id, wizard)


@router.post("/wizards/{wizard_id}/lists/{field}", response_model=WizardResponse)
def add_wizard_list_item(
    wizard_id: str,
    field: str,
    payload: ListItemRequest,
    service: WizardSessionService = Depends(get_wizard_service),
) -> WizardResponse:
    wizard = service.get(wizard_id)
    try:
        wizard.append_list_item(field, payload.value)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown list field: {field}")
    return wizard_view(wizard_id, wizard)


@router.delete("/wizards/{wizard_id}/lists/{field}/{index}", response_model=WizardResponse)
def remove_wizard_list_item(
    wizard_id: str,
    field: str,
    index: int,
    service: WizardSessionService = Depends(get_wizard_service),
) -> WizardResponse:
    wizard = service.get(wizard_id)
    try:
        wizard.remove_list_item(field, index)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown list field: {field}")
    return wizard_view(wizard_id, wizard)


@router.post("/wizards/{wizard_id}/advance", response_model=WizardResponse)
def advance_wizard(
    wizard_id: str,
    service: WizardSessionService = Depends(get_wizard_service),
) -> WizardResponse:
    wizard = service.get(wizard_id)
    wizard.advance()
    return wizard_view(wizard_id, wizard)


@router.post("/wizards/{wizard_id}/retreat", response_model=WizardResponse)
def retreat_wizard(
    wizard_id: str,
    service: WizardSessionService = Depends(get_wizard_service),
) -> WizardResponse:
    wizard = service.get(wizard_id)
    wizard.retreat()
    return wizard_view(wizard_id, wizard)


@router.post("/wizards/{wizard_id}/submit", response_model=SubmitResponse)
def submit_wizard(
    wizard_id: str,
    service: WizardSessionService = Depends(get_wizard_service),
) -> SubmitResponse:
    wizard = service.get(wizard_id)
    result = service.submit(wizard_id)
    return submit_view(wizard_id, wizard, result)


@router.delete("/wizards/{wizard_id}", status_code=204)
def discard_wizard(
    wizard_id: str,
    service: WizardSessionService = Depends(get_wizard_service),
) -> Response:
    service.discard(wizard_id)
    return Response(status_code=204)


# ----------------------------------------------------------------------
# Patients
# ----------------------------------------------------------------------

def _load_directory(gateway: DataGateway) -> PatientDirectory:
    directory = PatientDirectory(gateway)
    directory.load()
    if directory.error:
        raise NetworkFailure(directory.error, code="FETCH_FAILED", detail={"retry": True})
    return directory


@router.get("/patients", response_model=PatientListResponse)
def list_patients(
    search: str = "",
    language: str = "all",
    gateway: DataGateway = Depends(get_gateway),
) -> PatientListResponse:
    directory = _load_directory(gateway)
    directory.set_search(search)
    directory.set_language_filter(language)
    return PatientListResponse(
        patients=[patient_row(p) for p in directory.visible],
        stats=stats_view(directory.stats()),
    )


@router.get("/patients/{patient_id}", response_model=PatientDetailResponse)
def get_patient(
    patient_id: str,
    gateway: DataGateway = Depends(get_gateway),
) -> PatientDetailResponse:
    directory = _load_directory(gateway)
    return patient_detail(directory.get(patient_id))


# ----------------------------------------------------------------------
# Alerts
# ----------------------------------------------------------------------

@router.get("/alerts", response_model=AlertListResponse)
def list_alerts(
    search: str = "",
    status: str = "all",
    board: AlertBoard = Depends(get_alert_board),
) -> AlertListResponse:
    return AlertListResponse(
        alerts=[alert_view(a) for a in board.visible(search, status)],
        counts=board.counts(),
    )


@router.post("/alerts/{alert_id}/read", response_model=AlertSchema)
def mark_alert_read(
    alert_id: int,
    board: AlertBoard = Depends(get_alert_board),
) -> AlertSchema:
    return alert_view(board.mark_as_read(alert_id))


@router.post("/alerts/{alert_id}/acknowledge", response_model=AlertSchema)
def acknowledge_alert(
    alert_id: int,
    board: AlertBoard = Depends(get_alert_board),
) -> AlertSchema:
    return alert_view(board.mark_as_acknowledged(alert_id))


# ----------------------------------------------------------------------
# Form options
# ----------------------------------------------------------------------

@router.get("/options", response_model=OptionsResponse)
def form_options() -> OptionsResponse:
    return OptionsResponse(
        frequencies=FREQUENCY_OPTIONS,
        dosage_units=DOSAGE_UNIT_OPTIONS,
        languages=LANGUAGE_OPTIONS,
        states=STATE_OPTIONS,
    )

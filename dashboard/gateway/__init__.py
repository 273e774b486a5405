# dashboard/gateway/__init__.py
from .client import DataGateway, HttpDataGateway
from .decoder import decode_patient_collection, to_patient_payload, to_prescription_payload
from .types import CancellationToken, SubmitResult

__all__ = [
    "DataGateway",
    "HttpDataGateway",
    "decode_patient_collection",
    "to_patient_payload",
    "to_prescription_payload",
    "CancellationToken",
    "SubmitResult",
]

"""
Patient Router - API endpoints for patient record management.

These endpoints are open to anonymous callers.
"""
from fastapi import APIRouter, Depends, Request, Response, status

from ..core.schemas import MessageResponse
from ..exceptions import NotFoundException
from .dependencies import get_patient_service
from .schemas import PatientCreate, PatientUpdate, PatientResponse, PatientEnvelope, PatientListResponse
from .service import PatientService

router = APIRouter()


@router.get("", response_model=PatientListResponse)
async def list_patients(patient_service: PatientService = Depends(get_patient_service)):
    """
    Get every patient record
    """
    patients = patient_service.list_patients()
    return PatientListResponse(
        message="Patient list",
        total_patients=len(patients),
        patients=[PatientResponse.model_validate(patient) for patient in patients],
        note="Send the version you read with PUT to detect concurrent edits"
    )


@router.get("/{patient_id}", response_model=PatientEnvelope)
async def get_patient(
    patient_id: int,
    patient_service: PatientService = Depends(get_patient_service)
):
    """
    Get a patient record by ID
    """
    patient = patient_service.get_patient(patient_id)
    if patient is None:
        raise NotFoundException("Patient not found", extra={"patientId": patient_id})
    return PatientEnvelope(message="Patient details", patient=PatientResponse.model_validate(patient))


@router.post("", response_model=PatientEnvelope, status_code=status.HTTP_201_CREATED)
async def create_patient(
    data: PatientCreate,
    request: Request,
    response: Response,
    patient_service: PatientService = Depends(get_patient_service)
):
    """
    Create a patient record

    The response carries a Location header pointing at the new record.
    """
    patient = patient_service.create_patient(data)
    response.headers["Location"] = request.app.url_path_for("get_patient", patient_id=patient.id)
    return PatientEnvelope(message="Patient created", patient=PatientResponse.model_validate(patient))


@router.put("/{patient_id}", response_model=PatientEnvelope)
async def update_patient(
    patient_id: int,
    data: PatientUpdate,
    patient_service: PatientService = Depends(get_patient_service)
):
    """
    Replace a patient record

    The body id must match the path id (400). A missing record gives 404;
    a stale version gives 409 and the client should re-fetch before retrying.
    """
    patient = patient_service.update_patient(patient_id, data)
    return PatientEnvelope(message="Patient updated", patient=PatientResponse.model_validate(patient))


@router.delete("/{patient_id}", response_model=MessageResponse)
async def delete_patient(
    patient_id: int,
    patient_service: PatientService = Depends(get_patient_service)
):
    """
    Delete a patient record
    """
    if not patient_service.delete_patient(patient_id):
        raise NotFoundException("Patient not found", extra={"patientId": patient_id})
    return MessageResponse(message="Patient deleted")

"""
Doctor Router - API endpoints for the doctor dashboard and doctor directory.

Doctor accounts are created through /api/auth/register with role "Doctor".
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends

from ..auth.dependencies import get_auth_service, get_optional_claims
from ..auth.exceptions import ForbiddenException
from ..auth.models import UserRole
from ..auth.service import AuthService
from ..core.security import TokenClaims
from ..patients.dependencies import get_patient_service
from ..patients.schemas import PatientResponse
from ..patients.service import PatientService
from .schemas import (
    DashboardDoctor,
    DoctorDashboardResponse,
    DashboardLoginHelp,
    DoctorSummary,
    DoctorDirectoryResponse
)

# Set up logging
logger = logging.getLogger(__name__)

router = APIRouter()

DASHBOARD_PERMISSIONS = ["View patients", "Add patients", "Update patients"]


@router.get("/dashboard")
async def doctor_dashboard(
    claims: Optional[TokenClaims] = Depends(get_optional_claims),
    patient_service: PatientService = Depends(get_patient_service)
):
    """
    Doctor dashboard

    Accepts the token as ``?token=`` or as a bearer header. Doctors get the
    patient list; other roles get 403; anonymous callers get login instructions.
    """
    if claims is None:
        return DashboardLoginHelp(
            message="Doctor dashboard - login required",
            instruction="Log in with a Doctor account",
            login_steps={
                "step1": "POST /api/auth/register with role Doctor",
                "step2": "POST /api/auth/login",
                "step3": "Call /api/doctors/dashboard?token=YOUR_TOKEN or send it as a bearer header",
            },
            register_example="/api/auth/register?username=doctor1&email=doctor1@hospital.com&password=Doctor123!&role=Doctor"
        )

    if claims.role != UserRole.DOCTOR:
        logger.warning(f"User {claims.user_id} with role {claims.role.value} denied dashboard access")
        raise ForbiddenException("This dashboard is only available to doctors")

    patients = patient_service.list_patients()
    return DoctorDashboardResponse(
        message=f"Doctor dashboard - Dr. {claims.username}",
        total_patients=len(patients),
        patients=[PatientResponse.model_validate(patient) for patient in patients],
        doctor=DashboardDoctor(
            username=claims.username,
            role=claims.role,
            timestamp=datetime.now(timezone.utc)
        ),
        permissions=DASHBOARD_PERMISSIONS
    )


@router.get("/info", response_model=DoctorDirectoryResponse)
async def doctors_info(auth_service: AuthService = Depends(get_auth_service)):
    """
    List active users with the Doctor role
    """
    doctors = auth_service.list_doctors()
    return DoctorDirectoryResponse(
        message="Doctor directory",
        total_doctors=len(doctors),
        doctors=[DoctorSummary.model_validate(doctor) for doctor in doctors],
        note="Log in as a doctor to access the dashboard"
    )

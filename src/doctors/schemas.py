"""
Doctor Schemas - Pydantic models for the doctor dashboard and directory.
"""
from datetime import datetime
from typing import Dict, List

from ..auth.models import UserRole
from ..core.schemas import CamelModel
from ..patients.schemas import PatientResponse


class DashboardDoctor(CamelModel):
    username: str
    role: UserRole
    timestamp: datetime


class DoctorDashboardResponse(CamelModel):
    """
    Doctor Dashboard Schema - Returned to authenticated doctors

    Fields:
    - message: Greeting for the doctor
    - total_patients: Number of patient records
    - patients: Every patient record
    - doctor: Who is looking at the dashboard, and when
    - permissions: What the dashboard allows
    """
    message: str
    total_patients: int
    patients: List[PatientResponse]
    doctor: DashboardDoctor
    permissions: List[str]


class DashboardLoginHelp(CamelModel):
    """Returned to anonymous callers of the dashboard."""
    message: str
    instruction: str
    login_steps: Dict[str, str]
    register_example: str


class DoctorSummary(CamelModel):
    id: int
    username: str
    email: str
    created_at: datetime


class DoctorDirectoryResponse(CamelModel):
    message: str
    total_doctors: int
    doctors: List[DoctorSummary]
    note: str

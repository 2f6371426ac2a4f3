"""
Patient Schemas - Pydantic models for patient data validation and serialization.
"""
from datetime import date, datetime
from typing import List, Optional

from pydantic import Field

from ..core.schemas import CamelModel


class PatientBase(CamelModel):
    """
    Fields shared by every patient schema

    Fields:
    - first_name / last_name: Patient's name (required)
    - date_of_birth, gender, phone, address, emergency_contact: Demographics (optional)
    - medical_history, allergies: Clinical notes (optional)
    """
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    emergency_contact: Optional[str] = None
    medical_history: Optional[str] = None
    allergies: Optional[str] = None


class PatientCreate(PatientBase):
    """Body of POST /api/patients."""
    pass


class PatientUpdate(PatientBase):
    """
    Body of PUT /api/patients/{id} - replaces the whole record

    Fields:
    - id: Must match the id in the path
    - version: Version the client last read; a stale value is rejected (optional)
    """
    id: int
    version: Optional[int] = Field(None, ge=1)


class PatientResponse(PatientBase):
    id: int
    version: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PatientEnvelope(CamelModel):
    message: str
    patient: PatientResponse


class PatientListResponse(CamelModel):
    message: str
    total_patients: int
    patients: List[PatientResponse]
    note: str

"""
FastAPI dependencies for the patients module.
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from ..database import get_db
from .repository import PatientRepository
from .service import PatientService


def get_patient_service(db: Session = Depends(get_db)) -> PatientService:
    return PatientService(PatientRepository(db))

"""
Patient repository - data access for patient records.
"""
from typing import List, Optional

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from .models import Patient


class PatientRepository:
    """Persists and looks up patients through a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def list(self) -> List[Patient]:
        return self.db.query(Patient).order_by(Patient.id).all()

    def get(self, patient_id: int) -> Optional[Patient]:
        return self.db.query(Patient).filter(Patient.id == patient_id).first()

    def exists(self, patient_id: int) -> bool:
        return self.db.query(self.db.query(Patient).filter(Patient.id == patient_id).exists()).scalar()

    def add(self, patient: Patient) -> Patient:
        self.db.add(patient)
        self.db.commit()
        self.db.refresh(patient)
        return patient

    def save(self, patient: Patient) -> Patient:
        """
        Flush pending changes to a loaded patient.

        Raises:
            StaleDataError: If the row was changed or removed since it was loaded
        """
        try:
            self.db.commit()
        except StaleDataError:
            self.db.rollback()
            raise
        self.db.refresh(patient)
        return patient

    def delete(self, patient: Patient) -> None:
        self.db.delete(patient)
        self.db.commit()

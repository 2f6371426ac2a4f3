"""
Patient Service - Business logic for patient record management.
"""
import logging
from typing import List, Optional

from sqlalchemy.orm.exc import StaleDataError

from ..exceptions import ConcurrencyConflictException, IdMismatchException, NotFoundException
from .models import Patient
from .repository import PatientRepository
from .schemas import PatientCreate, PatientUpdate

# Set up logging
logger = logging.getLogger(__name__)


class PatientService:
    """CRUD over patient records with id and version checks on update."""

    def __init__(self, patients: PatientRepository):
        self.patients = patients

    def list_patients(self) -> List[Patient]:
        return self.patients.list()

    def get_patient(self, patient_id: int) -> Optional[Patient]:
        return self.patients.get(patient_id)

    def create_patient(self, data: PatientCreate) -> Patient:
        """
        Persist a new patient as given; the database assigns the id.
        """
        patient = self.patients.add(Patient(**data.model_dump()))
        logger.info(f"Patient {patient.id} created")
        return patient

    def update_patient(self, patient_id: int, data: PatientUpdate) -> Patient:
        """
        Replace every field of a patient record.

        Optional fields missing from ``data`` are cleared.

        Args:
            patient_id: Id from the request path
            data: Full replacement record; ``data.id`` must equal ``patient_id``

        Returns:
            Patient: The updated record with its new version

        Raises:
            IdMismatchException: If ``data.id`` differs from ``patient_id``
            NotFoundException: If the patient does not exist (or vanished during the write)
            ConcurrencyConflictException: If the record changed since the client
                (or this request) read it; the client should re-fetch and retry
        """
        if data.id != patient_id:
            logger.warning(f"Patient update rejected: body id {data.id} does not match path id {patient_id}")
            raise IdMismatchException(extra={"patientId": patient_id})

        patient = self.patients.get(patient_id)
        if patient is None:
            raise NotFoundException("Patient not found", extra={"patientId": patient_id})

        if data.version is not None and data.version != patient.version:
            logger.warning(
                f"Patient {patient_id} update conflict: client version {data.version}, "
                f"stored version {patient.version}"
            )
            raise ConcurrencyConflictException(
                extra={"patientId": patient_id, "currentVersion": patient.version}
            )

        for field, value in data.model_dump(exclude={"id", "version"}).items():
            setattr(patient, field, value)

        try:
            patient = self.patients.save(patient)
        except StaleDataError:
            if not self.patients.exists(patient_id):
                logger.warning(f"Patient {patient_id} was deleted during update")
                raise NotFoundException("Patient not found", extra={"patientId": patient_id})
            logger.warning(f"Patient {patient_id} was modified concurrently")
            raise ConcurrencyConflictException(extra={"patientId": patient_id})

        logger.info(f"Patient {patient_id} updated to version {patient.version}")
        return patient

    def delete_patient(self, patient_id: int) -> bool:
        """
        Returns:
            bool: True if a record was removed, False if no such id existed
        """
        patient = self.patients.get(patient_id)
        if patient is None:
            return False
        self.patients.delete(patient)
        logger.info(f"Patient {patient_id} deleted")
        return True

"""
Patient Model - Stores patient records managed through the patients API.
"""
from sqlalchemy import Column, Integer, String, Date, DateTime, func

from ..database import Base


class Patient(Base):
    """
    Patient Model - Stores patient demographic and clinical information

    Fields:
    - id: Primary key, assigned by the database
    - first_name / last_name: Patient's name
    - date_of_birth: Patient's date of birth
    - gender: Patient's gender
    - phone: Contact number
    - address: Patient's address
    - emergency_contact: Emergency contact information
    - medical_history: Medical history notes
    - allergies: Known allergies
    - version: Optimistic concurrency marker, bumped on every update
    - created_at: When the record was created
    - updated_at: When the record was last updated
    """
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    date_of_birth = Column(Date, nullable=True)
    gender = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    address = Column(String, nullable=True)
    emergency_contact = Column(String, nullable=True)
    medical_history = Column(String, nullable=True)
    allergies = Column(String, nullable=True)
    version = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self):
        """String representation of the Patient model"""
        return f"<Patient(id={self.id}, name='{self.first_name} {self.last_name}', version={self.version})>"

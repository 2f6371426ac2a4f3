"""
User Model - Stores the accounts that can register, log in and receive tokens.
"""
import enum
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum

from ..database import Base


class UserRole(str, enum.Enum):
    """
    Enumeration for user roles in the hospital system.

    Roles:
    - DOCTOR: Medical practitioners; the only role allowed on the doctor dashboard
    - PATIENT: Default role for self-registered accounts
    """
    DOCTOR = "Doctor"
    PATIENT = "Patient"


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class User(Base):
    """
    User Model - Stores all user information in the system

    Fields:
    - id: Primary key for user identification
    - username: Unique login name
    - email: Unique email address, also accepted as a login identifier
    - password_hash: bcrypt hash (never returned to callers)
    - role: User role (Doctor, Patient)
    - created_at: Timestamp when user registered
    - is_active: Soft-delete marker; inactive users are invisible to every lookup
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(
        Enum(UserRole, name="userrole", values_callable=lambda roles: [role.value for role in roles]),
        nullable=False,
        default=UserRole.PATIENT
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    is_active = Column(Boolean, nullable=False, default=True)

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}', role='{self.role}')>"

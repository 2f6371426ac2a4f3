"""
User Schemas - Pydantic models for registration, login and user listings.
"""
from datetime import datetime
from typing import Dict, List

from pydantic import BaseModel, EmailStr, Field, field_validator

from ..core.schemas import CamelModel
from .models import UserRole


class RegisterRequest(BaseModel):
    """
    Registration Schema - Used when registering a new user

    Fields:
    - username: Unique login name (surrounding whitespace is stripped)
    - email: Unique email address
    - password: Plain text password (hashed before storage)
    - role: Doctor or Patient (defaults to Patient)
    """
    username: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=1)
    role: UserRole = UserRole.PATIENT

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, v):
        """Strip surrounding whitespace so a blank username fails min_length"""
        if isinstance(v, str):
            return v.strip()
        return v


class LoginRequest(BaseModel):
    """
    Login Schema - Used for authentication

    Fields:
    - username: Username or email address
    - password: Plain text password
    """
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AuthResponse(CamelModel):
    """Returned by successful registration and login."""
    token: str
    username: str
    role: UserRole
    expires_at: datetime


class UserSummary(CamelModel):
    """
    User listing entry. Never carries the password hash.
    """
    id: int
    username: str
    email: str
    role: UserRole
    created_at: datetime


class UserListing(CamelModel):
    total: int
    users: List[UserSummary]


class RegisterInfoResponse(CamelModel):
    """Describes the registration endpoint and lists the current users."""
    current_users: UserListing
    available_roles: List[UserRole]
    instructions: Dict[str, str]


class LoginInfoResponse(CamelModel):
    message: str
    instructions: Dict[str, str]


class RegisteredUser(CamelModel):
    username: str
    email: str
    role: UserRole


class NextSteps(CamelModel):
    login_url: str
    patients_url: str
    dashboard_url: str


class QueryRegisterResponse(CamelModel):
    """Body of a registration performed through GET query parameters."""
    success: bool
    message: str
    registration_time: datetime
    user: RegisteredUser
    token: str
    next_steps: NextSteps


class QueryLoginResponse(CamelModel):
    """Body of a login performed through GET query parameters."""
    success: bool
    message: str
    username: str
    role: UserRole
    token: str
    expires_at: datetime

"""
Authentication routes for the hospital system.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ..config import Settings, get_app_settings
from ..core.schemas import MessageResponse
from ..core.security import TokenClaims
from ..exceptions import AppException
from .dependencies import get_auth_service, get_current_claims
from .models import UserRole
from .schemas import (
    RegisterRequest, LoginRequest, AuthResponse, UserSummary, UserListing,
    RegisterInfoResponse, LoginInfoResponse, RegisteredUser, NextSteps,
    QueryRegisterResponse, QueryLoginResponse
)
from .service import AuthService

# Set up logging
logger = logging.getLogger(__name__)

# Create API router
router = APIRouter()

REGISTER_INSTRUCTIONS = {
    "register": "POST /api/auth/register with {username, email, password, role}",
    "roles": "role is optional and defaults to Patient",
    "login": "POST /api/auth/login with {username, password}",
}

LOGIN_INSTRUCTIONS = {
    "login": "POST /api/auth/login with {username, password}",
    "identifier": "username may also be the account's email address",
    "token": "Send the returned token as 'Authorization: Bearer <token>' or as ?token=<token>",
}


def _first_error_message(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    error = errors[0]
    field = ".".join(str(part) for part in error.get("loc", ()))
    return f"{field}: {error.get('msg')}" if field else error.get("msg", "Invalid request")


# ============================================================================
# REGISTRATION
# ============================================================================

@router.get("/register", summary="Describe registration (optionally register from query parameters)")
def register_page(
    username: Optional[str] = Query(None),
    email: Optional[str] = Query(None),
    password: Optional[str] = Query(None),
    role: Optional[str] = Query(None),
    settings: Settings = Depends(get_app_settings),
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Show registration instructions together with the current active users.

    When the application runs with ``legacy_query_auth`` enabled and username,
    email and password are all present, the user is registered from the
    query parameters instead.
    """
    if settings.legacy_query_auth and username and email and password:
        return _register_from_query(auth_service, username, email, password, role)

    users = auth_service.list_users()
    return RegisterInfoResponse(
        current_users=UserListing(total=len(users), users=users),
        available_roles=list(UserRole),
        instructions=REGISTER_INSTRUCTIONS
    )


def _register_from_query(
    auth_service: AuthService,
    username: str,
    email: str,
    password: str,
    role: Optional[str]
):
    provided_data = {"username": username, "email": email, "role": role}
    try:
        data = RegisterRequest(
            username=username,
            email=email,
            password=password,
            role=role or UserRole.PATIENT
        )
        result = auth_service.register(data.username, data.email, data.password, data.role)
    except AppException as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "message": e.detail, "providedData": provided_data}
        )
    except ValidationError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "message": _first_error_message(e), "providedData": provided_data}
        )

    token = result.token
    return QueryRegisterResponse(
        success=True,
        message=f"Registration successful! Welcome {result.username}!",
        registration_time=datetime.now(timezone.utc),
        user=RegisteredUser(username=result.username, email=data.email, role=result.role),
        token=token,
        next_steps=NextSteps(
            login_url=f"/api/auth/login?token={token}",
            patients_url=f"/api/patients?token={token}",
            dashboard_url=f"/api/doctors/dashboard?token={token}"
        )
    )


@router.post("/register", response_model=AuthResponse, summary="Register a new user")
def register(
    data: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Register a new user and return a bearer token valid for 24 hours.

    Raises:
        DuplicateIdentityException: If the username or email is already in use (400)
    """
    return auth_service.register(data.username, data.email, data.password, data.role)


# ============================================================================
# LOGIN
# ============================================================================

@router.get("/login", summary="Describe login (optionally log in from query parameters)")
def login_page(
    username: Optional[str] = Query(None),
    password: Optional[str] = Query(None),
    settings: Settings = Depends(get_app_settings),
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Show login instructions.

    With ``legacy_query_auth`` enabled and both username and password present,
    logs the user in from the query parameters.
    """
    if settings.legacy_query_auth and username and password:
        result = auth_service.login(username, password)
        return QueryLoginResponse(
            success=True,
            message=f"Login successful! Welcome back {result.username}!",
            username=result.username,
            role=result.role,
            token=result.token,
            expires_at=result.expires_at
        )

    return LoginInfoResponse(message="Log in to receive an access token", instructions=LOGIN_INSTRUCTIONS)


@router.post("/login", response_model=AuthResponse, summary="Log in")
def login(
    data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Authenticate with username (or email) and password.

    Raises:
        InvalidCredentialsException: On unknown user or wrong password (401)
    """
    return auth_service.login(data.username, data.password)


# ============================================================================
# USERS
# ============================================================================

@router.get("/users", response_model=List[UserSummary], summary="List active users")
def list_users(auth_service: AuthService = Depends(get_auth_service)):
    return auth_service.list_users()


@router.get("/users/{username}", response_model=UserSummary, summary="Get an active user")
def get_user(username: str, auth_service: AuthService = Depends(get_auth_service)):
    return UserSummary.model_validate(auth_service.get_user_by_username(username))


@router.delete("/users/{user_id}", response_model=MessageResponse, summary="Deactivate your own account")
def deactivate_user(
    user_id: int,
    claims: TokenClaims = Depends(get_current_claims),
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Soft-delete the caller's account. Tokens already issued stay valid until
    they expire, but the account disappears from listings and can no longer
    log in.
    """
    auth_service.deactivate_user(user_id, claims)
    return MessageResponse(message="User deactivated")

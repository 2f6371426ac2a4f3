"""
Authentication service layer for business logic.
"""
import logging
from datetime import datetime
from typing import Callable, List

from sqlalchemy.exc import IntegrityError

from ..core.security import TokenClaims, TokenIssuer, hash_password, verify_password
from ..exceptions import NotFoundException
from .exceptions import DuplicateIdentityException, ForbiddenException, InvalidCredentialsException
from .models import User, UserRole, utcnow
from .repository import UserRepository
from .schemas import AuthResponse, UserSummary

# Set up logging
logger = logging.getLogger(__name__)


class AuthService:
    """
    Registration, login and user lookups.

    The uniqueness check and the insert are separate statements, so two
    concurrent registrations can both pass the check; the table's unique
    constraints reject the loser, which is reported as a duplicate.
    """

    def __init__(self, users: UserRepository, tokens: TokenIssuer, clock: Callable[[], datetime] = utcnow):
        self.users = users
        self.tokens = tokens
        self.clock = clock

    def register(
        self,
        username: str,
        email: str,
        password: str,
        role: UserRole = UserRole.PATIENT
    ) -> AuthResponse:
        """
        Register a new user and issue their first token.

        Args:
            username: Unique login name
            email: Unique email address
            password: Plain text password
            role: Doctor or Patient

        Returns:
            AuthResponse with token, username, role and expiry

        Raises:
            DuplicateIdentityException: If an active user already has the username or email
        """
        logger.info(f"Registration attempt for username: {username}")

        if self.users.identity_taken(username, email):
            logger.warning(f"Registration failed: username {username} or email {email} already in use")
            raise DuplicateIdentityException()

        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password),
            role=role,
            created_at=self.clock(),
            is_active=True
        )
        try:
            user = self.users.add(user)
        except IntegrityError:
            logger.warning(f"Registration failed: unique constraint rejected {username}")
            raise DuplicateIdentityException()

        logger.info(f"User account created: {user.id} ({user.role.value})")
        return self._authenticate(user)

    def login(self, username: str, password: str) -> AuthResponse:
        """
        Authenticate by username or email and issue a fresh token.

        Raises:
            InvalidCredentialsException: If no active user matches or the password is wrong
        """
        user = self.users.get_by_username_or_email(username)

        if not user or not verify_password(password, user.password_hash):
            logger.warning(f"Login failed: Invalid credentials for {username}")
            raise InvalidCredentialsException()

        logger.info(f"Login successful: User {user.id} ({user.username})")
        return self._authenticate(user)

    def list_users(self) -> List[UserSummary]:
        """All active users, without password hashes."""
        return [UserSummary.model_validate(user) for user in self.users.list_active()]

    def list_doctors(self) -> List[User]:
        return self.users.list_active(role=UserRole.DOCTOR)

    def get_user_by_username(self, username: str) -> User:
        """
        Raises:
            NotFoundException: If no active user has this username
        """
        user = self.users.get_by_username(username)
        if not user:
            raise NotFoundException("User not found", extra={"username": username})
        return user

    def deactivate_user(self, user_id: int, claims: TokenClaims) -> None:
        """
        Soft-delete an account. Users may only deactivate themselves.

        Raises:
            ForbiddenException: If the token belongs to a different user
            NotFoundException: If no active user has this id
        """
        if claims.user_id != user_id:
            logger.warning(f"User {claims.user_id} tried to deactivate user {user_id}")
            raise ForbiddenException("You can only deactivate your own account")

        user = self.users.get_by_id(user_id)
        if not user:
            raise NotFoundException("User not found", extra={"userId": user_id})
        self.users.deactivate(user)

    def _authenticate(self, user: User) -> AuthResponse:
        issued = self.tokens.issue(user)
        return AuthResponse(
            token=issued.token,
            username=user.username,
            role=user.role,
            expires_at=issued.expires_at
        )

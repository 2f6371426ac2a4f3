"""
Core security utilities for password hashing and access token handling.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from jose import jwt, JWTError, ExpiredSignatureError
from passlib.context import CryptContext
from pydantic import BaseModel

from ..auth.exceptions import InvalidTokenException
from ..auth.models import User, UserRole, utcnow
from ..config import Settings

# Set up logging
logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        str: Salted bcrypt hash
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against a hash.

    Args:
        plain_password: Plain text password
        hashed_password: Hashed password to compare against

    Returns:
        bool: True if password matches hash
    """
    return pwd_context.verify(plain_password, hashed_password)


class IssuedToken(BaseModel):
    """A freshly signed token and the moment it stops being valid."""
    token: str
    expires_at: datetime


class TokenClaims(BaseModel):
    """Verified contents of an access token."""
    user_id: int
    username: str
    email: str
    role: UserRole
    issued_at: datetime
    expires_at: datetime


class TokenIssuer:
    """
    Signs and verifies access tokens.

    Tokens are HS256 JWTs carrying the user's id (``sub``), username, email and
    role, bound to the configured issuer and audience. They are not tracked
    after issuance and cannot be revoked before they expire.
    """

    def __init__(self, settings: Settings, clock: Callable[[], datetime] = utcnow):
        self._secret_key = settings.jwt_secret_key
        self._algorithm = settings.jwt_algorithm
        self._issuer = settings.jwt_issuer
        self._audience = settings.jwt_audience
        self._lifetime = timedelta(hours=settings.token_lifetime_hours)
        self._clock = clock

    def issue(self, user: User) -> IssuedToken:
        """
        Create a signed token for a user.

        ``exp`` is exactly the token lifetime after ``iat``; both are whole
        seconds since JWT time claims carry no fractions.
        """
        issued_at = self._clock().replace(microsecond=0)
        expires_at = issued_at + self._lifetime
        claims = {
            "sub": str(user.id),
            "username": user.username,
            "email": user.email,
            "role": UserRole(user.role).value,
            "iss": self._issuer,
            "aud": self._audience,
            "iat": issued_at,
            "exp": expires_at,
        }
        token = jwt.encode(claims, self._secret_key, algorithm=self._algorithm)
        return IssuedToken(token=token, expires_at=expires_at)

    def decode(self, token: str) -> TokenClaims:
        """
        Verify signature, issuer, audience and expiry, and return the claims.

        Raises:
            InvalidTokenException: If any check fails or the payload is incomplete
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                audience=self._audience,
                issuer=self._issuer,
                options={
                    "require_exp": True,
                    "require_iat": True,
                    "require_iss": True,
                    "require_aud": True,
                    "require_sub": True,
                }
            )
        except ExpiredSignatureError:
            logger.info("Rejected expired token")
            raise InvalidTokenException("Token has expired")
        except JWTError as e:
            logger.info(f"Rejected invalid token: {str(e)}")
            raise InvalidTokenException()

        try:
            return TokenClaims(
                user_id=int(payload["sub"]),
                username=payload["username"],
                email=payload["email"],
                role=payload["role"],
                issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except (KeyError, TypeError, ValueError):
            raise InvalidTokenException("Invalid token payload")

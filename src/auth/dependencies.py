"""
FastAPI dependencies for authentication.

Tokens are accepted from the ``Authorization: Bearer`` header or from a
``token`` query parameter; both go through the same verification.
"""
from typing import Optional

from fastapi import Depends, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from ..core.security import TokenClaims, TokenIssuer
from ..database import get_db
from .exceptions import InvalidTokenException
from .repository import UserRepository
from .service import AuthService

# Bearer scheme that lets anonymous requests through
bearer_scheme = HTTPBearer(auto_error=False)


def get_token_issuer(request: Request) -> TokenIssuer:
    """The process-wide token issuer created at startup."""
    return request.app.state.token_issuer


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_auth_service(
    users: UserRepository = Depends(get_user_repository),
    tokens: TokenIssuer = Depends(get_token_issuer)
) -> AuthService:
    return AuthService(users, tokens)


def get_optional_claims(
    token: Optional[str] = Query(None, description="Access token, as an alternative to the Authorization header"),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenIssuer = Depends(get_token_issuer)
) -> Optional[TokenClaims]:
    """
    Decode the caller's token if one was sent.

    Returns:
        TokenClaims, or None for anonymous requests

    Raises:
        InvalidTokenException: If a token was sent but fails verification
    """
    raw_token = token or (credentials.credentials if credentials else None)
    if not raw_token:
        return None
    return tokens.decode(raw_token)


def get_current_claims(claims: Optional[TokenClaims] = Depends(get_optional_claims)) -> TokenClaims:
    """
    Require an authenticated caller.

    Raises:
        InvalidTokenException: If no token was sent
    """
    if claims is None:
        raise InvalidTokenException("Not authenticated")
    return claims

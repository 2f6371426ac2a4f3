"""
Authentication-specific exceptions.
"""
from fastapi import status

from ..exceptions import AppException, ErrorKind


class DuplicateIdentityException(AppException):
    """Exception raised when a username or email is already registered."""
    def __init__(self, detail: str = "Username or email is already in use"):
        super().__init__(status.HTTP_400_BAD_REQUEST, detail, ErrorKind.DUPLICATE_IDENTITY)


class InvalidCredentialsException(AppException):
    """
    Exception raised when credentials are invalid.

    Unknown users and wrong passwords share the same message.
    """
    def __init__(self, detail: str = "Invalid username or password"):
        super().__init__(status.HTTP_401_UNAUTHORIZED, detail, ErrorKind.INVALID_CREDENTIALS)


class InvalidTokenException(AppException):
    """Exception raised when a token is malformed, mis-signed or expired."""
    def __init__(self, detail: str = "Invalid token"):
        super().__init__(
            status.HTTP_401_UNAUTHORIZED,
            detail,
            ErrorKind.INVALID_TOKEN,
            headers={"WWW-Authenticate": "Bearer"}
        )


class ForbiddenException(AppException):
    """Exception raised when an authenticated user lacks the required role."""
    def __init__(self, detail: str = "Permission denied"):
        super().__init__(status.HTTP_403_FORBIDDEN, detail, ErrorKind.FORBIDDEN)

"""
Authentication-specific exceptions.

Every exception carries a stable ``error_code`` that clients can branch on;
messages are fixed strings that reveal nothing about internal state.
"""
from typing import Dict, Optional
from fastapi import HTTPException, status

class AuthException(HTTPException):
    """Base class for authentication and authorization exceptions."""
    error_code = "auth_error"

    def __init__(self, status_code: int, detail: str, headers: Optional[Dict[str, str]] = None):
        super().__init__(status_code=status_code, detail=detail, headers=headers)

class InvalidCredentialsException(AuthException):
    """Unknown email or wrong password. The two cases are indistinguishable on purpose."""
    error_code = "invalid_credentials"

    def __init__(self, detail: str = "Invalid email or password"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)

class AccountDeactivatedException(AuthException):
    """Exception raised when a deactivated account tries to log in."""
    error_code = "account_deactivated"

    def __init__(self, detail: str = "Account has been deactivated"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)

class UnauthorizedException(AuthException):
    """Missing, malformed, expired or otherwise unusable bearer token."""
    error_code = "unauthorized"

    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )

class ForbiddenException(AuthException):
    """Valid session whose role is not allowed to run the operation."""
    error_code = "forbidden"

    def __init__(self, detail: str = "Permission denied"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)

class NotFoundException(AuthException):
    """Exception raised when the target user does not exist."""
    error_code = "not_found"

    def __init__(self, detail: str = "User not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)

class IncorrectCurrentPasswordException(AuthException):
    """Exception raised when a password change presents the wrong current password."""
    error_code = "incorrect_current_password"

    def __init__(self, detail: str = "Current password is incorrect"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

class ConflictException(AuthException):
    """Exception raised when an email is already registered."""
    error_code = "conflict"

    def __init__(self, detail: str = "Email already registered"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)

class ServiceUnavailableException(AuthException):
    """Exception raised when the user store does not answer in time."""
    error_code = "service_unavailable"

    def __init__(self, detail: str = "Service temporarily unavailable"):
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail)

"""
Authentication routes for the clinic staff portal.
"""
from fastapi import APIRouter, Depends, status
import logging

from ..core.permissions import Operation
from .dependencies import get_credential_service, require_operation
from .exceptions import ForbiddenException
from .schemas import (
    UserLogin, LoginResponse, PasswordChangeRequest, PasswordChangeResponse, SessionResponse
)
from .service import CredentialService
from .session import AuthSession

# Set up logging
logger = logging.getLogger(__name__)

# Create API router
router = APIRouter()

@router.post("/login", response_model=LoginResponse, summary="User Login")
async def login_route(
    login_data: UserLogin,
    service: CredentialService = Depends(get_credential_service),
):
    """
    Exchange email and password for a bearer token.

    Unknown emails and wrong passwords produce the same error.
    """
    return await service.login(login_data.email, login_data.password)

@router.get("/verify", response_model=SessionResponse, summary="Verify Current Session")
async def verify_session_route(
    session: AuthSession = Depends(require_operation(Operation.VERIFY_SESSION)),
):
    """
    Report the identity behind the presented token.
    """
    return SessionResponse(valid=True, user_id=session.subject_id, role=session.role)

@router.put("/change-password", response_model=PasswordChangeResponse, summary="User Changes Their Own Password")
async def change_password_route(
    password_data: PasswordChangeRequest,
    session: AuthSession = Depends(require_operation(Operation.CHANGE_PASSWORD)),
    service: CredentialService = Depends(get_credential_service),
):
    """
    Change the caller's password.

    The ``user_id`` in the body must be the caller's own id.
    """
    if password_data.user_id != session.subject_id:
        logger.warning(
            f"User {session.subject_id} tried to change the password of user {password_data.user_id}"
        )
        raise ForbiddenException("Users can only change their own password")

    success = await service.change_password(
        password_data.user_id,
        password_data.current_password,
        password_data.new_password,
    )
    return PasswordChangeResponse(success=success)

@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT, summary="User Logout")
async def logout_route(
    session: AuthSession = Depends(require_operation(Operation.LOGOUT)),
    service: CredentialService = Depends(get_credential_service),
):
    """
    Forget the bookkeeping record of the presented token.

    The token itself stays valid until it expires.
    """
    await service.logout(session)

"""
Authentication service layer for business logic.
"""
import logging
import secrets
import time
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict

from ..core.concurrency import run_hashing, run_repository
from ..core.security import PasswordHasher, TokenCodec, TokenPayload
from .exceptions import (
    AccountDeactivatedException,
    IncorrectCurrentPasswordException,
    InvalidCredentialsException,
    NotFoundException,
)
from .models import UserRole
from .repository import UserRepository
from .schemas import LoginResponse, UserSummary
from .session import AuthSession

# Set up logging
logger = logging.getLogger(__name__)

# Closed role-to-dashboard mapping; every role has exactly one entry
DASHBOARD_REDIRECTS: Dict[UserRole, str] = {
    UserRole.ADMIN: "/admin/dashboard",
    UserRole.DOCTOR: "/doctor/dashboard",
    UserRole.RECEPTIONIST: "/receptionist/dashboard",
}

def get_dashboard_redirect(role: UserRole) -> str:
    """
    Get the dashboard path a role lands on after login.

    Args:
        role: User role

    Returns:
        str: Dashboard path

    Raises:
        ValueError: If ``role`` is not a UserRole value
    """
    return DASHBOARD_REDIRECTS[UserRole(role)]


class CredentialService:
    """
    Issues session tokens from credentials and manages password changes.
    """

    def __init__(
        self,
        users: UserRepository,
        hasher: PasswordHasher,
        codec: TokenCodec,
        token_lifetime: timedelta = timedelta(hours=24),
        clock: Callable[[], float] = time.time,
    ):
        self.users = users
        self.hasher = hasher
        self.codec = codec
        self.token_lifetime = token_lifetime
        self.clock = clock

    async def login(self, email: str, password: str) -> LoginResponse:
        """
        Authenticate a user and issue a session token.

        Args:
            email: Email address, matched exactly against the stored value
            password: Plain text password

        Returns:
            LoginResponse with user summary, token and dashboard redirect

        Raises:
            InvalidCredentialsException: Unknown email or wrong password
            AccountDeactivatedException: Account exists but is deactivated
        """
        user = await run_repository(self.users.find_by_email, email)
        if user is None:
            logger.warning(f"Login failed: Invalid credentials for {email}")
            raise InvalidCredentialsException()

        if not user.is_active:
            logger.warning(f"Login failed: Account {user.id} is deactivated")
            raise AccountDeactivatedException()

        if not await run_hashing(self.hasher.verify, password, user.password_hash):
            logger.warning(f"Login failed: Invalid credentials for {email}")
            raise InvalidCredentialsException()

        role = UserRole(user.role)
        expires = int(self.clock() + self.token_lifetime.total_seconds())
        token = self.codec.encode(
            TokenPayload(
                subject_id=user.id,
                exp=expires,
                role=role.value,
                email=user.email,
                jti=secrets.token_urlsafe(8),
            )
        )
        await run_repository(
            self.users.record_session,
            user.id,
            token,
            datetime.fromtimestamp(expires, tz=timezone.utc),
        )

        logger.info(f"Login successful: User {user.id} ({role.value})")
        return LoginResponse(
            user=UserSummary.model_validate(user),
            token=token,
            redirect_path=get_dashboard_redirect(role),
        )

    async def change_password(self, subject_id: int, current_password: str, new_password: str) -> bool:
        """
        Replace a user's password after checking the current one.

        Session bookkeeping rows of the user are cleared in the same
        transaction. Tokens already handed out stay valid until they expire.

        Args:
            subject_id: User whose password changes
            current_password: Password currently on record
            new_password: Replacement password

        Returns:
            bool: True once the new digest is stored

        Raises:
            NotFoundException: No user with that id
            IncorrectCurrentPasswordException: Current password does not match
        """
        user = await run_repository(self.users.find_by_id, subject_id)
        if user is None:
            raise NotFoundException()

        if not await run_hashing(self.hasher.verify, current_password, user.password_hash):
            logger.warning(f"Password change failed for user {subject_id}: incorrect current password")
            raise IncorrectCurrentPasswordException()

        new_digest = await run_hashing(self.hasher.hash, new_password)
        updated = await run_repository(
            self.users.update_password,
            subject_id,
            new_digest,
            datetime.now(timezone.utc),
        )
        if not updated:
            # Row vanished between the read and the write
            raise NotFoundException()

        logger.info(f"User {subject_id} successfully changed their password.")
        return True

    async def logout(self, session: AuthSession) -> None:
        """
        Drop the bookkeeping row of the presented token.

        Args:
            session: Verified session of the caller
        """
        await run_repository(self.users.delete_session, session.raw_token)
        logger.info(f"User {session.subject_id} logged out")

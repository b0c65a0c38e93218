"""
Per-request session derivation from bearer tokens.
"""
from dataclasses import dataclass
from typing import Callable, Optional
import time
import logging

from ..core.security import TokenCodec
from .models import UserRole
from .repository import UserRepository

# Set up logging
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthSession:
    """
    Identity of the caller for the duration of one request.

    Built fresh on every verification and never persisted.
    """
    subject_id: int
    role: UserRole
    raw_token: str


class SessionVerifier:
    """
    Turns a raw bearer token into an ``AuthSession``.

    The role and the active flag are always re-read from the user store, so a
    role change or a deactivation applies to the very next request. The role
    claim inside the token is ignored.
    """

    def __init__(
        self,
        users: UserRepository,
        codec: TokenCodec,
        clock: Callable[[], float] = time.time,
    ):
        self.users = users
        self.codec = codec
        self.clock = clock

    def verify(self, raw_token: Optional[str]) -> Optional[AuthSession]:
        """
        Validate a token against the live user record.

        Args:
            raw_token: Token presented by the client

        Returns:
            AuthSession if the token is valid, unexpired and belongs to an active
            user; None in every other case
        """
        if not raw_token:
            return None

        payload = self.codec.decode(raw_token)
        if payload is None:
            return None

        if payload.exp <= self.clock():
            return None

        user = self.users.find_by_id(payload.subject_id)
        if user is None:
            logger.info(f"Token presented for unknown user {payload.subject_id}")
            return None

        if not user.is_active:
            logger.info(f"Token presented for deactivated user {user.id}")
            return None

        return AuthSession(subject_id=user.id, role=UserRole(user.role), raw_token=raw_token)

    def require_role(self, raw_token: Optional[str], required_role: UserRole) -> bool:
        """
        Check that a token yields a session with exactly the given role.

        Args:
            raw_token: Token presented by the client
            required_role: Role the session must have

        Returns:
            bool: False on any verification failure or role mismatch
        """
        session = self.verify(raw_token)
        if session is None:
            return False
        return session.role == required_role

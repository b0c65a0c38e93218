"""
Access control chain - ordered gates run in front of a protected operation.

The order is fixed: the authenticated gate first, then the role gate for
role-restricted levels. A rejecting gate raises and the operation never runs.
"""
from typing import Callable, Optional, TypeVar
import logging

from ..core.permissions import AccessLevel, Operation, get_access_level
from .exceptions import ForbiddenException, UnauthorizedException
from .session import AuthSession, SessionVerifier

# Set up logging
logger = logging.getLogger(__name__)

T = TypeVar("T")


def authenticated_gate(verifier: SessionVerifier, raw_token: Optional[str]) -> AuthSession:
    """
    Require a verifiable session.

    Raises:
        UnauthorizedException: If the token yields no session
    """
    session = verifier.verify(raw_token)
    if session is None:
        raise UnauthorizedException("Invalid or expired token")
    return session


def role_gate(session: AuthSession, level: AccessLevel) -> AuthSession:
    """
    Require the session role to be one of the level's allowed roles.

    Raises:
        ForbiddenException: If the role is not allowed
    """
    if not level.permits(session.role):
        logger.warning(
            f"Access denied for user {session.subject_id}: role {session.role.value} "
            f"not in {sorted(role.value for role in level.allowed_roles)}"
        )
        raise ForbiddenException()
    return session


class AccessControlChain:
    """
    Composes the gates around protected operations.
    """

    def __init__(self, verifier: SessionVerifier):
        self.verifier = verifier

    def enforce(self, level: AccessLevel, raw_token: Optional[str]) -> Optional[AuthSession]:
        """
        Run the gates required by an access level.

        Args:
            level: Required access level
            raw_token: Token presented by the client, if any

        Returns:
            The verified session, or None for public levels

        Raises:
            UnauthorizedException: No valid session
            ForbiddenException: Session role not allowed
        """
        if level.is_public:
            return None
        session = authenticated_gate(self.verifier, raw_token)
        if level.allowed_roles:
            role_gate(session, level)
        return session

    def run(
        self,
        operation: Operation,
        raw_token: Optional[str],
        handler: Callable[[Optional[AuthSession]], T],
    ) -> T:
        """
        Run a handler behind the gates configured for an operation.

        Args:
            operation: Protected operation being invoked
            raw_token: Token presented by the client, if any
            handler: Called with the derived session once every gate passed

        Returns:
            Whatever the handler returns
        """
        session = self.enforce(get_access_level(operation), raw_token)
        return handler(session)

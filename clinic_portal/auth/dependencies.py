"""
FastAPI dependencies for authentication and authorization.

Routes declare what they need with ``require_operation`` (or
``require_access``); the access control chain runs before
the route body and hands it the verified session.
"""
from datetime import timedelta
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from ..config import settings
from ..core.concurrency import run_repository
from ..core.permissions import AccessLevel, Operation, get_access_level
from ..core.security import PasswordHasher, TokenCodec, password_hasher, token_codec
from ..database import get_db
from .guards import AccessControlChain
from .repository import SqlAlchemyUserRepository, UserRepository
from .service import CredentialService
from .session import AuthSession, SessionVerifier

# Bearer scheme; a missing or malformed header is handled by the chain, not here
bearer_scheme = HTTPBearer(auto_error=False)

def get_password_hasher() -> PasswordHasher:
    return password_hasher

def get_token_codec() -> TokenCodec:
    return token_codec

def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    """
    User repository bound to the request's database session.
    """
    return SqlAlchemyUserRepository(db)

def get_session_verifier(
    users: UserRepository = Depends(get_user_repository),
    codec: TokenCodec = Depends(get_token_codec),
) -> SessionVerifier:
    return SessionVerifier(users, codec)

def get_access_chain(verifier: SessionVerifier = Depends(get_session_verifier)) -> AccessControlChain:
    return AccessControlChain(verifier)

def get_credential_service(
    users: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
    codec: TokenCodec = Depends(get_token_codec),
) -> CredentialService:
    return CredentialService(
        users,
        hasher,
        codec,
        token_lifetime=timedelta(minutes=settings.access_token_expire_minutes),
    )

def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    """
    Extract the raw token from an ``Authorization: Bearer <token>`` header.

    Returns:
        The token, or None when the header is absent or not a bearer header
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        return None
    return credentials.credentials

def require_access(level: AccessLevel):
    """
    Dependency factory that runs the access control chain for a level.

    Args:
        level: Required access level

    Returns:
        Dependency yielding the verified session (None for public levels)
    """
    async def access_checker(
        token: Optional[str] = Depends(get_bearer_token),
        chain: AccessControlChain = Depends(get_access_chain),
    ) -> Optional[AuthSession]:
        # Bounded by the repository timeout
        return await run_repository(chain.enforce, level, token)
    return access_checker

def require_operation(operation: Operation):
    """
    Dependency factory that applies the access level mapped to an operation.

    Args:
        operation: Protected operation

    Returns:
        Dependency yielding the verified session
    """
    return require_access(get_access_level(operation))


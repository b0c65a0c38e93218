"""
User repository - the narrow storage interface used by the auth core.

Components receive a ``UserRepository`` instead of reaching for a database
session, so tests can substitute an in-memory implementation.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol
from sqlalchemy.exc import IntegrityError, OperationalError, TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session
import logging

from .models import User, SessionRecord, UserRole

# Set up logging
logger = logging.getLogger(__name__)


class RepositoryUnavailableError(Exception):
    """The backing store could not be reached or did not answer in time."""


class ConstraintViolationError(Exception):
    """A write would violate a uniqueness constraint (for users, the email)."""


class UserRepository(Protocol):
    def find_by_id(self, user_id: int) -> Optional[User]: ...

    def find_by_email(self, email: str) -> Optional[User]: ...

    def list_users(self) -> List[User]: ...

    def create_user(self, email: str, full_name: str, password_hash: str, role: UserRole) -> User: ...

    def update_user(self, user_id: int, changes: Dict[str, Any], updated_at: datetime) -> Optional[User]: ...

    def update_password(self, user_id: int, password_hash: str, updated_at: datetime) -> bool: ...

    def record_session(self, user_id: int, token: str, expires_at: datetime) -> None: ...

    def delete_session(self, token: str) -> None: ...

    def delete_sessions_for(self, user_id: int) -> int: ...


class SqlAlchemyUserRepository:
    """
    ``UserRepository`` backed by a SQLAlchemy session.

    Connectivity failures are re-raised as ``RepositoryUnavailableError``.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, user_id: int) -> Optional[User]:
        try:
            return self.db.query(User).filter(User.id == user_id).first()
        except (OperationalError, PoolTimeoutError) as e:
            raise RepositoryUnavailableError(str(e)) from e

    def find_by_email(self, email: str) -> Optional[User]:
        try:
            return self.db.query(User).filter(User.email == email).first()
        except (OperationalError, PoolTimeoutError) as e:
            raise RepositoryUnavailableError(str(e)) from e

    def list_users(self) -> List[User]:
        try:
            return self.db.query(User).order_by(User.id).all()
        except (OperationalError, PoolTimeoutError) as e:
            raise RepositoryUnavailableError(str(e)) from e

    def create_user(self, email: str, full_name: str, password_hash: str, role: UserRole) -> User:
        user = User(
            email=email,
            full_name=full_name,
            password_hash=password_hash,
            role=role,
            is_active=True,
        )
        self.db.add(user)
        self._commit()
        self.db.refresh(user)
        return user

    def update_user(self, user_id: int, changes: Dict[str, Any], updated_at: datetime) -> Optional[User]:
        user = self.find_by_id(user_id)
        if user is None:
            return None
        for field, value in changes.items():
            setattr(user, field, value)
        user.updated_at = updated_at
        self._commit()
        self.db.refresh(user)
        return user

    def update_password(self, user_id: int, password_hash: str, updated_at: datetime) -> bool:
        """
        Store a new digest and drop every session record of the user in one transaction.
        """
        user = self.find_by_id(user_id)
        if user is None:
            return False
        user.password_hash = password_hash
        user.updated_at = updated_at
        deleted = (
            self.db.query(SessionRecord)
            .filter(SessionRecord.user_id == user_id)
            .delete(synchronize_session=False)
        )
        self._commit()
        logger.info(f"Password updated for user {user_id}; {deleted} session record(s) cleared")
        return True

    def record_session(self, user_id: int, token: str, expires_at: datetime) -> None:
        self.db.add(SessionRecord(user_id=user_id, token=token, expires_at=expires_at))
        self._commit()

    def delete_session(self, token: str) -> None:
        self.db.query(SessionRecord).filter(SessionRecord.token == token).delete(synchronize_session=False)
        self._commit()

    def delete_sessions_for(self, user_id: int) -> int:
        deleted = (
            self.db.query(SessionRecord)
            .filter(SessionRecord.user_id == user_id)
            .delete(synchronize_session=False)
        )
        self._commit()
        return deleted

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ConstraintViolationError(str(e.orig)) from e
        except (OperationalError, PoolTimeoutError) as e:
            self.db.rollback()
            raise RepositoryUnavailableError(str(e)) from e

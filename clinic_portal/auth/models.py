"""
User Model - Stores clinic staff accounts and session bookkeeping rows.
"""
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum, ForeignKey
import enum
from ..database import Base


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class UserRole(str, enum.Enum):
    """
    Enumeration for staff roles in the clinic portal.

    The set is closed: no other roles exist.

    Roles:
    - ADMIN: Manages staff accounts and reads clinic statistics
    - DOCTOR: Medical practitioner with a consultation schedule
    - RECEPTIONIST: Front desk staff handling patient arrivals
    """
    ADMIN = "admin"
    DOCTOR = "doctor"
    RECEPTIONIST = "receptionist"


class User(Base):
    """
    User Model - Stores all staff accounts in the system

    Fields:
    - id: Primary key for user identification
    - email: Unique email address, lowercased when the account is created
    - full_name: User's complete name
    - password_hash: Salted PBKDF2 digest (never store raw passwords)
    - role: Staff role (admin, doctor, receptionist)
    - is_active: Deactivated accounts cannot log in or use issued tokens
    - created_at: Timestamp when user was created
    - updated_at: Timestamp when user was last updated
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    full_name = Column(String, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(Enum(UserRole, name="user_role"), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"


class SessionRecord(Base):
    """
    Bookkeeping row for an issued session token.

    Rows are written at login and removed at logout or password change.
    Token verification never reads this table.
    """
    __tablename__ = "user_sessions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    token = Column(String, unique=True, nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

"""
Bootstrap utilities for first admin creation.
Creates the first admin user from environment variables when none exists.
"""
import logging
from sqlalchemy.orm import Session

from ..auth.models import User, UserRole
from ..auth.repository import ConstraintViolationError, SqlAlchemyUserRepository
from ..config import settings
from .security import hash_password

logger = logging.getLogger(__name__)

def admin_exists(db: Session) -> bool:
    """
    Check if any admin user exists in the database.

    Args:
        db: Database session

    Returns:
        bool: True if at least one admin exists, False otherwise
    """
    return db.query(User).filter(User.role == UserRole.ADMIN).count() > 0

def create_bootstrap_admin(db: Session) -> bool:
    """
    Create the first admin user from settings.

    Args:
        db: Database session

    Returns:
        bool: True if admin was created, False otherwise
    """
    if not settings.bootstrap_admin_email or not settings.bootstrap_admin_password:
        logger.warning("Bootstrap admin credentials not provided in environment variables")
        return False

    users = SqlAlchemyUserRepository(db)
    email = settings.bootstrap_admin_email.lower()
    if users.find_by_email(email) is not None:
        logger.warning(f"Bootstrap failed: Email {email} already exists")
        return False

    try:
        admin = users.create_user(
            email=email,
            full_name=settings.bootstrap_admin_name,
            password_hash=hash_password(settings.bootstrap_admin_password),
            role=UserRole.ADMIN,
        )
    except ConstraintViolationError as e:
        logger.error(f"Failed to create bootstrap admin: {str(e)}")
        return False

    logger.info(f"Bootstrap admin created successfully: {admin.email} (ID: {admin.id})")
    return True

def bootstrap_admin_if_needed(db: Session) -> None:
    """
    Create the bootstrap admin when the system has no admin yet.
    Called during application startup.

    Args:
        db: Database session
    """
    if admin_exists(db):
        logger.info("Admin account present. Bootstrap not needed.")
        return

    logger.info("No admin users found. Attempting bootstrap admin creation...")
    if not create_bootstrap_admin(db):
        logger.warning("Bootstrap admin creation skipped.")
        logger.info("To create the first admin, set BOOTSTRAP_ADMIN_EMAIL and BOOTSTRAP_ADMIN_PASSWORD in your .env file.")

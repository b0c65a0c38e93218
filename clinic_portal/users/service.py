"""
User management service - staff account administration for admins.
"""
import logging
from datetime import datetime, timezone
from typing import List

from ..auth.exceptions import ConflictException, NotFoundException
from ..auth.models import User
from ..auth.repository import ConstraintViolationError, UserRepository
from ..core.concurrency import run_hashing, run_repository
from ..core.security import PasswordHasher
from .schemas import UserCreate, UserUpdate

# Set up logging
logger = logging.getLogger(__name__)

async def create_user(
    users: UserRepository,
    hasher: PasswordHasher,
    user_data: UserCreate,
    created_by_id: int,
) -> User:
    """
    Create a staff account.

    Args:
        users: User repository
        hasher: Password hasher
        user_data: Validated creation payload
        created_by_id: ID of the admin creating the account

    Returns:
        The created user

    Raises:
        ConflictException: If the email is already registered
    """
    email = user_data.email.lower()
    logger.info(f"User creation attempt for email: {email} by admin {created_by_id}")

    existing_user = await run_repository(users.find_by_email, email)
    if existing_user:
        logger.warning(f"User creation failed: Email {email} already registered")
        raise ConflictException()

    password_hash = await run_hashing(hasher.hash, user_data.password)
    try:
        user = await run_repository(
            users.create_user, email, user_data.full_name, password_hash, user_data.role
        )
    except ConstraintViolationError:
        # Lost a race against a concurrent creation with the same email
        raise ConflictException()

    logger.info(f"User account created: {user.id} ({user.role.value})")
    return user

async def list_users(users: UserRepository) -> List[User]:
    """
    List every staff account ordered by id.
    """
    return await run_repository(users.list_users)

async def update_user(
    users: UserRepository,
    user_id: int,
    user_data: UserUpdate,
    updated_by_id: int,
) -> User:
    """
    Apply a partial update to a staff account.

    A new email is stored lowercased. Deactivating an account also clears
    its session records.

    Args:
        users: User repository
        user_id: ID of the account to update
        user_data: Fields to change
        updated_by_id: ID of the admin performing the update

    Returns:
        The updated user

    Raises:
        NotFoundException: If no user has that id
        ConflictException: If the new email belongs to another account
    """
    changes = user_data.model_dump(exclude_unset=True, exclude_none=True)

    if "email" in changes:
        changes["email"] = changes["email"].lower()
        owner = await run_repository(users.find_by_email, changes["email"])
        if owner is not None and owner.id != user_id:
            logger.warning(f"User update failed: Email {changes['email']} already registered")
            raise ConflictException()

    try:
        user = await run_repository(users.update_user, user_id, changes, datetime.now(timezone.utc))
    except ConstraintViolationError:
        raise ConflictException()
    if user is None:
        raise NotFoundException()

    if changes.get("is_active") is False:
        cleared = await run_repository(users.delete_sessions_for, user_id)
        logger.info(f"User {user_id} deactivated by admin {updated_by_id}; {cleared} session record(s) cleared")

    logger.info(f"User {user_id} updated by admin {updated_by_id}: {sorted(changes)}")
    return user

"""
User Management Router - admin-only endpoints for staff accounts.
"""
from typing import List
from fastapi import APIRouter, Depends, status

from ..auth.dependencies import get_password_hasher, get_user_repository, require_operation
from ..auth.repository import UserRepository
from ..auth.schemas import UserResponse
from ..auth.session import AuthSession
from ..core.permissions import Operation
from ..core.security import PasswordHasher
from .schemas import UserCreate, UserUpdate
from . import service

router = APIRouter()

@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user_route(
    user_data: UserCreate,
    users: UserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
    session: AuthSession = Depends(require_operation(Operation.CREATE_USER)),
):
    """
    Create a staff account (admin only).
    """
    return await service.create_user(users, hasher, user_data, session.subject_id)

@router.get("", response_model=List[UserResponse])
async def list_users_route(
    users: UserRepository = Depends(get_user_repository),
    session: AuthSession = Depends(require_operation(Operation.LIST_USERS)),
):
    """
    List all staff accounts (admin only).
    """
    return await service.list_users(users)

@router.patch("/{user_id}", response_model=UserResponse)
async def update_user_route(
    user_id: int,
    user_data: UserUpdate,
    users: UserRepository = Depends(get_user_repository),
    session: AuthSession = Depends(require_operation(Operation.UPDATE_USER)),
):
    """
    Update a staff account (admin only).
    """
    return await service.update_user(users, user_id, user_data, session.subject_id)

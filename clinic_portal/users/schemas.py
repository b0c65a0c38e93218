"""
User Management Schemas - Pydantic models for admin user administration.
"""
from typing import Optional
from pydantic import BaseModel, EmailStr, Field
from ..auth.models import UserRole
from ..auth.schemas import MIN_PASSWORD_LENGTH

class UserCreate(BaseModel):
    """
    User Creation Schema - Used when an admin creates a staff account

    Fields:
    - email: Email address, stored lowercased
    - password: Initial password (hashed before storage)
    - full_name: User's full name
    - role: One of admin, doctor, receptionist
    """
    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)
    full_name: str = Field(..., min_length=2)
    role: UserRole

class UserUpdate(BaseModel):
    """
    User Update Schema - Partial update; omitted fields keep their value
    """
    email: Optional[EmailStr] = None
    full_name: Optional[str] = Field(None, min_length=2)
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None

"""
Auth Schemas - Pydantic models for login, password change and session payloads.
"""
from typing import Optional
from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from .models import UserRole

MIN_PASSWORD_LENGTH = 6

class UserLogin(BaseModel):
    """
    User Login Schema - Used for authentication

    Fields:
    - email: User's email address, matched exactly against the stored one
    - password: User's plain text password
    """
    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)

class UserSummary(BaseModel):
    """
    Identity returned alongside a freshly issued token.
    """
    id: int
    email: str
    full_name: str
    role: UserRole

    class Config:
        from_attributes = True

class LoginResponse(BaseModel):
    """
    Login Response Schema - Returned after successful authentication

    Fields:
    - user: Basic user information
    - token: Bearer token to present on every later request
    - redirect_path: Dashboard the client should open for this role
    """
    user: UserSummary
    token: str
    redirect_path: str

class PasswordChangeRequest(BaseModel):
    """
    Schema for a password change by an authenticated user.

    Fields:
    - user_id: Account whose password changes; must be the caller's own
    - current_password: User's current password
    - new_password: New desired password
    """
    user_id: int
    current_password: str
    new_password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)

class PasswordChangeResponse(BaseModel):
    success: bool

class SessionResponse(BaseModel):
    """
    Result of verifying the caller's current session.
    """
    valid: bool
    user_id: int
    role: UserRole

class UserResponse(BaseModel):
    """
    User Response Schema - Used when returning user data

    The password digest is never part of the response.
    """
    id: int
    email: str
    full_name: str
    role: UserRole
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        """Configuration for Pydantic model to enable ORM mode"""
        from_attributes = True

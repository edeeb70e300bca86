"""
Authentication and user schemas
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from dearguest.schemas.common import CamelModel


class LoginRequest(BaseModel):
    """Login with email and password"""
    email: str
    password: str


class UserPublic(CamelModel):
    """User profile without credentials"""
    id: UUID
    email: str
    role: str


class UserDetail(UserPublic):
    """User profile as listed for the main admin"""
    created_at: datetime


class LoginResponse(BaseModel):
    """Session token and the logged-in user"""
    token: str
    user: UserPublic


class UserCreate(BaseModel):
    """Create a user (main admin only)"""
    email: str
    password: str
    role: str


class CredentialsUpdate(CamelModel):
    """Change the event owner's login"""
    email: str | None = None
    new_password: str | None = None

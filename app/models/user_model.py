# /app/models/user_model.py

# --- Core Imports ---
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict


class UserRole(str, Enum):
    STUDENT = "student"
    TEACHER = "teacher"
    HEAD_TEACHER = "head_teacher"


class UserCreate(BaseModel):
    """The payload for registering a new account."""
    email: str = Field(..., min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=8)
    name: str = Field(..., min_length=2)
    role: UserRole
    class_id: Optional[str] = Field(default=None, description="Home class; only stored for students.")


class UserUpdate(BaseModel):
    """Partial profile update for the signed-in user."""
    name: Optional[str] = Field(default=None, min_length=2)
    class_id: Optional[str] = Field(default=None)


class User(BaseModel):
    """The public profile of a user, as returned by the API."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str
    role: UserRole
    class_id: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: Optional[datetime] = None


class SessionResponse(BaseModel):
    """The unified user + role view of the current session; `user` is null when signed out."""
    user: Optional[User] = None
    expires_at: Optional[datetime] = None

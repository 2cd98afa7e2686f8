from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from app.core.enums import Role
from app.core.schemas import CamelModel, SessionUser


class LoginRequest(CamelModel):
    email: EmailStr
    password: str


class LoginResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user: SessionUser
    issued_at: datetime


class UserCreate(CamelModel):
    full_name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: Role = Role.STAFF


class UserUpdate(CamelModel):
    """Omit `password` to keep the current one."""

    full_name: str = Field(..., min_length=1)
    email: EmailStr
    password: Optional[str] = Field(None, min_length=6)
    role: Role

from __future__ import annotations

from datetime import datetime

from pydantic import EmailStr
from sqlmodel import Field, SQLModel

from app.core.roles import Role
from app.core.security import MIN_PASSWORD_LENGTH


class UserRead(SQLModel):
    id: int
    email: str
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None
    role: Role
    created_at: datetime
    updated_at: datetime


class UserSummary(SQLModel):
    id: int
    email: str
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None


class UserWithStatsRead(UserRead):
    membership_count: int = 0


class UserCreate(SQLModel):
    email: EmailStr
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    role: Role = Role.DEVELOPER
    profile_image_url: str | None = None


class UserRoleUpdate(SQLModel):
    role: Role


class PasswordUpdate(SQLModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=MIN_PASSWORD_LENGTH)


class LoginRequest(SQLModel):
    email: EmailStr
    password: str = Field(min_length=1)

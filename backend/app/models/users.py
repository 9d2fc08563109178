from __future__ import annotations

from datetime import datetime

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from app.core.roles import Role
from app.core.time import utcnow


def _enum_values(enum_cls: type[Role]) -> list[str]:
    return [member.value for member in enum_cls]


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)
    email: str = Field(index=True, unique=True)
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None
    password_hash: str

    role: Role = Field(
        default=Role.DEVELOPER,
        sa_type=sa.Enum(Role, name="user_role", values_callable=_enum_values),
    )

    created_at: datetime = Field(default_factory=utcnow, sa_type=sa.DateTime())
    updated_at: datetime = Field(default_factory=utcnow, sa_type=sa.DateTime())

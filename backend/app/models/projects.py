from __future__ import annotations

from datetime import datetime
from enum import StrEnum

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from app.core.time import utcnow


class ProjectStatus(StrEnum):
    ACTIVE = "active"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"


class Project(SQLModel, table=True):
    __tablename__ = "projects"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(index=True, max_length=255)
    description: str | None = None
    deadline: datetime | None = Field(default=None, sa_type=sa.DateTime())
    status: ProjectStatus = Field(
        default=ProjectStatus.ACTIVE,
        sa_type=sa.Enum(
            ProjectStatus,
            name="project_status",
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
    )

    # Ownership is an audit fact; it survives deletion of the creating user.
    created_by: int = Field(index=True)
    project_lead_id: int | None = Field(
        default=None, foreign_key="users.id", ondelete="SET NULL", index=True
    )

    created_at: datetime = Field(default_factory=utcnow, sa_type=sa.DateTime())
    updated_at: datetime = Field(default_factory=utcnow, sa_type=sa.DateTime())


class ProjectMembership(SQLModel, table=True):
    __tablename__ = "project_memberships"
    __table_args__ = (
        sa.UniqueConstraint(
            "project_id", "user_id", name="uq_project_memberships_project_id_user_id"
        ),
    )

    id: int | None = Field(default=None, primary_key=True)
    project_id: int = Field(foreign_key="projects.id", ondelete="CASCADE", index=True)
    user_id: int = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    assigned_by: int
    created_at: datetime = Field(default_factory=utcnow, sa_type=sa.DateTime())

from __future__ import annotations

from datetime import datetime

from sqlmodel import Field, SQLModel

from app.models.projects import ProjectStatus
from app.schemas.documents import DocumentRead
from app.schemas.users import UserSummary


class ProjectCreate(SQLModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    deadline: datetime | None = None
    status: ProjectStatus = ProjectStatus.ACTIVE
    project_lead_id: int | None = None


class ProjectUpdate(SQLModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    deadline: datetime | None = None
    status: ProjectStatus | None = None


class ProjectRead(SQLModel):
    id: int
    name: str
    description: str | None = None
    deadline: datetime | None = None
    status: ProjectStatus
    created_by: int
    project_lead_id: int | None = None
    created_at: datetime
    updated_at: datetime


class MembershipCreate(SQLModel):
    user_id: int


class LeadAssignment(SQLModel):
    project_lead_id: int | None


class MembershipRead(SQLModel):
    id: int
    project_id: int
    user_id: int
    assigned_by: int
    created_at: datetime


class MembershipWithUser(MembershipRead):
    user: UserSummary


class ProjectDetailRead(ProjectRead):
    creator: UserSummary | None = None
    project_lead: UserSummary | None = None
    memberships: list[MembershipWithUser] = []
    documents: list[DocumentRead] = []
    membership_count: int = 0
    document_count: int = 0

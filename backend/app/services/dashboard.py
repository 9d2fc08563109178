"""Dashboard counters, scoped to what the actor can see.

Recomputed on every request. Fine while the project count stays small; a
large deployment would want these as aggregate queries.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from sqlmodel import Session, col, func, select

from app.core.config import settings
from app.core.time import utcnow
from app.db import crud
from app.models.documents import Document
from app.models.projects import ProjectMembership, ProjectStatus
from app.models.users import User
from app.services.visibility import visible_projects


@dataclass(frozen=True, slots=True)
class DashboardStats:
    total_projects: int
    active_projects: int
    completed_projects: int
    on_hold_projects: int
    team_members: int
    due_this_week: int
    total_documents: int


def dashboard_stats(session: Session, actor: User, now: datetime | None = None) -> DashboardStats:
    now = now or utcnow()
    window_end = now + timedelta(days=settings.due_soon_days)

    projects = visible_projects(session, actor)
    project_ids = [p.id for p in projects]

    team_members = 0
    total_documents = 0
    if project_ids:
        team_members = crud.exec_one(
            session,
            select(func.count(func.distinct(ProjectMembership.user_id))).where(
                col(ProjectMembership.project_id).in_(project_ids)
            ),
        )
        total_documents = crud.exec_one(
            session,
            select(func.count(col(Document.id))).where(col(Document.project_id).in_(project_ids)),
        )

    active = [p for p in projects if p.status == ProjectStatus.ACTIVE]
    return DashboardStats(
        total_projects=len(projects),
        active_projects=len(active),
        completed_projects=sum(1 for p in projects if p.status == ProjectStatus.COMPLETED),
        on_hold_projects=sum(1 for p in projects if p.status == ProjectStatus.ON_HOLD),
        team_members=team_members,
        due_this_week=sum(
            1 for p in active if p.deadline is not None and now <= p.deadline <= window_end
        ),
        total_documents=total_documents,
    )

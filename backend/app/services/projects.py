"""Project lifecycle: create, read, update, delete."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import delete
from sqlmodel import Session, col, select

from app.core.errors import InsufficientRole
from app.core.logging import get_logger
from app.core.roles import Capability, require_capability
from app.core.time import utcnow
from app.db import crud
from app.models.documents import Document
from app.models.projects import Project, ProjectMembership, ProjectStatus
from app.models.users import User
from app.services import assignment_policy, memberships
from app.services.assignments import get_project_or_raise, get_user_or_raise
from app.services.visibility import can_view_project

logger = get_logger(__name__)

# Fields a project update may touch. Ownership and leadership have their own paths.
UPDATABLE_FIELDS = frozenset({"name", "description", "deadline", "status"})
REQUIRED_FIELDS = frozenset({"name", "status"})


@dataclass(frozen=True, slots=True)
class ProjectDetail:
    project: Project
    created_by: User | None
    project_lead: User | None
    memberships: list[tuple[ProjectMembership, User]]
    documents: list[Document]


def normalize_deadline(value: datetime | None) -> datetime | None:
    """Store deadlines as naive UTC."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def create_project(
    session: Session,
    actor: User,
    *,
    name: str,
    description: str | None = None,
    deadline: datetime | None = None,
    status: ProjectStatus = ProjectStatus.ACTIVE,
    project_lead_id: int | None = None,
) -> Project:
    assignment_policy.authorize_project_create(actor, designates_lead=project_lead_id is not None)
    actor_id = actor.id
    if project_lead_id is not None:
        assignment_policy.ensure_lead_eligible(get_user_or_raise(session, project_lead_id))

    project = Project(
        name=name,
        description=description,
        deadline=normalize_deadline(deadline),
        status=status,
        created_by=actor_id,
        project_lead_id=project_lead_id,
    )
    project = crud.save(session, project)
    logger.info("project.created project_id=%s actor_id=%s", project.id, actor_id)
    return project


def get_project_detail(session: Session, actor: User, project_id: int) -> ProjectDetail:
    project = get_project_or_raise(session, project_id)
    if not can_view_project(session, actor, project):
        raise InsufficientRole("Access denied")

    member_rows = crud.exec_all(
        session,
        select(ProjectMembership, User)
        .join(User, col(User.id) == col(ProjectMembership.user_id))
        .where(ProjectMembership.project_id == project_id)
        .order_by(col(ProjectMembership.id).asc()),
    )
    documents = crud.exec_all(
        session,
        select(Document).where(Document.project_id == project_id).order_by(col(Document.id).asc()),
    )
    return ProjectDetail(
        project=project,
        created_by=crud.get_by_id(session, User, project.created_by),
        project_lead=(
            crud.get_by_id(session, User, project.project_lead_id)
            if project.project_lead_id is not None
            else None
        ),
        memberships=member_rows,
        documents=documents,
    )


def update_project(session: Session, actor: User, project_id: int, updates: dict[str, Any]) -> Project:
    require_capability(actor, Capability.UPDATE_PROJECT)
    actor_id = actor.id
    project = get_project_or_raise(session, project_id)
    assignment_policy.authorize_project_update(actor, project)

    for key, value in updates.items():
        if key not in UPDATABLE_FIELDS:
            continue
        if value is None and key in REQUIRED_FIELDS:
            continue
        if key == "deadline":
            value = normalize_deadline(value)
        setattr(project, key, value)
    project.updated_at = utcnow()
    project = crud.save(session, project)
    logger.info(
        "project.updated project_id=%s actor_id=%s fields=%s",
        project_id,
        actor_id,
        sorted(k for k in updates if k in UPDATABLE_FIELDS),
    )
    return project


def delete_project(session: Session, actor: User, project_id: int) -> None:
    """Delete a project with its memberships and documents in one transaction."""
    assignment_policy.authorize_project_delete(actor)
    actor_id = actor.id
    project = get_project_or_raise(session, project_id)

    memberships.delete_for_project(session, project_id)
    crud.execute(session, delete(Document).where(col(Document.project_id) == project_id))
    session.delete(project)
    crud.commit(session)
    logger.info("project.deleted project_id=%s actor_id=%s", project_id, actor_id)

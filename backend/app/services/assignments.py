"""Membership and lead assignment operations.

Each operation checks the actor's role first, then loads the project and
target, asks ``assignment_policy`` for a decision and applies it in the
caller's session. The actor is always an explicit argument.
"""

from __future__ import annotations

from sqlmodel import Session

from app.core.errors import ProjectNotFound, TargetNotFound
from app.core.logging import get_logger
from app.core.roles import Capability, require_capability
from app.core.time import utcnow
from app.db import crud
from app.models.projects import Project, ProjectMembership
from app.models.users import User
from app.services import assignment_policy, memberships

logger = get_logger(__name__)


def get_project_or_raise(session: Session, project_id: int) -> Project:
    project = crud.get_by_id(session, Project, project_id)
    if project is None:
        raise ProjectNotFound()
    return project


def get_user_or_raise(session: Session, user_id: int) -> User:
    user = crud.get_by_id(session, User, user_id)
    if user is None:
        raise TargetNotFound()
    return user


def assign_member(session: Session, actor: User, project_id: int, user_id: int) -> ProjectMembership:
    require_capability(actor, Capability.ASSIGN_MEMBERS)
    actor_id = actor.id
    project = get_project_or_raise(session, project_id)
    target = get_user_or_raise(session, user_id)

    assignment_policy.authorize_assign(
        actor, project, target, memberships.member_ids(session, project_id)
    )
    membership = memberships.add_membership(session, project_id, user_id, assigned_by=actor_id)
    crud.commit(session)
    session.refresh(membership)
    logger.info(
        "membership.assigned project_id=%s user_id=%s actor_id=%s",
        project_id,
        user_id,
        actor_id,
    )
    return membership


def remove_member(session: Session, actor: User, project_id: int, user_id: int) -> bool:
    """Remove ``user_id`` from the project. Absent memberships are a no-op."""
    require_capability(actor, Capability.REMOVE_MEMBERS)
    actor_id = actor.id
    project = get_project_or_raise(session, project_id)
    get_user_or_raise(session, user_id)

    assignment_policy.authorize_remove(actor, project, memberships.member_ids(session, project_id))
    removed = memberships.remove_membership(session, project_id, user_id)
    crud.commit(session)
    logger.info(
        "membership.removed project_id=%s user_id=%s actor_id=%s removed=%s",
        project_id,
        user_id,
        actor_id,
        removed,
    )
    return removed


def assign_lead(session: Session, actor: User, project_id: int, lead_id: int | None) -> Project:
    require_capability(actor, Capability.ASSIGN_LEAD)
    actor_id = actor.id
    project = get_project_or_raise(session, project_id)
    new_lead = get_user_or_raise(session, lead_id) if lead_id is not None else None

    assignment_policy.authorize_assign_lead(actor, new_lead)
    project.project_lead_id = lead_id
    project.updated_at = utcnow()
    project = crud.save(session, project)
    logger.info(
        "project.lead_assigned project_id=%s lead_id=%s actor_id=%s",
        project_id,
        lead_id,
        actor_id,
    )
    return project

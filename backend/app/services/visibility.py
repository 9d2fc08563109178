"""Which projects an actor may read.

Visibility is broader than mutation rights: project leads read every project
even though they can only change the ones they are related to.
"""

from __future__ import annotations

from sqlmodel import Session, col, select
from sqlmodel.sql.expression import SelectOfScalar

from app.core.roles import Capability, has_capability
from app.db import crud
from app.models.projects import Project, ProjectMembership
from app.models.users import User
from app.services import assignment_policy, memberships


def visible_projects_statement(actor: User) -> SelectOfScalar[Project]:
    statement = select(Project)
    if not has_capability(actor.role, Capability.VIEW_ALL_PROJECTS):
        member_of = select(ProjectMembership.project_id).where(
            ProjectMembership.user_id == actor.id
        )
        statement = statement.where(col(Project.id).in_(member_of))
    return statement.order_by(col(Project.created_at).desc(), col(Project.id).desc())


def visible_projects(session: Session, actor: User) -> list[Project]:
    return crud.exec_all(session, visible_projects_statement(actor))


def can_view_project(session: Session, actor: User, project: Project) -> bool:
    return assignment_policy.can_read_project(actor, memberships.member_ids(session, project.id))

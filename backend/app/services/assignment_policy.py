"""Decision procedures for project membership and project mutation.

Every function here is pure: it receives the acting user, the loaded project
and whatever membership facts it needs, and either returns or raises a
``PolicyError``. Loading rows and writing results is the job of
``app.services.assignments`` and the lifecycle services.

Relation test used throughout: a project lead may act on a project when they
are its designated lead, its creator, or one of its members. The three
relations grant identical rights, so there is no precedence between them.
"""

from __future__ import annotations

from collections.abc import Collection
from typing import assert_never

from app.core.errors import InsufficientRole, InvalidTargetRole, NotRelatedToProject
from app.core.roles import (
    LEAD_ELIGIBLE_ROLES,
    Capability,
    Role,
    has_capability,
    require_capability,
)
from app.models.projects import Project
from app.models.users import User


def is_related(actor: User, project: Project, member_ids: Collection[int]) -> bool:
    return (
        project.project_lead_id == actor.id
        or project.created_by == actor.id
        or actor.id in member_ids
    )


def leads_or_created(actor: User, project: Project) -> bool:
    return project.project_lead_id == actor.id or project.created_by == actor.id


def authorize_assign(
    actor: User, project: Project, target: User, member_ids: Collection[int]
) -> None:
    """Decide whether ``actor`` may add ``target`` as a member of ``project``.

    Admins attach project leads only. Project leads attach developers only,
    and only to projects they are related to. Developers never assign.
    Duplicate detection is left to the store's unique constraint.
    """
    require_capability(actor, Capability.ASSIGN_MEMBERS)
    match actor.role:
        case Role.ADMIN:
            if target.role != Role.PROJECT_LEAD:
                raise InvalidTargetRole("Admins can only assign project leads to projects")
        case Role.PROJECT_LEAD:
            if not is_related(actor, project, member_ids):
                raise NotRelatedToProject(
                    "You can only assign users to projects you lead, created, or belong to"
                )
            if target.role != Role.DEVELOPER:
                raise InvalidTargetRole("Project leads can only assign developers to projects")
        case Role.DEVELOPER:
            raise InsufficientRole("Developers cannot assign users to projects")
        case _:
            assert_never(actor.role)


def authorize_remove(actor: User, project: Project, member_ids: Collection[int]) -> None:
    """Admins remove unconditionally; project leads under the relation test."""
    require_capability(actor, Capability.REMOVE_MEMBERS)
    match actor.role:
        case Role.ADMIN:
            return
        case Role.PROJECT_LEAD:
            if not is_related(actor, project, member_ids):
                raise NotRelatedToProject(
                    "You can only remove users from projects you lead, created, or belong to"
                )
        case Role.DEVELOPER:
            raise InsufficientRole("Developers cannot remove users from projects")
        case _:
            assert_never(actor.role)


def authorize_assign_lead(actor: User, new_lead: User | None) -> None:
    """Only admins designate leads; the lead must be a project lead or an admin.

    ``new_lead=None`` clears the designation and needs no target check.
    """
    require_capability(actor, Capability.ASSIGN_LEAD)
    if new_lead is not None:
        ensure_lead_eligible(new_lead)


def ensure_lead_eligible(user: User) -> None:
    if user.role not in LEAD_ELIGIBLE_ROLES:
        raise InvalidTargetRole("User must be a project lead or admin")


def authorize_project_create(actor: User, *, designates_lead: bool = False) -> None:
    """Designating a lead at creation needs the same right as ASSIGN_LEAD."""
    require_capability(actor, Capability.CREATE_PROJECT)
    if designates_lead:
        require_capability(actor, Capability.ASSIGN_LEAD)


def authorize_project_update(actor: User, project: Project) -> None:
    require_capability(actor, Capability.UPDATE_PROJECT)
    match actor.role:
        case Role.ADMIN:
            return
        case Role.PROJECT_LEAD:
            if not leads_or_created(actor, project):
                raise NotRelatedToProject("You can only update projects you lead or created")
        case Role.DEVELOPER:
            raise InsufficientRole()
        case _:
            assert_never(actor.role)


def authorize_project_delete(actor: User) -> None:
    require_capability(actor, Capability.DELETE_PROJECT)


def authorize_document_management(
    actor: User, project: Project, member_ids: Collection[int]
) -> None:
    """Upload/delete documents: admins anywhere, leads on related projects."""
    require_capability(actor, Capability.MANAGE_DOCUMENTS)
    match actor.role:
        case Role.ADMIN:
            return
        case Role.PROJECT_LEAD:
            if not is_related(actor, project, member_ids):
                raise NotRelatedToProject(
                    "You can only manage documents on projects you lead, created, or belong to"
                )
        case Role.DEVELOPER:
            raise InsufficientRole()
        case _:
            assert_never(actor.role)


def authorize_document_read(actor: User, member_ids: Collection[int]) -> None:
    """Document reads follow project visibility."""
    require_capability(actor, Capability.VIEW_DOCUMENTS)
    if not can_read_project(actor, member_ids):
        raise InsufficientRole("Access denied")


def can_read_project(actor: User, member_ids: Collection[int]) -> bool:
    if has_capability(actor.role, Capability.VIEW_ALL_PROJECTS):
        return True
    return actor.id in member_ids

"""Role and capability definitions.

Roles are a closed set. Each role maps to an explicit frozenset of
capabilities; anything not listed is denied.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from app.core.errors import InsufficientRole

if TYPE_CHECKING:
    from app.models.users import User


class Role(StrEnum):
    ADMIN = "admin"
    PROJECT_LEAD = "project_lead"
    DEVELOPER = "developer"


class Capability(StrEnum):
    MANAGE_USERS = "manage_users"
    CREATE_PROJECT = "create_project"
    UPDATE_PROJECT = "update_project"
    DELETE_PROJECT = "delete_project"
    ASSIGN_MEMBERS = "assign_members"
    REMOVE_MEMBERS = "remove_members"
    ASSIGN_LEAD = "assign_lead"
    MANAGE_DOCUMENTS = "manage_documents"
    VIEW_ALL_PROJECTS = "view_all_projects"
    VIEW_DOCUMENTS = "view_documents"


ROLE_CAPABILITIES: dict[Role, frozenset[Capability]] = {
    Role.ADMIN: frozenset(
        {
            Capability.MANAGE_USERS,
            Capability.CREATE_PROJECT,
            Capability.UPDATE_PROJECT,
            Capability.DELETE_PROJECT,
            Capability.ASSIGN_MEMBERS,
            Capability.REMOVE_MEMBERS,
            Capability.ASSIGN_LEAD,
            Capability.MANAGE_DOCUMENTS,
            Capability.VIEW_ALL_PROJECTS,
            Capability.VIEW_DOCUMENTS,
        }
    ),
    # Project-scoped powers; the relation to the project is checked by the policy.
    Role.PROJECT_LEAD: frozenset(
        {
            Capability.CREATE_PROJECT,
            Capability.UPDATE_PROJECT,
            Capability.ASSIGN_MEMBERS,
            Capability.REMOVE_MEMBERS,
            Capability.MANAGE_DOCUMENTS,
            Capability.VIEW_ALL_PROJECTS,
            Capability.VIEW_DOCUMENTS,
        }
    ),
    Role.DEVELOPER: frozenset({Capability.VIEW_DOCUMENTS}),
}

# Roles allowed in Project.project_lead_id.
LEAD_ELIGIBLE_ROLES = frozenset({Role.PROJECT_LEAD, Role.ADMIN})

# Roles an admin may hand out through user management.
MANAGED_ROLES = frozenset({Role.PROJECT_LEAD, Role.DEVELOPER})


def has_capability(role: Role, capability: Capability) -> bool:
    return capability in ROLE_CAPABILITIES.get(role, frozenset())


def require_capability(actor: User, capability: Capability) -> None:
    """Raise ``InsufficientRole`` unless the actor's role grants ``capability``."""
    if not has_capability(actor.role, capability):
        raise InsufficientRole(f"Role '{actor.role}' may not {capability.value.replace('_', ' ')}")

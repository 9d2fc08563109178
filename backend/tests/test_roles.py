# ruff: noqa

import pytest

from app.core.errors import InsufficientRole
from app.core.roles import (
    LEAD_ELIGIBLE_ROLES,
    ROLE_CAPABILITIES,
    Capability,
    Role,
    has_capability,
    require_capability,
)
from app.models.users import User


def test_every_role_has_a_capability_set():
    assert set(ROLE_CAPABILITIES) == set(Role)


def test_developer_is_read_only():
    assert ROLE_CAPABILITIES[Role.DEVELOPER] == frozenset({Capability.VIEW_DOCUMENTS})


def test_admin_and_lead_powers_are_not_nested():
    admin = ROLE_CAPABILITIES[Role.ADMIN]
    lead = ROLE_CAPABILITIES[Role.PROJECT_LEAD]
    assert Capability.ASSIGN_LEAD in admin and Capability.ASSIGN_LEAD not in lead
    assert Capability.DELETE_PROJECT in admin and Capability.DELETE_PROJECT not in lead
    assert Capability.MANAGE_USERS not in lead


@pytest.mark.parametrize("role", list(Role))
def test_view_all_projects_only_for_non_developers(role):
    assert has_capability(role, Capability.VIEW_ALL_PROJECTS) is (role != Role.DEVELOPER)


def test_require_capability_denies_by_default():
    dev = User(id=1, email="d@example.com", password_hash="x", role=Role.DEVELOPER)
    with pytest.raises(InsufficientRole):
        require_capability(dev, Capability.ASSIGN_MEMBERS)


def test_lead_eligible_roles():
    assert LEAD_ELIGIBLE_ROLES == {Role.PROJECT_LEAD, Role.ADMIN}

# ruff: noqa

import pytest

from app.core.errors import (
    EmailAlreadyRegistered,
    InsufficientRole,
    InvalidCredentials,
    InvalidPassword,
    InvalidTargetRole,
    TargetNotFound,
)
from app.core.roles import Role
from app.db.bootstrap import ensure_admin
from app.models.projects import Project
from app.services import assignments
from app.services import users as users_service


def test_authenticate(session, make_user):
    user = make_user(Role.DEVELOPER, email="Dev@Example.com")
    assert users_service.authenticate(session, "dev@example.com", "secret123").id == user.id
    with pytest.raises(InvalidCredentials):
        users_service.authenticate(session, "dev@example.com", "wrong")
    with pytest.raises(InvalidCredentials):
        users_service.authenticate(session, "nobody@example.com", "secret123")


def test_duplicate_email_is_rejected(session, make_user):
    make_user(Role.DEVELOPER, email="dup@example.com")
    with pytest.raises(EmailAlreadyRegistered):
        make_user(Role.PROJECT_LEAD, email="dup@example.com")


def test_admin_cannot_create_admins(session, make_user):
    admin = make_user(Role.ADMIN)
    with pytest.raises(InvalidTargetRole):
        users_service.create_managed_user(
            session, admin, email="new@example.com", password="secret123", role=Role.ADMIN
        )


def test_only_admins_manage_users(session, make_user):
    lead = make_user(Role.PROJECT_LEAD)
    dev = make_user(Role.DEVELOPER)
    with pytest.raises(InsufficientRole):
        users_service.list_users_with_counts(session, lead)
    with pytest.raises(InsufficientRole):
        users_service.delete_user(session, lead, dev.id)
    with pytest.raises(InsufficientRole):
        users_service.change_role(session, dev, dev.id, Role.PROJECT_LEAD)


def test_list_users_includes_membership_counts(session, make_user, make_project):
    admin = make_user(Role.ADMIN)
    lead = make_user(Role.PROJECT_LEAD)
    first = make_project(admin, name="One")
    second = make_project(admin, name="Two")
    assignments.assign_member(session, admin, first.id, lead.id)
    assignments.assign_member(session, admin, second.id, lead.id)

    counts = {row.user.id: row.membership_count for row in users_service.list_users_with_counts(session, admin)}
    assert counts == {admin.id: 0, lead.id: 2}


def test_demoting_a_lead_clears_leadership(session, make_user, make_project):
    admin = make_user(Role.ADMIN)
    lead = make_user(Role.PROJECT_LEAD)
    project = make_project(admin, lead=lead)
    project_id = project.id

    user = users_service.change_role(session, admin, lead.id, Role.DEVELOPER)
    session.expire_all()

    assert user.role == Role.DEVELOPER
    assert session.get(Project, project_id).project_lead_id is None


def test_change_role_validation(session, make_user):
    admin = make_user(Role.ADMIN)
    dev = make_user(Role.DEVELOPER)
    with pytest.raises(InvalidTargetRole):
        users_service.change_role(session, admin, dev.id, Role.ADMIN)
    with pytest.raises(TargetNotFound):
        users_service.change_role(session, admin, 999, Role.PROJECT_LEAD)


def test_change_password(session, make_user):
    dev = make_user(Role.DEVELOPER)
    with pytest.raises(InvalidPassword):
        users_service.change_password(session, dev, "wrong", "newsecret")

    users_service.change_password(session, dev, "secret123", "newsecret")
    assert users_service.authenticate(session, dev.email, "newsecret").id == dev.id


def test_bootstrap_admin_is_idempotent(session):
    first = ensure_admin(session)
    second = ensure_admin(session)
    assert first.id == second.id
    assert first.role == Role.ADMIN

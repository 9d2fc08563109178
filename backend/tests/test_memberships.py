# ruff: noqa

import threading

import pytest
from sqlmodel import Session, SQLModel, create_engine, select

from app.core.errors import (
    DuplicateMembership,
    InsufficientRole,
    InvalidTargetRole,
    ProjectNotFound,
    TargetNotFound,
)
from app.core.roles import Role
from app.db.session import enable_sqlite_foreign_keys
from app.models.documents import Document
from app.models.projects import Project, ProjectMembership
from app.models.users import User
from app.services import assignments, memberships
from app.services import documents as documents_service
from app.services import projects as projects_service
from app.services import users as users_service


def _memberships(session: Session) -> list[tuple[int, int]]:
    rows = session.exec(select(ProjectMembership)).all()
    return sorted((m.project_id, m.user_id) for m in rows)


def test_add_and_list_memberships(session, make_user, make_project):
    admin = make_user(Role.ADMIN)
    dev = make_user(Role.DEVELOPER)
    project = make_project(admin)

    membership = memberships.add_membership(session, project.id, dev.id, assigned_by=admin.id)
    session.commit()

    assert membership.assigned_by == admin.id
    assert [m.user_id for m in memberships.list_by_project(session, project.id)] == [dev.id]
    assert [m.project_id for m in memberships.list_by_user(session, dev.id)] == [project.id]
    assert memberships.member_ids(session, project.id) == {dev.id}


def test_duplicate_membership_is_rejected_and_store_unchanged(session, make_user, make_project):
    admin = make_user(Role.ADMIN)
    dev = make_user(Role.DEVELOPER)
    project = make_project(admin)
    memberships.add_membership(session, project.id, dev.id, assigned_by=admin.id)
    session.commit()

    with pytest.raises(DuplicateMembership):
        memberships.add_membership(session, project.id, dev.id, assigned_by=admin.id)

    assert _memberships(session) == [(project.id, dev.id)]


def test_losing_concurrent_insert_maps_to_duplicate(tmp_path):
    """Both transactions are open before either commits; the constraint picks one."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'race.db'}",
        connect_args={"check_same_thread": False, "timeout": 10},
    )
    enable_sqlite_foreign_keys(engine)
    SQLModel.metadata.create_all(engine)

    with Session(engine) as setup:
        user = users_service.create_user(setup, email="dev@example.com", password="secret123")
        project = Project(name="P", created_by=user.id)
        setup.add(project)
        setup.commit()
        project_id, user_id = project.id, user.id

    outcome = {}

    def contender() -> None:
        with Session(engine) as second:
            try:
                memberships.add_membership(second, project_id, user_id, assigned_by=user_id)
                second.commit()
                outcome["second"] = "inserted"
            except DuplicateMembership:
                outcome["second"] = "duplicate"

    with Session(engine) as first:
        memberships.add_membership(first, project_id, user_id, assigned_by=user_id)
        # The first insert is flushed but uncommitted; the contender blocks on it.
        thread = threading.Thread(target=contender)
        thread.start()
        thread.join(timeout=0.5)
        first.commit()
    thread.join(timeout=10)

    assert not thread.is_alive()
    assert outcome == {"second": "duplicate"}
    with Session(engine) as check:
        assert len(memberships.list_by_project(check, project_id)) == 1
    engine.dispose()


def test_insert_for_missing_user_is_not_reported_as_duplicate(session, make_user, make_project):
    admin = make_user(Role.ADMIN)
    project = make_project(admin)

    with pytest.raises(TargetNotFound):
        memberships.add_membership(session, project.id, 999, assigned_by=admin.id)
    assert _memberships(session) == []


def test_insert_for_missing_project_is_not_reported_as_duplicate(session, make_user):
    dev = make_user(Role.DEVELOPER)

    with pytest.raises(ProjectNotFound):
        memberships.add_membership(session, 999, dev.id, assigned_by=dev.id)
    assert _memberships(session) == []


def test_remove_missing_membership_is_noop(session, make_user, make_project):
    admin = make_user(Role.ADMIN)
    dev = make_user(Role.DEVELOPER)
    project = make_project(admin)

    assert memberships.remove_membership(session, project.id, dev.id) is False

    memberships.add_membership(session, project.id, dev.id, assigned_by=admin.id)
    assert memberships.remove_membership(session, project.id, dev.id) is True
    session.commit()
    assert _memberships(session) == []


def test_assign_member_reports_missing_project_and_user(session, make_user, make_project):
    admin = make_user(Role.ADMIN)
    lead = make_user(Role.PROJECT_LEAD)
    project = make_project(admin)

    with pytest.raises(ProjectNotFound):
        assignments.assign_member(session, admin, 999, lead.id)
    with pytest.raises(TargetNotFound):
        assignments.assign_member(session, admin, project.id, 999)


def test_assign_lead_sets_and_clears(session, make_user, make_project):
    admin = make_user(Role.ADMIN)
    lead = make_user(Role.PROJECT_LEAD)
    project = make_project(admin)

    updated = assignments.assign_lead(session, admin, project.id, lead.id)
    assert updated.project_lead_id == lead.id

    cleared = assignments.assign_lead(session, admin, project.id, None)
    assert cleared.project_lead_id is None


def test_reference_scenario(session, make_user, make_project):
    admin = make_user(Role.ADMIN)
    lead_one = make_user(Role.PROJECT_LEAD)
    lead_two = make_user(Role.PROJECT_LEAD)
    dev = make_user(Role.DEVELOPER)
    project = make_project(admin, lead=lead_one)
    project_id = project.id

    assignments.assign_member(session, admin, project_id, lead_two.id)
    with pytest.raises(InvalidTargetRole):
        assignments.assign_member(session, admin, project_id, dev.id)

    assignments.assign_member(session, lead_one, project_id, dev.id)
    with pytest.raises(DuplicateMembership):
        assignments.assign_member(session, lead_one, project_id, dev.id)

    with pytest.raises(InsufficientRole):
        assignments.remove_member(session, dev, project_id, dev.id)

    assert _memberships(session) == sorted([(project_id, lead_two.id), (project_id, dev.id)])

    projects_service.delete_project(session, admin, project_id)
    assert _memberships(session) == []


def test_delete_project_cascades_memberships_and_documents(session, make_user, make_project):
    admin = make_user(Role.ADMIN)
    lead = make_user(Role.PROJECT_LEAD)
    keep = make_project(admin, name="Keep")
    doomed = make_project(admin, name="Doomed")
    keep_id, doomed_id = keep.id, doomed.id

    assignments.assign_member(session, admin, keep_id, lead.id)
    assignments.assign_member(session, admin, doomed_id, lead.id)
    for project_id in (keep_id, doomed_id):
        documents_service.register_document(
            session,
            admin,
            project_id,
            file_name=f"{project_id}.pdf",
            original_name="brief.pdf",
            file_size=10,
            mime_type="application/pdf",
        )

    projects_service.delete_project(session, admin, doomed_id)

    assert _memberships(session) == [(keep_id, lead.id)]
    assert [d.project_id for d in session.exec(select(Document)).all()] == [keep_id]
    assert session.get(Project, doomed_id) is None


def test_delete_user_cascades_memberships_and_leadership(session, make_user, make_project):
    admin = make_user(Role.ADMIN)
    lead = make_user(Role.PROJECT_LEAD)
    dev = make_user(Role.DEVELOPER)
    project = make_project(admin, lead=lead)
    project_id, lead_id = project.id, lead.id

    assignments.assign_member(session, lead, project_id, dev.id)
    assignments.assign_member(session, admin, project_id, lead_id)

    users_service.delete_user(session, admin, lead_id)
    session.expire_all()

    assert _memberships(session) == [(project_id, dev.id)]
    assert session.get(Project, project_id).project_lead_id is None
    assert session.get(User, lead_id) is None

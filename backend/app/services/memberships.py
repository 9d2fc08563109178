"""Project membership storage.

Uniqueness of ``(project_id, user_id)`` is owned by the database constraint
``uq_project_memberships_project_id_user_id``. ``add_membership`` never reads
before it writes; a losing concurrent insert surfaces as ``IntegrityError`` and
is mapped to ``DuplicateMembership``.
"""

from __future__ import annotations

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, col, select

from app.core.errors import (
    DuplicateMembership,
    ProjectNotFound,
    StorageUnavailable,
    TargetNotFound,
)
from app.core.logging import get_logger
from app.db import crud
from app.models.projects import Project, ProjectMembership
from app.models.users import User

logger = get_logger(__name__)


def add_membership(
    session: Session, project_id: int, user_id: int, assigned_by: int
) -> ProjectMembership:
    """Insert a membership inside the caller's transaction.

    The row is flushed, not committed. On any integrity failure the transaction
    is rolled back so nothing from this operation persists. A parent row that
    vanished mid-flight is reported as missing rather than as a duplicate.
    """
    membership = ProjectMembership(project_id=project_id, user_id=user_id, assigned_by=assigned_by)
    session.add(membership)
    try:
        session.flush()
    except IntegrityError as exc:
        session.rollback()
        if crud.get_by_id(session, Project, project_id) is None:
            raise ProjectNotFound() from exc
        if crud.get_by_id(session, User, user_id) is None:
            raise TargetNotFound() from exc
        logger.info(
            "membership.duplicate project_id=%s user_id=%s actor_id=%s",
            project_id,
            user_id,
            assigned_by,
        )
        raise DuplicateMembership() from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise StorageUnavailable(str(exc)) from exc
    return membership


def remove_membership(session: Session, project_id: int, user_id: int) -> bool:
    """Delete the membership if present. Returns whether a row was removed."""
    result = crud.execute(
        session,
        delete(ProjectMembership).where(
            col(ProjectMembership.project_id) == project_id,
            col(ProjectMembership.user_id) == user_id,
        ),
    )
    return bool(result.rowcount)


def list_by_project(session: Session, project_id: int) -> list[ProjectMembership]:
    statement = (
        select(ProjectMembership)
        .where(ProjectMembership.project_id == project_id)
        .order_by(col(ProjectMembership.id).asc())
    )
    return crud.exec_all(session, statement)


def list_by_user(session: Session, user_id: int) -> list[ProjectMembership]:
    statement = (
        select(ProjectMembership)
        .where(ProjectMembership.user_id == user_id)
        .order_by(col(ProjectMembership.id).asc())
    )
    return crud.exec_all(session, statement)


def member_ids(session: Session, project_id: int) -> set[int]:
    statement = select(ProjectMembership.user_id).where(ProjectMembership.project_id == project_id)
    return set(crud.exec_all(session, statement))


def delete_for_project(session: Session, project_id: int) -> None:
    crud.execute(session, delete(ProjectMembership).where(col(ProjectMembership.project_id) == project_id))


def delete_for_user(session: Session, user_id: int) -> None:
    crud.execute(session, delete(ProjectMembership).where(col(ProjectMembership.user_id) == user_id))

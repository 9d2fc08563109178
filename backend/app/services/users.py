"""User management: creation, role changes, deletion, passwords."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, col, func, select

from app.core.errors import (
    EmailAlreadyRegistered,
    InvalidCredentials,
    InvalidPassword,
    InvalidTargetRole,
    StorageUnavailable,
    TargetNotFound,
)
from app.core.logging import get_logger
from app.core.roles import MANAGED_ROLES, LEAD_ELIGIBLE_ROLES, Capability, Role, require_capability
from app.core.security import hash_password, verify_password
from app.core.time import utcnow
from app.db import crud
from app.models.projects import Project, ProjectMembership
from app.models.users import User
from app.services import memberships

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class UserWithCount:
    user: User
    membership_count: int


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user_by_email(session: Session, email: str) -> User | None:
    return crud.exec_first(session, select(User).where(User.email == normalize_email(email)))


def authenticate(session: Session, email: str, password: str) -> User:
    user = get_user_by_email(session, email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("auth.login_failed email=%s", normalize_email(email))
        raise InvalidCredentials()
    return user


def create_user(
    session: Session,
    *,
    email: str,
    password: str,
    role: Role = Role.DEVELOPER,
    first_name: str | None = None,
    last_name: str | None = None,
    profile_image_url: str | None = None,
) -> User:
    """Insert a user. Email uniqueness is enforced by the ``users.email`` index."""
    user = User(
        email=normalize_email(email),
        password_hash=hash_password(password),
        role=role,
        first_name=first_name,
        last_name=last_name,
        profile_image_url=profile_image_url,
    )
    session.add(user)
    try:
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        raise EmailAlreadyRegistered() from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise StorageUnavailable(str(exc)) from exc
    session.refresh(user)
    logger.info("user.created user_id=%s role=%s", user.id, user.role)
    return user


def create_managed_user(session: Session, actor: User, **fields) -> User:
    """Admin-initiated account creation; admins cannot mint other admins."""
    require_capability(actor, Capability.MANAGE_USERS)
    role = fields.get("role", Role.DEVELOPER)
    if role not in MANAGED_ROLES:
        raise InvalidTargetRole("Users can only be created as project leads or developers")
    return create_user(session, **fields)


def list_users_with_counts(session: Session, actor: User) -> list[UserWithCount]:
    require_capability(actor, Capability.MANAGE_USERS)
    counts = (
        select(ProjectMembership.user_id, func.count(col(ProjectMembership.id)).label("n"))
        .group_by(col(ProjectMembership.user_id))
        .subquery()
    )
    statement = (
        select(User, func.coalesce(counts.c.n, 0))
        .outerjoin(counts, counts.c.user_id == User.id)
        .order_by(col(User.id).asc())
    )
    return [UserWithCount(user=user, membership_count=n) for user, n in crud.exec_all(session, statement)]


def change_role(session: Session, actor: User, user_id: int, role: Role) -> User:
    """Change a user's role.

    A user who stops being lead-eligible is cleared as the designated lead of
    every project, in the same transaction.
    """
    require_capability(actor, Capability.MANAGE_USERS)
    if role not in MANAGED_ROLES:
        raise InvalidTargetRole("Role must be project_lead or developer")
    user = crud.get_by_id(session, User, user_id)
    if user is None:
        raise TargetNotFound()

    user.role = role
    user.updated_at = utcnow()
    session.add(user)
    if role not in LEAD_ELIGIBLE_ROLES:
        _clear_leadership(session, user_id)
    user = crud.save(session, user)
    logger.info("user.role_changed user_id=%s role=%s actor_id=%s", user_id, role, actor.id)
    return user


def delete_user(session: Session, actor: User, user_id: int) -> None:
    """Delete a user together with their memberships and lead designations."""
    require_capability(actor, Capability.MANAGE_USERS)
    actor_id = actor.id
    user = crud.get_by_id(session, User, user_id)
    if user is None:
        raise TargetNotFound()

    memberships.delete_for_user(session, user_id)
    _clear_leadership(session, user_id)
    session.delete(user)
    crud.commit(session)
    logger.info("user.deleted user_id=%s actor_id=%s", user_id, actor_id)


def change_password(session: Session, user: User, current_password: str, new_password: str) -> None:
    if not verify_password(current_password, user.password_hash):
        raise InvalidPassword()
    user.password_hash = hash_password(new_password)
    user.updated_at = utcnow()
    crud.save(session, user)
    logger.info("user.password_changed user_id=%s", user.id)


def _clear_leadership(session: Session, user_id: int) -> None:
    crud.execute(
        session,
        update(Project)
        .where(col(Project.project_lead_id) == user_id)
        .values(project_lead_id=None, updated_at=utcnow()),
    )

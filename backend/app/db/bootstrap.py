from __future__ import annotations

from sqlmodel import Session

from app.core.config import settings
from app.core.logging import get_logger
from app.core.roles import Role
from app.models.users import User
from app.services.users import create_user, get_user_by_email

logger = get_logger(__name__)


def ensure_admin(session: Session) -> User:
    """Create the bootstrap admin from settings unless that email already exists."""
    existing = get_user_by_email(session, settings.admin_email)
    if existing is not None:
        logger.info("bootstrap.admin_exists email=%s", existing.email)
        return existing

    admin = create_user(
        session,
        email=settings.admin_email,
        password=settings.admin_password,
        role=Role.ADMIN,
        first_name="System",
        last_name="Administrator",
    )
    logger.info("bootstrap.admin_created user_id=%s email=%s", admin.id, admin.email)
    return admin

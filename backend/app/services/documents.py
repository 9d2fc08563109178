"""Document metadata attached to projects.

Only metadata is stored here; where the bytes live is somebody else's concern.
"""

from __future__ import annotations

from sqlmodel import Session, col, select

from app.core.errors import DocumentNotFound
from app.core.logging import get_logger
from app.core.roles import Capability, require_capability
from app.db import crud
from app.models.documents import Document
from app.models.users import User
from app.services import assignment_policy, memberships
from app.services.assignments import get_project_or_raise

logger = get_logger(__name__)


def register_document(
    session: Session,
    actor: User,
    project_id: int,
    *,
    file_name: str,
    original_name: str,
    file_size: int,
    mime_type: str,
) -> Document:
    require_capability(actor, Capability.MANAGE_DOCUMENTS)
    actor_id = actor.id
    project = get_project_or_raise(session, project_id)
    assignment_policy.authorize_document_management(
        actor, project, memberships.member_ids(session, project_id)
    )

    document = Document(
        project_id=project_id,
        file_name=file_name,
        original_name=original_name,
        file_size=file_size,
        mime_type=mime_type,
        uploaded_by=actor_id,
    )
    document = crud.save(session, document)
    logger.info(
        "document.registered document_id=%s project_id=%s actor_id=%s",
        document.id,
        project_id,
        actor_id,
    )
    return document


def list_documents(session: Session, actor: User, project_id: int) -> list[Document]:
    get_project_or_raise(session, project_id)
    assignment_policy.authorize_document_read(actor, memberships.member_ids(session, project_id))
    statement = (
        select(Document).where(Document.project_id == project_id).order_by(col(Document.id).asc())
    )
    return crud.exec_all(session, statement)


def get_document(session: Session, actor: User, document_id: int) -> Document:
    document = crud.get_by_id(session, Document, document_id)
    if document is None:
        raise DocumentNotFound()
    get_project_or_raise(session, document.project_id)
    assignment_policy.authorize_document_read(
        actor, memberships.member_ids(session, document.project_id)
    )
    return document


def delete_document(session: Session, actor: User, document_id: int) -> None:
    require_capability(actor, Capability.MANAGE_DOCUMENTS)
    actor_id = actor.id
    document = crud.get_by_id(session, Document, document_id)
    if document is None:
        raise DocumentNotFound()
    project = get_project_or_raise(session, document.project_id)
    assignment_policy.authorize_document_management(
        actor, project, memberships.member_ids(session, project.id)
    )

    session.delete(document)
    crud.commit(session)
    logger.info("document.deleted document_id=%s actor_id=%s", document_id, actor_id)

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session

from app.api.deps import get_current_user
from app.db.session import get_session
from app.models.documents import Document
from app.models.users import User
from app.schemas.documents import DocumentRead
from app.services import documents as documents_service

router = APIRouter(prefix="/documents", tags=["documents"])
SESSION_DEP = Depends(get_session)
ACTOR_DEP = Depends(get_current_user)


@router.get("/{document_id}", response_model=DocumentRead)
def get_document(document_id: int, session: Session = SESSION_DEP, actor: User = ACTOR_DEP) -> Document:
    return documents_service.get_document(session, actor, document_id)


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_document(document_id: int, session: Session = SESSION_DEP, actor: User = ACTOR_DEP) -> Response:
    documents_service.delete_document(session, actor, document_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session

from app.api.deps import get_current_user
from app.db.pagination import paginate
from app.db.session import get_session
from app.models.documents import Document
from app.models.projects import Project, ProjectMembership
from app.models.users import User
from app.schemas.documents import DocumentCreate, DocumentRead
from app.schemas.pagination import DefaultLimitOffsetPage
from app.schemas.projects import (
    LeadAssignment,
    MembershipCreate,
    MembershipRead,
    MembershipWithUser,
    ProjectCreate,
    ProjectDetailRead,
    ProjectRead,
    ProjectUpdate,
)
from app.schemas.users import UserSummary
from app.services import assignments, documents, projects
from app.services.visibility import visible_projects_statement

router = APIRouter(prefix="/projects", tags=["projects"])
SESSION_DEP = Depends(get_session)
ACTOR_DEP = Depends(get_current_user)


def _summary(user: User | None) -> UserSummary | None:
    return UserSummary.model_validate(user) if user is not None else None


@router.get("", response_model=DefaultLimitOffsetPage[ProjectRead])
def list_projects(
    session: Session = SESSION_DEP, actor: User = ACTOR_DEP
) -> DefaultLimitOffsetPage[ProjectRead]:
    return paginate(session, visible_projects_statement(actor))


@router.post("", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
def create_project(
    payload: ProjectCreate, session: Session = SESSION_DEP, actor: User = ACTOR_DEP
) -> Project:
    return projects.create_project(session, actor, **payload.model_dump())


@router.get("/{project_id}", response_model=ProjectDetailRead)
def get_project(
    project_id: int, session: Session = SESSION_DEP, actor: User = ACTOR_DEP
) -> ProjectDetailRead:
    detail = projects.get_project_detail(session, actor, project_id)
    return ProjectDetailRead.model_validate(
        detail.project,
        update={
            "creator": _summary(detail.created_by),
            "project_lead": _summary(detail.project_lead),
            "memberships": [
                MembershipWithUser.model_validate(m, update={"user": _summary(u)})
                for m, u in detail.memberships
            ],
            "documents": [DocumentRead.model_validate(d) for d in detail.documents],
            "membership_count": len(detail.memberships),
            "document_count": len(detail.documents),
        },
    )


@router.patch("/{project_id}", response_model=ProjectRead)
def update_project(
    project_id: int,
    payload: ProjectUpdate,
    session: Session = SESSION_DEP,
    actor: User = ACTOR_DEP,
) -> Project:
    return projects.update_project(session, actor, project_id, payload.model_dump(exclude_unset=True))


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(project_id: int, session: Session = SESSION_DEP, actor: User = ACTOR_DEP) -> Response:
    projects.delete_project(session, actor, project_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{project_id}/assign",
    response_model=MembershipRead,
    status_code=status.HTTP_201_CREATED,
)
def assign_member(
    project_id: int,
    payload: MembershipCreate,
    session: Session = SESSION_DEP,
    actor: User = ACTOR_DEP,
) -> ProjectMembership:
    return assignments.assign_member(session, actor, project_id, payload.user_id)


@router.delete("/{project_id}/assign/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_member(
    project_id: int,
    user_id: int,
    session: Session = SESSION_DEP,
    actor: User = ACTOR_DEP,
) -> Response:
    assignments.remove_member(session, actor, project_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{project_id}/assign-lead", response_model=ProjectRead)
def assign_lead(
    project_id: int,
    payload: LeadAssignment,
    session: Session = SESSION_DEP,
    actor: User = ACTOR_DEP,
) -> Project:
    return assignments.assign_lead(session, actor, project_id, payload.project_lead_id)


@router.get("/{project_id}/documents", response_model=list[DocumentRead])
def list_documents(
    project_id: int, session: Session = SESSION_DEP, actor: User = ACTOR_DEP
) -> list[Document]:
    return documents.list_documents(session, actor, project_id)


@router.post(
    "/{project_id}/documents",
    response_model=DocumentRead,
    status_code=status.HTTP_201_CREATED,
)
def register_document(
    project_id: int,
    payload: DocumentCreate,
    session: Session = SESSION_DEP,
    actor: User = ACTOR_DEP,
) -> Document:
    return documents.register_document(session, actor, project_id, **payload.model_dump())

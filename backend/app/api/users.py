from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session

from app.api.deps import get_current_user
from app.db.session import get_session
from app.models.users import User
from app.schemas.common import OkResponse
from app.schemas.users import PasswordUpdate, UserCreate, UserRead, UserRoleUpdate, UserWithStatsRead
from app.services import users as users_service

router = APIRouter(prefix="/users", tags=["users"])
SESSION_DEP = Depends(get_session)
ACTOR_DEP = Depends(get_current_user)


@router.get("", response_model=list[UserWithStatsRead])
def list_users(session: Session = SESSION_DEP, actor: User = ACTOR_DEP) -> list[UserWithStatsRead]:
    return [
        UserWithStatsRead.model_validate(row.user, update={"membership_count": row.membership_count})
        for row in users_service.list_users_with_counts(session, actor)
    ]


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, session: Session = SESSION_DEP, actor: User = ACTOR_DEP) -> User:
    """Create a project lead or developer account.

    The password given here is the user's initial password; there is no
    separate invitation step.
    """
    return users_service.create_managed_user(session, actor, **payload.model_dump())


# Declared before /{user_id} routes so "password" is never parsed as an id.
@router.patch("/password", response_model=OkResponse)
def update_password(
    payload: PasswordUpdate, session: Session = SESSION_DEP, actor: User = ACTOR_DEP
) -> OkResponse:
    users_service.change_password(session, actor, payload.current_password, payload.new_password)
    return OkResponse()


@router.patch("/{user_id}/role", response_model=UserRead)
def update_role(
    user_id: int, payload: UserRoleUpdate, session: Session = SESSION_DEP, actor: User = ACTOR_DEP
) -> User:
    return users_service.change_role(session, actor, user_id, payload.role)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, session: Session = SESSION_DEP, actor: User = ACTOR_DEP) -> Response:
    users_service.delete_user(session, actor, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

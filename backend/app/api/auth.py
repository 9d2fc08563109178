from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlmodel import Session

from app.api.deps import SESSION_USER_KEY, get_current_user
from app.core.logging import get_logger
from app.db.session import get_session
from app.models.users import User
from app.schemas.common import OkResponse
from app.schemas.users import LoginRequest, UserRead
from app.services.users import authenticate

router = APIRouter(prefix="/auth", tags=["auth"])
logger = get_logger(__name__)


@router.post("/login", response_model=UserRead)
def login(payload: LoginRequest, request: Request, session: Session = Depends(get_session)) -> User:
    user = authenticate(session, payload.email, payload.password)
    request.session.clear()
    request.session[SESSION_USER_KEY] = user.id
    logger.info("auth.login user_id=%s", user.id)
    return user


@router.post("/logout", response_model=OkResponse)
def logout(request: Request) -> OkResponse:
    request.session.clear()
    return OkResponse()


@router.get("/user", response_model=UserRead)
def current_user(user: User = Depends(get_current_user)) -> User:
    return user

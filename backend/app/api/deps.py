from __future__ import annotations

from fastapi import Depends, HTTPException, Request, status
from sqlmodel import Session

from app.db import crud
from app.db.session import get_session
from app.models.users import User

SESSION_USER_KEY = "user_id"


def get_current_user(request: Request, session: Session = Depends(get_session)) -> User:
    """Resolve the acting user from the signed session cookie."""
    user_id = request.session.get(SESSION_USER_KEY)
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")

    user = crud.get_by_id(session, User, user_id)
    if user is None:
        request.session.clear()
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    return user

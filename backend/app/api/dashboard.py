from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.api.deps import get_current_user
from app.db.session import get_session
from app.models.users import User
from app.schemas.dashboard import DashboardStatsRead
from app.services.dashboard import dashboard_stats

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStatsRead)
def get_stats(
    session: Session = Depends(get_session),
    actor: User = Depends(get_current_user),
) -> DashboardStatsRead:
    return DashboardStatsRead(**asdict(dashboard_stats(session, actor)))

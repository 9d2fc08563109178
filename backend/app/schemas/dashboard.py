from __future__ import annotations

from sqlmodel import SQLModel


class DashboardStatsRead(SQLModel):
    total_projects: int
    active_projects: int
    completed_projects: int
    on_hold_projects: int
    team_members: int
    due_this_week: int
    total_documents: int

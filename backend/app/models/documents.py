from __future__ import annotations

from datetime import datetime

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from app.core.time import utcnow


class Document(SQLModel, table=True):
    __tablename__ = "documents"

    id: int | None = Field(default=None, primary_key=True)
    project_id: int = Field(foreign_key="projects.id", ondelete="CASCADE", index=True)
    file_name: str = Field(max_length=255)
    original_name: str = Field(max_length=255)
    file_size: int
    mime_type: str = Field(max_length=100)
    uploaded_by: int
    created_at: datetime = Field(default_factory=utcnow, sa_type=sa.DateTime())

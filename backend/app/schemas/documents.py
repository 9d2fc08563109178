from __future__ import annotations

from datetime import datetime

from sqlmodel import Field, SQLModel


class DocumentCreate(SQLModel):
    file_name: str = Field(min_length=1, max_length=255)
    original_name: str = Field(min_length=1, max_length=255)
    file_size: int = Field(ge=0)
    mime_type: str = Field(min_length=1, max_length=100)


class DocumentRead(SQLModel):
    id: int
    project_id: int
    file_name: str
    original_name: str
    file_size: int
    mime_type: str
    uploaded_by: int
    created_at: datetime

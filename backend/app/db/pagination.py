from __future__ import annotations

from typing import Any

from fastapi_pagination.ext.sqlmodel import paginate as _paginate
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.core.errors import StorageUnavailable


def paginate(session: Session, statement: Any) -> Any:
    try:
        return _paginate(session, statement)
    except SQLAlchemyError as exc:
        raise StorageUnavailable(str(exc)) from exc

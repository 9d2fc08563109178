from __future__ import annotations

from typing import Any, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel

from app.core.errors import StorageUnavailable

ModelT = TypeVar("ModelT", bound=SQLModel)


def get_by_id(session: Session, model: type[ModelT], obj_id: object) -> ModelT | None:
    try:
        return session.get(model, obj_id)
    except SQLAlchemyError as exc:
        raise StorageUnavailable(str(exc)) from exc


def exec_all(session: Session, statement: Any) -> list[Any]:
    try:
        return list(session.exec(statement).all())
    except SQLAlchemyError as exc:
        raise StorageUnavailable(str(exc)) from exc


def exec_first(session: Session, statement: Any) -> Any | None:
    try:
        return session.exec(statement).first()
    except SQLAlchemyError as exc:
        raise StorageUnavailable(str(exc)) from exc


def exec_one(session: Session, statement: Any) -> Any:
    """Single scalar row, e.g. an aggregate count."""
    try:
        return session.exec(statement).one()
    except SQLAlchemyError as exc:
        raise StorageUnavailable(str(exc)) from exc


def execute(session: Session, statement: Any) -> Any:
    """Run a bulk write; rolls back and raises on storage failure."""
    try:
        return session.execute(statement)
    except SQLAlchemyError as exc:
        session.rollback()
        raise StorageUnavailable(str(exc)) from exc


def save(session: Session, obj: ModelT) -> ModelT:
    """Add, commit and refresh ``obj``; rolls back and raises on storage failure."""
    session.add(obj)
    try:
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        raise StorageUnavailable(str(exc)) from exc
    session.refresh(obj)
    return obj


def commit(session: Session) -> None:
    try:
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        raise StorageUnavailable(str(exc)) from exc

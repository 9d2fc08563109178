# ruff: noqa

import os

# Cheap hashes and a throwaway database for the whole test run.
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from collections.abc import Callable, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.core.roles import Role
from app.db.session import enable_sqlite_foreign_keys, get_session
from app.main import create_app
from app.models.projects import Project, ProjectStatus
from app.models.users import User
from app.services import projects as projects_service
from app.services import users as users_service

PASSWORD = "secret123"


@pytest.fixture
def engine() -> Iterator[Engine]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Iterator[Session]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def make_user(session: Session) -> Callable[..., User]:
    counter = {"n": 0}

    def _make(role: Role = Role.DEVELOPER, email: str | None = None, password: str = PASSWORD) -> User:
        counter["n"] += 1
        return users_service.create_user(
            session,
            email=email or f"{role.value}{counter['n']}@example.com",
            password=password,
            role=role,
            first_name=role.value.title(),
            last_name=str(counter["n"]),
        )

    return _make


@pytest.fixture
def make_project(session: Session) -> Callable[..., Project]:
    def _make(
        creator: User,
        *,
        name: str = "Project",
        lead: User | None = None,
        status: ProjectStatus = ProjectStatus.ACTIVE,
        deadline=None,
    ) -> Project:
        return projects_service.create_project(
            session,
            creator,
            name=name,
            status=status,
            deadline=deadline,
            project_lead_id=lead.id if lead is not None else None,
        )

    return _make


@pytest.fixture
def app(engine: Engine) -> FastAPI:
    app = create_app(bootstrap=False)

    def _get_session() -> Iterator[Session]:
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    return app


@pytest.fixture
def client_for(app: FastAPI) -> Callable[[User], TestClient]:
    """Return a TestClient already logged in as ``user``."""

    def _login(user: User, password: str = PASSWORD) -> TestClient:
        client = TestClient(app)
        resp = client.post("/auth/login", json={"email": user.email, "password": password})
        assert resp.status_code == 200, resp.text
        return client

    return _login

"""FastAPI application entrypoint."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi_pagination import add_pagination
from sqlmodel import Session
from starlette.middleware.sessions import SessionMiddleware

from app.api import auth, dashboard, documents, projects, users
from app.core.config import settings
from app.core.errors import PolicyError, StorageUnavailable
from app.core.logging import configure_logging, get_logger
from app.db.bootstrap import ensure_admin
from app.db.session import engine, init_db

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    configure_logging(settings.log_level)
    init_db()
    with Session(engine) as session:
        ensure_admin(session)
    yield


def policy_error_handler(request: Request, exc: PolicyError) -> JSONResponse:
    logger.info(
        "policy.rejected path=%s error=%s detail=%s",
        request.url.path,
        exc.__class__.__name__,
        exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def storage_error_handler(request: Request, exc: StorageUnavailable) -> JSONResponse:
    logger.error("storage.unavailable path=%s error=%s", request.url.path, str(exc))
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Storage unavailable"},
    )


def create_app(*, bootstrap: bool = True) -> FastAPI:
    app = FastAPI(title="Project Tracker API", lifespan=lifespan if bootstrap else None)

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        session_cookie=settings.session_cookie,
        max_age=settings.session_ttl_seconds,
        same_site="lax",
        https_only=settings.session_https_only,
    )
    if settings.cors_origin_list:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origin_list,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(PolicyError, policy_error_handler)
    app.add_exception_handler(StorageUnavailable, storage_error_handler)

    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(projects.router)
    app.include_router(documents.router)
    app.include_router(dashboard.router)

    add_pagination(app)
    return app


app = create_app()

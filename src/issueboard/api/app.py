"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import httpx
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from issueboard import __version__
from issueboard.api.dependencies import (
    close_issue_locks,
    close_session_store,
    close_settings,
    init_issue_locks,
    init_session_store,
    init_settings,
)
from issueboard.api.models import APIResponse, RemoteErrorResponse
from issueboard.api.routes import board, issues, session
from issueboard.board import ColumnNotFoundError, IssueNotOnBoardError
from issueboard.config import Settings, load_settings
from issueboard.logging import sanitize_for_log
from issueboard.session import SessionMissingError, create_session_store
from issueboard.tracker import IssueDecodeError, RemoteRejectedError

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable

    from starlette.responses import Response

logger = logging.getLogger("issueboard.api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager: owns settings, session store and locks."""
    settings: Settings = app.state.settings
    init_settings(settings)
    init_session_store(create_session_store(settings))
    init_issue_locks()
    logger.info("issueboard started (session mode=%s)", settings.session_mode.value)

    yield
    # Shutdown
    close_issue_locks()
    close_session_store()
    close_settings()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=APIResponse[None](data=None, error=message).model_dump(),
    )


def _origin_allowed(request: Request, allowed: list[str]) -> bool:
    origin = request.headers.get("origin")
    if origin is None:
        return True
    origin = origin.rstrip("/")
    if origin in allowed:
        return True
    return origin.split("://", 1)[-1] == request.headers.get("host")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="issueboard API",
        description="Kanban board over GitHub issues, backed by column labels",
        version=__version__,
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.settings = settings = settings or load_settings()

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE"],
            allow_headers=["Content-Type"],
        )

    @app.middleware("http")
    async def no_store(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response = await call_next(request)
        response.headers["Cache-Control"] = "no-store"
        return response

    @app.middleware("http")
    async def check_origin(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        # Browsers send Origin on cross-site calls; only our own host and the allow-list pass
        if not _origin_allowed(request, settings.cors_origins):
            logger.warning("Rejected request from origin %s", request.headers["origin"])
            return _error(status.HTTP_403_FORBIDDEN, "origin_not_allowed")
        return await call_next(request)

    # Exception handlers
    @app.exception_handler(SessionMissingError)
    async def session_missing_handler(
        _request: Request, _exc: SessionMissingError
    ) -> JSONResponse:
        return _error(status.HTTP_401_UNAUTHORIZED, "missing_session")

    @app.exception_handler(RemoteRejectedError)
    async def remote_rejected_handler(
        _request: Request, exc: RemoteRejectedError
    ) -> JSONResponse:
        # Redirects and other non-errors from the tracker are not forwarded as-is
        status_code = exc.status_code if exc.status_code >= 400 else status.HTTP_502_BAD_GATEWAY
        return JSONResponse(
            status_code=status_code,
            content=RemoteErrorResponse(
                error=sanitize_for_log(str(exc)),
                status=exc.status_code,
                status_text=exc.status_text,
                body=exc.body,
            ).model_dump(),
        )

    @app.exception_handler(httpx.TransportError)
    async def transport_error_handler(
        _request: Request, exc: httpx.TransportError
    ) -> JSONResponse:
        logger.warning("Tracker unreachable: %s", exc)
        return _error(status.HTTP_502_BAD_GATEWAY, str(exc) or type(exc).__name__)

    @app.exception_handler(IssueDecodeError)
    async def decode_error_handler(
        _request: Request, exc: IssueDecodeError
    ) -> JSONResponse:
        logger.warning("Unexpected tracker payload: %s", exc)
        return _error(status.HTTP_502_BAD_GATEWAY, str(exc))

    @app.exception_handler(ColumnNotFoundError)
    async def column_not_found_handler(
        _request: Request, exc: ColumnNotFoundError
    ) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(IssueNotOnBoardError)
    async def not_on_board_handler(
        _request: Request, exc: IssueNotOnBoardError
    ) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, str(exc))

    # Include routers
    app.include_router(session.router, prefix="/api/v1")
    app.include_router(board.router, prefix="/api/v1")
    app.include_router(issues.router, prefix="/api/v1")

    return app

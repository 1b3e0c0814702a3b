"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Callable, Generator  # noqa: TC003
from typing import Annotated

from fastapi import Depends, Request

from issueboard.board import BoardService, IssueClient, IssueLocks
from issueboard.config import Settings
from issueboard.session import SessionContext, SessionMissingError, SessionStore
from issueboard.tracker import IssueTrackerClient

ClientFactory = Callable[[SessionContext], IssueClient]

# Global Settings instance (initialized on app startup)
_settings: Settings | None = None


def init_settings(settings: Settings) -> Settings:
    """Initialize the global Settings instance."""
    global _settings  # noqa: PLW0603
    _settings = settings
    return _settings


def close_settings() -> None:
    global _settings  # noqa: PLW0603
    _settings = None


def get_settings() -> Generator[Settings, None, None]:
    """Dependency that provides the Settings instance."""
    if _settings is None:
        raise RuntimeError("Settings not initialized. Call init_settings() first.")
    yield _settings


SettingsDep = Annotated[Settings, Depends(get_settings)]

# Global SessionStore instance (initialized on app startup)
_session_store: SessionStore | None = None


def init_session_store(store: SessionStore) -> SessionStore:
    """Initialize the global SessionStore instance."""
    global _session_store  # noqa: PLW0603
    _session_store = store
    return _session_store


def close_session_store() -> None:
    """Close the global SessionStore instance."""
    global _session_store  # noqa: PLW0603
    if _session_store is not None:
        _session_store.close()
        _session_store = None


def get_session_store() -> Generator[SessionStore, None, None]:
    """Dependency that provides the SessionStore instance."""
    if _session_store is None:
        raise RuntimeError("SessionStore not initialized. Call init_session_store() first.")
    yield _session_store


SessionStoreDep = Annotated[SessionStore, Depends(get_session_store)]

# Global per-issue lock registry, shared by every request
_issue_locks: IssueLocks | None = None


def init_issue_locks() -> IssueLocks:
    """Initialize the global IssueLocks instance."""
    global _issue_locks  # noqa: PLW0603
    _issue_locks = IssueLocks()
    return _issue_locks


def close_issue_locks() -> None:
    global _issue_locks  # noqa: PLW0603
    _issue_locks = None


def get_issue_locks() -> Generator[IssueLocks, None, None]:
    """Dependency that provides the IssueLocks instance."""
    if _issue_locks is None:
        raise RuntimeError("IssueLocks not initialized. Call init_issue_locks() first.")
    yield _issue_locks


IssueLocksDep = Annotated[IssueLocks, Depends(get_issue_locks)]


def get_client_factory(settings: SettingsDep) -> ClientFactory:
    """Dependency that builds tracker clients for a session."""

    def factory(session: SessionContext) -> IssueClient:
        return IssueTrackerClient(
            token=session.token,
            base_url=settings.api_url,
            timeout=settings.timeout,
        )

    return factory


ClientFactoryDep = Annotated[ClientFactory, Depends(get_client_factory)]


def get_optional_session(request: Request, store: SessionStoreDep) -> SessionContext | None:
    """Dependency that provides the session, or None when there is none."""
    return store.read(request)


OptionalSessionDep = Annotated[SessionContext | None, Depends(get_optional_session)]


def require_session(session: OptionalSessionDep) -> SessionContext:
    """Dependency that provides the session or fails with 401."""
    if session is None:
        raise SessionMissingError("missing_session")
    return session


SessionDep = Annotated[SessionContext, Depends(require_session)]


def get_board_service(
    session: SessionDep, factory: ClientFactoryDep, locks: IssueLocksDep
) -> Generator[BoardService, None, None]:
    """Dependency that provides a BoardService for the request's session."""
    service = BoardService(factory(session), session, locks)
    try:
        yield service
    finally:
        service.close()


BoardServiceDep = Annotated[BoardService, Depends(get_board_service)]

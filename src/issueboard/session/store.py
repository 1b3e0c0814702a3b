"""Session store interface and factory."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from issueboard.config import SessionMode, Settings
from issueboard.session.cookies import CookieSessionStore
from issueboard.session.local import LocalSessionStore

if TYPE_CHECKING:
    from fastapi import Request, Response

    from issueboard.session.models import SessionContext, SessionUpdate


class SessionStore(Protocol):
    """Interface shared by the cookie and local stores."""

    def read(self, request: Request) -> SessionContext | None:
        """Return the active session, or None."""
        ...

    def write(self, response: Response, update: SessionUpdate) -> None:
        """Store the fields present in ``update``."""
        ...

    def clear(self, response: Response) -> None:
        """Log out."""
        ...

    def close(self) -> None:
        """Release resources at shutdown."""
        ...


def create_session_store(settings: Settings) -> SessionStore:
    """Build the store matching the configured session mode."""
    if settings.session_mode == SessionMode.CLIENT:
        return LocalSessionStore(
            settings.store_path,
            default_owner=settings.default_owner,
            default_repo=settings.default_repo,
            default_name=settings.default_name,
        )
    return CookieSessionStore(secure=settings.cookie_secure)

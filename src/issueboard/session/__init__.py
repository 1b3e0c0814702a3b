"""Session - token/owner/repo storage in cookies or a local store."""

from issueboard.session.cookies import CookieSessionStore
from issueboard.session.exceptions import SessionError, SessionMissingError
from issueboard.session.local import LocalSessionStore
from issueboard.session.models import SessionContext, SessionUpdate
from issueboard.session.store import SessionStore, create_session_store

__all__ = [
    "CookieSessionStore",
    "LocalSessionStore",
    "SessionContext",
    "SessionError",
    "SessionMissingError",
    "SessionStore",
    "SessionUpdate",
    "create_session_store",
]

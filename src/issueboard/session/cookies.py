"""Server-held sessions - credentials in HTTP-only cookies."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from issueboard.session.models import SessionContext, SessionUpdate

if TYPE_CHECKING:
    from fastapi import Request, Response

logger = logging.getLogger("issueboard.session")

TOKEN_COOKIE = "kb_token"
OWNER_COOKIE = "kb_owner"
REPO_COOKIE = "kb_repo"

SESSION_COOKIES = (TOKEN_COOKIE, OWNER_COOKIE, REPO_COOKIE)


class CookieSessionStore:
    """Keeps token, owner and repo in HTTP-only, same-site cookies.

    The token never reaches client-side script. Display names are not kept
    in this mode.
    """

    def __init__(self, secure: bool = True) -> None:
        self.secure = secure

    def read(self, request: Request) -> SessionContext | None:
        """Return the session carried by the request, or None if incomplete."""
        token = request.cookies.get(TOKEN_COOKIE)
        owner = request.cookies.get(OWNER_COOKIE)
        repo = request.cookies.get(REPO_COOKIE)
        if not token or not owner or not repo:
            return None
        return SessionContext(token=token, owner=owner, repo=repo)

    def write(self, response: Response, update: SessionUpdate) -> None:
        """Set a cookie for each field present in ``update``."""
        values = {
            TOKEN_COOKIE: update.token,
            OWNER_COOKIE: update.owner,
            REPO_COOKIE: update.repo,
        }
        for name, value in values.items():
            if value is not None:
                self._set(response, name, value)
        logger.info("Session cookies written: %s", [n for n, v in values.items() if v is not None])

    def clear(self, response: Response) -> None:
        """Expire all three cookies."""
        for name in SESSION_COOKIES:
            self._set(response, name, "", max_age=0)
        logger.info("Session cookies cleared")

    def close(self) -> None:
        """Nothing to release; present for symmetry with the local store."""

    def _set(self, response: Response, name: str, value: str, max_age: int | None = None) -> None:
        response.set_cookie(
            name,
            value,
            max_age=max_age,
            path="/",
            secure=self.secure,
            httponly=True,
            samesite="lax",
        )

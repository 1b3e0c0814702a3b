"""Client-held sessions - credentials in a local persistent key-value store."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from issueboard.session.database import Database
from issueboard.session.models import SessionContext, SessionUpdate

if TYPE_CHECKING:
    from fastapi import Request, Response

logger = logging.getLogger("issueboard.session")

TOKEN_KEY = "kb:token"
OWNER_KEY = "kb:owner"
REPO_KEY = "kb:repo"
NAME_KEY = "kb:name"

SESSION_KEYS = [TOKEN_KEY, OWNER_KEY, REPO_KEY, NAME_KEY]


class LocalSessionStore:
    """Keeps the session in SQLite, with an in-memory mirror.

    Reads prefer the mirror, then the persisted values, then the configured
    owner/repo/name defaults. The store is created at application start and
    owns the mirror; logout clears it.
    """

    def __init__(
        self,
        db_path: str,
        default_owner: str,
        default_repo: str,
        default_name: str = "",
    ) -> None:
        """Initialize the store.

        Args:
            db_path: SQLite file path, or ":memory:"
            default_owner: Owner used when none has been stored
            default_repo: Repository used when none has been stored
            default_name: Display name used when none has been stored
        """
        self._db = Database(db_path)
        self._db.create_tables()
        self._defaults = {
            OWNER_KEY: default_owner,
            REPO_KEY: default_repo,
            NAME_KEY: default_name,
        }
        self._mirror: SessionContext | None = None
        self._lock = threading.Lock()

    @property
    def mirror(self) -> SessionContext | None:
        return self._mirror

    def close(self) -> None:
        """Drop the mirror and close the database."""
        self._mirror = None
        self._db.close()

    def read(self, request: Request | None = None) -> SessionContext | None:
        """Return the current session, or None when no token is stored."""
        if self._mirror is not None:
            return self._mirror
        values = self._load()
        token = values.get(TOKEN_KEY, "")
        if not token:
            return None
        return SessionContext(
            token=token,
            owner=values[OWNER_KEY],
            repo=values[REPO_KEY],
            display_name=values[NAME_KEY],
        )

    def preferences(self) -> dict[str, str]:
        """Owner, repo and display name as they would be used, without the token."""
        values = self._load()
        return {
            "owner": values[OWNER_KEY],
            "repo": values[REPO_KEY],
            "display_name": values[NAME_KEY],
        }

    def write(self, response: Response | None, update: SessionUpdate) -> None:
        """Persist each field present in ``update`` and refresh the mirror."""
        values = {
            TOKEN_KEY: update.token,
            OWNER_KEY: update.owner,
            REPO_KEY: update.repo,
            NAME_KEY: update.display_name,
        }
        with self._lock:
            for key, value in values.items():
                if value is not None:
                    self._db.set(key, value)
            self._mirror = None
            self._mirror = self.read()
        logger.info("Local session written: %s", [k for k, v in values.items() if v is not None])

    def clear(self, response: Response | None = None) -> None:
        """Log out: forget the token, keep owner/repo/name for next time."""
        with self._lock:
            self._db.set(TOKEN_KEY, "")
            self._mirror = None
        logger.info("Local session cleared")

    def _load(self) -> dict[str, str]:
        stored = self._db.get_many(SESSION_KEYS)
        values = {TOKEN_KEY: stored.get(TOKEN_KEY, "")}
        for key, default in self._defaults.items():
            values[key] = stored.get(key) or default
        return values

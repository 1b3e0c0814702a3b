"""Session value types."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SessionContext:
    """Credential and scope for every tracker call.

    Built once per request (server mode) or held by the local store for the
    application's lifetime (client mode), and passed explicitly to whatever
    needs it.
    """

    token: str = field(repr=False)
    owner: str
    repo: str
    display_name: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True)
class SessionUpdate:
    """Partial session write; fields left as None are not touched."""

    token: str | None = None
    owner: str | None = None
    repo: str | None = None
    display_name: str | None = None

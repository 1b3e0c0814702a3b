"""Issue models and decoding of tracker payloads.

Remote JSON is validated with pydantic at the client boundary and converted
into the frozen ``Issue`` dataclass used everywhere else.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError, field_validator

from issueboard.tracker.exceptions import IssueDecodeError


class IssueState(StrEnum):
    """Lifecycle state, owned by the tracker."""

    OPEN = "open"
    CLOSED = "closed"


def dedupe_labels(labels: Iterable[str]) -> tuple[str, ...]:
    """Collapse duplicate label names, keeping first-seen order."""
    return tuple(dict.fromkeys(labels))


@dataclass(frozen=True)
class Issue:
    """A tracker issue as shown on the board."""

    id: int
    number: int
    title: str
    url: str
    state: IssueState
    labels: tuple[str, ...] = ()
    author: str | None = None
    body: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    is_pull_request: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "labels", dedupe_labels(self.labels))

    @property
    def is_closed(self) -> bool:
        return self.state == IssueState.CLOSED

    def has_label(self, name: str) -> bool:
        return name in self.labels

    def with_labels(self, labels: Iterable[str]) -> Issue:
        """Return a copy of this issue carrying a different label set."""
        return replace(self, labels=tuple(labels))


# Payload schemas (GitHub REST v3)


class LabelPayload(BaseModel):
    """Label object as returned by the tracker."""

    model_config = ConfigDict(extra="ignore")

    name: str
    color: str | None = None


class UserPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    login: str


class IssuePayload(BaseModel):
    """Issue object as returned by ``/repos/{owner}/{repo}/issues``."""

    model_config = ConfigDict(extra="ignore")

    id: int
    number: int
    title: str
    html_url: str
    state: IssueState
    labels: list[LabelPayload] = []
    user: UserPayload | None = None
    body: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    pull_request: dict[str, Any] | None = None

    @field_validator("labels", mode="before")
    @classmethod
    def _labels_as_objects(cls, value: Any) -> Any:
        # The API accepts bare names on write and some endpoints echo them back
        if value is None:
            return []
        if isinstance(value, list):
            return [{"name": item} if isinstance(item, str) else item for item in value]
        return value

    def to_issue(self) -> Issue:
        return Issue(
            id=self.id,
            number=self.number,
            title=self.title,
            url=self.html_url,
            state=self.state,
            labels=tuple(label.name for label in self.labels),
            author=self.user.login if self.user else None,
            body=self.body,
            created_at=self.created_at,
            updated_at=self.updated_at,
            is_pull_request=self.pull_request is not None,
        )


_ISSUE_LIST = TypeAdapter(list[IssuePayload])
_LABEL_LIST = TypeAdapter(list[LabelPayload | str])


def decode_issue(payload: Any) -> Issue:
    """Validate a single issue object.

    Raises:
        IssueDecodeError: If the payload is not a well-formed issue.
    """
    try:
        return IssuePayload.model_validate(payload).to_issue()
    except ValidationError as e:
        raise IssueDecodeError(f"Malformed issue payload: {e}") from e


def decode_issue_list(payload: Any) -> list[Issue]:
    """Validate an array of issue objects.

    Pull requests are kept and flagged with ``is_pull_request``; excluding them
    is the board's job.

    Raises:
        IssueDecodeError: If the payload is not a list of well-formed issues.
    """
    try:
        return [item.to_issue() for item in _ISSUE_LIST.validate_python(payload)]
    except ValidationError as e:
        raise IssueDecodeError(f"Malformed issue list payload: {e}") from e


def decode_label_names(payload: Any) -> list[str]:
    """Validate a label array (objects or bare names) and return the names.

    Raises:
        IssueDecodeError: If the payload is not a list of labels.
    """
    try:
        items = _LABEL_LIST.validate_python(payload)
    except ValidationError as e:
        raise IssueDecodeError(f"Malformed label payload: {e}") from e
    return list(dedupe_labels(item if isinstance(item, str) else item.name for item in items))

"""Pydantic models for REST API."""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field, field_validator

from issueboard.board import COLUMN_ORDER, COLUMNS, Board, ColumnId, classify
from issueboard.tracker import Issue

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


class RemoteErrorResponse(APIResponse[None]):
    """Error envelope for requests the tracker rejected."""

    status: int
    status_text: str = ""
    body: str = ""


# Session models


class SessionCreate(BaseModel):
    """Request model for establishing or updating a session.

    Only fields that are present are written.
    """

    token: str | None = None
    owner: str | None = None
    repo: str | None = None
    name: str | None = Field(default=None, max_length=255)


class SessionStatusResponse(BaseModel):
    """Response model for the session; never includes the token."""

    has_session: bool
    mode: str
    owner: str | None = None
    repo: str | None = None
    display_name: str | None = None


# Board models


class CardResponse(BaseModel):
    """A card on the board."""

    id: int
    number: int
    title: str
    url: str
    state: str
    labels: list[str]
    column: ColumnId
    column_title: str


class ColumnResponse(BaseModel):
    """One board column with its cards, newest first."""

    id: ColumnId
    title: str
    label: str
    count: int
    cards: list[CardResponse]


class BoardResponse(BaseModel):
    """The board grid. ``has_session`` is false when no token is available."""

    has_session: bool
    owner: str | None = None
    repo: str | None = None
    columns: list[ColumnResponse] = []


class StatusButton(BaseModel):
    column: ColumnId
    title: str
    active: bool


class IssueDetailResponse(CardResponse):
    """Detail view of an issue with its status buttons."""

    body: str | None
    author: str | None
    created_at: datetime | None
    updated_at: datetime | None
    status_buttons: list[StatusButton]


class EnsureLabelsResponse(BaseModel):
    """Reserved labels and whether each was newly created."""

    created: dict[str, bool]


# Mutation models


class ColumnMove(BaseModel):
    """Request model for moving a card (drag-drop or status button)."""

    column: str = Field(..., min_length=1)


class LabelsUpdate(BaseModel):
    """Request model for the label update proxy."""

    labels: list[str] = []

    @field_validator("labels", mode="before")
    @classmethod
    def _keep_strings(cls, value: Any) -> list[str]:
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, str)]


class LabelsResponse(BaseModel):
    labels: list[str]


def card_to_response(issue: Issue) -> CardResponse:
    """Convert an Issue to CardResponse."""
    column = classify(issue)
    return CardResponse(
        id=issue.id,
        number=issue.number,
        title=issue.title,
        url=issue.url,
        state=issue.state.value,
        labels=list(issue.labels),
        column=column,
        column_title=COLUMNS[column].title,
    )


def board_to_response(board: Board, owner: str, repo: str) -> BoardResponse:
    """Convert a Board to BoardResponse."""
    columns = []
    for column_id in COLUMN_ORDER:
        column = COLUMNS[column_id]
        issues = board.issues(column_id)
        columns.append(
            ColumnResponse(
                id=column_id,
                title=column.title,
                label=column.label,
                count=len(issues),
                cards=[card_to_response(issue) for issue in issues],
            )
        )
    return BoardResponse(has_session=True, owner=owner, repo=repo, columns=columns)


def issue_to_detail(issue: Issue) -> IssueDetailResponse:
    """Convert an Issue to IssueDetailResponse."""
    card = card_to_response(issue)
    return IssueDetailResponse(
        **card.model_dump(),
        body=issue.body,
        author=issue.author,
        created_at=issue.created_at,
        updated_at=issue.updated_at,
        status_buttons=[
            StatusButton(
                column=column_id,
                title=COLUMNS[column_id].title,
                active=column_id == card.column,
            )
            for column_id in COLUMN_ORDER
        ],
    )

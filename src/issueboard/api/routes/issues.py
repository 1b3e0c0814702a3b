"""Issue endpoints - detail view, column moves and the label update proxy."""

from typing import Annotated

from fastapi import APIRouter, Path

from issueboard.api.dependencies import BoardServiceDep
from issueboard.api.models import (
    APIResponse,
    ColumnMove,
    IssueDetailResponse,
    LabelsResponse,
    LabelsUpdate,
    issue_to_detail,
)

router = APIRouter(prefix="/issues", tags=["issues"])

IssueNumber = Annotated[int, Path(ge=1, description="Issue display number")]


@router.get("/{number}", response_model=APIResponse[IssueDetailResponse])
def get_issue(number: IssueNumber, service: BoardServiceDep) -> APIResponse[IssueDetailResponse]:
    """Issue detail with its status buttons."""
    issue = service.get_issue(number)
    return APIResponse(data=issue_to_detail(issue))


@router.put("/{number}/column", response_model=APIResponse[IssueDetailResponse])
def move_issue(
    number: IssueNumber, payload: ColumnMove, service: BoardServiceDep
) -> APIResponse[IssueDetailResponse]:
    """Move a card to another column (drag-drop target or status button)."""
    issue = service.move(number, payload.column)
    return APIResponse(data=issue_to_detail(issue))


@router.put("/{number}/labels", response_model=APIResponse[LabelsResponse])
def set_labels(
    number: IssueNumber, payload: LabelsUpdate, service: BoardServiceDep
) -> APIResponse[LabelsResponse]:
    """Replace an issue's labels as given."""
    applied = service.set_labels(number, payload.labels)
    return APIResponse(data=LabelsResponse(labels=applied))

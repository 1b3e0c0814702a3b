"""Board endpoints - board grid and reserved label setup."""

from fastapi import APIRouter

from issueboard.api.dependencies import (
    BoardServiceDep,
    ClientFactoryDep,
    IssueLocksDep,
    OptionalSessionDep,
)
from issueboard.api.models import (
    APIResponse,
    BoardResponse,
    EnsureLabelsResponse,
    board_to_response,
)
from issueboard.board import BoardService

router = APIRouter(tags=["board"])


@router.get("/board", response_model=APIResponse[BoardResponse])
def get_board(
    session: OptionalSessionDep, factory: ClientFactoryDep, locks: IssueLocksDep
) -> APIResponse[BoardResponse]:
    """Fetch issues and return them grouped into the three columns.

    Without a session this is not an error: the response says so and carries
    no columns.
    """
    if session is None:
        return APIResponse(data=BoardResponse(has_session=False))

    service = BoardService(factory(session), session, locks)
    try:
        board = service.load()
    finally:
        service.close()
    return APIResponse(data=board_to_response(board, session.owner, session.repo))


@router.post("/labels/ensure", response_model=APIResponse[EnsureLabelsResponse])
def ensure_labels(service: BoardServiceDep) -> APIResponse[EnsureLabelsResponse]:
    """Create the reserved column labels where missing."""
    return APIResponse(data=EnsureLabelsResponse(created=service.ensure_labels()))

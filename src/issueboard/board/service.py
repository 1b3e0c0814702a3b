"""BoardService - loads the board and applies moves for one session."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from issueboard.board.classifier import classify, is_board_issue
from issueboard.board.exceptions import IssueNotOnBoardError
from issueboard.board.models import COLUMN_ORDER, COLUMNS, Board, ColumnId, get_column
from issueboard.board.mutator import IssueClient, IssueLocks, StatusMutator
from issueboard.board.state import BoardState
from issueboard.tracker import Issue

if TYPE_CHECKING:
    from issueboard.session import SessionContext

logger = logging.getLogger("issueboard.board")


class BoardService:
    """Ties the tracker client, board state and status mutator together.

    Local state is only touched after the tracker confirms a write; the
    confirmed label set is patched into the issue in place.
    """

    def __init__(
        self,
        client: IssueClient,
        session: SessionContext,
        locks: IssueLocks | None = None,
        state: BoardState | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            client: Remote issue client authenticated for ``session``
            session: Owner/repo the board is scoped to
            locks: Shared per-issue locks (one registry per application)
            state: Existing board state to reconcile into
        """
        self._client = client
        self._session = session
        self._locks = locks or IssueLocks()
        self._state = state or BoardState()
        self._mutator = StatusMutator(client, session)

    @property
    def state(self) -> BoardState:
        return self._state

    @property
    def board(self) -> Board:
        return self._state.board

    def close(self) -> None:
        self._client.close()

    def load(self) -> Board:
        """Fetch the issue list and rebuild the board."""
        issues = self._client.list_issues(self._session.owner, self._session.repo)
        board = self._state.replace(issues)
        logger.info(
            "Loaded board for %s: %s",
            self._session.full_name,
            {column.value: count for column, count in board.counts().items()},
        )
        return board

    def get_issue(self, number: int) -> Issue:
        """Fetch one issue and refresh it on the board."""
        issue = self._client.get_issue(self._session.owner, self._session.repo, number)
        if is_board_issue(issue):
            self._state.upsert(issue)
        return issue

    def move(self, number: int, target: ColumnId | str) -> Issue:
        """Move an issue to another column.

        The issue is re-read from the tracker while holding its lock, so the
        label set sent back always starts from the remote's current labels.

        Returns:
            The issue with its confirmed label set

        Raises:
            ColumnNotFoundError: If ``target`` is not a column id
            IssueNotOnBoardError: If ``number`` is a pull request
            RemoteRejectedError: If the tracker rejects a request
        """
        column = get_column(target)
        with self._locks.for_issue(self._session.owner, self._session.repo, number):
            issue = self._client.get_issue(self._session.owner, self._session.repo, number)
            if not is_board_issue(issue):
                raise IssueNotOnBoardError(f"#{number} is a pull request")
            applied = self._mutator.move_issue(issue, column.id)
            updated = issue.with_labels(applied)
            self._state.upsert(updated)

        landed = classify(updated)
        if landed != column.id:
            # Tracker applied something other than what was sent
            logger.warning("#%d landed in %s instead of %s", number, landed, column.id)
        return updated

    def set_labels(self, number: int, labels: Iterable[str]) -> list[str]:
        """Replace an issue's labels verbatim (label update proxy)."""
        with self._locks.for_issue(self._session.owner, self._session.repo, number):
            applied = self._client.set_labels(
                self._session.owner, self._session.repo, number, labels
            )
            if self._state.get(number) is not None:
                self._state.patch_labels(number, applied)
        return applied

    def ensure_labels(self) -> dict[str, bool]:
        """Create the three reserved labels where missing.

        Returns:
            Mapping of label name to whether it was newly created
        """
        created = {}
        for column_id in COLUMN_ORDER:
            column = COLUMNS[column_id]
            created[column.label] = self._client.ensure_label(
                self._session.owner, self._session.repo, column.label, column.color
            )
        return created

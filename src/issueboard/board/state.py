"""In-memory board state."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from issueboard.board.classifier import is_board_issue, partition
from issueboard.board.exceptions import IssueNotOnBoardError
from issueboard.board.models import Board
from issueboard.tracker import Issue

logger = logging.getLogger("issueboard.board")


class BoardState:
    """Current issue set and the Board derived from it.

    Every change swaps in a new issue mapping and a freshly partitioned Board;
    previously returned Boards stay valid and unchanged.
    """

    def __init__(self, issues: Iterable[Issue] = ()) -> None:
        self._issues: dict[int, Issue] = {}
        self._board = Board()
        self.replace(issues)

    @property
    def board(self) -> Board:
        return self._board

    @property
    def issues(self) -> list[Issue]:
        return list(self._issues.values())

    def get(self, number: int) -> Issue | None:
        return self._issues.get(number)

    def replace(self, issues: Iterable[Issue]) -> Board:
        """Swap in a whole new issue set (pull requests are dropped)."""
        self._set({issue.number: issue for issue in issues if is_board_issue(issue)})
        return self._board

    def upsert(self, issue: Issue) -> Board:
        """Add or refresh one issue."""
        if not is_board_issue(issue):
            raise IssueNotOnBoardError(f"#{issue.number} is a pull request")
        self._set({**self._issues, issue.number: issue})
        return self._board

    def patch_labels(self, number: int, labels: Iterable[str]) -> Issue:
        """Replace the label set of one issue already on the board.

        Raises:
            IssueNotOnBoardError: If the issue is not in the current set
        """
        current = self._issues.get(number)
        if current is None:
            raise IssueNotOnBoardError(f"Issue #{number} is not on the board")
        updated = current.with_labels(labels)
        self._set({**self._issues, number: updated})
        return updated

    def _set(self, issues: dict[int, Issue]) -> None:
        self._issues = issues
        self._board = partition(issues.values())
        logger.debug("Board recomputed: %s", self._board.counts())

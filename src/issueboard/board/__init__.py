"""Board - column classification, board state and label-based status moves."""

from issueboard.board.classifier import classify, is_board_issue, partition
from issueboard.board.exceptions import BoardError, ColumnNotFoundError, IssueNotOnBoardError
from issueboard.board.models import (
    COLUMN_ORDER,
    COLUMNS,
    RESERVED_LABELS,
    Board,
    Column,
    ColumnId,
    get_column,
)
from issueboard.board.mutator import IssueClient, IssueLocks, StatusMutator, next_labels
from issueboard.board.service import BoardService
from issueboard.board.state import BoardState

__all__ = [
    "COLUMNS",
    "COLUMN_ORDER",
    "RESERVED_LABELS",
    "Board",
    "BoardError",
    "BoardService",
    "BoardState",
    "Column",
    "ColumnId",
    "ColumnNotFoundError",
    "IssueClient",
    "IssueLocks",
    "IssueNotOnBoardError",
    "StatusMutator",
    "classify",
    "get_column",
    "is_board_issue",
    "next_labels",
    "partition",
]

"""Custom exceptions for the board."""


class BoardError(Exception):
    """Base exception for board errors."""


class ColumnNotFoundError(BoardError):
    """Column with given id does not exist."""


class IssueNotOnBoardError(BoardError):
    """Issue is not part of the current board (unknown or a pull request)."""

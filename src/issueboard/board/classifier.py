"""Column classifier - maps an issue to exactly one board column."""

from __future__ import annotations

from collections.abc import Iterable
from types import MappingProxyType

from issueboard.board.models import COLUMN_ORDER, COLUMNS, Board, ColumnId
from issueboard.tracker import Issue


def classify(issue: Issue) -> ColumnId:
    """Return the column an issue belongs to.

    Reserved labels are checked in column order (todo, doing, done) and the
    first one present wins, even over a closed state. Issues without a
    reserved label go to done when closed and to todo otherwise.
    """
    for column_id in COLUMN_ORDER:
        if issue.has_label(COLUMNS[column_id].label):
            return column_id
    if issue.is_closed:
        return ColumnId.DONE
    return ColumnId.TODO


def is_board_issue(issue: Issue) -> bool:
    """Pull requests share the issues endpoint but never appear on the board."""
    return not issue.is_pull_request


def partition(issues: Iterable[Issue]) -> Board:
    """Group issues into a new Board, newest (highest number) first."""
    grouped: dict[ColumnId, list[Issue]] = {column_id: [] for column_id in COLUMN_ORDER}
    for issue in issues:
        if is_board_issue(issue):
            grouped[classify(issue)].append(issue)

    return Board(
        columns=MappingProxyType(
            {
                column_id: tuple(sorted(items, key=lambda i: i.number, reverse=True))
                for column_id, items in grouped.items()
            }
        )
    )

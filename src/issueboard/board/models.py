"""Column configuration and the derived Board snapshot."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType

from issueboard.board.exceptions import ColumnNotFoundError
from issueboard.tracker import Issue


class ColumnId(StrEnum):
    """Fixed board columns."""

    TODO = "todo"
    DOING = "doing"
    DONE = "done"


@dataclass(frozen=True)
class Column:
    """Static column definition: display title and reserved label."""

    id: ColumnId
    title: str
    label: str
    color: str  # label colour used when creating the reserved label


COLUMN_ORDER: tuple[ColumnId, ...] = (ColumnId.TODO, ColumnId.DOING, ColumnId.DONE)

COLUMNS: Mapping[ColumnId, Column] = MappingProxyType(
    {
        ColumnId.TODO: Column(ColumnId.TODO, "Todo", "kb:todo", "6e7681"),
        ColumnId.DOING: Column(ColumnId.DOING, "Doing", "kb:doing", "1f6feb"),
        ColumnId.DONE: Column(ColumnId.DONE, "Done", "kb:done", "2da44e"),
    }
)

RESERVED_LABELS: frozenset[str] = frozenset(column.label for column in COLUMNS.values())


def get_column(column_id: ColumnId | str) -> Column:
    """Look up a column by id.

    Raises:
        ColumnNotFoundError: If the id is not one of todo/doing/done
    """
    try:
        return COLUMNS[ColumnId(column_id)]
    except ValueError as e:
        raise ColumnNotFoundError(
            f"Column '{column_id}' not found. Available: {[c.value for c in COLUMN_ORDER]}"
        ) from e


@dataclass(frozen=True)
class Board:
    """Partition of the issue set into the three columns.

    Each column holds issues sorted by descending number. Boards are rebuilt,
    never edited.
    """

    columns: Mapping[ColumnId, tuple[Issue, ...]] = field(
        default_factory=lambda: MappingProxyType({column: () for column in COLUMN_ORDER})
    )

    def issues(self, column_id: ColumnId | str) -> tuple[Issue, ...]:
        return self.columns[get_column(column_id).id]

    def column_of(self, number: int) -> ColumnId | None:
        """Return the column holding the given issue number, if any."""
        for column_id in COLUMN_ORDER:
            if any(issue.number == number for issue in self.columns[column_id]):
                return column_id
        return None

    def counts(self) -> dict[ColumnId, int]:
        return {column_id: len(self.columns[column_id]) for column_id in COLUMN_ORDER}

    def __len__(self) -> int:
        return sum(len(issues) for issues in self.columns.values())

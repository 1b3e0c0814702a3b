"""Status mutator - moves an issue between columns by rewriting its labels."""

from __future__ import annotations

import logging
import threading
import weakref
from collections.abc import Iterable
from typing import TYPE_CHECKING, Protocol

from issueboard.board.models import COLUMNS, ColumnId, get_column
from issueboard.tracker import Issue, dedupe_labels

if TYPE_CHECKING:
    from issueboard.session import SessionContext

logger = logging.getLogger("issueboard.board")


class IssueClient(Protocol):
    """Interface for the remote issue client."""

    def list_issues(self, owner: str, repo: str) -> list[Issue]:
        """List issues (first page, open and closed)."""
        ...

    def get_issue(self, owner: str, repo: str, number: int) -> Issue:
        """Fetch one issue."""
        ...

    def set_labels(self, owner: str, repo: str, number: int, labels: Iterable[str]) -> list[str]:
        """Replace an issue's label set."""
        ...

    def ensure_label(self, owner: str, repo: str, name: str, color: str) -> bool:
        """Create a label if missing."""
        ...

    def close(self) -> None:
        """Release the underlying connection."""
        ...


def next_labels(labels: Iterable[str], target: ColumnId | str) -> list[str]:
    """Compute the label set that puts an issue in ``target``.

    The other two reserved labels are removed, the target's label is added,
    and every other label is carried over in its original order.
    """
    target_label = get_column(target).label
    other_labels = {column.label for column in COLUMNS.values() if column.label != target_label}
    kept = [label for label in labels if label not in other_labels]
    return list(dedupe_labels([*kept, target_label]))


class IssueLocks:
    """One lock per (owner, repo, number) so moves on an issue run one at a time.

    Locks are held weakly: an entry lives only while some request holds or
    waits on it.
    """

    def __init__(self) -> None:
        self._locks: weakref.WeakValueDictionary[tuple[str, str, int], threading.Lock] = (
            weakref.WeakValueDictionary()
        )
        self._guard = threading.Lock()

    def for_issue(self, owner: str, repo: str, number: int) -> threading.Lock:
        key = (owner.lower(), repo.lower(), number)
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

    def __len__(self) -> int:
        return len(self._locks)


class StatusMutator:
    """Persists column moves through the tracker's whole-set label replace."""

    def __init__(self, client: IssueClient, session: SessionContext) -> None:
        self._client = client
        self._session = session

    def move_issue(self, issue: Issue, target: ColumnId | str) -> list[str]:
        """Move an issue to ``target``.

        The complete resulting label set is sent, since the remote replace
        drops any label that is left out.

        Returns:
            The label set the tracker reports as applied

        Raises:
            ColumnNotFoundError: If ``target`` is not a column id
            RemoteRejectedError: If the tracker rejects the update
        """
        column = get_column(target)
        labels = next_labels(issue.labels, column.id)
        logger.info("Moving #%d to %s", issue.number, column.id)
        return self._client.set_labels(
            self._session.owner, self._session.repo, issue.number, labels
        )

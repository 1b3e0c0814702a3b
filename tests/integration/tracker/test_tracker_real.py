"""Integration tests for IssueTrackerClient against the real GitHub API.

These tests require:
- GITHUB_TOKEN environment variable (Issues read & write)
- GITHUB_TEST_REPO environment variable (e.g., "owner/test-repo")
- At least one open issue in the test repository

The first open issue is moved through the columns and then put back with its
original labels.

Run with: pytest tests/integration/tracker/ -m real
"""

import os
from collections.abc import Generator

import pytest

from issueboard.board import BoardService, ColumnId, classify
from issueboard.session import SessionContext
from issueboard.tracker import IssueTrackerClient, RemoteRejectedError

# Skip all tests in this module if credentials not available
pytestmark = [
    pytest.mark.integration,
    pytest.mark.real,
    pytest.mark.skipif(
        not os.environ.get("GITHUB_TOKEN") or not os.environ.get("GITHUB_TEST_REPO"),
        reason="GITHUB_TOKEN and GITHUB_TEST_REPO required",
    ),
]


@pytest.fixture
def session() -> SessionContext:
    owner, repo = os.environ["GITHUB_TEST_REPO"].split("/", 1)
    return SessionContext(token=os.environ["GITHUB_TOKEN"], owner=owner, repo=repo)


@pytest.fixture
def tracker_client(session: SessionContext) -> Generator[IssueTrackerClient, None, None]:
    client = IssueTrackerClient(token=session.token)
    yield client
    client.close()


class TestRealTracker:
    def test_list_issues(self, tracker_client: IssueTrackerClient, session: SessionContext) -> None:
        issues = tracker_client.list_issues(session.owner, session.repo)

        assert isinstance(issues, list)
        for issue in issues:
            assert issue.number > 0
            assert issue.url.startswith("https://")

    def test_ensure_labels_twice(
        self, tracker_client: IssueTrackerClient, session: SessionContext
    ) -> None:
        service = BoardService(tracker_client, session)

        service.ensure_labels()
        assert service.ensure_labels() == {"kb:todo": False, "kb:doing": False, "kb:done": False}

    def test_move_round_trip(
        self, tracker_client: IssueTrackerClient, session: SessionContext
    ) -> None:
        service = BoardService(tracker_client, session)
        service.ensure_labels()
        board = service.load()
        candidates = [i for i in board.issues(ColumnId.TODO) if not i.is_closed]
        if not candidates:
            pytest.skip("No open issue in the todo column")
        original = candidates[0]

        try:
            moved = service.move(original.number, ColumnId.DOING)
            assert classify(moved) == ColumnId.DOING
            assert service.board.column_of(original.number) == ColumnId.DOING
            for label in original.labels:
                if not label.startswith("kb:"):
                    assert label in moved.labels
        finally:
            service.set_labels(original.number, original.labels)

    def test_missing_issue_rejected(
        self, tracker_client: IssueTrackerClient, session: SessionContext
    ) -> None:
        with pytest.raises(RemoteRejectedError) as exc_info:
            tracker_client.get_issue(session.owner, session.repo, 999_999_999)

        assert exc_info.value.status_code == 404

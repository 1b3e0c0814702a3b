"""Unit tests for issue routes."""

import httpx
import pytest
from fastapi.testclient import TestClient
from helpers import FakeTracker

from issueboard.tracker import IssueDecodeError, RemoteRejectedError


def _buttons(data: dict) -> dict[str, bool]:
    return {button["column"]: button["active"] for button in data["status_buttons"]}


@pytest.mark.unit
class TestGetIssue:
    """Tests for GET /issues/{number}."""

    def test_detail_with_status_buttons(self, authed_client: TestClient) -> None:
        response = authed_client.get("/api/v1/issues/9")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["number"] == 9
        assert data["state"] == "closed"
        assert data["column"] == "todo"
        assert _buttons(data) == {"todo": True, "doing": False, "done": False}
        assert [b["title"] for b in data["status_buttons"]] == ["Todo", "Doing", "Done"]

    def test_unknown_issue_returns_remote_404(self, authed_client: TestClient) -> None:
        response = authed_client.get("/api/v1/issues/999")

        assert response.status_code == 404
        assert response.json()["status"] == 404

    def test_requires_session(self, api_client: TestClient) -> None:
        response = api_client.get("/api/v1/issues/9")

        assert response.status_code == 401
        assert response.json()["error"] == "missing_session"

    def test_rejects_non_positive_number(self, authed_client: TestClient) -> None:
        assert authed_client.get("/api/v1/issues/0").status_code == 422


@pytest.mark.unit
class TestMoveIssue:
    """Tests for PUT /issues/{number}/column."""

    def test_open_issue_round_trip(self, authed_client: TestClient, tracker: FakeTracker) -> None:
        data = authed_client.put("/api/v1/issues/7/column", json={"column": "doing"}).json()["data"]
        assert data["labels"] == ["kb:doing"]
        assert data["column"] == "doing"
        assert _buttons(data) == {"todo": False, "doing": True, "done": False}

        data = authed_client.put("/api/v1/issues/7/column", json={"column": "todo"}).json()["data"]
        assert data["labels"] == ["kb:todo"]
        assert tracker.issues[7].labels == ("kb:todo",)

    def test_closed_issue_to_done(self, authed_client: TestClient) -> None:
        response = authed_client.put("/api/v1/issues/9/column", json={"column": "done"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert set(data["labels"]) == {"priority:high", "kb:done"}
        assert data["column"] == "done"

    def test_board_reflects_move(self, authed_client: TestClient) -> None:
        authed_client.put("/api/v1/issues/12/column", json={"column": "done"})

        columns = authed_client.get("/api/v1/board").json()["data"]["columns"]
        done = [card["number"] for card in columns[2]["cards"]]
        assert done == [15, 12]

    def test_forbidden_surfaces_status_and_body(
        self, authed_client: TestClient, tracker: FakeTracker
    ) -> None:
        tracker.fail_with = RemoteRejectedError(
            403, "Forbidden", '{"message": "Resource not accessible"}'
        )

        response = authed_client.put("/api/v1/issues/9/column", json={"column": "done"})

        assert response.status_code == 403
        data = response.json()
        assert "403" in data["error"]
        assert data["status_text"] == "Forbidden"
        assert "Resource not accessible" in data["body"]
        assert tracker.issues[9].labels == ("kb:todo", "priority:high")

    def test_network_failure_is_bad_gateway(
        self, authed_client: TestClient, tracker: FakeTracker
    ) -> None:
        tracker.fail_with = httpx.ConnectError("connection refused")

        response = authed_client.put("/api/v1/issues/7/column", json={"column": "done"})

        assert response.status_code == 502
        assert response.json() == {"data": None, "error": "connection refused"}

    def test_remote_redirect_is_bad_gateway(
        self, authed_client: TestClient, tracker: FakeTracker
    ) -> None:
        tracker.fail_with = RemoteRejectedError(301, "Moved Permanently", "")

        response = authed_client.put("/api/v1/issues/7/column", json={"column": "doing"})

        assert response.status_code == 502
        data = response.json()
        assert data["status"] == 301
        assert data["status_text"] == "Moved Permanently"

    def test_non_json_tracker_body_is_bad_gateway(
        self, authed_client: TestClient, tracker: FakeTracker
    ) -> None:
        tracker.fail_with = IssueDecodeError("Tracker returned a non-JSON body (text/html)")

        response = authed_client.put("/api/v1/issues/7/column", json={"column": "doing"})

        assert response.status_code == 502
        assert "non-JSON" in response.json()["error"]

    def test_unknown_column_is_bad_request(
        self, authed_client: TestClient, tracker: FakeTracker
    ) -> None:
        response = authed_client.put("/api/v1/issues/7/column", json={"column": "archive"})

        assert response.status_code == 400
        assert "archive" in response.json()["error"]
        assert tracker.set_label_calls == []

    def test_pull_request_not_movable(self, authed_client: TestClient) -> None:
        response = authed_client.put("/api/v1/issues/20/column", json={"column": "done"})

        assert response.status_code == 404
        assert "pull request" in response.json()["error"]

    def test_requires_session(self, api_client: TestClient, tracker: FakeTracker) -> None:
        response = api_client.put("/api/v1/issues/7/column", json={"column": "done"})

        assert response.status_code == 401
        assert tracker.set_label_calls == []


@pytest.mark.unit
class TestSetLabels:
    """Tests for PUT /issues/{number}/labels."""

    def test_forwards_labels_verbatim(self, authed_client: TestClient, tracker: FakeTracker) -> None:
        response = authed_client.put(
            "/api/v1/issues/7/labels", json={"labels": ["bug", "kb:done"]}
        )

        assert response.status_code == 200
        assert response.json()["data"]["labels"] == ["bug", "kb:done"]
        assert tracker.set_label_calls == [("acme", "widgets", 7, ["bug", "kb:done"])]

    def test_non_string_entries_dropped(
        self, authed_client: TestClient, tracker: FakeTracker
    ) -> None:
        authed_client.put("/api/v1/issues/7/labels", json={"labels": ["bug", 3, None]})

        assert tracker.set_label_calls[-1][3] == ["bug"]

    def test_non_list_becomes_empty(self, authed_client: TestClient, tracker: FakeTracker) -> None:
        response = authed_client.put("/api/v1/issues/7/labels", json={"labels": "bug"})

        assert response.status_code == 200
        assert tracker.set_label_calls[-1][3] == []

    def test_missing_session_is_unauthorized(
        self, api_client: TestClient, tracker: FakeTracker
    ) -> None:
        response = api_client.put("/api/v1/issues/7/labels", json={"labels": ["bug"]})

        assert response.status_code == 401
        assert response.json() == {"data": None, "error": "missing_session"}
        assert tracker.set_label_calls == []

    def test_remote_error_passed_through(
        self, authed_client: TestClient, tracker: FakeTracker
    ) -> None:
        tracker.fail_with = RemoteRejectedError(422, "Unprocessable Entity", '{"message": "bad"}')

        response = authed_client.put("/api/v1/issues/7/labels", json={"labels": ["x"]})

        assert response.status_code == 422
        assert response.json()["status"] == 422
        assert response.json()["body"] == '{"message": "bad"}'

"""Test helpers: issue builders and an in-memory tracker."""

from __future__ import annotations

from collections.abc import Iterable

from issueboard.tracker import Issue, IssueState, RemoteRejectedError


def make_issue(
    number: int,
    state: str = "open",
    labels: Iterable[str] = (),
    *,
    title: str | None = None,
    pull_request: bool = False,
    body: str | None = None,
) -> Issue:
    """Build an Issue with sensible defaults."""
    return Issue(
        id=1000 + number,
        number=number,
        title=title or f"Issue {number}",
        url=f"https://github.com/acme/widgets/issues/{number}",
        state=IssueState(state),
        labels=tuple(labels),
        body=body,
        is_pull_request=pull_request,
    )


def issue_node(
    number: int,
    state: str = "open",
    labels: Iterable[str] = (),
    *,
    pull_request: bool = False,
) -> dict:
    """Build a GitHub REST issue object."""
    node = {
        "id": 1000 + number,
        "number": number,
        "title": f"Issue {number}",
        "html_url": f"https://github.com/acme/widgets/issues/{number}",
        "state": state,
        "labels": [{"name": name, "color": "ededed"} for name in labels],
        "user": {"login": "octocat"},
        "body": f"Body of {number}",
        "created_at": "2025-01-02T03:04:05Z",
        "updated_at": "2025-01-03T03:04:05Z",
    }
    if pull_request:
        node["pull_request"] = {"url": f"https://api.github.com/repos/acme/widgets/pulls/{number}"}
    return node


class FakeTracker:
    """In-memory stand-in for IssueTrackerClient.

    Issues live in ``issues`` keyed by number. ``fail_with`` makes the next
    ``set_labels`` call raise instead of writing.
    """

    def __init__(self, issues: Iterable[Issue] = ()) -> None:
        self.issues: dict[int, Issue] = {issue.number: issue for issue in issues}
        self.existing_labels: set[str] = set()
        self.set_label_calls: list[tuple[str, str, int, list[str]]] = []
        self.fail_with: Exception | None = None
        self.closed = False

    def list_issues(self, owner: str, repo: str) -> list[Issue]:
        return list(self.issues.values())

    def get_issue(self, owner: str, repo: str, number: int) -> Issue:
        if number not in self.issues:
            raise RemoteRejectedError(404, "Not Found", '{"message": "Not Found"}')
        return self.issues[number]

    def set_labels(self, owner: str, repo: str, number: int, labels: Iterable[str]) -> list[str]:
        names = list(labels)
        self.set_label_calls.append((owner, repo, number, names))
        if self.fail_with is not None:
            error, self.fail_with = self.fail_with, None
            raise error
        if number not in self.issues:
            raise RemoteRejectedError(404, "Not Found", '{"message": "Not Found"}')
        self.issues[number] = self.issues[number].with_labels(names)
        return list(self.issues[number].labels)

    def ensure_label(self, owner: str, repo: str, name: str, color: str) -> bool:
        if name in self.existing_labels:
            return False
        self.existing_labels.add(name)
        return True

    def close(self) -> None:
        self.closed = True


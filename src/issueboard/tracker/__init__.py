"""Remote issue client - GitHub REST API access for issues and labels."""

from issueboard.tracker.client import API_VERSION, BASE_URL, PAGE_SIZE, IssueTrackerClient
from issueboard.tracker.exceptions import IssueDecodeError, RemoteRejectedError, TrackerError
from issueboard.tracker.models import (
    Issue,
    IssueState,
    decode_issue,
    decode_issue_list,
    decode_label_names,
    dedupe_labels,
)

__all__ = [
    "API_VERSION",
    "BASE_URL",
    "PAGE_SIZE",
    "Issue",
    "IssueDecodeError",
    "IssueState",
    "IssueTrackerClient",
    "RemoteRejectedError",
    "TrackerError",
    "decode_issue",
    "decode_issue_list",
    "decode_label_names",
    "dedupe_labels",
]

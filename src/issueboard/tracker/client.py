"""IssueTrackerClient - GitHub REST API client for issues and labels."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

import httpx

from issueboard.logging import register_secret, sanitize_for_log, truncate_output
from issueboard.tracker.exceptions import IssueDecodeError, RemoteRejectedError
from issueboard.tracker.models import (
    Issue,
    decode_issue,
    decode_issue_list,
    decode_label_names,
)

logger = logging.getLogger("issueboard.tracker")

BASE_URL = "https://api.github.com"
API_VERSION = "2022-11-28"
ACCEPT = "application/vnd.github+json"
PAGE_SIZE = 100

# Statuses GitHub uses for "label already exists"
_LABEL_EXISTS_STATUSES = frozenset({409, 422})


class IssueTrackerClient:
    """Client for the GitHub issues REST API.

    Every call is a single request: no retries and no pagination beyond
    ``PAGE_SIZE``. Non-success responses raise ``RemoteRejectedError``;
    transport failures propagate as ``httpx.TransportError``.
    """

    def __init__(
        self,
        token: str,
        base_url: str = BASE_URL,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the client.

        Args:
            token: GitHub token with Issues read & write access
            base_url: GitHub REST API URL (for testing/enterprise)
            timeout: Per-request timeout in seconds
        """
        self.token = token
        register_secret(token)
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client for the REST API."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.base_url,
                headers={
                    "Authorization": f"Bearer {self.token}",
                    "Accept": ACCEPT,
                    "X-GitHub-Api-Version": API_VERSION,
                    "Cache-Control": "no-cache",
                },
                timeout=self.timeout,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        """Send one request and reject non-success responses.

        Raises:
            RemoteRejectedError: If the tracker answers with a non-2xx status
        """
        logger.debug("%s %s", method, path)
        response = self.client.request(method, path, params=params, json=json)
        if not response.is_success:
            error = _rejection(response)
            logger.warning(
                "%s %s rejected: %s",
                method,
                path,
                sanitize_for_log(truncate_output(str(error))),
            )
            raise error
        return response

    def list_issues(self, owner: str, repo: str) -> list[Issue]:
        """List open and closed issues (first page only).

        Pull requests are returned too, flagged with ``is_pull_request``.
        """
        response = self._request(
            "GET",
            f"/repos/{owner}/{repo}/issues",
            params={"state": "all", "per_page": PAGE_SIZE},
        )
        issues = decode_issue_list(_json(response))
        logger.info("Fetched %d issue(s) from %s/%s", len(issues), owner, repo)
        return issues

    def get_issue(self, owner: str, repo: str, number: int) -> Issue:
        """Fetch one issue by its display number."""
        response = self._request("GET", f"/repos/{owner}/{repo}/issues/{number}")
        return decode_issue(_json(response))

    def set_labels(self, owner: str, repo: str, number: int, labels: Iterable[str]) -> list[str]:
        """Replace the whole label set of an issue.

        Args:
            owner: Repository owner
            repo: Repository name
            number: Issue display number
            labels: Complete label set to apply; labels left out are removed

        Returns:
            The label names the tracker reports as applied
        """
        names = list(labels)
        logger.info("Setting labels on %s/%s#%d: %s", owner, repo, number, names)
        response = self._request(
            "PUT",
            f"/repos/{owner}/{repo}/issues/{number}/labels",
            json=names,
        )
        return decode_label_names(_json(response))

    def ensure_label(self, owner: str, repo: str, name: str, color: str) -> bool:
        """Create a label unless it already exists.

        Returns:
            True if the label was created, False if it already existed
        """
        try:
            self._request(
                "POST",
                f"/repos/{owner}/{repo}/labels",
                json={"name": name, "color": color},
            )
        except RemoteRejectedError as e:
            if e.status_code in _LABEL_EXISTS_STATUSES:
                logger.debug("Label %s already exists in %s/%s", name, owner, repo)
                return False
            raise
        logger.info("Created label %s in %s/%s", name, owner, repo)
        return True


def _json(response: httpx.Response) -> Any:
    """Parse a success body; proxies and captive portals answer 200 with HTML."""
    try:
        return response.json()
    except ValueError as e:
        content_type = response.headers.get("content-type", "unknown")
        raise IssueDecodeError(f"Tracker returned a non-JSON body ({content_type})") from e


def _rejection(response: httpx.Response) -> RemoteRejectedError:
    try:
        body = response.text
    except (httpx.StreamError, UnicodeDecodeError):
        body = ""
    return RemoteRejectedError(response.status_code, response.reason_phrase, body)

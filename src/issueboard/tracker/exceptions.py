"""Custom exceptions for the remote issue client."""


class TrackerError(Exception):
    """Base exception for issue tracker errors."""


class RemoteRejectedError(TrackerError):
    """The tracker answered with a non-success HTTP status."""

    def __init__(self, status_code: int, status_text: str = "", body: str = "") -> None:
        self.status_code = status_code
        self.status_text = status_text
        self.body = body
        message = f"{status_code} {status_text}".rstrip()
        if body:
            message = f"{message} - {body}"
        super().__init__(message)


class IssueDecodeError(TrackerError):
    """A tracker response did not match the expected issue/label shape."""

"""REST API for issueboard."""

from issueboard.api.app import create_app
from issueboard.api.models import (
    APIResponse,
    BoardResponse,
    IssueDetailResponse,
    SessionStatusResponse,
)

__all__ = [
    "APIResponse",
    "BoardResponse",
    "IssueDetailResponse",
    "SessionStatusResponse",
    "create_app",
]

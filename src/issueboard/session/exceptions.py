"""Custom exceptions for session handling."""


class SessionError(Exception):
    """Base exception for session errors."""


class SessionMissingError(SessionError):
    """No token/owner/repo available for a call that needs one."""

"""issueboard - Kanban board over GitHub issues, backed by column labels."""

__version__ = "0.1.0"


def get_version() -> str:
    """Return the package version."""
    return __version__

"""Shared pytest fixtures and configuration."""

from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from helpers import FakeTracker, make_issue

from issueboard.api import create_app
from issueboard.api.dependencies import get_client_factory
from issueboard.config import SessionMode, Settings
from issueboard.session import SessionContext


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")
    config.addinivalue_line("markers", "real: talks to the real GitHub API (local only)")


@pytest.fixture
def session_context() -> SessionContext:
    return SessionContext(token="ghp_test", owner="acme", repo="widgets", display_name="Ada")


@pytest.fixture
def tracker() -> FakeTracker:
    """Tracker holding a small mixed board."""
    return FakeTracker(
        [
            make_issue(7),
            make_issue(9, "closed", ["kb:todo", "priority:high"]),
            make_issue(12, "open", ["kb:doing", "bug"]),
            make_issue(15, "closed"),
            make_issue(20, "open", ["kb:todo"], pull_request=True),
        ]
    )


@pytest.fixture
def factory_sessions() -> list[SessionContext]:
    """Sessions the app asked the client factory for, in call order."""
    return []


@pytest.fixture
def server_settings() -> Settings:
    # Plain-http test client, so cookies must not be marked Secure
    return Settings(session_mode=SessionMode.SERVER, cookie_secure=False)


@pytest.fixture
def client_settings() -> Settings:
    return Settings(
        session_mode=SessionMode.CLIENT,
        store_path=":memory:",
        default_owner="your-org",
        default_repo="kanban",
    )


def _client_for(
    settings: Settings, tracker: FakeTracker, sessions: list[SessionContext]
) -> Generator[TestClient, None, None]:
    app = create_app(settings)

    def factory(session: SessionContext) -> FakeTracker:
        sessions.append(session)
        return tracker

    app.dependency_overrides[get_client_factory] = lambda: factory
    with TestClient(app) as client:
        yield client


@pytest.fixture
def api_client(
    server_settings: Settings, tracker: FakeTracker, factory_sessions: list[SessionContext]
) -> Generator[TestClient, None, None]:
    """Test client for a cookie-session app backed by ``tracker``."""
    yield from _client_for(server_settings, tracker, factory_sessions)


@pytest.fixture
def local_api_client(
    client_settings: Settings, tracker: FakeTracker, factory_sessions: list[SessionContext]
) -> Generator[TestClient, None, None]:
    """Test client for a local-store app backed by ``tracker``."""
    yield from _client_for(client_settings, tracker, factory_sessions)


@pytest.fixture
def authed_client(api_client: TestClient) -> TestClient:
    """Cookie-session client already signed in to acme/widgets."""
    response = api_client.post(
        "/api/v1/session", json={"token": "ghp_test", "owner": "acme", "repo": "widgets"}
    )
    assert response.status_code == 200
    return api_client

"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- Signed-in user sessions
- A fake identity provider that never touches the network
- Test application assembly
"""

from unittest.mock import MagicMock
from urllib.parse import urlencode

import pytest
from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from spiritual_cookie.api.errors import install_error_handlers
from spiritual_cookie.api.routes import router as api_router
from spiritual_cookie.config.settings import Settings, get_settings
from spiritual_cookie.domain.ports import PrayerRequestRepository, UserSession
from spiritual_cookie.web import pages_router


class FakeIdentityProvider:
    """IdentityProvider double that returns a fixed user."""

    id = "fake"
    name = "Fake"

    def __init__(self, user: UserSession, error: Exception | None = None) -> None:
        self.user = user
        self.error = error
        self.calls: list[tuple[str, str, str]] = []

    def authorization_url(self, redirect_uri: str, state: str, nonce: str) -> str:
        query = urlencode({"redirect_uri": redirect_uri, "state": state, "nonce": nonce})
        return f"https://idp.example/authorize?{query}"

    def authenticate(self, code: str, redirect_uri: str, nonce: str) -> UserSession:
        self.calls.append((code, redirect_uri, nonce))
        if self.error is not None:
            raise self.error
        return self.user


@pytest.fixture
def user() -> UserSession:
    """Signed-in user used across tests."""
    return UserSession(id="google-sub-123", email="ana@example.com", name="Ana")


@pytest.fixture
def fake_provider(user: UserSession) -> FakeIdentityProvider:
    return FakeIdentityProvider(user)


@pytest.fixture
def repository() -> MagicMock:
    """Mock repository recording inserts."""
    return MagicMock(spec=PrayerRequestRepository)


def build_app(providers: dict) -> FastAPI:
    """Assemble the application without the database lifespan."""
    test_app = FastAPI()
    test_app.add_middleware(SessionMiddleware, secret_key="test-secret")
    install_error_handlers(test_app)
    test_app.include_router(api_router, prefix="/api")
    test_app.include_router(pages_router)
    test_app.state.providers = providers
    test_app.state.pool = MagicMock()
    test_app.dependency_overrides[get_settings] = lambda: Settings(
        public_base_url="http://testserver"
    )
    return test_app


@pytest.fixture
def make_app():
    """Factory fixture building a test application for a provider registry."""
    return build_app

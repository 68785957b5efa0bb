"""
Unit tests for the prayer submission route.

Tests endpoint responses with mocked dependencies.
"""

from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from spiritual_cookie.api.dependencies import get_current_session, get_repository
from spiritual_cookie.api.errors import install_error_handlers
from spiritual_cookie.api.routes.prayer import router
from spiritual_cookie.domain.exceptions import StorageError
from spiritual_cookie.domain.ports import PrayerRequest, UserSession

VALID_BODY = {"name": "Ana", "email": "ana@example.com", "prayer": "For my family"}


@pytest.fixture
def app(repository: MagicMock) -> FastAPI:
    """Create test FastAPI application with the prayer router."""
    test_app = FastAPI()
    install_error_handlers(test_app)
    test_app.include_router(router, prefix="/api")
    test_app.dependency_overrides[get_repository] = lambda: repository
    return test_app


@pytest.fixture
def signed_in_client(app: FastAPI, user: UserSession) -> TestClient:
    """Client whose requests carry a valid session."""
    app.dependency_overrides[get_current_session] = lambda: user
    return TestClient(app)


@pytest.fixture
def signed_out_client(app: FastAPI) -> TestClient:
    """Client whose requests carry no session."""
    app.dependency_overrides[get_current_session] = lambda: None
    return TestClient(app)


class TestSubmitSuccess:
    """Tests for accepted submissions."""

    def test_submit_returns_200(self, signed_in_client: TestClient) -> None:
        """Valid submission with a session returns 200 and the success message."""
        response = signed_in_client.post("/api/prayer", json=VALID_BODY)

        assert response.status_code == 200
        assert response.json() == {"message": "Prayer request submitted successfully"}

    def test_submit_inserts_one_record(
        self, signed_in_client: TestClient, repository: MagicMock
    ) -> None:
        """Exactly one record with the form values and session user is inserted."""
        signed_in_client.post("/api/prayer", json=VALID_BODY)

        repository.add.assert_called_once()
        record = repository.add.call_args[0][0]
        assert isinstance(record, PrayerRequest)
        assert (record.name, record.email, record.prayer) == (
            "Ana",
            "ana@example.com",
            "For my family",
        )
        assert record.user == "ana@example.com"
        assert record.date is not None

    def test_extra_user_field_is_ignored(
        self, signed_in_client: TestClient, repository: MagicMock
    ) -> None:
        """A client cannot choose the stored user."""
        body = {**VALID_BODY, "user": "attacker@example.com"}

        response = signed_in_client.post("/api/prayer", json=body)

        assert response.status_code == 200
        assert repository.add.call_args[0][0].user == "ana@example.com"


class TestUnauthenticated:
    """Tests for submissions without a session."""

    def test_no_session_returns_401(self, signed_out_client: TestClient) -> None:
        """Missing session returns 401 Unauthorized."""
        response = signed_out_client.post("/api/prayer", json=VALID_BODY)

        assert response.status_code == 401
        assert response.json() == {"message": "Unauthorized"}

    def test_no_session_inserts_nothing(
        self, signed_out_client: TestClient, repository: MagicMock
    ) -> None:
        """No database interaction happens without a session."""
        signed_out_client.post("/api/prayer", json=VALID_BODY)

        repository.add.assert_not_called()

    def test_no_session_checked_before_fields(self, signed_out_client: TestClient) -> None:
        """Session check wins over field validation."""
        response = signed_out_client.post("/api/prayer", json={"name": ""})

        assert response.status_code == 401


class TestMissingFields:
    """Tests for presence validation."""

    @pytest.mark.parametrize("field", ["name", "email", "prayer"])
    def test_empty_field_returns_400(
        self, signed_in_client: TestClient, repository: MagicMock, field: str
    ) -> None:
        """An empty required field returns 400 and inserts nothing."""
        body = {**VALID_BODY, field: ""}

        response = signed_in_client.post("/api/prayer", json=body)

        assert response.status_code == 400
        assert response.json() == {"message": "All fields are required"}
        repository.add.assert_not_called()

    @pytest.mark.parametrize("field", ["name", "email", "prayer"])
    def test_missing_field_returns_400(
        self, signed_in_client: TestClient, repository: MagicMock, field: str
    ) -> None:
        """An absent required field returns 400 and inserts nothing."""
        body = {k: v for k, v in VALID_BODY.items() if k != field}

        response = signed_in_client.post("/api/prayer", json=body)

        assert response.status_code == 400
        repository.add.assert_not_called()

    def test_null_field_returns_400(self, signed_in_client: TestClient) -> None:
        """A null field counts as missing."""
        response = signed_in_client.post("/api/prayer", json={**VALID_BODY, "prayer": None})

        assert response.status_code == 400

    def test_non_string_field_returns_400(self, signed_in_client: TestClient) -> None:
        """Mistyped fields are reported like missing ones, not 422."""
        response = signed_in_client.post("/api/prayer", json={**VALID_BODY, "name": 42})

        assert response.status_code == 400
        assert response.json() == {"message": "All fields are required"}

    def test_malformed_json_returns_400(self, signed_in_client: TestClient) -> None:
        """A body that is not JSON returns 400."""
        response = signed_in_client.post(
            "/api/prayer",
            content=b"name=Ana",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400


class TestStorageFailure:
    """Tests for database failures."""

    def test_storage_error_returns_500(
        self, signed_in_client: TestClient, repository: MagicMock
    ) -> None:
        """Storage failure returns a generic 500."""
        repository.add.side_effect = StorageError("connection refused")

        response = signed_in_client.post("/api/prayer", json=VALID_BODY)

        assert response.status_code == 500
        assert response.json() == {"message": "Internal Server Error"}

    def test_storage_error_does_not_leak_cause(
        self, signed_in_client: TestClient, repository: MagicMock
    ) -> None:
        """The underlying failure reason never reaches the client."""
        repository.add.side_effect = StorageError("password authentication failed")

        response = signed_in_client.post("/api/prayer", json=VALID_BODY)

        assert "password" not in response.text


class TestMethodNotAllowed:
    """Tests for non-POST methods."""

    @pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE"])
    def test_other_methods_return_405(
        self, signed_in_client: TestClient, repository: MagicMock, method: str
    ) -> None:
        """Any method other than POST returns 405 with a message body."""
        response = signed_in_client.request(method, "/api/prayer")

        assert response.status_code == 405
        assert response.json() == {"message": "Method Not Allowed"}
        repository.add.assert_not_called()


class TestUnexpectedFailure:
    """Tests for errors no route maps explicitly."""

    def test_unexpected_error_is_message_shaped(
        self, app: FastAPI, user: UserSession, repository: MagicMock
    ) -> None:
        """Unhandled exceptions return a generic 500 with a message body."""
        repository.add.side_effect = RuntimeError("driver bug")
        app.dependency_overrides[get_current_session] = lambda: user
        client = TestClient(app, raise_server_exceptions=False)

        response = client.post("/api/prayer", json=VALID_BODY)

        assert response.status_code == 500
        assert response.json() == {"message": "Internal Server Error"}
        assert "driver bug" not in response.text

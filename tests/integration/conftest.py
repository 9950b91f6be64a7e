"""
Integration Test Fixtures.

Fixtures for integration tests - uses a real database and the full app.
These fixtures build on the root conftest.py database fixtures.
"""

from collections.abc import AsyncGenerator, Generator
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from cloudnotes.backend.core.database import get_db_session

TEST_USER_ID = "user-alice"
OTHER_USER_ID = "user-bob"


# =============================================================================
# Settings Fixtures
# =============================================================================


def _create_mock_settings() -> Any:
    """Create a mock secrets object; there is no config/.env in tests."""
    settings = MagicMock()
    settings.db_password = "test_pass"
    settings.jwt_secret = "test-secret-key"
    return settings


@pytest.fixture
def mock_settings() -> Generator[Any, None, None]:
    """
    Patch get_settings wherever it was imported by name.

    Active for the whole test so tokens are signed and verified with the
    same secret.
    """
    settings = _create_mock_settings()
    with patch("cloudnotes.backend.core.config.get_settings", return_value=settings), \
         patch("cloudnotes.backend.core.security.get_settings", return_value=settings):
        yield settings


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
async def client(
    db_session: AsyncSession,
    mock_settings: Any,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with database session override.

    Every request in the test shares the test session, which is rolled
    back afterwards.

    Usage:
        async def test_health_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    from cloudnotes.backend.main import create_app

    app = create_app()
    app.dependency_overrides[get_db_session] = override_get_db_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# Authentication Fixtures
# =============================================================================


def make_auth_headers(user_id: str) -> dict[str, str]:
    """Bearer headers for a token whose subject is user_id."""
    from cloudnotes.backend.core.security import create_access_token

    token = create_access_token(data={"sub": user_id, "email": f"{user_id}@example.com"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(mock_settings: Any) -> dict[str, str]:
    """
    Authentication headers for the main test user.

    Usage:
        async def test_list_notes(client: AsyncClient, auth_headers: dict):
            response = await client.get("/api/v1/notes", headers=auth_headers)
            assert response.status_code == 200
    """
    return make_auth_headers(TEST_USER_ID)


@pytest.fixture
def other_auth_headers(mock_settings: Any) -> dict[str, str]:
    """Authentication headers for a second, unrelated user."""
    return make_auth_headers(OTHER_USER_ID)


@pytest.fixture
def test_user_id() -> str:
    """Subject of the tokens in auth_headers, for rows inserted directly."""
    return TEST_USER_ID


# =============================================================================
# API Response Assertion Helpers
# =============================================================================


class ApiAssertions:
    """Helper class for API response assertions."""

    @staticmethod
    def assert_success(response: Any, expected_status: int = 200) -> dict[str, Any]:
        """
        Assert API response is successful.

        Returns:
            Response JSON data
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is True, f"Response not successful: {data}"
        return data

    @staticmethod
    def assert_error(
        response: Any,
        expected_status: int,
        expected_code: str | None = None,
    ) -> dict[str, Any]:
        """
        Assert API response is an error.

        Returns:
            Response JSON data
        """
        assert response.status_code == expected_status, (
            f"Expected status {expected_status}, got {response.status_code}: "
            f"{response.text}"
        )
        data = response.json()
        assert data.get("success") is False, f"Response should be error: {data}"
        assert data.get("error") is not None, f"Missing error details: {data}"

        if expected_code:
            actual_code = data["error"].get("code")
            assert actual_code == expected_code, (
                f"Expected error code {expected_code}, got {actual_code}"
            )

        return data

    @staticmethod
    def assert_validation_error(
        response: Any,
        field: str | None = None,
    ) -> dict[str, Any]:
        """Assert API response is a request validation error (422)."""
        data = ApiAssertions.assert_error(response, 422, "VAL_REQUEST_INVALID")

        if field:
            errors = data["error"].get("details", {}).get("validation_errors", [])
            fields = [e.get("field", "") for e in errors]
            assert any(field in f for f in fields), (
                f"Expected validation error for field '{field}', "
                f"got errors for: {fields}"
            )

        return data


@pytest.fixture
def api() -> ApiAssertions:
    """Provide API assertion helpers."""
    return ApiAssertions()

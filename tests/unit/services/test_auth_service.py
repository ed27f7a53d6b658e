"""Tests for admin login."""

import pytest

from src.dashboard.core.errors import ApiError
from src.dashboard.core.models.session import AdminSession
from src.dashboard.core.services.api_client import SESSION_KEY
from src.dashboard.core.services.auth_service import AuthService


class TestAuthService:
    """Test login, logout and the stored session."""

    @pytest.mark.asyncio
    async def test_login_stores_session(self, api, backend, session_storage):
        """Test a successful login keeps the token for later requests."""
        backend.add(
            "POST",
            "/api/auth/admin-login",
            {"token": "jwt-1", "admin": {"email": "admin@shop.test", "name": "Ada"}},
        )

        async with api:
            session = await AuthService(api, session_storage).login("admin@shop.test", "secret")

        assert backend.last_json() == {"email": "admin@shop.test", "password": "secret"}
        assert session.display_name == "Ada"
        stored = await session_storage.get(SESSION_KEY, AdminSession)
        assert stored.token == "jwt-1"
        assert stored.expires_at - stored.created_at == 86400

    @pytest.mark.asyncio
    async def test_login_without_token_fails(self, api, backend, session_storage):
        """Test a response without a token is refused."""
        backend.add("POST", "/api/auth/admin-login", {"admin": {}})

        async with api:
            with pytest.raises(ValueError):
                await AuthService(api, session_storage).login("admin@shop.test", "secret")

        assert not await session_storage.exists(SESSION_KEY, AdminSession)

    @pytest.mark.asyncio
    async def test_bad_credentials(self, api, backend, session_storage):
        """Test rejected credentials surface as an API error."""
        backend.add(
            "POST", "/api/auth/admin-login", {"error": "Invalid credentials"}, status_code=401
        )

        async with api:
            with pytest.raises(ApiError) as excinfo:
                await AuthService(api, session_storage).login("admin@shop.test", "nope")

        assert excinfo.value.status_code == 401

    @pytest.mark.asyncio
    async def test_logout_forgets_session(self, api, session_storage):
        """Test logging out removes the stored session."""
        await session_storage.set(SESSION_KEY, AdminSession.create(token="jwt-1"), 60)
        service = AuthService(api, session_storage)

        await service.logout()

        assert await service.current_session() is None

"""Admin login and logout."""

from loguru import logger

from src.dashboard.core.models.session import AdminSession
from src.dashboard.core.services.api_client import SESSION_KEY, ApiClient
from src.dashboard.core.storage.session_storage import SessionStorage
from src.dashboard.runtime.context import get_config


class AuthService:
    """Exchange admin credentials for a token and keep it in the session store."""

    def __init__(self, api: ApiClient, storage: SessionStorage):
        self.api = api
        self.storage = storage

    async def login(self, email: str, password: str) -> AdminSession:
        data = await self.api.post(
            "/auth/admin-login", json={"email": email, "password": password}
        )
        token = (data or {}).get("token")
        if not token:
            raise ValueError("Login response did not include a token")

        session = AdminSession.create(
            token=token,
            admin=data.get("admin"),
            ttl_seconds=get_config().session.ttl_seconds,
        )
        await self.storage.set(SESSION_KEY, session, get_config().session.ttl_seconds)
        logger.info(f"Logged in as {session.display_name}")
        return session

    async def logout(self) -> None:
        await self.storage.delete(SESSION_KEY)

    async def current_session(self) -> AdminSession | None:
        return await self.storage.get(SESSION_KEY, AdminSession)

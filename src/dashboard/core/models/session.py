"""Admin session model."""

import time
from typing import Any

from pydantic import BaseModel, Field


class AdminSession(BaseModel):
    """Result of a successful admin login, kept in the session store."""

    token: str = Field(description="Bearer token issued by the backend")
    admin: dict[str, Any] = Field(
        default_factory=dict, description="Admin profile returned with the token"
    )
    created_at: int = Field(description="Creation timestamp")
    expires_at: int = Field(description="Expiration timestamp")

    @classmethod
    def create(
        cls,
        token: str,
        admin: dict[str, Any] | None = None,
        ttl_seconds: int = 86400,
    ) -> "AdminSession":
        """Create a new admin session with timestamps."""
        now = int(time.time())
        return cls(
            token=token,
            admin=admin or {},
            created_at=now,
            expires_at=now + ttl_seconds,
        )

    def is_expired(self) -> bool:
        """Check if session is expired."""
        return time.time() > self.expires_at

    @property
    def display_name(self) -> str:
        return str(self.admin.get("name") or self.admin.get("email") or "admin")

"""Session storage interface and implementations.

The admin token lives here rather than in a process-wide HTTP default; the
request context reads it at each call boundary.
"""

from __future__ import annotations

import json
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, TypeVar

from loguru import logger
from pydantic import BaseModel, ValidationError

T = TypeVar("T", bound=BaseModel)


class SessionStorage(ABC):
    """Abstract interface for session storage backends."""

    @abstractmethod
    async def set(self, key: str, value: BaseModel, ttl_seconds: int) -> None:
        """Store a session with TTL.

        Args:
            key: Session identifier
            value: Session data (Pydantic model)
            ttl_seconds: Time to live in seconds
        """

    @abstractmethod
    async def get(self, key: str, model_class: type[T]) -> T | None:
        """Retrieve a session.

        Args:
            key: Session identifier
            model_class: Pydantic model class to deserialize to

        Returns:
            Session data or None if not found/expired
        """

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete a session."""

    async def exists(self, key: str, model_class: type[T]) -> bool:
        """Check if a valid, non-expired session exists."""
        return await self.get(key, model_class) is not None


class InMemorySessionStorage(SessionStorage):
    """In-memory session storage with TTL support."""

    def __init__(self):
        self._data: dict[str, dict[str, Any]] = {}

    async def set(self, key: str, value: BaseModel, ttl_seconds: int) -> None:
        self._data[key] = {
            "data": json.loads(value.model_dump_json()),
            "expires_at": time.time() + ttl_seconds,
        }

    async def get(self, key: str, model_class: type[T]) -> T | None:
        entry = self._data.get(key)
        if entry is None:
            return None

        if time.time() > entry["expires_at"]:
            del self._data[key]
            return None

        try:
            return model_class.model_validate(entry["data"])
        except ValidationError:
            del self._data[key]
            return None

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)


class FileSessionStorage(SessionStorage):
    """JSON-file session storage so the CLI keeps its login between runs."""

    def __init__(self, path: Path):
        self._path = path

    def _read(self) -> dict[str, dict[str, Any]]:
        if not self._path.exists():
            return {}
        try:
            content = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable session file {self._path}: {e}")
            return {}
        return content if isinstance(content, dict) else {}

    def _write(self, data: dict[str, dict[str, Any]]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data), encoding="utf-8")
        self._path.chmod(0o600)

    async def set(self, key: str, value: BaseModel, ttl_seconds: int) -> None:
        data = self._read()
        data[key] = {
            "data": json.loads(value.model_dump_json()),
            "expires_at": time.time() + ttl_seconds,
        }
        self._write(data)

    async def get(self, key: str, model_class: type[T]) -> T | None:
        data = self._read()
        entry = data.get(key)
        if entry is None:
            return None

        if time.time() > entry.get("expires_at", 0):
            del data[key]
            self._write(data)
            return None

        try:
            return model_class.model_validate(entry.get("data"))
        except ValidationError:
            logger.warning(f"Discarding corrupted session entry '{key}'")
            del data[key]
            self._write(data)
            return None

    async def delete(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)


_storage: SessionStorage | None = None


def get_session_storage() -> SessionStorage:
    """Get the configured session storage instance."""
    global _storage

    if _storage is None:
        from src.dashboard.runtime.context import get_config

        session_config = get_config().session
        if session_config.backend == "file":
            _storage = FileSessionStorage(session_config.file_path)
        else:
            _storage = InMemorySessionStorage()

    return _storage


def _reset_storage() -> None:
    """Reset storage instance (for testing)."""
    global _storage
    _storage = None

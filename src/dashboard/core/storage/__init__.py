from .session_storage import (
    FileSessionStorage,
    InMemorySessionStorage,
    SessionStorage,
    get_session_storage,
)

__all__ = [
    "FileSessionStorage",
    "InMemorySessionStorage",
    "SessionStorage",
    "get_session_storage",
]

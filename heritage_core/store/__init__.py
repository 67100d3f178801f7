# heritage_core/store/__init__.py

from .provider import StoreProvider
from .providers.memory_provider import InMemoryStorage
from .providers.sqlite_provider import SQLiteStorage
from .providers.http_provider import HTTPStorage
import os


def load_store_provider(config: dict | None = None) -> StoreProvider:
    """
    Factory resolver for selecting the external store backend.

        - sqlite (default)
        - memory
        - http
    """
    config = config or {}
    provider = config.get("provider") or os.getenv("HERITAGE_STORE_PROVIDER", "sqlite")

    if provider == "memory":
        return InMemoryStorage()

    if provider == "sqlite":
        db_path = config.get("sqlite_path") or os.getenv("HERITAGE_DB_PATH", "db/heritage_state.db")
        return SQLiteStorage(db_path)

    if provider == "http":
        url = config.get("url") or os.getenv("HERITAGE_STORE_URL", "http://localhost:8080")
        timeout = float(config.get("timeout") or os.getenv("HERITAGE_STORE_TIMEOUT", "5"))
        return HTTPStorage(url, timeout=timeout)

    raise ValueError(f"Unknown store provider: {provider}")


__all__ = [
    "StoreProvider",
    "InMemoryStorage",
    "SQLiteStorage",
    "HTTPStorage",
    "load_store_provider",
]

from typing import Any, Dict, List, Tuple
from heritage_core.errors import StoreUnavailableError
from heritage_core.store.provider import StoreProvider


class InMemoryStorage(StoreProvider):
    def __init__(self, available: bool = True):
        self.data: Dict[str, bytes] = {}
        self.writes: List[Tuple[str, bytes]] = []
        self.audit: List[Tuple[str, Dict[str, Any]]] = []
        self.available = available

    def is_available(self) -> bool:
        return self.available

    def get(self, key: str) -> bytes:
        if not self.available:
            raise StoreUnavailableError("in-memory store is offline")
        return self.data.get(key, b"")

    def set(self, key: str, value: bytes) -> None:
        if not self.available:
            raise StoreUnavailableError("in-memory store is offline")
        self.data[key] = bytes(value)
        self.writes.append((key, bytes(value)))

    # audit
    def log_event(self, event_type: str, payload: Dict[str, Any]) -> None:
        self.audit.append((event_type, payload))

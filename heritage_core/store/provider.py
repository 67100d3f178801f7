# heritage_core/store/provider.py
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict


class StoreProvider(ABC):
    """
    Address-scoped key/value store the legacy records live in.

    Implementations return b"" for absent keys and raise
    StoreUnavailableError when the backing service cannot be reached.
    The caller identity is implicit in the provider's session.
    """

    @abstractmethod
    def is_available(self) -> bool: ...

    @abstractmethod
    def get(self, key: str) -> bytes: ...

    @abstractmethod
    def set(self, key: str, value: bytes) -> None: ...

    def log_event(self, event_type: str, payload: Dict[str, Any]) -> None:
        """Audit hook for lifecycle events. Providers without an audit trail ignore it."""
        return

    def close(self) -> None:
        return

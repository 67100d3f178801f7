"""
Heritage Core Package
=====================
Lifecycle manager for digital-legacy records kept in an address-keyed
key/value store.

Provides:
- Legacy record model and canonical payload codec
- Key index used to enumerate every record from one lookup
- Pluggable store providers (SQLite default, memory, HTTP gateway)
- Pluggable confidentiality providers (AES-GCM default)
- Lifecycle manager enforcing ownership and status transitions
"""

from heritage_core.errors import (
    LegacyError,
    ValidationError,
    NotFoundError,
    AuthorizationError,
    InvalidStateError,
    ConditionNotMetError,
    DecodeError,
    StoreUnavailableError,
)
from heritage_core.models import LegacyRecord, LegacyDraft, Session
from heritage_core.legacy_store import LegacyStore
from heritage_core.lifecycle import LifecycleManager

__all__ = [
    "LegacyError",
    "ValidationError",
    "NotFoundError",
    "AuthorizationError",
    "InvalidStateError",
    "ConditionNotMetError",
    "DecodeError",
    "StoreUnavailableError",
    "LegacyRecord",
    "LegacyDraft",
    "Session",
    "LegacyStore",
    "LifecycleManager",
]

# heritage_core/errors.py
from __future__ import annotations
from typing import Iterable, List, Optional


class LegacyError(Exception):
    """Base class for every error raised by heritage_core."""
    retryable: bool = False


class LegacyPermanentError(LegacyError):
    """Retrying the same call with the same inputs will fail the same way."""
    retryable = False


class LegacyTransientError(LegacyError):
    """The external store could not be reached; the call may be retried."""
    retryable = True


class ValidationError(LegacyPermanentError):
    def __init__(self, fields: Iterable[str], message: Optional[str] = None):
        self.fields: List[str] = list(fields)
        super().__init__(message or f"missing required fields: {', '.join(self.fields)}")


class NotFoundError(LegacyPermanentError):
    def __init__(self, record_id: str):
        self.record_id = record_id
        super().__init__(f"legacy record not found: {record_id}")


class AuthorizationError(LegacyPermanentError):
    def __init__(self, record_id: str, caller: str):
        self.record_id = record_id
        self.caller = caller
        super().__init__(f"{caller!r} is not the owner of legacy record {record_id}")


class InvalidStateError(LegacyPermanentError):
    def __init__(self, record_id: str, status: str, target: str):
        self.record_id = record_id
        self.status = status
        self.target = target
        super().__init__(f"legacy record {record_id} is {status}; cannot move to {target}")


class ConditionNotMetError(LegacyPermanentError):
    def __init__(self, record_id: str):
        self.record_id = record_id
        super().__init__(f"inheritance conditions not verified for legacy record {record_id}")


class DecodeError(LegacyPermanentError):
    pass


class StoreUnavailableError(LegacyTransientError):
    pass

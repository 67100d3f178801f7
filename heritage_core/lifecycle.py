"""
heritage_core.lifecycle
-----------------------
State machine for legacy records.

    active ──trigger_inheritance──▶ inherited
       │
       └──────────expire──────────▶ expired

Both target states are terminal. Only the record's owner may move it, and
every call carries an explicit Session (caller identity + store).
"""

from __future__ import annotations
import time
from typing import Callable, List, Optional

from heritage_core.constants import LEGACY_CATEGORIES, STATUS_ACTIVE, STATUS_EXPIRED, STATUS_INHERITED
from heritage_core.crypto import ConfidentialityProvider
from heritage_core.errors import (
    AuthorizationError, ConditionNotMetError, InvalidStateError, ValidationError,
)
from heritage_core.logger import get_logger
from heritage_core.models import LegacyDraft, LegacyRecord, Session
from heritage_core.utils import new_legacy_id, normalize_identity

log = get_logger("Heritage.Lifecycle")

ConditionVerifier = Callable[[LegacyRecord], bool]


def conditions_assumed_met(record: LegacyRecord) -> bool:
    return True


class LifecycleManager:
    def __init__(
        self,
        confidentiality: ConfidentialityProvider,
        condition_verifier: Optional[ConditionVerifier] = None,
        clock: Callable[[], float] = time.time,
        id_factory: Callable[[], str] = new_legacy_id,
        strict_categories: bool = False,
    ):
        self.confidentiality = confidentiality
        self.condition_verifier = condition_verifier or conditions_assumed_met
        self.clock = clock
        self.id_factory = id_factory
        self.strict_categories = strict_categories

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------
    def create(self, session: Session, draft: LegacyDraft) -> str:
        # an ownerless record could never be decoded or transitioned
        if not normalize_identity(session.caller_identity):
            raise ValidationError(["caller_identity"])
        missing = draft.missing()
        if missing:
            raise ValidationError(missing)
        if self.strict_categories and draft.category not in LEGACY_CATEGORIES:
            raise ValidationError(["category"], f"unknown category: {draft.category!r}")

        record = LegacyRecord(
            id=self.id_factory(),
            owner=session.caller_identity,
            category=draft.category,
            encrypted_payload=self.confidentiality.protect(draft.plain_fields()),
            beneficiary=draft.beneficiary,
            inheritance_conditions=draft.conditions,
            created_at=int(self.clock()),
            status=STATUS_ACTIVE,
        )
        session.store.register_record(record)
        session.store.record_event("legacy.created", {"id": record.id, "by": record.owner})
        log.info(f"[LIFECYCLE] created {record.id} owner={record.owner!r} category={record.category}")
        return record.id

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def _load_for_transition(self, session: Session, record_id: str, target: str) -> LegacyRecord:
        record = session.store.load(record_id)
        if not record.is_owned_by(session.caller_identity):
            log.warning(f"[LIFECYCLE] {session.caller_identity!r} denied {target} on {record_id}")
            raise AuthorizationError(record_id, session.caller_identity)
        if record.status != STATUS_ACTIVE:
            raise InvalidStateError(record_id, record.status, target)
        return record

    def _commit(self, session: Session, record: LegacyRecord, status: str) -> LegacyRecord:
        updated = record.with_status(status)
        session.store.save(updated)
        session.store.record_event(f"legacy.{status}", {"id": record.id, "by": session.caller_identity})
        log.info(f"[LIFECYCLE] {record.id} {record.status} -> {status} by {session.caller_identity!r}")
        return updated

    def trigger_inheritance(self, session: Session, record_id: str) -> LegacyRecord:
        record = self._load_for_transition(session, record_id, STATUS_INHERITED)
        if not self.condition_verifier(record):
            raise ConditionNotMetError(record_id)
        return self._commit(session, record, STATUS_INHERITED)

    def expire(self, session: Session, record_id: str) -> LegacyRecord:
        record = self._load_for_transition(session, record_id, STATUS_EXPIRED)
        return self._commit(session, record, STATUS_EXPIRED)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def list(self, session: Session) -> List[LegacyRecord]:
        # every owner's records; filtering is left to the caller
        return session.store.list_all()

    def get(self, session: Session, record_id: str) -> LegacyRecord:
        return session.store.load(record_id)

"""
heritage_core.legacy_store
--------------------------
Single point of contact with the external store.

Combines the key index and the record codec into record-level operations:
list every record, load one, save one, and register a new one (save then
index). None of these are transactional against the store.
"""

from __future__ import annotations
from typing import Any, Dict, List

from heritage_core import codec
from heritage_core.constants import record_key
from heritage_core.errors import DecodeError, NotFoundError, StoreUnavailableError
from heritage_core.index import KeyIndex
from heritage_core.logger import get_logger
from heritage_core.models import LegacyRecord
from heritage_core.store.provider import StoreProvider

log = get_logger("Heritage.Store")


class LegacyStore:
    def __init__(self, provider: StoreProvider):
        self.provider = provider
        self.index = KeyIndex(provider)

    def _require_available(self) -> None:
        if not self.provider.is_available():
            log.error("[STORE] external store unavailable")
            raise StoreUnavailableError("external store is not available")

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def list_all(self) -> List[LegacyRecord]:
        """
        Every indexed record, newest first.

        A record that cannot be fetched or decoded is logged and skipped;
        the rest of the listing is still returned.
        """
        self._require_available()

        records = []
        for record_id in self.index.list_ids():
            try:
                raw = self.provider.get(record_key(record_id))
            except StoreUnavailableError as e:
                log.error(f"[STORE] error loading legacy {record_id}: {e}")
                continue

            if not raw:
                log.warning(f"[STORE] index entry {record_id} has no record payload")
                continue

            try:
                records.append(codec.decode(raw, record_id))
            except DecodeError as e:
                log.error(f"[STORE] error parsing legacy data for {record_id}: {e}")

        records.sort(key=lambda r: r.created_at, reverse=True)
        return records

    def load(self, record_id: str) -> LegacyRecord:
        self._require_available()
        raw = self.provider.get(record_key(record_id))
        if not raw:
            raise NotFoundError(record_id)
        return codec.decode(raw, record_id)

    def dangling_ids(self) -> List[str]:
        """Index entries with no record payload behind them. Report only; nothing is removed."""
        self._require_available()
        return [rid for rid in self.index.list_ids() if not self.provider.get(record_key(rid))]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def save(self, record: LegacyRecord) -> None:
        """Write the record payload. The index is not touched."""
        self._require_available()
        self.provider.set(record_key(record.id), codec.encode(record))
        log.debug(f"[STORE] saved {record.id} status={record.status}")

    def register_record(self, record: LegacyRecord) -> None:
        """
        Save a new record and make it reachable through the index.

        Safe to retry: the payload is rewritten and the id is appended only
        if it is not indexed yet. A failure between the two writes leaves an
        orphaned record until the call is retried.
        """
        self.save(record)
        if self.index.contains(record.id):
            log.info(f"[STORE] {record.id} already indexed")
            return
        self.index.append(record.id)
        log.info(f"[STORE] registered {record.id}")

    def record_event(self, event_type: str, payload: Dict[str, Any]) -> None:
        self.provider.log_event(event_type, payload)

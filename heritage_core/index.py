# heritage_core/index.py
from __future__ import annotations
import json
from typing import List

from heritage_core.constants import INDEX_KEY
from heritage_core.logger import get_logger
from heritage_core.store.provider import StoreProvider
from heritage_core.utils import canonical_json

log = get_logger("Heritage.Index")


class KeyIndex:
    """
    Append-only list of record ids stored under the reserved index key.

    append() is a plain read-modify-write: two callers appending against the
    same stale read lose one of the ids (last writer wins).
    """

    def __init__(self, provider: StoreProvider, key: str = INDEX_KEY):
        self.provider = provider
        self.key = key

    def list_ids(self) -> List[str]:
        raw = self.provider.get(self.key)
        if not raw:
            return []

        try:
            ids = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as e:
            # unreadable index is treated as "no index yet"
            log.error(f"[INDEX] could not parse {self.key}: {e}")
            return []

        if not isinstance(ids, list):
            log.error(f"[INDEX] {self.key} is not a list (got {type(ids).__name__})")
            return []

        valid = [i for i in ids if isinstance(i, str)]
        if len(valid) != len(ids):
            log.warning(f"[INDEX] dropped {len(ids) - len(valid)} non-string entries from {self.key}")
        return valid

    def append(self, record_id: str) -> None:
        ids = self.list_ids()
        ids.append(record_id)
        self.provider.set(self.key, canonical_json(ids))
        log.debug(f"[INDEX] appended {record_id} (size={len(ids)})")

    def contains(self, record_id: str) -> bool:
        return record_id in self.list_ids()

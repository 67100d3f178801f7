# heritage_core/models.py
from __future__ import annotations
from dataclasses import dataclass, asdict, fields, replace
from typing import Any, Dict, Iterable, List, Optional, TYPE_CHECKING

from heritage_core.constants import (
    F_BENEFICIARY, F_CATEGORY, F_CONDITIONS, F_DATA, F_ID, F_OWNER,
    F_STATUS, F_TIMESTAMP, REQUIRED_FIELDS, STATUSES, STATUS_ACTIVE,
)
from heritage_core.errors import DecodeError
from heritage_core.utils import same_identity

if TYPE_CHECKING:
    from heritage_core.legacy_store import LegacyStore


@dataclass
class LegacyRecord:
    """
    A single digital-legacy entry.

    `status` is the only field that changes after creation. Everything else
    is write-once; use `with_status()` to derive the updated record.
    """
    id: str
    owner: str
    category: str
    encrypted_payload: str
    beneficiary: str = ""
    inheritance_conditions: str = ""
    created_at: int = 0
    status: str = STATUS_ACTIVE  # active | inherited | expired

    def with_status(self, status: str) -> "LegacyRecord":
        return replace(self, status=status)

    def is_owned_by(self, identity: str) -> bool:
        return same_identity(self.owner, identity)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_payload(self) -> Dict[str, Any]:
        """Wire layout of a stored record."""
        return {
            F_ID: self.id,
            F_DATA: self.encrypted_payload,
            F_TIMESTAMP: self.created_at,
            F_OWNER: self.owner,
            F_CATEGORY: self.category,
            F_STATUS: self.status,
            F_BENEFICIARY: self.beneficiary,
            F_CONDITIONS: self.inheritance_conditions,
        }


@dataclass
class PartialRecord:
    """
    Record as found on the wire, before defaults are applied.

    Older payloads may lack `id`, `status`, `beneficiary`, `conditions` or
    `timestamp`; `upgrade()` fills those in and rejects payloads missing a
    required field.
    """
    id: Optional[str] = None
    data: Optional[str] = None
    timestamp: Optional[Any] = None
    owner: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None
    beneficiary: Optional[str] = None
    conditions: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "PartialRecord":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in payload.items() if k in known})

    def missing(self) -> List[str]:
        return [name for name in REQUIRED_FIELDS if getattr(self, name) in (None, "")]

    def upgrade(self, record_id: Optional[str] = None) -> LegacyRecord:
        rid = record_id or self.id
        if not rid or not isinstance(rid, str):
            raise DecodeError("record payload has no id and none was supplied")

        missing = self.missing()
        if missing:
            raise DecodeError(f"record {rid} missing required fields: {', '.join(missing)}")

        for name in (F_DATA, F_OWNER, F_CATEGORY, F_BENEFICIARY, F_CONDITIONS, F_STATUS):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise DecodeError(f"record {rid} field {name!r} is not a string")

        status = self.status or STATUS_ACTIVE
        if status not in STATUSES:
            raise DecodeError(f"record {rid} has unknown status {status!r}")

        created_at = self.timestamp if self.timestamp is not None else 0
        # bool is an int subclass but never a valid timestamp
        if isinstance(created_at, bool):
            raise DecodeError(f"record {rid} timestamp is not an integer")
        try:
            created_at = int(created_at)
        except (TypeError, ValueError) as e:
            raise DecodeError(f"record {rid} timestamp is not an integer") from e

        return LegacyRecord(
            id=rid,
            owner=self.owner,
            category=self.category,
            encrypted_payload=self.data,
            beneficiary=self.beneficiary or "",
            inheritance_conditions=self.conditions or "",
            created_at=created_at,
            status=status,
        )


@dataclass
class LegacyDraft:
    """Creation input. `sensitive_info` is handed to the confidentiality provider and never stored in clear."""
    category: str = ""
    beneficiary: str = ""
    sensitive_info: str = ""
    description: str = ""
    conditions: str = ""

    def missing(self) -> List[str]:
        required = ("category", "beneficiary", "sensitive_info")
        return [name for name in required if not (getattr(self, name) or "").strip()]

    def plain_fields(self) -> Dict[str, str]:
        return {
            "category": self.category,
            "description": self.description,
            "sensitiveInfo": self.sensitive_info,
            "beneficiary": self.beneficiary,
            "conditions": self.conditions,
        }


@dataclass
class Session:
    """Caller identity plus the store it acts against, passed explicitly into every lifecycle call."""
    caller_identity: str
    store: "LegacyStore"


def status_counts(records: Iterable[LegacyRecord]) -> Dict[str, int]:
    counts = {status: 0 for status in STATUSES}
    for rec in records:
        counts[rec.status] = counts.get(rec.status, 0) + 1
    return counts


def owned_by(records: Iterable[LegacyRecord], identity: str) -> List[LegacyRecord]:
    return [rec for rec in records if rec.is_owned_by(identity)]

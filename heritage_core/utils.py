"""
heritage_core.utils
-------------------
Lightweight helpers for record id generation, timestamping, base64 utilities
and canonical JSON serialization.
Canonical JSON keeps stored payloads byte-stable for identical records.
"""

from __future__ import annotations
import base64, json, secrets, string, time
from typing import Any, Dict, Optional

_BASE36 = string.digits + string.ascii_lowercase


def b64e(b: bytes) -> str:
    return base64.b64encode(b).decode("ascii")

def b64d(s: str) -> bytes:
    return base64.b64decode(s.encode("ascii"))

def now_ts() -> str:
    # RFC3339 / ISO 8601 in UTC, second precision
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())

def new_legacy_id(now_ms: Optional[int] = None) -> str:
    """
    Record id in the form "<epoch ms>-<7 base36 chars>".

    The millisecond prefix keeps ids roughly sortable by creation time; the
    random suffix separates records created within the same millisecond.
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_BASE36) for _ in range(7))
    return f"{now_ms}-{suffix}"

def canonical_json(obj: Any) -> bytes:
    # Deterministic, minimal JSON for stored payloads
    return json.dumps(obj, separators=(",", ":"), sort_keys=True, ensure_ascii=False).encode("utf-8")

def normalize_identity(identity: str) -> str:
    return (identity or "").strip().lower()

def same_identity(a: str, b: str) -> bool:
    """Addresses compare case-insensitively (checksummed vs lower-case hex)."""
    return bool(normalize_identity(a)) and normalize_identity(a) == normalize_identity(b)

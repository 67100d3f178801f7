"""
heritage_core.codec
-------------------
Encodes legacy records to the store's byte payload format and back.

Payloads are UTF-8 canonical JSON objects keyed by field name, so older
payloads missing optional fields still decode and unknown fields written by
newer clients are ignored.
"""

from __future__ import annotations
import json
from typing import Optional

from heritage_core.errors import DecodeError
from heritage_core.models import LegacyRecord, PartialRecord
from heritage_core.utils import canonical_json


def encode(record: LegacyRecord) -> bytes:
    return canonical_json(record.to_payload())


def decode(payload: bytes, record_id: Optional[str] = None) -> LegacyRecord:
    """
    Decode a stored record payload.

    `record_id` is the id taken from the store key; when given it takes
    precedence over any id embedded in the payload.
    """
    try:
        data = json.loads(payload.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        raise DecodeError(f"record payload is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise DecodeError(f"record payload must be a JSON object, got {type(data).__name__}")

    return PartialRecord.from_payload(data).upgrade(record_id)

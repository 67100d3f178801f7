# heritage_core/constants.py

# Store key layout. Must stay byte-identical for interoperability with
# records written by other clients of the same store.
INDEX_KEY = "legacy_keys"
RECORD_KEY_PREFIX = "legacy_"

STATUS_ACTIVE = "active"
STATUS_INHERITED = "inherited"
STATUS_EXPIRED = "expired"

STATUSES = (STATUS_ACTIVE, STATUS_INHERITED, STATUS_EXPIRED)
TERMINAL_STATUSES = frozenset({STATUS_INHERITED, STATUS_EXPIRED})

LEGACY_CATEGORIES = (
    "Crypto Wallet",
    "Social Media",
    "Financial Account",
    "Digital Assets",
    "Personal Documents",
)

# Wire field names of a stored record payload
F_ID = "id"
F_DATA = "data"
F_TIMESTAMP = "timestamp"
F_OWNER = "owner"
F_CATEGORY = "category"
F_STATUS = "status"
F_BENEFICIARY = "beneficiary"
F_CONDITIONS = "conditions"

REQUIRED_FIELDS = (F_DATA, F_OWNER, F_CATEGORY)


def record_key(record_id: str) -> str:
    return f"{RECORD_KEY_PREFIX}{record_id}"

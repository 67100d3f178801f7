import itertools
import pytest
from heritage_core.crypto import EncodingConfidentiality
from heritage_core.legacy_store import LegacyStore
from heritage_core.lifecycle import LifecycleManager
from heritage_core.models import LegacyDraft, Session
from heritage_core.store import InMemoryStorage

OWNER = "0xAAA0000000000000000000000000000000000001"
OTHER = "0xCCC0000000000000000000000000000000000002"
BENEFICIARY = "0xBEEF000000000000000000000000000000000003"


@pytest.fixture
def provider():
    return InMemoryStorage()


@pytest.fixture
def store(provider):
    return LegacyStore(provider)


@pytest.fixture
def manager():
    ticks = itertools.count(1_700_000_000)
    ids = (f"id-{n}" for n in itertools.count(1))
    return LifecycleManager(
        EncodingConfidentiality(),
        clock=lambda: next(ticks),
        id_factory=lambda: next(ids),
    )


@pytest.fixture
def owner_session(store):
    return Session(caller_identity=OWNER, store=store)


@pytest.fixture
def other_session(store):
    return Session(caller_identity=OTHER, store=store)


@pytest.fixture
def draft():
    return LegacyDraft(
        category="Crypto Wallet",
        beneficiary=BENEFICIARY,
        sensitive_info="seed phrase: correct horse battery staple",
        description="cold wallet",
        conditions="on proof of death",
    )

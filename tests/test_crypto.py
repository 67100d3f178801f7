import os
import pytest
from heritage_core.crypto import (
    AEAD_PREFIX, AeadConfidentiality, EncodingConfidentiality,
    load_confidentiality_provider, x25519_generate,
)
from heritage_core.utils import b64e, new_legacy_id

FIELDS = {"category": "Crypto Wallet", "sensitiveInfo": "seed words", "beneficiary": "0xBEEF"}


def test_aead_protect_reveal():
    provider = AeadConfidentiality(os.urandom(32))
    protected = provider.protect(FIELDS)
    assert protected.startswith(AEAD_PREFIX)
    assert "seed words" not in protected
    assert provider.reveal(protected) == FIELDS


def test_aead_uses_fresh_nonce():
    provider = AeadConfidentiality(os.urandom(32))
    assert provider.protect(FIELDS) != provider.protect(FIELDS)


def test_aead_for_recipient_shares_key():
    owner_priv, owner_pub = x25519_generate()
    heir_priv, heir_pub = x25519_generate()
    sealed = AeadConfidentiality.for_recipient(owner_priv, heir_pub).protect(FIELDS)
    assert AeadConfidentiality.for_recipient(heir_priv, owner_pub).reveal(sealed) == FIELDS


def test_aead_rejects_short_key():
    with pytest.raises(ValueError):
        AeadConfidentiality(b"short")


def test_encoding_provider_matches_reference_format(caplog):
    provider = EncodingConfidentiality()
    protected = provider.protect({"a": 1})
    assert protected == "FHE-eyJhIjoxfQ=="
    assert provider.reveal(protected) == {"a": 1}
    assert "NOT confidential" in caplog.text


def test_confidentiality_factory(monkeypatch):
    monkeypatch.delenv("HERITAGE_CONFIDENTIALITY", raising=False)
    monkeypatch.delenv("HERITAGE_AEAD_KEY", raising=False)
    with pytest.raises(ValueError):
        load_confidentiality_provider()

    monkeypatch.setenv("HERITAGE_AEAD_KEY", b64e(os.urandom(32)))
    assert isinstance(load_confidentiality_provider(), AeadConfidentiality)

    monkeypatch.setenv("HERITAGE_CONFIDENTIALITY", "encoding")
    assert isinstance(load_confidentiality_provider(), EncodingConfidentiality)

    with pytest.raises(ValueError):
        load_confidentiality_provider({"provider": "rot13"})


def test_legacy_id_format():
    rid = new_legacy_id(now_ms=1700000000123)
    prefix, suffix = rid.split("-")
    assert prefix == "1700000000123"
    assert len(suffix) == 7 and suffix.isalnum() and suffix == suffix.lower()
    assert new_legacy_id() != new_legacy_id()

"""
heritage_core.crypto
--------------------
Confidentiality providers producing the opaque `encrypted_payload` stored on
a legacy record.

- AeadConfidentiality: AES-256-GCM over the canonical JSON of the plain fields,
  keyed directly or through X25519 + HKDF with the beneficiary's public key
- EncodingConfidentiality: reversible prefix + base64 stand-in with no
  confidentiality, kept for payloads produced by the reference web client

The lifecycle manager only calls protect(); it never decrypts.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple
from cryptography.hazmat.primitives.asymmetric import x25519
from cryptography.hazmat.primitives.kdf.hkdf import HKDF
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
import json, os
from .logger import get_logger
from .utils import b64e, b64d, canonical_json

log = get_logger("Heritage.Crypto")

AEAD_PREFIX = "AEAD1-"
ENCODING_PREFIX = "FHE-"
HKDF_INFO = b"heritage-v1"


# --------- X25519 + HKDF + AES-GCM ----------
def x25519_generate() -> Tuple[bytes, bytes]:
    sk = x25519.X25519PrivateKey.generate()
    pk = sk.public_key()
    return sk.private_bytes_raw(), pk.public_bytes_raw()

def derive_key(sender_priv: bytes, recipient_pub: bytes, salt: Optional[bytes] = None, info: bytes = HKDF_INFO) -> bytes:
    sk = x25519.X25519PrivateKey.from_private_bytes(sender_priv)
    shared = sk.exchange(x25519.X25519PublicKey.from_public_bytes(recipient_pub))
    hkdf = HKDF(algorithm=hashes.SHA256(), length=32, salt=salt, info=info)
    return hkdf.derive(shared)  # 256-bit AEAD key

def aead_encrypt(key: bytes, plaintext: bytes, aad: Optional[bytes] = None) -> Tuple[bytes, bytes]:
    aes = AESGCM(key)
    nonce = os.urandom(12)
    ct = aes.encrypt(nonce, plaintext, aad)
    return nonce, ct

def aead_decrypt(key: bytes, nonce: bytes, ciphertext: bytes, aad: Optional[bytes] = None) -> bytes:
    aes = AESGCM(key)
    return aes.decrypt(nonce, ciphertext, aad)


# --------- Providers ----------
class ConfidentialityProvider(ABC):
    name: str = "base"

    @abstractmethod
    def protect(self, plain_fields: Dict[str, Any]) -> str:
        """Return an opaque string standing for `plain_fields`."""


class AeadConfidentiality(ConfidentialityProvider):
    name = "aead"

    def __init__(self, key: bytes, aad: Optional[bytes] = None):
        if len(key) != 32:
            raise ValueError("AEAD key must be 32 bytes")
        self._key = key
        self._aad = aad

    @classmethod
    def for_recipient(cls, sender_priv: bytes, recipient_pub: bytes, aad: Optional[bytes] = None) -> "AeadConfidentiality":
        return cls(derive_key(sender_priv, recipient_pub), aad=aad)

    def protect(self, plain_fields: Dict[str, Any]) -> str:
        nonce, ct = aead_encrypt(self._key, canonical_json(plain_fields), aad=self._aad)
        envelope = canonical_json({"nonce": b64e(nonce), "ciphertext": b64e(ct)})
        return AEAD_PREFIX + b64e(envelope)

    def reveal(self, protected: str) -> Dict[str, Any]:
        if not protected.startswith(AEAD_PREFIX):
            raise ValueError("not an AEAD-protected payload")
        enc = json.loads(b64d(protected[len(AEAD_PREFIX):]).decode("utf-8"))
        pt = aead_decrypt(self._key, b64d(enc["nonce"]), b64d(enc["ciphertext"]), aad=self._aad)
        return json.loads(pt.decode("utf-8"))


class EncodingConfidentiality(ConfidentialityProvider):
    """Reversible encoding only. Anyone reading the store can recover the fields."""
    name = "encoding"

    def __init__(self, prefix: str = ENCODING_PREFIX):
        self.prefix = prefix
        log.warning("[CRYPTO] encoding provider in use; payloads are NOT confidential")

    def protect(self, plain_fields: Dict[str, Any]) -> str:
        return self.prefix + b64e(json.dumps(plain_fields, separators=(",", ":")).encode("utf-8"))

    def reveal(self, protected: str) -> Dict[str, Any]:
        return json.loads(b64d(protected[len(self.prefix):]).decode("utf-8"))


def load_confidentiality_provider(config: dict | None = None) -> ConfidentialityProvider:
    """
    Factory resolver for the confidentiality provider.

        - aead (default), key from config["key"] (raw bytes) or HERITAGE_AEAD_KEY (base64)
        - encoding
    """
    config = config or {}
    provider = config.get("provider") or os.getenv("HERITAGE_CONFIDENTIALITY", "aead")

    if provider == "encoding":
        return EncodingConfidentiality(config.get("prefix", ENCODING_PREFIX))

    if provider == "aead":
        key = config.get("key")
        if key is None:
            key_b64 = os.getenv("HERITAGE_AEAD_KEY")
            if not key_b64:
                raise ValueError("aead confidentiality requires HERITAGE_AEAD_KEY")
            key = b64d(key_b64)
        return AeadConfidentiality(key)

    raise ValueError(f"Unknown confidentiality provider: {provider}")

"""AES-256-GCM envelope codec for single string payloads.

Envelope wire format (JSON object, lowercase hex strings):

- ``iv``: 12-byte random nonce, fresh for every call (24 hex chars)
- ``encryptedData``: ciphertext, same length as the UTF-8 plaintext
- ``authTag``: 16-byte GCM tag (32 hex chars)

An envelope carries no key material and no associated data. Decryption
verifies the tag before any plaintext is released.
"""
from __future__ import annotations

import binascii
import json
import logging
import os
from dataclasses import dataclass

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from fieldcipher.core.exceptions import (
    CryptoError,
    DecryptionFailedError,
    EncryptionFailedError,
    InvalidAuthTagError,
    InvalidCiphertextError,
    InvalidIVError,
)

logger = logging.getLogger(__name__)

NONCE_SIZE = 12  # 96-bit nonce
TAG_SIZE = 16  # 128-bit GCM tag

FIELD_IV = "iv"
FIELD_CIPHERTEXT = "encryptedData"
FIELD_TAG = "authTag"


def _unhex(value: str, field: str, error: type[CryptoError]) -> bytes:
    # binascii rejects odd lengths and whitespace, unlike bytes.fromhex
    try:
        return binascii.unhexlify(value)
    except (binascii.Error, ValueError) as exc:
        raise error(f"{field} is not valid hex", field=field) from exc


@dataclass(frozen=True)
class Envelope:
    nonce: bytes
    ciphertext: bytes
    tag: bytes

    def to_json(self) -> str:
        return json.dumps(
            {
                FIELD_IV: self.nonce.hex(),
                FIELD_CIPHERTEXT: self.ciphertext.hex(),
                FIELD_TAG: self.tag.hex(),
            },
            separators=(",", ":"),
        )

    @classmethod
    def from_json(cls, text: str) -> "Envelope":
        """
        Parse an envelope produced by :meth:`to_json`.

        Fields are checked in wire order (iv, encryptedData, authTag) so the
        first malformed one determines the error raised.
        """
        if not isinstance(text, str):
            raise InvalidCiphertextError(f"envelope must be a JSON string, got {type(text).__name__}")
        try:
            parsed = json.loads(text)
        except ValueError as exc:
            raise InvalidCiphertextError("Failed to parse encrypted content") from exc
        if not isinstance(parsed, dict):
            raise InvalidCiphertextError("Encrypted content is not a JSON object")

        for field in (FIELD_IV, FIELD_CIPHERTEXT, FIELD_TAG):
            if not isinstance(parsed.get(field), str):
                raise InvalidCiphertextError(f"Envelope field {field} is missing or not a string", field=field)

        nonce = _unhex(parsed[FIELD_IV], FIELD_IV, InvalidIVError)
        if len(nonce) != NONCE_SIZE:
            raise InvalidIVError(f"iv must be {NONCE_SIZE} bytes, got {len(nonce)}", field=FIELD_IV)
        ciphertext = _unhex(parsed[FIELD_CIPHERTEXT], FIELD_CIPHERTEXT, InvalidCiphertextError)
        tag = _unhex(parsed[FIELD_TAG], FIELD_TAG, InvalidAuthTagError)
        if len(tag) != TAG_SIZE:
            raise InvalidAuthTagError(f"authTag must be {TAG_SIZE} bytes, got {len(tag)}", field=FIELD_TAG)
        return cls(nonce=nonce, ciphertext=ciphertext, tag=tag)


def encrypt_envelope(key: bytes, plaintext: str) -> Envelope:
    """
    Encrypt ``plaintext`` under ``key`` with AES-256-GCM.

    A fresh random 96-bit nonce is drawn per call, so equal plaintexts never
    share a ciphertext.
    """
    try:
        aead = AESGCM(key)
        nonce = os.urandom(NONCE_SIZE)
        sealed = aead.encrypt(nonce, plaintext.encode("utf-8"), None)
    except Exception as exc:
        raise EncryptionFailedError("Encryption failed") from exc
    # AESGCM appends the tag to the ciphertext
    return Envelope(nonce=nonce, ciphertext=sealed[:-TAG_SIZE], tag=sealed[-TAG_SIZE:])


def decrypt_envelope(key: bytes, envelope: Envelope) -> str:
    """Verify and decrypt ``envelope``; raises DecryptionFailedError on any cipher failure."""
    try:
        aead = AESGCM(key)
        plaintext = aead.decrypt(envelope.nonce, envelope.ciphertext + envelope.tag, None)
    except InvalidTag as exc:
        raise DecryptionFailedError("Decryption failed: authTag or ciphertext is invalid") from exc
    except Exception as exc:
        raise DecryptionFailedError("Decryption failed") from exc
    try:
        return plaintext.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecryptionFailedError("Decrypted content is not valid UTF-8") from exc


def encrypt_text(key: bytes, plaintext: str) -> str:
    """Encrypt a string and return the envelope JSON."""
    if not isinstance(plaintext, str):
        raise EncryptionFailedError(f"plaintext must be str, got {type(plaintext).__name__}")
    envelope = encrypt_envelope(key, plaintext)
    logger.debug("sealed %d byte(s) into an envelope", len(envelope.ciphertext))
    return envelope.to_json()


def decrypt_text(key: bytes, envelope_json: str) -> str:
    """Parse an envelope JSON string and return the authenticated plaintext."""
    envelope = Envelope.from_json(envelope_json)
    plaintext = decrypt_envelope(key, envelope)
    logger.debug("opened envelope with %d byte(s) of ciphertext", len(envelope.ciphertext))
    return plaintext

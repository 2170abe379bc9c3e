"""Security helpers: key derivation and the AES-GCM envelope codec.

This package provides:
- scrypt (default) or Argon2id derivation of a 32-byte key from secret, salt and context
- AES-256-GCM encryption of single strings into self-describing JSON envelopes
- the Config object both are driven by
"""

from .kdf import derive_key
from .crypto import Envelope, encrypt_text, decrypt_text
from .config import Config

__all__ = [
    "derive_key",
    "Envelope",
    "encrypt_text",
    "decrypt_text",
    "Config",
]

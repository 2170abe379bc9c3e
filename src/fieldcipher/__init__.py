"""fieldcipher: selective encryption, decryption and hashing of nested data.

    >>> from fieldcipher import Config, encrypt, decrypt
    >>> config = Config(secret="s" * 32, salt="t" * 16, context=("users",))
    >>> sealed = encrypt(config).from_object({"name": "John Doe", "email": "john@example.com"}, ["email"])
    >>> decrypt(config).from_object(sealed, ["email"])["email"]
    'john@example.com'
"""

import logging

from .core.exceptions import (
    CryptoError,
    ConfigError,
    InvalidCiphertextError,
    InvalidIVError,
    InvalidAuthTagError,
    EncryptionFailedError,
    DecryptionFailedError,
    HashFailedError,
    UnsupportedTypeError,
)
from .core.hashing import HashAlgorithm
from .security import Config, Envelope, derive_key
from .operations import Operations, encrypt, decrypt, hash

# library logging: silent unless the application configures handlers
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "CryptoError",
    "ConfigError",
    "InvalidCiphertextError",
    "InvalidIVError",
    "InvalidAuthTagError",
    "EncryptionFailedError",
    "DecryptionFailedError",
    "HashFailedError",
    "UnsupportedTypeError",
    "HashAlgorithm",
    "Config",
    "Envelope",
    "derive_key",
    "Operations",
    "encrypt",
    "decrypt",
    "hash",
]

import logging
from typing import Sequence

from argon2.low_level import Type, hash_secret_raw
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from fieldcipher.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

KEY_LEN = 32
MIN_SECRET_LEN = 32
MIN_SALT_LEN = 16
CONTEXT_SEPARATOR = "::"

KDF_SCRYPT = "scrypt"
KDF_ARGON2ID = "argon2id"

# scrypt cost parameters; identical to the Node.js scryptSync defaults
SCRYPT_N = 2 ** 14
SCRYPT_R = 8
SCRYPT_P = 1

ARGON2_TIME_COST = 3
ARGON2_MEMORY_COST = 65536
ARGON2_PARALLELISM = 1


def validate_secret_and_salt(secret: str, salt: str) -> None:
    """Raise ConfigError unless secret and salt are long enough to derive from."""
    if not isinstance(secret, str) or len(secret) < MIN_SECRET_LEN:
        raise ConfigError(f"secret must be at least {MIN_SECRET_LEN} characters")
    if not isinstance(salt, str) or len(salt) < MIN_SALT_LEN:
        raise ConfigError(f"salt must be at least {MIN_SALT_LEN} characters")


def combine_salt(salt: str, context: Sequence[str]) -> bytes:
    """
    Join the static salt and the context labels with ``::``.
    Label order matters: ("a", "b") and ("b", "a") produce different salts.
    """
    dynamic = CONTEXT_SEPARATOR.join(context)
    return f"{salt}{CONTEXT_SEPARATOR}{dynamic}".encode("utf-8")


def derive_key(
    secret: str,
    salt: str,
    context: Sequence[str] = (),
    kdf: str = KDF_SCRYPT,
) -> bytes:
    """
    Derive the 32-byte symmetric key for (secret, salt, context).
    Deterministic: the same inputs always give the same key.
    """
    validate_secret_and_salt(secret, salt)
    if isinstance(context, str):
        raise ConfigError("context must be a sequence of labels, not a single string")
    context = tuple(context)
    for label in context:
        if not isinstance(label, str):
            raise ConfigError(f"context labels must be strings, got {type(label).__name__}")

    combined = combine_salt(salt, context)
    password = secret.encode("utf-8")

    if kdf == KDF_SCRYPT:
        key = Scrypt(salt=combined, length=KEY_LEN, n=SCRYPT_N, r=SCRYPT_R, p=SCRYPT_P).derive(password)
    elif kdf == KDF_ARGON2ID:
        key = hash_secret_raw(
            secret=password,
            salt=combined,
            time_cost=ARGON2_TIME_COST,
            memory_cost=ARGON2_MEMORY_COST,
            parallelism=ARGON2_PARALLELISM,
            hash_len=KEY_LEN,
            type=Type.ID,
        )
    else:
        raise ConfigError(f"Unsupported kdf: {kdf!r}")

    logger.debug("derived %s key from %d context label(s)", kdf, len(context))
    return key

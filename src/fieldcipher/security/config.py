"""Key configuration shared by the encrypt and decrypt entry points."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Sequence

from fieldcipher.core.exceptions import ConfigError

from .kdf import CONTEXT_SEPARATOR, KDF_SCRYPT, derive_key

ENV_SECRET = "FIELDCIPHER_SECRET"
ENV_SALT = "FIELDCIPHER_SALT"
ENV_CONTEXT = "FIELDCIPHER_CONTEXT"
ENV_KDF = "FIELDCIPHER_KDF"


@dataclass(frozen=True)
class Config:
    """
    Secret, salt and ordered context labels a key is derived from.

    ``context`` is stored as a tuple so a Config can be shared between
    threads and used as a dict key. The secret is kept out of ``repr``.
    """

    secret: str = field(repr=False)
    salt: str = field(repr=False)
    context: Sequence[str] = ()
    kdf: str = KDF_SCRYPT

    def __post_init__(self):
        if isinstance(self.context, str):
            raise ConfigError("context must be a sequence of labels, not a single string")
        object.__setattr__(self, "context", tuple(self.context))

    def derive_key(self) -> bytes:
        return derive_key(self.secret, self.salt, self.context, kdf=self.kdf)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """
        Build a Config from environment variables.

        - ``FIELDCIPHER_SECRET`` and ``FIELDCIPHER_SALT`` are required
        - ``FIELDCIPHER_CONTEXT`` holds labels joined with ``::`` (optional)
        - ``FIELDCIPHER_KDF`` selects ``scrypt`` (default) or ``argon2id``
        """
        env = os.environ if environ is None else environ
        secret = env.get(ENV_SECRET)
        salt = env.get(ENV_SALT)
        if not secret:
            raise ConfigError(f"{ENV_SECRET} environment variable is not set")
        if not salt:
            raise ConfigError(f"{ENV_SALT} environment variable is not set")
        raw_context = env.get(ENV_CONTEXT, "")
        context = tuple(raw_context.split(CONTEXT_SEPARATOR)) if raw_context else ()
        return cls(secret=secret, salt=salt, context=context, kdf=env.get(ENV_KDF, KDF_SCRYPT))

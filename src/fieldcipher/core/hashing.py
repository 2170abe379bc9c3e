""" Utility for one-way digest operations. """

import hashlib
import logging
from enum import Enum
from typing import Union

from .exceptions import HashFailedError

logger = logging.getLogger(__name__)


class HashAlgorithm(str, Enum):
    # Digest algorithms accepted by hash(); values are hashlib names
    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"
    MD5 = "md5"
    RIPEMD160 = "ripemd160"


DEFAULT_ALGORITHM = HashAlgorithm.SHA512


def resolve_algorithm(algorithm: Union[str, HashAlgorithm]) -> HashAlgorithm:
    """Map a name (case-insensitive) or enum member to a HashAlgorithm."""
    if isinstance(algorithm, HashAlgorithm):
        return algorithm
    if isinstance(algorithm, str):
        try:
            return HashAlgorithm(algorithm.lower())
        except ValueError:
            pass
    raise HashFailedError(f"Unsupported hash algorithm: {algorithm!r}")


def digest(algorithm: Union[str, HashAlgorithm], content: str) -> str:

    # Hex digest of the UTF-8 encoding of content.

    algo = resolve_algorithm(algorithm)
    try:
        h = hashlib.new(algo.value)
        h.update(content.encode("utf-8"))
        return h.hexdigest()
    except (ValueError, TypeError, AttributeError, UnicodeEncodeError) as exc:
        # ripemd160 is missing from some OpenSSL 3 builds
        logger.debug("digest %s failed: %s", algo.value, exc)
        raise HashFailedError(f"Hash generation failed for {algo.value}") from exc

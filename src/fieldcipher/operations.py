"""
Public entry points: ``encrypt``, ``decrypt`` and ``hash``.

Each factory returns an :class:`Operations` pair. ``from_string`` works on a
bare string; ``from_object`` walks a dict and transforms only the selected
dot paths (every top-level field when ``paths`` is omitted).

Object fields are encrypted in canonical JSON form and parsed back on
decryption, so a field keeps its type across a round trip (``42`` comes back
as ``42``, not ``"42"``). ``from_string`` encrypts the raw text.

A field envelope holds JSON, so opening one with ``decrypt(...).from_string``
returns the JSON text (``'"john@example.com"'``); open field envelopes with
``from_object``. Authenticated plaintext that is not JSON, such as raw text
sealed with ``from_string``, comes back from ``from_object`` unchanged.
"""

from __future__ import annotations

import json
import logging
from typing import Callable, Dict, Iterable, Optional, Union

from .core.exceptions import InvalidCiphertextError
from .core.hashing import DEFAULT_ALGORITHM, HashAlgorithm, digest, resolve_algorithm
from .core.paths import normalize_paths
from .core.transform import LeafTransform, Value, canonical_json, stringify, transform, transform_string
from .security.config import Config
from .security.crypto import decrypt_text, encrypt_text

logger = logging.getLogger(__name__)

Paths = Optional[Union[str, Iterable[str]]]


class Operations:
    """A string codec plus the object traversal built on its leaf transform."""

    def __init__(self, codec: Callable[[str], str], leaf: LeafTransform):
        self._codec = codec
        self._leaf = leaf

    def from_string(self, text: str) -> str:
        return transform_string(text, self._codec)

    def from_object(self, value: Dict[str, Value], paths: Paths = None) -> Dict[str, Value]:
        """
        Return a transformed copy of ``value``.

        Args:
            value: plain dict to walk; it is never modified.
            paths: dot paths to transform. Arrays and selected objects are
                transformed as one unit; ``None`` selects every top-level field.

        Raises:
            UnsupportedTypeError: if a visited value is outside the JSON-like model.
        """
        selection = normalize_paths(paths, value) if isinstance(value, dict) else frozenset()
        return transform(value, selection, self._leaf)


def encrypt(config: Config) -> Operations:
    """Derive the key for ``config`` once and return encrypting operations."""
    key = config.derive_key()

    def codec(text: str) -> str:
        return encrypt_text(key, text)

    def leaf(value: Value, path: str) -> Value:
        return encrypt_text(key, canonical_json(value))

    return Operations(codec, leaf)


def decrypt(config: Config) -> Operations:
    """Derive the key for ``config`` once and return decrypting operations."""
    key = config.derive_key()

    def codec(text: str) -> str:
        return decrypt_text(key, text)

    def leaf(value: Value, path: str) -> Value:
        if not isinstance(value, str):
            raise InvalidCiphertextError(
                f"Expected an encrypted envelope at {path}, got {type(value).__name__}", path=path
            )
        plaintext = decrypt_text(key, value)
        try:
            return json.loads(plaintext)
        except ValueError:
            # raw text, as sealed by from_string or by older writers
            logger.debug("plaintext at %s is not JSON; returned as text", path)
            return plaintext

    return Operations(codec, leaf)


def hash(algorithm: Union[str, HashAlgorithm] = DEFAULT_ALGORITHM) -> Operations:
    """Return one-way digest operations; digests replace their source for good."""
    algo = resolve_algorithm(algorithm)

    def codec(text: str) -> str:
        return digest(algo, text)

    def leaf(value: Value, path: str) -> Value:
        return digest(algo, stringify(value))

    logger.debug("hash operations using %s", algo.value)
    return Operations(codec, leaf)

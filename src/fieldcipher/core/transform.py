"""
Structural transform engine.

Walks a plain JSON-like value (None, bool, int, float, str, list, dict) and
applies a leaf transform to exactly the locations named by a path selection,
copying everything else into a fresh result:

- arrays are atomic: a selected array goes to the leaf transform whole, an
  unselected one is deep-copied into the result and never looked into
- a selected object goes to the leaf transform whole; an unselected object is
  recursed into with the selection narrowed to its children
- a selected scalar goes to the leaf transform, an unselected one is kept
- anything else (datetime, re.Pattern, functions, tuples, sets, class
  instances, dict/list subclasses, NaN) raises UnsupportedTypeError naming its
  path and aborts the whole call

Leaf transforms receive the selected value itself plus its full dot path and
decide how to serialize it (see canonical_json / stringify).
"""

from __future__ import annotations

import copy
import json
import logging
import math
from typing import Any, Callable, Dict, List, Union

from .exceptions import CryptoError, UnsupportedTypeError, annotate
from .paths import PathSet, is_selected, join_path, narrow

logger = logging.getLogger(__name__)

Scalar = Union[None, bool, int, float, str]
Value = Union[Scalar, List["Value"], Dict[str, "Value"]]
LeafTransform = Callable[[Value, str], Value]

_SCALAR_TYPES = (type(None), bool, int, float, str)


def is_scalar(value: Any) -> bool:
    if type(value) not in _SCALAR_TYPES:
        return False
    # NaN and the infinities have no JSON form
    return not (type(value) is float and not math.isfinite(value))


def check_value(value: Any, path: str = "") -> None:
    """Raise UnsupportedTypeError for the first unsupported value in ``value``."""
    if type(value) is dict:
        for key, child in value.items():
            if type(key) is not str:
                raise UnsupportedTypeError(join_path(path, str(key)), f"{type(key).__name__} key")
            check_value(child, join_path(path, key))
    elif type(value) is list:
        for index, child in enumerate(value):
            check_value(child, join_path(path, str(index)))
    elif not is_scalar(value):
        raise UnsupportedTypeError(path, type(value).__name__)


def canonical_json(value: Value) -> str:
    """Compact JSON in insertion order; the form selected subtrees are encrypted in."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), allow_nan=False)


def stringify(value: Value) -> str:
    # strings stay as they are so they digest like from_string input
    if type(value) is str:
        return value
    return canonical_json(value)


def _apply(leaf: LeafTransform, value: Value, path: str) -> Value:
    try:
        return leaf(value, path)
    except CryptoError as exc:
        annotate(exc, path)
        raise


def transform(value: Dict[str, Value], paths: PathSet, leaf: LeafTransform, path: str = "") -> Dict[str, Value]:
    """Return a copy of ``value`` with every selected location passed through ``leaf``.

    ``paths`` is relative to ``value``; ``path`` is the absolute dot path of
    ``value`` itself and only feeds error messages and the leaf transform.
    Unselected arrays are deep-copied, so changing the result leaves the
    input alone.
    The input is never modified and nothing is returned if any field fails.
    """
    if type(value) is not dict:
        raise UnsupportedTypeError(path, type(value).__name__)

    result: Dict[str, Value] = {}
    for key, child in value.items():
        if type(key) is not str:
            raise UnsupportedTypeError(join_path(path, str(key)), f"{type(key).__name__} key")
        full_path = join_path(path, key)
        selected = is_selected(paths, key)

        if type(child) is list:
            if selected:
                check_value(child, full_path)
                result[key] = _apply(leaf, child, full_path)
            else:
                # copied so the output never aliases the input
                result[key] = copy.deepcopy(child)
        elif type(child) is dict:
            if selected:
                check_value(child, full_path)
                result[key] = _apply(leaf, child, full_path)
            else:
                result[key] = transform(child, narrow(paths, key), leaf, full_path)
        elif is_scalar(child):
            result[key] = _apply(leaf, child, full_path) if selected else child
        else:
            raise UnsupportedTypeError(full_path, type(child).__name__)

    if not path:
        logger.debug("transformed object with %d field(s), %d path(s) selected", len(result), len(paths))
    return result


def transform_string(text: str, codec: Callable[[str], str]) -> str:
    """Apply ``codec`` to a bare string; no traversal is involved."""
    if type(text) is not str:
        raise UnsupportedTypeError("", type(text).__name__)
    return codec(text)

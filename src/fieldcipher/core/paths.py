"""Dot-notation path selection.

A selection is a frozenset of dot paths such as ``profile.email``. The
traversal only ever asks two questions of it: is this exact path selected,
and which paths remain once we descend into a child object.
"""

from typing import Any, FrozenSet, Iterable, Mapping, Optional, Union

from .exceptions import UnsupportedTypeError

PATH_SEPARATOR = "."

PathSet = FrozenSet[str]


def normalize_paths(paths: Optional[Union[str, Iterable[str]]], root: Mapping[str, Any]) -> PathSet:
    """Return the selection to use for ``root``.

    ``None`` selects every top-level field of ``root`` (field names, not
    nested dot paths), so each field is transformed as a whole. A bare string
    is a single path.
    """
    if paths is None:
        return frozenset(root.keys())
    if isinstance(paths, str):
        return frozenset((paths,))
    try:
        selection = frozenset(paths)
    except TypeError as exc:
        raise UnsupportedTypeError("", f"{type(paths).__name__} paths") from exc
    for item in selection:
        if not isinstance(item, str):
            raise UnsupportedTypeError(repr(item), f"{type(item).__name__} path")
    return selection


def is_selected(paths: PathSet, path: str) -> bool:
    return path in paths


def narrow(paths: PathSet, parent: str) -> PathSet:
    """Paths below ``parent``, re-rooted so they are relative to it."""
    prefix = parent + PATH_SEPARATOR
    return frozenset(p[len(prefix):] for p in paths if p.startswith(prefix))


def join_path(parent: str, key: str) -> str:
    return f"{parent}{PATH_SEPARATOR}{key}" if parent else key

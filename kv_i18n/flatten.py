"""
Mapping between hierarchical translation trees and flat store keys.

A translation tree such as ``{"messages": {"greeting": "hi"}}`` stored for
locale ``en`` becomes the single entry ``en.messages.greeting``. Segment
names containing the path separator are escaped with :data:`SEPARATOR_ESCAPE_CHAR`
so they stay one path component.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from .values import classify

FLATTEN_SEPARATOR = "."
SEPARATOR_ESCAPE_CHAR = "\x01"


def escape_default_separator(segment: Any) -> str:
    """Replace every path separator inside one segment name."""
    return str(segment).replace(FLATTEN_SEPARATOR, SEPARATOR_ESCAPE_CHAR)


def _iter_leaves(
    tree: Mapping[Any, Any],
    escape: bool,
    prefix: str | None,
) -> Iterator[tuple[str, Any]]:
    for segment, value in tree.items():
        name = escape_default_separator(segment) if escape else str(segment)
        path = name if prefix is None else f"{prefix}{FLATTEN_SEPARATOR}{name}"
        if isinstance(value, Mapping):
            yield from _iter_leaves(value, escape, path)
            continue
        classify(value, key=path)
        yield path, value


def flatten_translations(
    locale: str,
    tree: Mapping[Any, Any],
    *,
    escape: bool = True,
) -> Iterator[tuple[str, Any]]:
    """
    Lazily yield ``(flat_key, terminal)`` pairs for every leaf of ``tree``.

    Parameters
    ----------
    locale:
        Locale identifier used as the first path segment of every key.
    tree:
        Nested mapping of segment names to child mappings or terminals.
    escape:
        When true, dots inside segment names are escaped instead of being
        treated as path separators.

    Raises
    ------
    UnsupportedValueKindError
        When the walk reaches a lazy or otherwise unstorable terminal. Pairs
        yielded before that point have already been handed to the consumer.
    """
    return _iter_leaves(tree, escape, str(locale))


def _expand_parts(part: Any) -> list[Any]:
    if part is None:
        return []
    if isinstance(part, (str, bytes)) or not isinstance(part, Sequence):
        return [part]
    expanded: list[Any] = []
    for item in part:
        expanded.extend(_expand_parts(item))
    return expanded


def normalize_flat_keys(
    key: Any,
    scope: Any = None,
    separator: str | None = None,
) -> str:
    """
    Join ``scope`` and ``key`` into one dot-separated relative key.

    ``key`` and ``scope`` may each be a string or a (nested) sequence of
    segments; ``None`` parts are dropped. When ``separator`` differs from the
    dot, literal dots are escaped and ``separator`` is translated to the dot,
    so callers using a custom separator address the same flat keys.
    """
    parts = _expand_parts(scope) + _expand_parts(key)
    separator = separator or FLATTEN_SEPARATOR
    normalized = [str(part) for part in parts]
    if separator != FLATTEN_SEPARATOR:
        normalized = [
            part.replace(FLATTEN_SEPARATOR, SEPARATOR_ESCAPE_CHAR).replace(
                separator, FLATTEN_SEPARATOR
            )
            for part in normalized
        ]
    return FLATTEN_SEPARATOR.join(normalized)


def locale_of(flat_key: str) -> str | None:
    """Return the text before the first separator, or ``None`` if there is none."""
    head, found, _ = flat_key.partition(FLATTEN_SEPARATOR)
    return head if found else None

"""
Thread-safe in-memory translation store.

Useful for development, tests and single-process deployments that want the
same flat key layout as the Redis store.
"""

from __future__ import annotations

from threading import RLock


class MemoryTranslationStore:
    """
    Dictionary-backed implementation of :class:`TranslationBackend`.

    Notes
    -----
    Keys are kept in insertion order, so scans return keys in the order they
    were first written.
    """

    def __init__(self) -> None:
        """Create an empty key space and initialize lock state."""
        self._data: dict[str, str] = {}
        self._lock = RLock()

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def scan_prefix(self, prefix: str) -> list[str]:
        with self._lock:
            return [key for key in self._data if key.startswith(prefix)]

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._data)

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

"""
Store protocol used by :class:`kv_i18n.adapter.KeyValueI18nBackend`.

The adapter depends on this minimal method surface rather than on a specific
client library, enabling external stores such as Redis without changing the
translation API.
"""

from __future__ import annotations

from typing import Protocol


class TranslationBackend(Protocol):
    """
    Behavioral contract for flat key-value stores holding translations.

    Keys are flat translation keys (``en.messages.greeting``) and values are
    JSON text. Implementations may be shared by several adapter instances, so
    they are expected to be safe for concurrent access; no multi-key
    atomicity is required.
    """

    def get(self, key: str) -> bytes | str | None:
        """
        Return the stored value for ``key`` or ``None`` when absent.

        Clients that do not decode responses may return the raw bytes.
        """

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, overwriting any previous value."""

    def scan_prefix(self, prefix: str) -> list[str]:
        """Return every stored key starting with the literal ``prefix``."""

    def keys(self) -> list[str]:
        """Return every stored key."""

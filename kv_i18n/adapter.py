"""
Translation backend that keeps its data in a flat key-value store.

Writes flatten a translation tree into one store entry per leaf. Reads try
an exact key first and otherwise collect every entry below the key into a
one-level mapping keyed by the remaining dotted path.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .backend_protocol import TranslationBackend
from .flatten import FLATTEN_SEPARATOR, flatten_translations, locale_of, normalize_flat_keys
from .values import MISSING, decode_value, encode_value

if TYPE_CHECKING:  # pragma: no cover - typing-only imports
    from .backends import StoreBackend

_LOGGER = logging.getLogger(__name__)


class KeyValueI18nBackend:
    """
    Store, look up and enumerate translations held in a key-value store.

    Parameters
    ----------
    store:
        Object implementing :class:`kv_i18n.backend_protocol.TranslationBackend`.
        The adapter owns no connection state of its own; every call is a
        live round trip to ``store`` and store errors propagate unchanged.
    """

    def __init__(self, store: TranslationBackend) -> None:
        self.store = store

    @classmethod
    def from_backend(
        cls,
        backend: "str | StoreBackend" = "memory",
        **backend_options: Any,
    ) -> "KeyValueI18nBackend":
        """
        Build an adapter around a named store backend.

        ``backend_options`` are forwarded to :func:`kv_i18n.backends.create_store`.
        """
        from .backends import create_store

        return cls(create_store(backend=backend, **backend_options))

    def store_translations(
        self,
        locale: str,
        data: Mapping[Any, Any],
        *,
        escape: bool = True,
    ) -> None:
        """
        Write every leaf of ``data`` as one store entry under ``locale``.

        Existing entries with the same flat key are overwritten. The writes
        are not atomic: a failing leaf raises
        :class:`~kv_i18n.exceptions.UnsupportedValueKindError` and leaves the
        entries written before it in place.
        """
        written = 0
        for flat_key, value in flatten_translations(locale, data, escape=escape):
            self.store.set(flat_key, encode_value(value, key=flat_key))
            written += 1
        _LOGGER.debug("Stored translations locale=%s entries=%d", locale, written)

    def lookup(
        self,
        locale: str,
        key: Any,
        scope: Any = (),
        *,
        separator: str | None = None,
    ) -> Any:
        """
        Return the translation stored for ``key``.

        Returns
        -------
        Any
            The decoded terminal when ``key`` names a leaf; a mapping from
            the remaining dotted path to decoded values when ``key`` names an
            inner node (``{"b.c": "x"}``, not ``{"b": {"c": "x"}}``); or
            :data:`kv_i18n.values.MISSING` when nothing is stored.
        """
        normalized = self.resolve_link(locale, normalize_flat_keys(key, scope, separator))
        main_key = f"{locale}{FLATTEN_SEPARATOR}{normalized}"

        raw = self.store.get(main_key)
        if raw is not None:
            return decode_value(raw)

        child_prefix = f"{main_key}{FLATTEN_SEPARATOR}"
        child_keys = self.store.scan_prefix(child_prefix)
        if not child_keys:
            _LOGGER.debug("Translation missing locale=%s key=%s", locale, normalized)
            return MISSING

        result: dict[str, Any] = {}
        for child_key in child_keys:
            child_raw = self.store.get(child_key)
            # Removed by another writer between the scan and the read.
            if child_raw is None:
                continue
            result[child_key[len(child_prefix):]] = decode_value(child_raw)
        if not result:
            _LOGGER.debug("Subtree vanished during lookup locale=%s key=%s", locale, normalized)
            return MISSING
        _LOGGER.debug(
            "Collected subtree locale=%s key=%s entries=%d", locale, normalized, len(result)
        )
        return result

    def resolve_link(self, locale: str, key: str) -> str:
        """Return ``key`` unchanged; link indirection is left to the caller."""
        return key

    def translations(self, locale: str) -> dict[str, Any]:
        """Return every entry of ``locale`` keyed by its path below the locale."""
        prefix = f"{locale}{FLATTEN_SEPARATOR}"
        result: dict[str, Any] = {}
        for flat_key in self.store.scan_prefix(prefix):
            raw = self.store.get(flat_key)
            if raw is not None:
                result[flat_key[len(prefix):]] = decode_value(raw)
        return result

    def available_locales(self) -> set[str]:
        """
        Return the locales that have at least one stored entry.

        Scans every key of the store on each call; results are not cached.
        """
        keys = self.store.keys()
        locales = {locale for locale in map(locale_of, keys) if locale is not None}
        _LOGGER.debug("Scanned locales keys=%d locales=%d", len(keys), len(locales))
        return locales

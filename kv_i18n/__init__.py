"""
kv_i18n
=======

Translation backend that stores i18n strings in a flat key-value store.

A nested translation tree is flattened into one entry per leaf on write::

    {"messages": {"greeting": "hi"}}   stored for "en"
    ->  en.messages.greeting = '"hi"'

Values are JSON text so numbers, booleans and nulls survive the round trip.
Lookups return the decoded leaf, a one-level mapping of everything below an
inner key, or :data:`MISSING`.

Redis support is available as a separate plugin package:

* import path: ``kv_i18n_redis``
* addresses use the ``host[:port][/db][/namespace]`` form; several
  addresses configure a Redis cluster

Store switching can be done with one parameter:

    from kv_i18n import create_i18n_backend

    i18n = create_i18n_backend(backend="memory")
    i18n = create_i18n_backend(backend="redis", addresses="localhost:6379/0/app")

Typical usage::

    from kv_i18n import KeyValueI18nBackend, MemoryTranslationStore

    i18n = KeyValueI18nBackend(MemoryTranslationStore())
    i18n.store_translations("en", {"messages": {"greeting": "hi"}})

    i18n.lookup("en", "greeting", scope=["messages"])   # "hi"
    i18n.lookup("en", "messages")                       # {"greeting": "hi"}
    i18n.available_locales()                            # {"en"}
"""

from .adapter import KeyValueI18nBackend
from .backend_protocol import TranslationBackend
from .backends import StoreBackend, available_backends, create_i18n_backend, create_store
from .exceptions import (
    BackendConfigurationError,
    BackendNotAvailableError,
    InvalidAddressError,
    KvI18nError,
    UnsupportedValueKindError,
)
from .flatten import (
    FLATTEN_SEPARATOR,
    SEPARATOR_ESCAPE_CHAR,
    escape_default_separator,
    flatten_translations,
    normalize_flat_keys,
)
from .memory import MemoryTranslationStore
from .values import MISSING, ValueKind, decode_value, encode_value

__all__ = [
    "FLATTEN_SEPARATOR",
    "MISSING",
    "SEPARATOR_ESCAPE_CHAR",
    "BackendConfigurationError",
    "BackendNotAvailableError",
    "InvalidAddressError",
    "KeyValueI18nBackend",
    "KvI18nError",
    "MemoryTranslationStore",
    "StoreBackend",
    "TranslationBackend",
    "UnsupportedValueKindError",
    "ValueKind",
    "available_backends",
    "create_i18n_backend",
    "create_store",
    "decode_value",
    "encode_value",
    "escape_default_separator",
    "flatten_translations",
    "normalize_flat_keys",
]

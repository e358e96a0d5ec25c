"""
Redis backend plugin for kv_i18n.

This package is intentionally separate from the core library so users can opt
into Redis-backed translation storage only when needed:

    from kv_i18n_redis import RedisI18nBackend

    i18n = RedisI18nBackend("localhost:6379/0/translations")
    i18n.store_translations("en", {"messages": {"greeting": "hi"}})
    i18n.lookup("en", "messages.greeting")

Several addresses configure a Redis cluster:

    RedisI18nBackend("10.0.0.1:7000", "10.0.0.2:7000")

Users can either import this package directly or use the core backend factory:

    from kv_i18n import create_i18n_backend
    i18n = create_i18n_backend(backend="redis", addresses="localhost:6379/0/translations")
"""

from .address import RedisAddress
from .backend import RedisI18nBackend
from .store import RedisStoreConfig, RedisTranslationStore, escape_glob

__all__ = [
    "RedisAddress",
    "RedisI18nBackend",
    "RedisStoreConfig",
    "RedisTranslationStore",
    "escape_glob",
]

"""
Backend factory helpers for easy store switching.

This module gives application developers a uniform way to pick a storage
backend by name without rewriting adapter bootstrap logic.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

from .backend_protocol import TranslationBackend
from .exceptions import BackendConfigurationError, BackendNotAvailableError
from .memory import MemoryTranslationStore

if TYPE_CHECKING:  # pragma: no cover - typing-only imports
    from .adapter import KeyValueI18nBackend


class StoreBackend(str, Enum):
    """
    Built-in backend names supported by the factory helpers.

    MEMORY
        In-process in-memory store.
    REDIS
        Redis store provided by the optional plugin package.
    """

    MEMORY = "memory"
    REDIS = "redis"


def _normalize_backend(backend: str | StoreBackend) -> StoreBackend:
    """
    Normalize backend name into :class:`StoreBackend` enum value.
    """
    if isinstance(backend, StoreBackend):
        return backend
    lowered = str(backend).strip().lower()
    try:
        return StoreBackend(lowered)
    except ValueError as exc:
        valid = ", ".join(item.value for item in StoreBackend)
        raise BackendConfigurationError(
            f"Unknown backend {backend!r}. Supported values: {valid}."
        ) from exc


def available_backends() -> tuple[str, ...]:
    """
    Return backend names available in the current environment.

    The Redis backend appears only when the optional plugin package is installed.
    """
    backends = [StoreBackend.MEMORY.value]
    try:
        __import__("kv_i18n_redis")
    except ImportError:
        pass
    else:
        backends.append(StoreBackend.REDIS.value)
    return tuple(backends)


def create_store(
    backend: str | StoreBackend = StoreBackend.MEMORY,
    **backend_options: Any,
) -> TranslationBackend:
    """
    Create a translation store instance from a short backend name.

    Parameters
    ----------
    backend:
        Backend selector string (``"memory"`` or ``"redis"``).
    backend_options:
        Backend-specific options.

        Redis options:
            ``addresses`` (str or sequence of address specs), ``namespace``
            (str), ``redis_client`` and optional plugin-native ``config``
            object.
    """
    selected = _normalize_backend(backend)
    if selected is StoreBackend.MEMORY:
        if backend_options:
            unknown = ", ".join(sorted(str(key) for key in backend_options))
            raise BackendConfigurationError(
                f"Memory backend does not accept options: {unknown}."
            )
        return MemoryTranslationStore()
    if selected is StoreBackend.REDIS:
        try:
            from kv_i18n_redis import RedisStoreConfig, RedisTranslationStore
        except ImportError as exc:
            raise BackendNotAvailableError(
                "Redis backend requires the 'redis' client library (pip install redis)."
            ) from exc

        config = backend_options.pop("config", None)
        redis_client = backend_options.pop("redis_client", None)
        if config is None:
            addresses = backend_options.pop("addresses", ())
            if isinstance(addresses, str):
                addresses = (addresses,)
            namespace = backend_options.pop("namespace", None)
            config = RedisStoreConfig.from_specs(*addresses, namespace=namespace)
        if backend_options:
            unknown = ", ".join(sorted(str(key) for key in backend_options))
            raise BackendConfigurationError(
                f"Unknown Redis backend options: {unknown}."
            )
        return RedisTranslationStore(config=config, redis_client=redis_client)
    raise BackendConfigurationError(f"Unhandled backend: {selected!r}")


def create_i18n_backend(
    backend: str | StoreBackend = StoreBackend.MEMORY,
    **backend_options: Any,
) -> "KeyValueI18nBackend":
    """
    Build :class:`KeyValueI18nBackend` using named store backend in one step.

    ``i18n = create_i18n_backend("redis", addresses=["localhost:6379/0/app"])``
    """
    from .adapter import KeyValueI18nBackend

    return KeyValueI18nBackend(create_store(backend=backend, **backend_options))

"""
Redis-backed translation store implementation.

The store implements the core ``TranslationBackend`` protocol and can be
injected into :class:`kv_i18n.adapter.KeyValueI18nBackend`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from kv_i18n.exceptions import InvalidAddressError
from redis import Redis
from redis.cluster import ClusterNode, RedisCluster

from .address import RedisAddress

_LOGGER = logging.getLogger(__name__)

_GLOB_SPECIAL = frozenset("*?[]\\")


def escape_glob(text: str) -> str:
    """Escape Redis glob metacharacters so ``text`` matches literally."""
    return "".join(f"\\{char}" if char in _GLOB_SPECIAL else char for char in text)


@dataclass(slots=True)
class RedisStoreConfig:
    """
    Configuration for :class:`RedisTranslationStore`.

    Parameters
    ----------
    addresses:
        One address for a single server, several for a Redis cluster.
    namespace:
        Prefix for all redis keys created by this store. Defaults to the
        namespace carried by the addresses.
    socket_timeout_seconds:
        Read/write timeout passed to the redis client; ``None`` keeps the
        client default.
    socket_connect_timeout_seconds:
        Connect timeout passed to the redis client.
    scan_count:
        ``COUNT`` hint for incremental ``SCAN`` calls.
    """

    addresses: tuple[RedisAddress, ...] = field(default_factory=lambda: (RedisAddress(),))
    namespace: str | None = None
    socket_timeout_seconds: float | None = None
    socket_connect_timeout_seconds: float | None = None
    scan_count: int = 1000

    def __post_init__(self) -> None:
        """Validate configuration values and resolve the namespace."""
        self.addresses = tuple(self.addresses)
        if not self.addresses:
            raise InvalidAddressError("RedisStoreConfig.addresses must not be empty.")
        carried = {address.namespace for address in self.addresses if address.namespace}
        if len(carried) > 1:
            raise InvalidAddressError(
                f"All Redis addresses must share one namespace, got {sorted(carried)}."
            )
        if self.namespace is None and carried:
            self.namespace = carried.pop()
        if self.namespace is not None and not self.namespace.strip():
            raise InvalidAddressError("RedisStoreConfig.namespace cannot be blank when provided.")
        if self.socket_timeout_seconds is not None and self.socket_timeout_seconds <= 0:
            raise ValueError("RedisStoreConfig.socket_timeout_seconds must be > 0.")
        if (
            self.socket_connect_timeout_seconds is not None
            and self.socket_connect_timeout_seconds <= 0
        ):
            raise ValueError("RedisStoreConfig.socket_connect_timeout_seconds must be > 0.")
        if self.scan_count <= 0:
            raise ValueError("RedisStoreConfig.scan_count must be >= 1.")

    @classmethod
    def from_specs(cls, *specs: str, **kwargs: Any) -> "RedisStoreConfig":
        """
        Build configuration from ``host[:port][/db][/namespace]`` strings.

        No specs means a single ``localhost:6379/0`` server.
        """
        addresses = tuple(RedisAddress.parse(spec) for spec in specs) or (RedisAddress(),)
        return cls(addresses=addresses, **kwargs)

    @property
    def is_cluster(self) -> bool:
        """Return true when several addresses describe a Redis cluster."""
        return len(self.addresses) > 1


class RedisTranslationStore:
    """
    Redis-backed implementation of the core translation store API.

    Data model
    ----------
    * every flat translation key is one Redis string key
    * keys are prefixed with ``"{namespace}:"`` when a namespace is set
    * key enumeration uses incremental ``SCAN``, never ``KEYS``

    Notes
    -----
    No locking or transactions are used; concurrent writers see last-write-wins
    per key.
    """

    def __init__(
        self,
        *,
        config: RedisStoreConfig | None = None,
        redis_client: Redis | RedisCluster | None = None,
    ) -> None:
        self.config = config or RedisStoreConfig()
        self._redis = redis_client or self._create_client()
        self._prefix = f"{self.config.namespace}:" if self.config.namespace else ""

    def _create_client(self) -> Redis | RedisCluster:
        # Values stay bytes so undecodable data reaches decode_value intact.
        options: dict[str, Any] = {"decode_responses": False}
        if self.config.socket_timeout_seconds is not None:
            options["socket_timeout"] = self.config.socket_timeout_seconds
        if self.config.socket_connect_timeout_seconds is not None:
            options["socket_connect_timeout"] = self.config.socket_connect_timeout_seconds

        first = self.config.addresses[0]
        if self.config.is_cluster:
            _LOGGER.debug(
                "Creating Redis cluster client startup_nodes=%s",
                [(address.host, address.port) for address in self.config.addresses],
            )
            return RedisCluster(
                startup_nodes=[
                    ClusterNode(address.host, address.port) for address in self.config.addresses
                ],
                username=first.username,
                password=first.password,
                ssl=first.ssl,
                **options,
            )
        _LOGGER.debug("Creating Redis client host=%s port=%d db=%d", first.host, first.port, first.db)
        return Redis.from_url(first.to_url(), **options)

    # ------------------------------------------------------------------ #
    # Key helpers
    # ------------------------------------------------------------------ #

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def _decode_text(self, value: bytes | str) -> str:
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    def _strip(self, raw_key: bytes | str) -> str:
        return self._decode_text(raw_key)[len(self._prefix):]

    # ------------------------------------------------------------------ #
    # TranslationBackend API
    # ------------------------------------------------------------------ #

    def get(self, key: str) -> bytes | str | None:
        return self._redis.get(self._key(key))

    def set(self, key: str, value: str) -> None:
        self._redis.set(self._key(key), value)

    def scan_prefix(self, prefix: str) -> list[str]:
        pattern = f"{escape_glob(self._key(prefix))}*"
        # SCAN may report one key more than once.
        found = dict.fromkeys(
            self._strip(raw_key)
            for raw_key in self._redis.scan_iter(match=pattern, count=self.config.scan_count)
        )
        _LOGGER.debug("Scanned Redis keys pattern=%s count=%d", pattern, len(found))
        return list(found)

    def keys(self) -> list[str]:
        return self.scan_prefix("")

    def close(self) -> None:
        """Release the underlying connection pool."""
        self._redis.close()

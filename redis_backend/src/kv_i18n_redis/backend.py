"""
Redis-backed translation adapter convenience wrapper.
"""

from __future__ import annotations

from kv_i18n.adapter import KeyValueI18nBackend
from redis import Redis
from redis.cluster import RedisCluster

from .store import RedisStoreConfig, RedisTranslationStore


class RedisI18nBackend(KeyValueI18nBackend):
    """
    :class:`KeyValueI18nBackend` variant that keeps translations in Redis.

    Examples
    --------
    ``RedisI18nBackend()``
        localhost, port 6379, db 0
    ``RedisI18nBackend("example.com:23682/1/theplaylist")``
        example.com, port 23682, db 1, namespace ``theplaylist``
    ``RedisI18nBackend("localhost:6379/0", "localhost:6380/0")``
        Redis cluster with two startup nodes

    Parameters
    ----------
    addresses:
        ``host[:port][/db][/namespace]`` specs or ``redis://`` URLs.
    namespace:
        Key prefix overriding the namespace carried by the addresses.
    redis_client:
        Optional preconfigured Redis client instance.
    socket_timeout_seconds:
        Client read/write timeout.
    """

    def __init__(
        self,
        *addresses: str,
        namespace: str | None = None,
        redis_client: Redis | RedisCluster | None = None,
        socket_timeout_seconds: float | None = None,
    ) -> None:
        self.redis_store = RedisTranslationStore(
            config=RedisStoreConfig.from_specs(
                *addresses,
                namespace=namespace,
                socket_timeout_seconds=socket_timeout_seconds,
            ),
            redis_client=redis_client,
        )
        super().__init__(self.redis_store)

"""
Unit tests for :class:`kv_i18n_redis.RedisTranslationStore`.

The Redis client is replaced by a small dictionary-backed double that
understands the escaped prefix patterns the store sends to ``SCAN``.
"""

from __future__ import annotations

import unittest
from typing import Any, Iterator
from unittest import mock

from kv_i18n import KeyValueI18nBackend
from kv_i18n_redis import (
    RedisI18nBackend,
    RedisStoreConfig,
    RedisTranslationStore,
    escape_glob,
)


def _unescape_prefix_pattern(pattern: str) -> str:
    if not pattern.endswith("*") or pattern.endswith("\\*"):
        raise AssertionError(f"Expected a prefix pattern, got {pattern!r}")
    body = pattern[:-1]
    prefix = []
    index = 0
    while index < len(body):
        char = body[index]
        if char == "\\":
            index += 1
            char = body[index]
        elif char in "*?[]":
            raise AssertionError(f"Unescaped glob character in {pattern!r}")
        prefix.append(char)
        index += 1
    return "".join(prefix)


class FakeRedis:
    """Subset of the redis client API used by the translation store."""

    def __init__(self, *, as_bytes: bool = False) -> None:
        self.data: dict[str, Any] = {}
        self.patterns: list[str] = []
        self.as_bytes = as_bytes
        self.closed = False

    def _out(self, value: str) -> Any:
        return value.encode("utf-8") if self.as_bytes else value

    def get(self, key: str) -> Any:
        value = self.data.get(key)
        if value is None or isinstance(value, bytes):
            return value
        return self._out(value)

    def set(self, key: str, value: str) -> bool:
        self.data[key] = value
        return True

    def scan_iter(self, match: str, count: int) -> Iterator[Any]:
        self.patterns.append(match)
        prefix = _unescape_prefix_pattern(match)
        matched = [key for key in self.data if key.startswith(prefix)]
        # Real SCAN may return the same key twice across cursor pages.
        for key in matched + matched[:1]:
            yield self._out(key)

    def close(self) -> None:
        self.closed = True


class EscapeGlobTest(unittest.TestCase):
    def test_metacharacters_are_escaped(self) -> None:
        self.assertEqual("a\\*b\\?c\\[d\\]e\\\\f", escape_glob("a*b?c[d]e\\f"))

    def test_plain_text_is_unchanged(self) -> None:
        self.assertEqual("en.messages.", escape_glob("en.messages."))


class RedisTranslationStoreTest(unittest.TestCase):
    def setUp(self) -> None:
        self.client = FakeRedis()
        self.store = RedisTranslationStore(
            config=RedisStoreConfig(namespace="app"),
            redis_client=self.client,
        )

    def test_keys_are_namespaced_on_write_and_read(self) -> None:
        self.store.set("en.greeting", '"hi"')
        self.assertEqual({"app:en.greeting": '"hi"'}, self.client.data)
        self.assertEqual('"hi"', self.store.get("en.greeting"))
        self.assertIsNone(self.store.get("en.missing"))

    def test_scan_prefix_strips_namespace_and_deduplicates(self) -> None:
        self.store.set("en.a", "1")
        self.store.set("en.b", "2")
        self.store.set("fr.a", "3")
        self.assertEqual(["en.a", "en.b"], self.store.scan_prefix("en."))
        self.assertEqual(["app:en.*"], self.client.patterns)

    def test_scan_prefix_escapes_glob_characters(self) -> None:
        self.store.set("en.a*b.c", "1")
        self.store.set("en.axb.c", "2")
        self.assertEqual(["en.a*b.c"], self.store.scan_prefix("en.a*b."))
        self.assertEqual(["app:en.a\\*b.*"], self.client.patterns)

    def test_keys_only_covers_namespace(self) -> None:
        self.client.data["other:en.a"] = "1"
        self.store.set("en.a", "1")
        self.store.set("fr.a", "1")
        self.assertEqual(["en.a", "fr.a"], self.store.keys())

    def test_without_namespace_keys_scan_everything(self) -> None:
        store = RedisTranslationStore(redis_client=self.client)
        self.client.data["en.a"] = "1"
        self.assertEqual(["en.a"], store.keys())
        self.assertEqual(["*"], self.client.patterns)

    def test_bytes_keys_are_decoded_and_values_passed_through(self) -> None:
        client = FakeRedis(as_bytes=True)
        store = RedisTranslationStore(redis_client=client)
        store.set("en.a", '"x"')
        self.assertEqual(b'"x"', store.get("en.a"))
        self.assertEqual(["en.a"], store.scan_prefix("en."))
        self.assertEqual("x", KeyValueI18nBackend(store).lookup("en", "a"))

    def test_invalid_utf8_value_falls_back_to_raw_string(self) -> None:
        client = FakeRedis(as_bytes=True)
        client.data["en.legacy"] = b"\xffnot-utf8"
        i18n = KeyValueI18nBackend(RedisTranslationStore(redis_client=client))
        with self.assertLogs("kv_i18n.values", level="WARNING"):
            self.assertEqual("\ufffdnot-utf8", i18n.lookup("en", "legacy"))

    def test_close_releases_client(self) -> None:
        self.store.close()
        self.assertTrue(self.client.closed)


class RedisClientConstructionTest(unittest.TestCase):
    def test_single_address_uses_from_url(self) -> None:
        with mock.patch("kv_i18n_redis.store.Redis") as redis_cls:
            RedisTranslationStore(
                config=RedisStoreConfig.from_specs(
                    "example.com:23682/1/theplaylist", socket_timeout_seconds=2.5
                )
            )
        redis_cls.from_url.assert_called_once_with(
            "redis://example.com:23682/1",
            decode_responses=False,
            socket_timeout=2.5,
        )

    def test_several_addresses_build_a_cluster_client(self) -> None:
        with mock.patch("kv_i18n_redis.store.RedisCluster") as cluster_cls:
            RedisTranslationStore(
                config=RedisStoreConfig.from_specs("localhost:6379/0", "localhost:6380/0")
            )
        kwargs = cluster_cls.call_args.kwargs
        nodes = [(node.host, node.port) for node in kwargs["startup_nodes"]]
        self.assertEqual(2, len(nodes))
        self.assertEqual([6379, 6380], [port for _, port in nodes])
        self.assertFalse(kwargs["decode_responses"])
        self.assertFalse(kwargs["ssl"])


class RedisI18nBackendTest(unittest.TestCase):
    def test_end_to_end_over_fake_client(self) -> None:
        client = FakeRedis()
        i18n = RedisI18nBackend("localhost:6379/0/translations", redis_client=client)
        self.assertIsInstance(i18n, KeyValueI18nBackend)
        i18n.store_translations("en", {"messages": {"greeting": "hi", "farewell": "bye"}, "limit": 42})
        i18n.store_translations("fr", {"messages": {"greeting": "salut"}})

        self.assertEqual('"hi"', client.data["translations:en.messages.greeting"])
        self.assertEqual("hi", i18n.lookup("en", "messages.greeting"))
        self.assertEqual(42, i18n.lookup("en", "limit"))
        self.assertEqual({"greeting": "hi", "farewell": "bye"}, i18n.lookup("en", "messages"))
        self.assertEqual({"en", "fr"}, i18n.available_locales())
        self.assertIs(i18n.store, i18n.redis_store)


if __name__ == "__main__":
    unittest.main()

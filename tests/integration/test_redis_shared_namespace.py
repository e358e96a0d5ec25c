"""
Integration test against a real Redis server.

Set ``KV_I18N_TEST_REDIS_URL`` (for example ``redis://127.0.0.1:6379/15``)
to run it. Two independent adapter instances share one namespace, the way
several service processes share one Redis deployment.
"""

from __future__ import annotations

import os
import unittest
import uuid

from kv_i18n import MISSING, UnsupportedValueKindError
from kv_i18n_redis import RedisI18nBackend

REDIS_URL = os.getenv("KV_I18N_TEST_REDIS_URL", "").strip()


@unittest.skipUnless(REDIS_URL, "KV_I18N_TEST_REDIS_URL is not set")
class RedisSharedNamespaceIntegrationTest(unittest.TestCase):
    def setUp(self) -> None:
        self.namespace = f"kv-i18n-it-{uuid.uuid4().hex}"
        self.writer = RedisI18nBackend(REDIS_URL, namespace=self.namespace)
        self.reader = RedisI18nBackend(REDIS_URL, namespace=self.namespace)
        self.addCleanup(self._drop_namespace)

    def _drop_namespace(self) -> None:
        client = self.writer.redis_store._redis
        keys = list(client.scan_iter(match=f"{self.namespace}:*"))
        if keys:
            client.delete(*keys)
        self.writer.redis_store.close()
        self.reader.redis_store.close()

    def test_writes_from_one_instance_are_visible_to_another(self) -> None:
        self.writer.store_translations(
            "en",
            {"messages": {"greeting": "hi", "farewell": "bye"}, "a": {"b": {"c": "x"}}, "limit": 42},
        )
        self.writer.store_translations("fr", {"messages": {"greeting": "salut"}})

        self.assertEqual("hi", self.reader.lookup("en", "messages.greeting"))
        self.assertEqual(42, self.reader.lookup("en", "limit"))
        self.assertEqual({"greeting": "hi", "farewell": "bye"}, self.reader.lookup("en", "messages"))
        self.assertEqual({"b.c": "x"}, self.reader.lookup("en", "a"))
        self.assertIs(MISSING, self.reader.lookup("fr", "limit"))
        self.assertEqual({"en", "fr"}, self.reader.available_locales())

    def test_lazy_value_keeps_earlier_writes(self) -> None:
        with self.assertRaises(UnsupportedValueKindError):
            self.writer.store_translations("en", {"first": "kept", "lazy": lambda: "x"})
        self.assertEqual("kept", self.reader.lookup("en", "first"))


if __name__ == "__main__":
    unittest.main()

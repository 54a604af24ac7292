import os
import unittest
from unittest.mock import patch

from golinks.config import Settings
from golinks.db import InMemoryRouteStore, SqlRouteStore
from golinks.dependencies import build_route_store


class SettingsTests(unittest.TestCase):
    @patch.dict(
        os.environ,
        {"GOLINKS_ADMIN": "true", "GOLINKS_LOOKUP_TIMEOUT_SECONDS": "2.5"},
    )
    def test_reads_prefixed_environment(self):
        settings = Settings()
        self.assertTrue(settings.admin)
        self.assertEqual(settings.lookup_timeout_seconds, 2.5)

    def test_in_memory_store_without_database_url(self):
        store = build_route_store(Settings(database_url=None))
        self.assertIsInstance(store, InMemoryRouteStore)

    def test_in_memory_toggle_wins(self):
        settings = Settings(
            database_url="sqlite+pysqlite:///:memory:", use_in_memory_backends=True
        )
        self.assertIsInstance(build_route_store(settings), InMemoryRouteStore)

    def test_sql_store_with_database_url(self):
        settings = Settings(database_url="sqlite+pysqlite:///:memory:")
        self.assertIsInstance(build_route_store(settings), SqlRouteStore)


if __name__ == "__main__":
    unittest.main()

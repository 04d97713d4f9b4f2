import unittest
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from portfolio.db import InMemoryRemoteClient
from portfolio.registry import ABOUT, BLOG_POSTS, HERO, PROJECTS, SERVICES
from portfolio.remote_store import (
    REMOTE_UNAVAILABLE,
    RemoteErrorKind,
    RemoteStore,
    classify_remote_error,
    from_row,
    to_row,
)


class _PgError(Exception):
    def __init__(self, message: str, pgcode: str):
        super().__init__(message)
        self.pgcode = pgcode


class TranslationTests(unittest.TestCase):
    def test_to_row_and_back(self):
        record = {
            "id": "b1",
            "title": "Hello",
            "imageUrl": "https://example.com/a.png",
            "readTime": "3 min read",
            "createdAt": "2024-01-01T00:00:00.000Z",
            "unknown": "dropped",
        }
        row = to_row(BLOG_POSTS, record)
        self.assertEqual(row["image_url"], "https://example.com/a.png")
        self.assertEqual(row["read_time"], "3 min read")
        self.assertNotIn("unknown", row)
        record.pop("unknown")
        self.assertEqual(from_row(BLOG_POSTS, row), record)

    def test_singleton_columns(self):
        row = to_row(HERO, {"headlineLine1": "I craft", "statsValue2": "8+"})
        self.assertEqual(row, {"headline_line1": "I craft", "stats_value2": "8+"})


class ClassifyRemoteErrorTests(unittest.TestCase):
    def test_postgres_undefined_table_code(self):
        self.assertIs(
            classify_remote_error(_PgError("boom", "42P01")),
            RemoteErrorKind.SCHEMA_MISSING,
        )

    def test_wrapped_driver_error(self):
        orig = _PgError("relation missing", "42P01")
        wrapped = OperationalError("SELECT 1", {}, orig)
        self.assertIs(classify_remote_error(wrapped), RemoteErrorKind.SCHEMA_MISSING)

    def test_messages(self):
        for message in (
            'relation "public.projects" does not exist',
            "no such table: projects",
            "Could not find the table 'public.projects' in the schema cache",
        ):
            self.assertIs(
                classify_remote_error(RuntimeError(message)),
                RemoteErrorKind.SCHEMA_MISSING,
            )

    def test_other_errors(self):
        self.assertIs(
            classify_remote_error(ConnectionError("connection refused")),
            RemoteErrorKind.QUERY_FAILED,
        )
        self.assertIs(
            classify_remote_error(_PgError("duplicate key", "23505")),
            RemoteErrorKind.QUERY_FAILED,
        )


class RemoteStoreTests(unittest.TestCase):
    def setUp(self):
        self.client = InMemoryRemoteClient()
        self.store = RemoteStore(self.client)

    def test_insert_and_select_camel_records(self):
        self.assertTrue(
            self.store.insert(
                PROJECTS,
                [
                    {"id": "a", "title": "A", "liveUrl": "l", "createdAt": "2024-01-01"},
                    {"id": "b", "title": "B", "createdAt": "2024-02-01"},
                ],
            )
        )
        self.assertEqual(self.client.tables["projects"]["a"]["live_url"], "l")
        rows = self.store.select(PROJECTS)
        self.assertEqual([row["id"] for row in rows], ["b", "a"])
        self.assertEqual(rows[1]["liveUrl"], "l")
        self.assertEqual(self.store.select_one(PROJECTS, "a")["title"], "A")
        self.assertIsNone(self.store.select_one(PROJECTS, "zzz"))

    def test_services_ordered_ascending(self):
        self.store.upsert(SERVICES, [{"id": "x", "order": 2}, {"id": "y", "order": 1}])
        self.assertEqual([row["id"] for row in self.store.select(SERVICES)], ["y", "x"])

    def test_singleton_upsert_uses_sentinel_id(self):
        self.assertTrue(self.store.upsert(ABOUT, [{"bio": ["hi"], "imageUrl": "i"}]))
        self.assertEqual(list(self.client.tables["about_content"]), ["default"])
        row = self.store.select_one(ABOUT, "default")
        self.assertEqual(row["imageUrl"], "i")

    def test_update_and_delete(self):
        self.store.insert(PROJECTS, [{"id": "a", "title": "A"}])
        self.assertEqual(self.store.update(PROJECTS, "a", {"title": "Z"})["title"], "Z")
        self.assertIsNone(self.store.update(PROJECTS, "nope", {"title": "Z"}))
        self.assertEqual(self.store.delete(PROJECTS, "a"), 1)
        self.assertEqual(self.store.delete(PROJECTS, "a"), 0)

    def test_missing_table_is_reported_and_cleared(self):
        store = RemoteStore(InMemoryRemoteClient(tables=["blog_posts"]))
        with self.assertLogs("portfolio.remote_store", level="ERROR") as logs:
            result = store.select(PROJECTS)
        self.assertIs(result, REMOTE_UNAVAILABLE)
        self.assertFalse(result)
        self.assertEqual(store.missing_tables, {"projects"})
        self.assertIn("not provisioned", logs.output[0])

        store.client.tables["projects"] = {}
        self.assertEqual(store.select(PROJECTS), [])
        self.assertEqual(store.missing_tables, set())

    def test_query_failure_returns_sentinel(self):
        client = MagicMock()
        client.count.side_effect = ConnectionError("network down")
        store = RemoteStore(client)
        with self.assertLogs("portfolio.remote_store", level="WARNING"):
            self.assertIs(store.count(PROJECTS), REMOTE_UNAVAILABLE)
        self.assertEqual(store.missing_tables, set())

    def test_check_connection(self):
        self.assertTrue(self.store.check_connection().success)

        client = MagicMock()
        client.select.side_effect = ConnectionError("refused")
        status = RemoteStore(client).check_connection()
        self.assertFalse(status.success)
        self.assertEqual(status.error, "refused")


if __name__ == "__main__":
    unittest.main()

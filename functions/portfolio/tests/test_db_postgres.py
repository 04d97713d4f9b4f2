import unittest

from portfolio.db import InMemoryRemoteClient, SqlRemoteClient


def _project(project_id: str, created_at: str, **extra) -> dict:
    row = {
        "id": project_id,
        "title": f"Project {project_id}",
        "description": "",
        "image": "",
        "tags": ["wp"],
        "created_at": created_at,
        "updated_at": created_at,
    }
    row.update(extra)
    return row


class SqlRemoteClientTests(unittest.TestCase):
    """
    Uses SQLite via SQLAlchemy URL for fast/local testing of the Postgres client logic.
    """

    def setUp(self):
        self.db = SqlRemoteClient("sqlite+pysqlite:///:memory:")

    def test_insert_and_select_ordered(self):
        self.db.insert(
            "projects",
            [
                _project("a", "2024-01-01T00:00:00.000Z"),
                _project("b", "2024-02-01T00:00:00.000Z"),
            ],
        )
        rows = self.db.select("projects", order_by="created_at", descending=True)
        self.assertEqual([row["id"] for row in rows], ["b", "a"])
        self.assertEqual(rows[0]["tags"], ["wp"])
        self.assertIsNone(rows[0]["live_url"])

        limited = self.db.select("projects", filters={"id": "a"}, limit=1)
        self.assertEqual(len(limited), 1)
        self.assertEqual(limited[0]["title"], "Project a")

    def test_update_returns_row_or_none(self):
        self.db.insert("projects", [_project("a", "2024-01-01T00:00:00.000Z")])
        updated = self.db.update("projects", "a", {"title": "Renamed", "id": "zzz"})
        self.assertEqual(updated["title"], "Renamed")
        self.assertEqual(updated["id"], "a")
        self.assertIsNone(self.db.update("projects", "missing", {"title": "x"}))

    def test_upsert_inserts_then_merges(self):
        self.db.upsert("hero_content", [{"id": "default", "tagline": "One"}])
        self.db.upsert("hero_content", [{"id": "default", "name": "Me"}])
        rows = self.db.select("hero_content")
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]["tagline"], "One")
        self.assertEqual(rows[0]["name"], "Me")

    def test_delete_and_count(self):
        self.db.insert(
            "services",
            [
                {"id": "s1", "title": "Themes", "order": 1},
                {"id": "s2", "title": "Plugins", "order": 0},
            ],
        )
        self.assertEqual(self.db.count("services"), 2)
        ordered = self.db.select("services", order_by="order")
        self.assertEqual([row["id"] for row in ordered], ["s2", "s1"])
        self.assertEqual(self.db.delete("services", {"id": "s1"}), 1)
        self.assertEqual(self.db.delete("services", {"id": "s1"}), 0)
        self.assertEqual(self.db.count("services"), 1)

    def test_replace_prunes_missing_rows(self):
        self.db.insert(
            "themes",
            [
                {"id": "t1", "title": "Old", "tags": []},
                {"id": "t2", "title": "Gone", "tags": []},
            ],
        )
        pruned = self.db.replace(
            "themes",
            [
                {"id": "t1", "title": "Kept", "tags": []},
                {"id": "t3", "title": "New", "tags": []},
            ],
        )
        self.assertEqual(pruned, 1)
        titles = {row["id"]: row["title"] for row in self.db.select("themes")}
        self.assertEqual(titles, {"t1": "Kept", "t3": "New"})

        self.assertEqual(self.db.replace("themes", []), 2)
        self.assertEqual(self.db.count("themes"), 0)

    def test_json_columns(self):
        stats = {"experience": "8+", "projects": "50+"}
        self.db.upsert(
            "about_content",
            [{"id": "default", "bio": ["a", "b"], "skills": [], "stats": stats}],
        )
        row = self.db.select("about_content", filters={"id": "default"})[0]
        self.assertEqual(row["bio"], ["a", "b"])
        self.assertEqual(row["stats"], stats)

    def test_unknown_table(self):
        with self.assertRaises(LookupError):
            self.db.select("nope")

    def test_missing_schema_surfaces_as_error(self):
        bare = SqlRemoteClient("sqlite+pysqlite:///:memory:", create_schema=False)
        with self.assertRaises(Exception) as ctx:
            bare.select("projects")
        self.assertIn("no such table", str(ctx.exception))

    def test_requires_url(self):
        with self.assertRaises(ValueError):
            SqlRemoteClient("")


class InMemoryRemoteClientTests(unittest.TestCase):
    def setUp(self):
        self.db = InMemoryRemoteClient()

    def test_duplicate_insert_rejected(self):
        self.db.insert("projects", [_project("a", "2024-01-01T00:00:00.000Z")])
        with self.assertRaises(ValueError):
            self.db.insert("projects", [_project("a", "2024-01-01T00:00:00.000Z")])

    def test_select_filters_and_copies(self):
        self.db.insert(
            "blog_posts",
            [
                {"id": "1", "slug": "one", "published": True},
                {"id": "2", "slug": "two", "published": False},
            ],
        )
        rows = self.db.select("blog_posts", filters={"published": True})
        self.assertEqual([row["id"] for row in rows], ["1"])
        rows[0]["slug"] = "changed"
        self.assertEqual(self.db.select("blog_posts", filters={"id": "1"})[0]["slug"], "one")
        self.assertEqual(self.db.count("blog_posts", {"id": ["1", "2"]}), 2)

    def test_missing_table(self):
        db = InMemoryRemoteClient(tables=["projects"])
        with self.assertRaises(LookupError) as ctx:
            db.select("blog_posts")
        self.assertIn('relation "blog_posts" does not exist', str(ctx.exception))

    def test_replace_and_reset(self):
        self.db.upsert("plugins", [{"id": "p1"}, {"id": "p2"}])
        self.assertEqual(self.db.replace("plugins", [{"id": "p2", "title": "x"}]), 1)
        self.assertEqual(self.db.select("plugins"), [{"id": "p2", "title": "x"}])
        self.db.reset()
        self.assertEqual(self.db.count("plugins"), 0)


if __name__ == "__main__":
    unittest.main()

import json
import unittest

from portfolio.db import InMemoryRemoteClient
from portfolio.local_store import InMemoryLocalStorage, LocalStore
from portfolio.migration import MigrationRunner, migrate_local_to_remote
from portfolio.registry import ABOUT, PROJECTS, SERVICES
from portfolio.remote_store import RemoteStore


class _BrokenServicesClient(InMemoryRemoteClient):
    def upsert(self, table, rows):
        if table == "services":
            raise ConnectionError("timeout")
        super().upsert(table, rows)


def _seed(storage: InMemoryLocalStorage) -> None:
    storage.items["website-projects"] = json.dumps(
        [
            {"id": "p1", "title": "One", "liveUrl": "l", "createdAt": "2024-01-01T00:00:00.000Z"},
            {"id": "p2", "title": "Two", "createdAt": "2024-02-01T00:00:00.000Z"},
            {"title": "No id"},
        ]
    )
    storage.items["website-services"] = json.dumps(
        [{"id": "s1", "title": "Themes", "order": 1}]
    )
    storage.items["website-about"] = json.dumps({"bio": ["hello"], "skills": ["PHP"]})


class MigrationTests(unittest.TestCase):
    def setUp(self):
        self.storage = InMemoryLocalStorage()
        _seed(self.storage)
        self.local = LocalStore(self.storage)
        self.client = InMemoryRemoteClient()
        self.remote = RemoteStore(self.client)

    def test_copies_collections_and_singletons(self):
        with self.assertLogs("portfolio.migration", level="INFO"):
            report = migrate_local_to_remote(self.local, self.remote)
        self.assertTrue(report.ok)
        self.assertFalse(report.skipped)
        self.assertEqual(report.migrated, {"projects": 2, "services": 1, "about": 1})
        self.assertEqual(self.client.tables["projects"]["p1"]["live_url"], "l")
        self.assertEqual(self.client.tables["about_content"]["default"]["bio"], ["hello"])
        self.assertIn("website-projects", self.storage.items)

    def test_is_idempotent(self):
        migrate_local_to_remote(self.local, self.remote)
        snapshot = json.dumps(self.client.tables, sort_keys=True)
        report = migrate_local_to_remote(self.local, self.remote)
        self.assertTrue(report.ok)
        self.assertEqual(json.dumps(self.client.tables, sort_keys=True), snapshot)
        self.assertEqual(self.client.count("projects"), 2)

    def test_skipped_without_remote(self):
        report = migrate_local_to_remote(self.local, None)
        self.assertTrue(report.skipped)
        self.assertEqual(report.migrated, {})

        report = migrate_local_to_remote(self.local, self.remote, remote_enabled=False)
        self.assertTrue(report.skipped)
        self.assertEqual(self.client.count("projects"), 0)

    def test_failure_does_not_stop_other_types(self):
        remote = RemoteStore(_BrokenServicesClient())
        report = migrate_local_to_remote(self.local, remote)
        self.assertFalse(report.ok)
        self.assertEqual(report.failed, {"services": 1})
        self.assertEqual(report.migrated["projects"], 2)
        self.assertEqual(report.migrated["about"], 1)

    def test_batches(self):
        report = migrate_local_to_remote(
            self.local, self.remote, (PROJECTS, SERVICES, ABOUT), batch_size=1
        )
        self.assertEqual(report.migrated["projects"], 2)

    def test_unreadable_local_storage_is_reported(self):
        self.storage.available = False
        report = migrate_local_to_remote(self.local, self.remote, (PROJECTS,))
        self.assertEqual(report.failed, {"projects": 0})


class MigrationRunnerTests(unittest.TestCase):
    def test_runs_once_unless_forced(self):
        storage = InMemoryLocalStorage()
        _seed(storage)
        client = InMemoryRemoteClient()
        runner = MigrationRunner(
            LocalStore(storage), RemoteStore(client), remote_enabled=True
        )
        self.assertFalse(runner.has_run)
        first = runner.run()
        self.assertTrue(runner.has_run)
        self.assertIs(runner.run(), first)

        client.reset()
        second = runner.run(force=True)
        self.assertIsNot(second, first)
        self.assertEqual(client.count("projects"), 2)


if __name__ == "__main__":
    unittest.main()

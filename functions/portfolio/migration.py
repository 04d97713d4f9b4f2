"""
Copies content accumulated in local storage into the remote store.

One-directional (local to remote) and upsert-only: local data is never
deleted, so running it again is harmless.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from portfolio.local_store import LocalStorageUnavailableError, LocalStore
from portfolio.registry import ALL_CONTENT_TYPES, ContentType
from portfolio.remote_store import REMOTE_UNAVAILABLE, RemoteStore
from shared.content_types import record_from_any

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 100


@dataclass
class MigrationReport:
    skipped: bool = False
    migrated: dict[str, int] = field(default_factory=dict)
    failed: dict[str, int] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed

    def as_dict(self) -> dict:
        return {
            "skipped": self.skipped,
            "migrated": dict(self.migrated),
            "failed": dict(self.failed),
            "ok": self.ok,
        }


def _local_records(local: LocalStore, content_type: ContentType) -> list[dict]:
    record_cls = content_type.record_cls
    if content_type.singleton:
        stored = local.read_singleton(content_type)
        if stored is None:
            return []
        return [record_from_any(record_cls, stored).as_dict()]

    records = []
    for item in local.read_collection(content_type):
        record = record_from_any(record_cls, item).as_dict()
        if not record.get("id"):
            logger.warning(
                "Skipping local %s record without an id: %r", content_type.name, item
            )
            continue
        records.append(record)
    return records


def migrate_local_to_remote(
    local: LocalStore,
    remote: Optional[RemoteStore],
    content_types: Iterable[ContentType] = ALL_CONTENT_TYPES,
    *,
    remote_enabled: bool = True,
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> MigrationReport:
    """
    Upsert every non-empty local collection/singleton into its remote table.

    A failed batch is logged and counted in the report; the run continues
    with the next batch and the next content type.
    """
    report = MigrationReport()
    if not remote_enabled or remote is None:
        logger.info("Remote backend not configured; skipping local content migration")
        report.skipped = True
        return report

    for content_type in content_types:
        try:
            records = _local_records(local, content_type)
        except LocalStorageUnavailableError as exc:
            logger.error("Cannot read local %s for migration: %s", content_type.name, exc)
            report.failed[content_type.name] = 0
            continue
        if not records:
            continue

        for start in range(0, len(records), batch_size):
            batch = records[start : start + batch_size]
            if remote.upsert(content_type, batch) is REMOTE_UNAVAILABLE:
                logger.error(
                    "Migration batch of %d %s record(s) failed",
                    len(batch),
                    content_type.name,
                )
                report.failed[content_type.name] = (
                    report.failed.get(content_type.name, 0) + len(batch)
                )
            else:
                report.migrated[content_type.name] = (
                    report.migrated.get(content_type.name, 0) + len(batch)
                )

        if content_type.name in report.migrated:
            logger.info(
                "Migrated %d local %s record(s) to remote table %r",
                report.migrated[content_type.name],
                content_type.name,
                content_type.table,
            )
    return report


class MigrationRunner:
    """
    Runs the migration at most once per instance unless forced.

    The app keeps one instance per process and calls `run()` at startup.
    """

    def __init__(
        self,
        local: LocalStore,
        remote: Optional[RemoteStore],
        *,
        remote_enabled: bool,
    ):
        self.local = local
        self.remote = remote
        self.remote_enabled = remote_enabled
        self.last_report: Optional[MigrationReport] = None

    @property
    def has_run(self) -> bool:
        return self.last_report is not None

    def run(self, *, force: bool = False) -> MigrationReport:
        if self.last_report is not None and not force:
            return self.last_report
        self.last_report = migrate_local_to_remote(
            self.local, self.remote, remote_enabled=self.remote_enabled
        )
        return self.last_report

"""
Content repositories: one generic implementation, instantiated per content type.

Reads try the remote store first when it is enabled and fall back to local
storage. Writes always land in local storage first and are then mirrored to
the remote store on a best-effort basis, so a failed remote write never
loses data. The only exception a repository raises is
`LocalStorageUnavailableError`.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from portfolio.local_store import LocalStore
from portfolio.registry import (
    ABOUT,
    BLOG_POSTS,
    COLLECTION_TYPES,
    CONTACT,
    FOOTER,
    HERO,
    PLUGINS,
    PROJECTS,
    SERVICES,
    THEMES,
    ContentType,
)
from portfolio.remote_store import REMOTE_UNAVAILABLE, RemoteStore
from shared.content_types import SINGLETON_ID, ContentRecord, record_from_any
from shared.json_utils import snake_to_camel
from shared.utils import (
    EPOCH,
    generate_slug,
    get_unique_id,
    next_timestamp,
    parse_timestamp,
)

logger = logging.getLogger(__name__)

# Keys callers may not set through add/update.
_SYSTEM_FIELDS = ("id", "createdAt", "updatedAt")


def _timestamp_key(value: Any):
    if isinstance(value, str):
        return parse_timestamp(value) or EPOCH
    return EPOCH


def _number_key(value: Any):
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return 0


class _Repository:
    def __init__(
        self,
        content_type: ContentType,
        local: LocalStore,
        remote: Optional[RemoteStore] = None,
        *,
        remote_enabled: bool = False,
    ):
        self.content_type = content_type
        self.local = local
        self.remote = remote
        self.remote_enabled = remote_enabled

    @property
    def remote_active(self) -> bool:
        return self.remote_enabled and self.remote is not None

    def _record(self, data: Any):
        return record_from_any(self.content_type.record_cls, data)

    def _fields(self, values: Any) -> dict:
        """Normalize caller input (record or dict, either casing) to known camelCase fields."""
        if isinstance(values, ContentRecord):
            values = values.as_dict()
        known = self.content_type.field_map
        normalized = {}
        for key, value in dict(values or {}).items():
            key = snake_to_camel(key)
            if key in known:
                normalized[key] = value
        return normalized


class ContentRepository(_Repository):
    """Repository for a collection content type (projects, services, ...)."""

    def _sorted(self, items: list[dict]) -> list[dict]:
        order_field = self.content_type.order_field
        if not order_field:
            return items
        # Timestamp columns sort chronologically; anything else (service order) numerically.
        sort_value = (
            _timestamp_key if self.content_type.order_by.endswith("_at") else _number_key
        )
        return sorted(
            items,
            key=lambda item: sort_value(item.get(order_field)),
            reverse=self.content_type.descending,
        )

    def _read_local(self) -> list[dict]:
        return [
            self._record(item).as_dict()
            for item in self.local.read_collection(self.content_type)
        ]

    def _write_local(self, items: list[dict]) -> None:
        self.local.write_collection(self.content_type, items)

    def _prepare_new(self, data: dict) -> dict:
        return data

    def get_all(self) -> list:
        if self.remote_active:
            rows = self.remote.select(self.content_type)
            if rows is not REMOTE_UNAVAILABLE:
                if rows or not self.content_type.prefer_local_when_remote_empty:
                    return [self._record(row) for row in rows]
                local_items = self._read_local()
                if local_items:
                    logger.warning(
                        "Remote %s table is empty; serving %d local record(s)",
                        self.content_type.table,
                        len(local_items),
                    )
                return [self._record(item) for item in self._sorted(local_items)]
        return [self._record(item) for item in self._sorted(self._read_local())]

    def get(self, record_id: str):
        if self.remote_active:
            row = self.remote.select_one(self.content_type, record_id)
            if row is not REMOTE_UNAVAILABLE and row is not None:
                return self._record(row)
        for item in self._read_local():
            if item.get("id") == record_id:
                return self._record(item)
        return None

    def add(self, values: Any):
        """Create a record with a fresh id; createdAt equals updatedAt."""
        data = self._fields(values)
        for key in _SYSTEM_FIELDS:
            data.pop(key, None)
        now = next_timestamp()
        data = self._prepare_new(
            {**data, "id": get_unique_id(), "createdAt": now, "updatedAt": now}
        )
        record = self._record(data)
        item = record.as_dict()

        items = self._read_local()
        items.append(item)
        self._write_local(items)

        if self.remote_active:
            self.remote.insert(self.content_type, [item])
        return record

    def update(self, record_id: str, changes: Any):
        """Merge `changes` into the record; returns None when no backend has `record_id`."""
        changes = self._fields(changes)
        for key in _SYSTEM_FIELDS:
            changes.pop(key, None)

        items = self._read_local()
        merged: Optional[dict] = None
        for index, item in enumerate(items):
            if item.get("id") == record_id:
                updated_at = next_timestamp(item.get("updatedAt"))
                merged = self._record(
                    {**item, **changes, "updatedAt": updated_at}
                ).as_dict()
                items[index] = merged
                break

        if merged is not None:
            self._write_local(items)
            if self.remote_active:
                self.remote.upsert(self.content_type, [merged])
            return self._record(merged)

        if not self.remote_active:
            return None
        current = self.remote.select_one(self.content_type, record_id)
        if current is REMOTE_UNAVAILABLE or current is None:
            return None
        updated_at = next_timestamp(current.get("updatedAt"))
        row = self.remote.update(
            self.content_type, record_id, {**changes, "updatedAt": updated_at}
        )
        if row is REMOTE_UNAVAILABLE or row is None:
            return None
        # The record only existed remotely; keep a local copy from now on.
        record = self._record(row)
        items.append(record.as_dict())
        self._write_local(items)
        return record

    def delete(self, record_id: str) -> bool:
        items = self._read_local()
        remaining = [item for item in items if item.get("id") != record_id]
        removed_locally = len(remaining) != len(items)
        if removed_locally:
            self._write_local(remaining)

        removed_remotely = False
        if self.remote_active:
            deleted = self.remote.delete(self.content_type, record_id)
            removed_remotely = deleted is not REMOTE_UNAVAILABLE and deleted > 0
        return removed_locally or removed_remotely

    def save(self, records: Iterable[Any]) -> list:
        """
        Replace the whole collection.

        Local storage is written before the remote mirror is attempted, so it
        holds the full list even when the remote step fails.
        """
        now = next_timestamp()
        items = []
        for value in records:
            data = self._fields(value)
            data["id"] = data.get("id") or get_unique_id()
            data["createdAt"] = data.get("createdAt") or now
            data["updatedAt"] = data.get("updatedAt") or data["createdAt"]
            items.append(self._record(data).as_dict())

        self._write_local(items)
        if self.remote_active:
            self.remote.replace(self.content_type, items)
        return [self._record(item) for item in items]

    def count(self) -> int:
        if self.remote_active:
            total = self.remote.count(self.content_type)
            if total is not REMOTE_UNAVAILABLE:
                return total
        return len(self.local.read_collection(self.content_type))


class BlogPostRepository(ContentRepository):
    def _prepare_new(self, data: dict) -> dict:
        if not data.get("slug"):
            data["slug"] = generate_slug(data.get("title", ""))
        return data

    def get_published(self) -> list:
        if self.remote_active:
            rows = self.remote.select(self.content_type, filters={"published": True})
            if rows is not REMOTE_UNAVAILABLE:
                return [self._record(row) for row in rows]
        return [
            self._record(item)
            for item in self._sorted(self._read_local())
            if item.get("published")
        ]

    def get_by_slug(self, slug: str):
        """Published post with `slug`, or None."""
        if self.remote_active:
            rows = self.remote.select(
                self.content_type, filters={"slug": slug, "published": True}, limit=1
            )
            if rows is not REMOTE_UNAVAILABLE:
                return self._record(rows[0]) if rows else None
        for item in self._read_local():
            if item.get("slug") == slug and item.get("published"):
                return self._record(item)
        return None


class SingletonRepository(_Repository):
    """Repository for a content type with one row, keyed by the sentinel id."""

    def get(self):
        if self.remote_active:
            row = self.remote.select_one(self.content_type, SINGLETON_ID)
            if row is not REMOTE_UNAVAILABLE and row is not None:
                return self._record(row)

        stored = self.local.read_singleton(self.content_type)
        if stored is not None:
            return self._record(stored)

        record = self.content_type.default_factory()
        self.local.write_singleton(self.content_type, record.as_dict())
        return record

    def save(self, value: Any):
        record = self._record(value)
        self.local.write_singleton(self.content_type, record.as_dict())
        if self.remote_active:
            self.remote.upsert(
                self.content_type,
                [{**record.as_dict(), "updatedAt": next_timestamp()}],
            )
        return record


class PortfolioContent:
    """
    Aggregate of all content repositories - this is what callers use.
    """

    def __init__(
        self,
        local: LocalStore,
        remote: Optional[RemoteStore] = None,
        *,
        remote_enabled: bool = False,
    ):
        self.local = local
        self.remote = remote
        self.remote_enabled = remote_enabled and remote is not None

        def collection(content_type, cls=ContentRepository):
            return cls(content_type, local, remote, remote_enabled=self.remote_enabled)

        def singleton(content_type):
            return SingletonRepository(
                content_type, local, remote, remote_enabled=self.remote_enabled
            )

        self.projects = collection(PROJECTS)
        self.blog_posts = collection(BLOG_POSTS, BlogPostRepository)
        self.services = collection(SERVICES)
        self.themes = collection(THEMES)
        self.plugins = collection(PLUGINS)
        self.hero = singleton(HERO)
        self.about = singleton(ABOUT)
        self.contact = singleton(CONTACT)
        self.footer = singleton(FOOTER)

    def repository(self, name: str):
        repository = getattr(self, name, None)
        if not isinstance(repository, _Repository):
            raise ValueError(f"Unknown content type: {name}")
        return repository

    def stats(self) -> dict[str, int]:
        """Record counts per collection, keyed by camelCase collection name."""
        return {
            snake_to_camel(content_type.name): self.repository(content_type.name).count()
            for content_type in COLLECTION_TYPES
        }

    def source(self) -> str:
        return "remote" if self.remote_enabled else "local"

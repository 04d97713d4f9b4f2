"""
Content-type aware adapter over a `RemoteClient`.

Translates camelCase records to the snake_case columns of each remote table
and back. Client failures are never retried or raised: they are logged and
reported to the caller as `REMOTE_UNAVAILABLE`, which means "use local
storage for this call".
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Optional

from portfolio.db import RemoteClient
from portfolio.registry import PROJECTS, ContentType
from shared.content_types import SINGLETON_ID

logger = logging.getLogger(__name__)


class _RemoteUnavailable:
    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "REMOTE_UNAVAILABLE"


REMOTE_UNAVAILABLE = _RemoteUnavailable()


class RemoteErrorKind(str, enum.Enum):
    SCHEMA_MISSING = "schema_missing"
    QUERY_FAILED = "query_failed"


# Postgres undefined_table, PostgREST "table not in schema cache".
_SCHEMA_MISSING_CODES = frozenset({"42P01", "PGRST205"})
_SCHEMA_MISSING_MESSAGE = re.compile(
    r'relation "?[\w.]+"? does not exist|no such table|undefined table'
    r"|could not find the table",
    re.IGNORECASE,
)


def classify_remote_error(exc: BaseException) -> RemoteErrorKind:
    for candidate in (exc, getattr(exc, "orig", None)):
        if candidate is None:
            continue
        for attribute in ("pgcode", "sqlstate", "code"):
            if getattr(candidate, attribute, None) in _SCHEMA_MISSING_CODES:
                return RemoteErrorKind.SCHEMA_MISSING
    if _SCHEMA_MISSING_MESSAGE.search(str(exc)):
        return RemoteErrorKind.SCHEMA_MISSING
    return RemoteErrorKind.QUERY_FAILED


def to_row(content_type: ContentType, record: dict) -> dict:
    field_map = content_type.field_map
    return {field_map[key]: value for key, value in record.items() if key in field_map}


def from_row(content_type: ContentType, row: dict) -> dict:
    columns = {column: key for key, column in content_type.field_map.items()}
    return {columns[key]: value for key, value in row.items() if key in columns}


@dataclass(frozen=True)
class ConnectionStatus:
    success: bool
    message: Optional[str] = None
    error: Optional[str] = None


class RemoteStore:
    def __init__(self, client: RemoteClient):
        self.client = client
        self.missing_tables: set[str] = set()

    def _call(self, content_type: ContentType, action: str, fn: Callable[[], Any]):
        try:
            result = fn()
        except Exception as exc:
            self._report(content_type.table, action, exc)
            return REMOTE_UNAVAILABLE
        self.missing_tables.discard(content_type.table)
        return result

    def _report(self, table: str, action: str, exc: Exception) -> None:
        if classify_remote_error(exc) is RemoteErrorKind.SCHEMA_MISSING:
            self.missing_tables.add(table)
            logger.error(
                "Remote table %r is not provisioned (%s failed: %s). "
                "Create the table or fix the remote configuration; "
                "using local storage meanwhile.",
                table,
                action,
                exc,
            )
        else:
            logger.warning(
                "Remote %s on %r failed, falling back to local storage: %s",
                action,
                table,
                exc,
                exc_info=True,
            )

    def _filters(self, content_type: ContentType, filters: Optional[dict]) -> dict:
        return to_row(content_type, filters or {})

    def select(
        self,
        content_type: ContentType,
        *,
        filters: Optional[dict] = None,
        limit: Optional[int] = None,
    ):
        rows = self._call(
            content_type,
            "select",
            lambda: self.client.select(
                content_type.table,
                filters=self._filters(content_type, filters),
                order_by=content_type.order_by,
                descending=content_type.descending,
                limit=limit,
            ),
        )
        if rows is REMOTE_UNAVAILABLE:
            return rows
        return [from_row(content_type, row) for row in rows]

    def select_one(self, content_type: ContentType, record_id: str):
        rows = self.select(content_type, filters={"id": record_id}, limit=1)
        if rows is REMOTE_UNAVAILABLE:
            return rows
        return rows[0] if rows else None

    def insert(self, content_type: ContentType, records: list[dict]):
        rows = [to_row(content_type, record) for record in records]
        return self._call(
            content_type,
            "insert",
            lambda: self.client.insert(content_type.table, rows) or True,
        )

    def update(self, content_type: ContentType, record_id: str, changes: dict):
        values = to_row(content_type, changes)
        row = self._call(
            content_type,
            "update",
            lambda: self.client.update(content_type.table, record_id, values),
        )
        if row is REMOTE_UNAVAILABLE or row is None:
            return row
        return from_row(content_type, row)

    def upsert(self, content_type: ContentType, records: list[dict]):
        rows = [to_row(content_type, record) for record in records]
        if content_type.singleton:
            rows = [{**row, "id": SINGLETON_ID} for row in rows]
        return self._call(
            content_type,
            "upsert",
            lambda: self.client.upsert(content_type.table, rows) or True,
        )

    def delete(self, content_type: ContentType, record_id: str):
        return self._call(
            content_type,
            "delete",
            lambda: self.client.delete(content_type.table, {"id": record_id}),
        )

    def replace(self, content_type: ContentType, records: list[dict]):
        rows = [to_row(content_type, record) for record in records]
        return self._call(
            content_type,
            "replace",
            lambda: self.client.replace(content_type.table, rows),
        )

    def count(self, content_type: ContentType):
        return self._call(
            content_type, "count", lambda: self.client.count(content_type.table)
        )

    def check_connection(self) -> ConnectionStatus:
        """Round-trip a one-row select against the projects table."""
        try:
            self.client.select(PROJECTS.table, limit=1)
        except Exception as exc:
            return ConnectionStatus(success=False, error=str(exc) or type(exc).__name__)
        return ConnectionStatus(success=True, message="Remote connection successful")

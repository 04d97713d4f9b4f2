"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from portfolio.availability import is_remote_available
from portfolio.config import get_settings
from portfolio.db import InMemoryRemoteClient, SqlRemoteClient
from portfolio.local_store import FileLocalStorage, InMemoryLocalStorage, LocalStore
from portfolio.migration import MigrationRunner
from portfolio.remote_store import RemoteStore
from portfolio.repositories import PortfolioContent

logger = logging.getLogger(__name__)

_local_store: LocalStore | None = None
_remote_store: RemoteStore | None = None
_content: PortfolioContent | None = None
_migration_runner: MigrationRunner | None = None


def remote_enabled() -> bool:
    settings = get_settings()
    return is_remote_available(settings.remote_url, settings.remote_key)


def get_local_store() -> LocalStore:
    global _local_store
    if _local_store:
        return _local_store

    settings = get_settings()
    if settings.use_in_memory_backends:
        _local_store = LocalStore(InMemoryLocalStorage())
    else:
        _local_store = LocalStore(FileLocalStorage(settings.local_storage_dir))
    return _local_store


def get_remote_store() -> Optional[RemoteStore]:
    """
    Return the remote store, or None when the backend is not configured or
    the engine cannot be set up. Setup failures are not cached, so the next
    call tries again.
    """
    global _remote_store
    if _remote_store:
        return _remote_store
    if not remote_enabled():
        return None

    settings = get_settings()
    if settings.use_in_memory_backends:
        _remote_store = RemoteStore(InMemoryRemoteClient())
        return _remote_store
    try:
        client = SqlRemoteClient(
            settings.remote_url,
            access_key=settings.remote_key,
            create_schema=settings.remote_create_schema,
        )
    except (SQLAlchemyError, ValueError) as exc:
        logger.error("Remote backend setup failed, using local storage only: %s", exc)
        return None
    _remote_store = RemoteStore(client)
    return _remote_store


def get_content() -> PortfolioContent:
    """
    Return a singleton content aggregate so every request shares the same stores.
    """
    global _content
    if _content:
        return _content

    remote = get_remote_store()
    content = PortfolioContent(
        get_local_store(), remote, remote_enabled=remote is not None
    )
    if remote is not None or not remote_enabled():
        _content = content
    return content


def get_migration_runner() -> MigrationRunner:
    global _migration_runner
    if _migration_runner:
        return _migration_runner

    remote = get_remote_store()
    runner = MigrationRunner(
        get_local_store(), remote, remote_enabled=remote is not None
    )
    if remote is not None or not remote_enabled():
        _migration_runner = runner
    return runner

"""
Remote database access for Postgres and an in-memory test implementation.

Clients speak in snake_case rows keyed by table name. They raise on failure;
`portfolio.remote_store` decides what a failure means for the caller.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, Iterable, Optional, Protocol

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Integer,
    String,
    Text,
    create_engine,
    delete,
    func,
    select,
)
from sqlalchemy.engine import URL, make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool


class RemoteClient(Protocol):
    """Generic CRUD interface over named remote tables."""

    def select(
        self,
        table: str,
        *,
        filters: Optional[dict] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[dict]:
        ...

    def insert(self, table: str, rows: list[dict]) -> None:
        ...

    def update(self, table: str, row_id: str, values: dict) -> Optional[dict]:
        ...

    def upsert(self, table: str, rows: list[dict]) -> None:
        ...

    def delete(self, table: str, filters: dict) -> int:
        ...

    def replace(self, table: str, rows: list[dict]) -> int:
        ...

    def count(self, table: str, filters: Optional[dict] = None) -> int:
        ...


def _matches(row: dict, filters: Optional[dict]) -> bool:
    for column, expected in (filters or {}).items():
        value = row.get(column)
        if isinstance(expected, (list, tuple, set, frozenset)):
            if value not in expected:
                return False
        elif value != expected:
            return False
    return True


class InMemoryRemoteClient:
    """Simple in-memory database for development and tests."""

    def __init__(self, tables: Optional[Iterable[str]] = None):
        names = list(tables) if tables is not None else list(ROW_MODELS)
        self.tables: Dict[str, Dict[str, dict]] = {name: {} for name in names}

    def _table(self, table: str) -> Dict[str, dict]:
        if table not in self.tables:
            raise LookupError(f'relation "{table}" does not exist')
        return self.tables[table]

    def reset(self) -> None:
        """Clear all stored rows (useful in tests)."""
        for rows in self.tables.values():
            rows.clear()

    def select(
        self,
        table: str,
        *,
        filters: Optional[dict] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[dict]:
        rows = [
            copy.deepcopy(row)
            for row in self._table(table).values()
            if _matches(row, filters)
        ]
        if order_by:
            rows.sort(
                key=lambda row: (row.get(order_by) is None, row.get(order_by)),
                reverse=descending,
            )
        if limit is not None:
            rows = rows[:limit]
        return rows

    def insert(self, table: str, rows: list[dict]) -> None:
        stored = self._table(table)
        for row in rows:
            if row["id"] in stored:
                raise ValueError(
                    f'duplicate key value violates unique constraint "{table}_pkey"'
                )
        for row in rows:
            stored[row["id"]] = copy.deepcopy(row)

    def update(self, table: str, row_id: str, values: dict) -> Optional[dict]:
        row = self._table(table).get(row_id)
        if row is None:
            return None
        row.update(copy.deepcopy(values))
        return copy.deepcopy(row)

    def upsert(self, table: str, rows: list[dict]) -> None:
        stored = self._table(table)
        for row in rows:
            existing = stored.setdefault(row["id"], {})
            existing.update(copy.deepcopy(row))

    def delete(self, table: str, filters: dict) -> int:
        stored = self._table(table)
        doomed = [key for key, row in stored.items() if _matches(row, filters)]
        for key in doomed:
            del stored[key]
        return len(doomed)

    def replace(self, table: str, rows: list[dict]) -> int:
        stored = self._table(table)
        keep = {row["id"] for row in rows}
        pruned = [key for key in stored if key not in keep]
        for key in pruned:
            del stored[key]
        self.upsert(table, rows)
        return len(pruned)

    def count(self, table: str, filters: Optional[dict] = None) -> int:
        return sum(1 for row in self._table(table).values() if _matches(row, filters))


def _with_access_key(url: URL, access_key: Optional[str]) -> URL:
    if access_key and url.host and url.password is None:
        return url.set(password=access_key)
    return url


class SqlRemoteClient:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (e.g., Postgres or SQLite for tests).
    """

    def __init__(
        self,
        database_url: str,
        *,
        access_key: Optional[str] = None,
        create_schema: bool = True,
    ):
        if not database_url:
            raise ValueError("PORTFOLIO_REMOTE_URL is required for SqlRemoteClient")
        url = _with_access_key(make_url(database_url), access_key)
        engine_options: dict[str, Any] = {"future": True, "pool_pre_ping": True}
        if url.get_backend_name() == "sqlite":
            if url.database in (None, "", ":memory:"):
                # One shared connection, otherwise every pooled connection sees its own empty database.
                engine_options["poolclass"] = StaticPool
                engine_options["connect_args"] = {"check_same_thread": False}
        else:
            engine_options["pool_recycle"] = 1800
        self.engine = create_engine(url, **engine_options)
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        if create_schema:
            Base.metadata.create_all(self.engine)

    def _model(self, table: str):
        try:
            return ROW_MODELS[table]
        except KeyError:
            raise LookupError(f'relation "{table}" does not exist') from None

    def _where(self, stmt, model, filters: Optional[dict]):
        conditions = self._conditions(model, filters)
        return stmt.where(*conditions) if conditions else stmt

    def _conditions(self, model, filters: Optional[dict]) -> list:
        conditions = []
        for column, expected in (filters or {}).items():
            attribute = getattr(model, column)
            if isinstance(expected, (list, tuple, set, frozenset)):
                conditions.append(attribute.in_(list(expected)))
            else:
                conditions.append(attribute == expected)
        return conditions

    def _new_row(self, model, row: dict):
        columns = model.__table__.columns.keys()
        return model(**{key: value for key, value in row.items() if key in columns})

    def _to_dict(self, row) -> dict:
        return {
            column.key: getattr(row, column.key) for column in row.__table__.columns
        }

    def select(
        self,
        table: str,
        *,
        filters: Optional[dict] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[dict]:
        model = self._model(table)
        stmt = self._where(select(model), model, filters)
        if order_by:
            column = getattr(model, order_by)
            stmt = stmt.order_by(column.desc() if descending else column.asc())
        if limit is not None:
            stmt = stmt.limit(limit)
        with self.Session() as session:
            return [self._to_dict(row) for row in session.execute(stmt).scalars()]

    def insert(self, table: str, rows: list[dict]) -> None:
        model = self._model(table)
        with self.Session() as session:
            session.add_all([self._new_row(model, row) for row in rows])
            session.commit()

    def update(self, table: str, row_id: str, values: dict) -> Optional[dict]:
        model = self._model(table)
        columns = model.__table__.columns.keys()
        with self.Session() as session:
            row = session.get(model, row_id)
            if not row:
                return None
            for key, value in values.items():
                if key in columns and key != "id":
                    setattr(row, key, value)
            session.commit()
            session.refresh(row)
            return self._to_dict(row)

    def upsert(self, table: str, rows: list[dict]) -> None:
        model = self._model(table)
        with self.Session() as session:
            for row in rows:
                session.merge(self._new_row(model, row))
            session.commit()

    def delete(self, table: str, filters: dict) -> int:
        model = self._model(table)
        with self.Session() as session:
            result = session.execute(
                self._where(delete(model), model, filters)
            )
            session.commit()
            return result.rowcount or 0

    def replace(self, table: str, rows: list[dict]) -> int:
        """Upsert `rows` and prune every other row, in one transaction."""
        model = self._model(table)
        keep = [row["id"] for row in rows]
        with self.Session() as session:
            stmt = delete(model)
            if keep:
                stmt = stmt.where(model.id.not_in(keep))
            pruned = session.execute(stmt).rowcount or 0
            for row in rows:
                session.merge(self._new_row(model, row))
            session.commit()
            return pruned

    def count(self, table: str, filters: Optional[dict] = None) -> int:
        model = self._model(table)
        stmt = self._where(select(func.count()).select_from(model), model, filters)
        with self.Session() as session:
            return session.execute(stmt).scalar_one()


Base = declarative_base()


class ProjectRow(Base):
    __tablename__ = "projects"

    id = Column(String, primary_key=True)
    title = Column(String, nullable=False, default="")
    description = Column(Text, nullable=False, default="")
    image = Column(String, nullable=False, default="")
    tags = Column(JSON, nullable=False, default=list)
    live_url = Column(String, nullable=True)
    github_url = Column(String, nullable=True)
    created_at = Column(String, nullable=False, index=True)
    updated_at = Column(String, nullable=False)


class BlogPostRow(Base):
    __tablename__ = "blog_posts"

    id = Column(String, primary_key=True)
    title = Column(String, nullable=False, default="")
    slug = Column(String, nullable=False, index=True)
    excerpt = Column(Text, nullable=False, default="")
    content = Column(Text, nullable=False, default="")
    image_url = Column(String, nullable=True)
    category = Column(String, nullable=False, default="")
    read_time = Column(String, nullable=False, default="5 min read")
    published = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(String, nullable=False, index=True)
    updated_at = Column(String, nullable=False)


class ServiceRow(Base):
    __tablename__ = "services"

    id = Column(String, primary_key=True)
    icon = Column(String, nullable=False, default="")
    title = Column(String, nullable=False, default="")
    description = Column(Text, nullable=False, default="")
    order = Column(Integer, nullable=False, default=0)
    created_at = Column(String, nullable=True)
    updated_at = Column(String, nullable=True)


class ThemeRow(Base):
    __tablename__ = "themes"

    id = Column(String, primary_key=True)
    title = Column(String, nullable=False, default="")
    description = Column(Text, nullable=False, default="")
    image = Column(String, nullable=False, default="")
    tags = Column(JSON, nullable=False, default=list)
    price = Column(String, nullable=True)
    live_url = Column(String, nullable=True)
    github_url = Column(String, nullable=True)
    file_url = Column(String, nullable=True)
    created_at = Column(String, nullable=True, index=True)
    updated_at = Column(String, nullable=True)


class PluginRow(Base):
    __tablename__ = "plugins"

    id = Column(String, primary_key=True)
    title = Column(String, nullable=False, default="")
    description = Column(Text, nullable=False, default="")
    image = Column(String, nullable=False, default="")
    tags = Column(JSON, nullable=False, default=list)
    price = Column(String, nullable=True)
    live_url = Column(String, nullable=True)
    github_url = Column(String, nullable=True)
    file_url = Column(String, nullable=True)
    created_at = Column(String, nullable=True, index=True)
    updated_at = Column(String, nullable=True)


class HeroContentRow(Base):
    __tablename__ = "hero_content"

    id = Column(String, primary_key=True)
    tagline = Column(String, nullable=True)
    headline_line1 = Column(String, nullable=True)
    headline_highlight = Column(String, nullable=True)
    headline_line2 = Column(String, nullable=True)
    subheadline = Column(Text, nullable=True)
    name = Column(String, nullable=True)
    role = Column(String, nullable=True)
    floating_title = Column(String, nullable=True)
    floating_subtitle = Column(String, nullable=True)
    available_badge_text = Column(String, nullable=True)
    primary_button_text = Column(String, nullable=True)
    secondary_button_text = Column(String, nullable=True)
    stats_label1 = Column(String, nullable=True)
    stats_label2 = Column(String, nullable=True)
    stats_label3 = Column(String, nullable=True)
    stats_value1 = Column(String, nullable=True)
    stats_value2 = Column(String, nullable=True)
    stats_value3 = Column(String, nullable=True)
    cv_url = Column(String, nullable=True)
    updated_at = Column(String, nullable=True)


class AboutContentRow(Base):
    __tablename__ = "about_content"

    id = Column(String, primary_key=True)
    bio = Column(JSON, nullable=True)
    skills = Column(JSON, nullable=True)
    stats = Column(JSON, nullable=True)
    image_url = Column(String, nullable=True)
    updated_at = Column(String, nullable=True)


class ContactInfoRow(Base):
    __tablename__ = "contact_info"

    id = Column(String, primary_key=True)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    location = Column(String, nullable=True)
    response_time = Column(String, nullable=True)
    smtp_host = Column(String, nullable=True)
    smtp_port = Column(String, nullable=True)
    smtp_user = Column(String, nullable=True)
    smtp_password = Column(String, nullable=True)
    smtp_from_email = Column(String, nullable=True)
    updated_at = Column(String, nullable=True)


class FooterContentRow(Base):
    __tablename__ = "footer_content"

    id = Column(String, primary_key=True)
    brand_name = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    social_links = Column(JSON, nullable=True)
    link_groups = Column(JSON, nullable=True)
    copyright_text = Column(String, nullable=True)
    updated_at = Column(String, nullable=True)


ROW_MODELS = {
    model.__tablename__: model
    for model in (
        ProjectRow,
        BlogPostRow,
        ServiceRow,
        ThemeRow,
        PluginRow,
        HeroContentRow,
        AboutContentRow,
        ContactInfoRow,
        FooterContentRow,
    )
}

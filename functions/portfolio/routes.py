"""
HTTP routes for the portfolio content API.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from portfolio.dependencies import (
    get_content,
    get_migration_runner,
    get_remote_store,
    remote_enabled,
)
from portfolio.migration import MigrationRunner
from portfolio.remote_store import RemoteStore
from portfolio.repositories import PortfolioContent
from portfolio.schemas import (
    AboutContentPayload,
    BlogPostCreate,
    BlogPostItem,
    BlogPostUpdate,
    ContactInfoPayload,
    FooterContentPayload,
    HealthResponse,
    HeroContentPayload,
    MigrationResponse,
    ProjectCreate,
    ProjectItem,
    ProjectUpdate,
    ServiceCreate,
    ServiceItem,
    ServiceUpdate,
    ShowcaseCreate,
    ShowcaseItem,
    ShowcaseUpdate,
    StatsResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _collection_router(path: str, name: str, create_model, update_model, item_model):
    """CRUD routes for one collection content type."""
    collection = APIRouter(prefix=path, tags=[name])

    @collection.get("")
    def list_records(content: PortfolioContent = Depends(get_content)):
        return [record.as_dict() for record in content.repository(name).get_all()]

    @collection.post("", status_code=201)
    def add_record(
        payload: create_model, content: PortfolioContent = Depends(get_content)
    ):
        return content.repository(name).add(payload.to_fields()).as_dict()

    @collection.put("")
    def save_records(
        payload: list[item_model], content: PortfolioContent = Depends(get_content)
    ):
        """Replace the whole collection."""
        records = content.repository(name).save([item.to_fields() for item in payload])
        return [record.as_dict() for record in records]

    @collection.get("/{record_id}")
    def get_record(record_id: str, content: PortfolioContent = Depends(get_content)):
        record = content.repository(name).get(record_id)
        if record is None:
            raise HTTPException(status_code=404, detail="Not found")
        return record.as_dict()

    @collection.patch("/{record_id}")
    def update_record(
        record_id: str,
        payload: update_model,
        content: PortfolioContent = Depends(get_content),
    ):
        record = content.repository(name).update(record_id, payload.to_fields())
        if record is None:
            raise HTTPException(status_code=404, detail="Not found")
        return record.as_dict()

    @collection.delete("/{record_id}")
    def delete_record(record_id: str, content: PortfolioContent = Depends(get_content)):
        if not content.repository(name).delete(record_id):
            raise HTTPException(status_code=404, detail="Not found")
        return {"status": "ok"}

    return collection


def _singleton_router(name: str, payload_model):
    singleton = APIRouter(prefix=f"/content/{name}", tags=["content"])

    @singleton.get("")
    def get_singleton(content: PortfolioContent = Depends(get_content)):
        return content.repository(name).get().as_dict()

    @singleton.put("")
    def save_singleton(
        payload: payload_model, content: PortfolioContent = Depends(get_content)
    ):
        return content.repository(name).save(payload.model_dump(by_alias=True)).as_dict()

    return singleton


# Registered before the blog collection routes so "/{record_id}" does not shadow them.
@router.get("/blog-posts/published")
def list_published_blog_posts(content: PortfolioContent = Depends(get_content)):
    return [post.as_dict() for post in content.blog_posts.get_published()]


@router.get("/blog-posts/slug/{slug}")
def get_blog_post_by_slug(slug: str, content: PortfolioContent = Depends(get_content)):
    post = content.blog_posts.get_by_slug(slug)
    if post is None:
        raise HTTPException(status_code=404, detail="Blog post not found")
    return post.as_dict()


@router.get("/stats", response_model=StatsResponse)
def content_stats(content: PortfolioContent = Depends(get_content)):
    return StatsResponse(source=content.source(), counts=content.stats())


@router.get("/health", response_model=HealthResponse)
def health(
    configured: bool = Depends(remote_enabled),
    store: Optional[RemoteStore] = Depends(get_remote_store),
):
    """
    Report whether the remote backend is configured, reachable and provisioned.
    """
    if not configured or store is None:
        return HealthResponse(
            remote_configured=configured,
            remote_connected=False,
            remote_error=(
                "Remote backend setup failed"
                if configured
                else "Remote backend not configured"
            ),
        )
    status = store.check_connection()
    return HealthResponse(
        remote_configured=True,
        remote_connected=status.success,
        remote_error=status.error,
        missing_tables=sorted(store.missing_tables),
    )


@router.post("/migrate", response_model=MigrationResponse)
def migrate_local_content(runner: MigrationRunner = Depends(get_migration_runner)):
    report = runner.run(force=True)
    if report.failed:
        logger.warning("Local content migration finished with failures: %s", report.failed)
    return MigrationResponse(**report.as_dict())


router.include_router(
    _collection_router("/projects", "projects", ProjectCreate, ProjectUpdate, ProjectItem)
)
router.include_router(
    _collection_router(
        "/blog-posts", "blog_posts", BlogPostCreate, BlogPostUpdate, BlogPostItem
    )
)
router.include_router(
    _collection_router("/services", "services", ServiceCreate, ServiceUpdate, ServiceItem)
)
router.include_router(
    _collection_router("/themes", "themes", ShowcaseCreate, ShowcaseUpdate, ShowcaseItem)
)
router.include_router(
    _collection_router(
        "/plugins", "plugins", ShowcaseCreate, ShowcaseUpdate, ShowcaseItem
    )
)
router.include_router(_singleton_router("hero", HeroContentPayload))
router.include_router(_singleton_router("about", AboutContentPayload))
router.include_router(_singleton_router("contact", ContactInfoPayload))
router.include_router(_singleton_router("footer", FooterContentPayload))

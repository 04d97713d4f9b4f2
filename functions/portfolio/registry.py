"""
Content type descriptors: where each type lives locally and remotely, its
remote columns, ordering and first-run default.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from shared.content_types import (
    AboutContent,
    BlogPost,
    ContactInfo,
    FooterContent,
    HeroContent,
    Plugin,
    Project,
    Service,
    Theme,
    default_about_content,
    default_contact_info,
    default_footer_content,
    default_hero_content,
)
from shared.json_utils import snake_to_camel


@dataclass(frozen=True)
class ContentType:
    name: str
    table: str
    local_key: str
    record_cls: type
    columns: tuple[str, ...]
    singleton: bool = False
    order_by: Optional[str] = "created_at"
    descending: bool = True
    default_factory: Optional[Callable[[], object]] = None
    # Serve the local list when the remote table answers with no rows.
    prefer_local_when_remote_empty: bool = False

    @property
    def field_map(self) -> dict[str, str]:
        """camelCase record field -> snake_case remote column."""
        return {snake_to_camel(column): column for column in self.columns}

    @property
    def order_field(self) -> Optional[str]:
        return snake_to_camel(self.order_by) if self.order_by else None


_SHOWCASE_COLUMNS = (
    "id",
    "title",
    "description",
    "image",
    "tags",
    "price",
    "live_url",
    "github_url",
    "file_url",
    "created_at",
    "updated_at",
)

PROJECTS = ContentType(
    name="projects",
    table="projects",
    local_key="website-projects",
    record_cls=Project,
    columns=(
        "id",
        "title",
        "description",
        "image",
        "tags",
        "live_url",
        "github_url",
        "created_at",
        "updated_at",
    ),
)

BLOG_POSTS = ContentType(
    name="blog_posts",
    table="blog_posts",
    local_key="website-blog-posts",
    record_cls=BlogPost,
    columns=(
        "id",
        "title",
        "slug",
        "excerpt",
        "content",
        "image_url",
        "category",
        "read_time",
        "published",
        "created_at",
        "updated_at",
    ),
)

SERVICES = ContentType(
    name="services",
    table="services",
    local_key="website-services",
    record_cls=Service,
    columns=(
        "id",
        "icon",
        "title",
        "description",
        "order",
        "created_at",
        "updated_at",
    ),
    order_by="order",
    descending=False,
    prefer_local_when_remote_empty=True,
)

THEMES = ContentType(
    name="themes",
    table="themes",
    local_key="website-themes",
    record_cls=Theme,
    columns=_SHOWCASE_COLUMNS,
)

PLUGINS = ContentType(
    name="plugins",
    table="plugins",
    local_key="website-plugins",
    record_cls=Plugin,
    columns=_SHOWCASE_COLUMNS,
)

HERO = ContentType(
    name="hero",
    table="hero_content",
    local_key="website-hero",
    record_cls=HeroContent,
    columns=(
        "id",
        "tagline",
        "headline_line1",
        "headline_highlight",
        "headline_line2",
        "subheadline",
        "name",
        "role",
        "floating_title",
        "floating_subtitle",
        "available_badge_text",
        "primary_button_text",
        "secondary_button_text",
        "stats_label1",
        "stats_label2",
        "stats_label3",
        "stats_value1",
        "stats_value2",
        "stats_value3",
        "cv_url",
        "updated_at",
    ),
    singleton=True,
    order_by=None,
    default_factory=default_hero_content,
)

ABOUT = ContentType(
    name="about",
    table="about_content",
    local_key="website-about",
    record_cls=AboutContent,
    columns=("id", "bio", "skills", "stats", "image_url", "updated_at"),
    singleton=True,
    order_by=None,
    default_factory=default_about_content,
)

CONTACT = ContentType(
    name="contact",
    table="contact_info",
    local_key="website-contact",
    record_cls=ContactInfo,
    columns=(
        "id",
        "email",
        "phone",
        "location",
        "response_time",
        "smtp_host",
        "smtp_port",
        "smtp_user",
        "smtp_password",
        "smtp_from_email",
        "updated_at",
    ),
    singleton=True,
    order_by=None,
    default_factory=default_contact_info,
)

FOOTER = ContentType(
    name="footer",
    table="footer_content",
    local_key="website-footer",
    record_cls=FooterContent,
    columns=(
        "id",
        "brand_name",
        "description",
        "social_links",
        "link_groups",
        "copyright_text",
        "updated_at",
    ),
    singleton=True,
    order_by=None,
    default_factory=default_footer_content,
)

COLLECTION_TYPES = (PROJECTS, BLOG_POSTS, SERVICES, THEMES, PLUGINS)
SINGLETON_TYPES = (HERO, ABOUT, CONTACT, FOOTER)
ALL_CONTENT_TYPES = COLLECTION_TYPES + SINGLETON_TYPES

_BY_NAME = {content_type.name: content_type for content_type in ALL_CONTENT_TYPES}


def get_content_type(name: str) -> ContentType:
    try:
        return _BY_NAME[name]
    except KeyError:
        raise ValueError(f"Unknown content type: {name}") from None

"""
Pydantic schemas for the portfolio content API.

Payloads use camelCase keys on the wire, matching the stored records.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_fields(self) -> dict:
        """Only the keys the client actually sent, camelCased."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class RecordMeta(CamelModel):
    id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


# Projects


class ProjectUpdate(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    tags: Optional[list[str]] = None
    live_url: Optional[str] = None
    github_url: Optional[str] = None


class ProjectCreate(ProjectUpdate):
    title: str = Field(..., min_length=1)
    description: str = ""
    image: str = ""
    tags: list[str] = Field(default_factory=list)


class ProjectItem(ProjectCreate, RecordMeta):
    pass


# Blog posts


class BlogPostUpdate(CamelModel):
    title: Optional[str] = None
    slug: Optional[str] = None
    excerpt: Optional[str] = None
    content: Optional[str] = None
    image_url: Optional[str] = None
    category: Optional[str] = None
    read_time: Optional[str] = None
    published: Optional[bool] = None


class BlogPostCreate(BlogPostUpdate):
    title: str = Field(..., min_length=1)
    excerpt: str = ""
    content: str = ""
    category: str = ""
    published: bool = False


class BlogPostItem(BlogPostCreate, RecordMeta):
    pass


# Services


class ServiceUpdate(CamelModel):
    icon: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    order: Optional[int] = None


class ServiceCreate(ServiceUpdate):
    icon: str = ""
    title: str = Field(..., min_length=1)
    description: str = ""
    order: int = 0


class ServiceItem(ServiceCreate, RecordMeta):
    pass


# Themes and plugins


class ShowcaseUpdate(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    tags: Optional[list[str]] = None
    price: Optional[str] = None
    live_url: Optional[str] = None
    github_url: Optional[str] = None
    file_url: Optional[str] = None


class ShowcaseCreate(ShowcaseUpdate):
    title: str = Field(..., min_length=1)
    description: str = ""
    image: str = ""
    tags: list[str] = Field(default_factory=list)


class ShowcaseItem(ShowcaseCreate, RecordMeta):
    pass


# Singletons


class HeroContentPayload(CamelModel):
    tagline: str = ""
    headline_line1: str = ""
    headline_highlight: str = ""
    headline_line2: str = ""
    subheadline: str = ""
    name: str = ""
    role: str = ""
    floating_title: str = ""
    floating_subtitle: str = ""
    available_badge_text: str = "Available"
    primary_button_text: str = "View My Work"
    secondary_button_text: str = "Download CV"
    stats_label1: str = "Projects"
    stats_label2: str = "Themes"
    stats_label3: str = "Plugins"
    stats_value1: str = "50+"
    stats_value2: str = "8+"
    stats_value3: str = "15+"
    cv_url: Optional[str] = None


class AboutStatsPayload(CamelModel):
    experience: str = ""
    projects: str = ""
    clients: str = ""
    coffee: str = ""


class AboutContentPayload(CamelModel):
    bio: list[str] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    stats: AboutStatsPayload = Field(default_factory=AboutStatsPayload)
    image_url: Optional[str] = None


class ContactInfoPayload(CamelModel):
    email: str = ""
    phone: str = ""
    location: str = ""
    response_time: str = ""
    smtp_host: Optional[str] = None
    smtp_port: Optional[str] = None
    smtp_user: Optional[str] = None
    smtp_password: Optional[str] = None
    smtp_from_email: Optional[str] = None


class SocialLinkPayload(CamelModel):
    icon: str
    href: str
    label: str = ""


class FooterLinkPayload(CamelModel):
    name: str
    path: str


class FooterLinkGroupPayload(CamelModel):
    title: str
    links: list[FooterLinkPayload] = Field(default_factory=list)


class FooterContentPayload(CamelModel):
    brand_name: str = ""
    description: str = ""
    social_links: list[SocialLinkPayload] = Field(default_factory=list)
    link_groups: list[FooterLinkGroupPayload] = Field(default_factory=list)
    copyright_text: str = ""


# Service endpoints


class StatsResponse(CamelModel):
    source: str
    counts: dict[str, int]


class HealthResponse(CamelModel):
    remote_configured: bool
    remote_connected: bool
    remote_error: Optional[str] = None
    missing_tables: list[str] = Field(default_factory=list)


class MigrationResponse(CamelModel):
    skipped: bool
    ok: bool
    migrated: dict[str, int]
    failed: dict[str, int]

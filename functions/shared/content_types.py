# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================


"""
Dataclasses for the portfolio content records.

Attributes are snake_case. `as_dict()` produces the camelCase shape kept in
local storage and returned by the API; `from_dict()` accepts camelCase or
snake_case keys, so blobs written by older clients still load.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any, List, Optional

from shared.json_utils import camel_to_snake, convert_keys, snake_to_camel

SINGLETON_ID = "default"
DEFAULT_READ_TIME = "5 min read"


class ContentRecord:
    """Serialization shared by every content dataclass."""

    def as_dict(self) -> dict:
        data = convert_keys(asdict(self), snake_to_camel)
        return {key: value for key, value in data.items() if value is not None}

    @classmethod
    def _values(cls, data: Optional[dict]) -> dict:
        normalized = convert_keys(
            data if isinstance(data, dict) else {}, camel_to_snake
        )
        known = {f.name for f in fields(cls)}
        return {
            key: value
            for key, value in normalized.items()
            if key in known and value is not None
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]):
        return cls(**cls._values(data))


@dataclass
class Project(ContentRecord):
    id: str = ""
    title: str = ""
    description: str = ""
    image: str = ""
    tags: List[str] = field(default_factory=list)
    live_url: Optional[str] = None
    github_url: Optional[str] = None
    created_at: str = ""
    updated_at: str = ""


@dataclass
class BlogPost(ContentRecord):
    id: str = ""
    title: str = ""
    slug: str = ""
    excerpt: str = ""
    content: str = ""
    image_url: Optional[str] = None
    category: str = ""
    read_time: str = DEFAULT_READ_TIME
    published: bool = False
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "BlogPost":
        values = cls._values(data)
        if not values.get("read_time"):
            values.pop("read_time", None)
        values["published"] = bool(values.get("published", False))
        return cls(**values)


@dataclass
class Service(ContentRecord):
    id: str = ""
    icon: str = ""
    title: str = ""
    description: str = ""
    order: int = 0
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "Service":
        values = cls._values(data)
        try:
            values["order"] = int(values.get("order") or 0)
        except (TypeError, ValueError):
            values["order"] = 0
        return cls(**values)


@dataclass
class ShowcaseItem(ContentRecord):
    """A downloadable or purchasable item listed in the themes/plugins galleries."""

    id: str = ""
    title: str = ""
    description: str = ""
    image: str = ""
    tags: List[str] = field(default_factory=list)
    price: Optional[str] = None
    live_url: Optional[str] = None
    github_url: Optional[str] = None
    file_url: Optional[str] = None
    created_at: str = ""
    updated_at: str = ""


@dataclass
class Theme(ShowcaseItem):
    pass


@dataclass
class Plugin(ShowcaseItem):
    pass


@dataclass
class HeroContent(ContentRecord):
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


@dataclass
class AboutStats(ContentRecord):
    experience: str = ""
    projects: str = ""
    clients: str = ""
    coffee: str = ""


@dataclass
class AboutContent(ContentRecord):
    bio: List[str] = field(default_factory=list)
    skills: List[str] = field(default_factory=list)
    stats: AboutStats = field(default_factory=AboutStats)
    image_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "AboutContent":
        values = cls._values(data)
        stats = values.get("stats")
        values["stats"] = (
            stats if isinstance(stats, AboutStats) else AboutStats.from_dict(stats)
        )
        return cls(**values)


@dataclass
class ContactInfo(ContentRecord):
    email: str = ""
    phone: str = ""
    location: str = ""
    response_time: str = ""
    smtp_host: Optional[str] = None
    smtp_port: Optional[str] = None
    smtp_user: Optional[str] = None
    smtp_password: Optional[str] = None
    smtp_from_email: Optional[str] = None


@dataclass
class SocialLink(ContentRecord):
    icon: str = ""
    href: str = ""
    label: str = ""


@dataclass
class FooterLink(ContentRecord):
    name: str = ""
    path: str = ""


@dataclass
class FooterLinkGroup(ContentRecord):
    title: str = ""
    links: List[FooterLink] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "FooterLinkGroup":
        values = cls._values(data)
        values["links"] = [
            FooterLink.from_dict(link)
            for link in values.get("links") or []
            if isinstance(link, dict)
        ]
        return cls(**values)


@dataclass
class FooterContent(ContentRecord):
    brand_name: str = ""
    description: str = ""
    social_links: List[SocialLink] = field(default_factory=list)
    link_groups: List[FooterLinkGroup] = field(default_factory=list)
    copyright_text: str = ""

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "FooterContent":
        values = cls._values(data)
        values["social_links"] = [
            SocialLink.from_dict(link)
            for link in values.get("social_links") or []
            if isinstance(link, dict)
        ]
        values["link_groups"] = [
            FooterLinkGroup.from_dict(group)
            for group in values.get("link_groups") or []
            if isinstance(group, dict)
        ]
        return cls(**values)


# First-run content, persisted locally the first time a singleton is read.


def default_hero_content() -> HeroContent:
    return HeroContent(
        tagline="Available for freelance work",
        headline_line1="I craft beautiful",
        headline_highlight="WordPress",
        headline_line2="experiences",
        subheadline=(
            "WordPress developer specializing in custom themes, plugins, and "
            "full-stack solutions. Turning complex ideas into elegant, "
            "performant websites."
        ),
        name="Tafsin Ahmed",
        role="WordPress Developer",
        floating_title="WordPress Expert",
        floating_subtitle="Since 2016",
    )


def default_about_content() -> AboutContent:
    return AboutContent(
        bio=[
            "Hi! I'm a WordPress developer with over 8 years of experience "
            "crafting beautiful, functional websites. I specialize in creating "
            "custom themes, plugins, and full-stack WordPress solutions.",
            "My journey started as a freelancer, and since then I've worked "
            "with startups, agencies, and enterprise clients worldwide. I "
            "believe in writing clean, maintainable code that scales.",
            "When I'm not coding, you'll find me exploring new technologies, "
            "contributing to open-source projects, or sharing knowledge "
            "through my blog.",
        ],
        skills=[
            "WordPress",
            "PHP",
            "JavaScript",
            "TypeScript",
            "React",
            "WooCommerce",
            "Gutenberg",
            "REST API",
            "MySQL",
            "Git",
            "SCSS",
            "Tailwind CSS",
            "ACF",
            "Elementor",
            "Custom Plugins",
            "Theme Development",
        ],
        stats=AboutStats(
            experience="8+", projects="50+", clients="100+", coffee="∞"
        ),
    )


def default_contact_info() -> ContactInfo:
    return ContactInfo(
        email="hello@devname.com",
        phone="+1 (555) 123-4567",
        location="San Francisco, CA",
        response_time="Within 24 hours",
    )


def default_footer_content() -> FooterContent:
    def group(title: str, *links: tuple[str, str]) -> FooterLinkGroup:
        return FooterLinkGroup(
            title=title,
            links=[FooterLink(name=name, path=path) for name, path in links],
        )

    return FooterContent(
        brand_name="Tafsin Ahmed",
        description=(
            "WordPress developer crafting exceptional themes, plugins, and "
            "custom solutions for businesses worldwide."
        ),
        social_links=[
            SocialLink(icon="Github", href="#", label="GitHub"),
            SocialLink(icon="Linkedin", href="#", label="LinkedIn"),
            SocialLink(icon="Twitter", href="#", label="Twitter"),
            SocialLink(icon="Mail", href="mailto:hello@example.com", label="Email"),
        ],
        link_groups=[
            group("Pages", ("Home", "/"), ("About", "/about"), ("Projects", "/projects")),
            group(
                "Services",
                ("Themes", "/themes"),
                ("Plugins", "/plugins"),
                ("Blog", "/blog"),
            ),
            group(
                "Connect",
                ("Contact", "/contact"),
                ("GitHub", "#"),
                ("LinkedIn", "#"),
            ),
        ],
        copyright_text="Tafsin Ahmed. All rights reserved.",
    )


def record_from_any(record_cls: type, value: Any):
    """Coerce a dataclass instance or a dict (either casing) into `record_cls`."""
    if isinstance(value, record_cls):
        return value
    if isinstance(value, ContentRecord):
        value = value.as_dict()
    return record_cls.from_dict(value)

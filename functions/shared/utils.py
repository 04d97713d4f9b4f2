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
Small helpers shared by the content records and the persistence layer.
"""

from __future__ import annotations

import re
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def get_unique_id() -> str:
    return uuid.uuid4().hex


def generate_slug(title: str) -> str:
    """Lowercase `title` and collapse every non-alphanumeric run into one hyphen."""
    return _NON_SLUG_CHARS.sub("-", (title or "").lower()).strip("-")


def format_timestamp(value: datetime) -> str:
    return (
        value.astimezone(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


def utc_now_iso() -> str:
    return format_timestamp(datetime.now(timezone.utc))


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def next_timestamp(previous: Optional[str] = None) -> str:
    """
    Current UTC time as ISO-8601, bumped past `previous` when the clock has not
    advanced beyond it (timestamps carry millisecond resolution).
    """
    now = _truncate_ms(datetime.now(timezone.utc))
    before = parse_timestamp(previous)
    if before is not None and now <= before:
        now = _truncate_ms(before) + timedelta(milliseconds=1)
    return format_timestamp(now)


def _truncate_ms(value: datetime) -> datetime:
    return value.replace(microsecond=value.microsecond // 1000 * 1000)
